# === FILE: site_mapper/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for SiteMapper.

Commands:
  crawl, c  Crawl a domain and print its site map
  config    Show the effective configuration

Group options:
  --config PATH       YAML/JSON config (default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only when omitted)
  --log-format FORMAT Logging format string

crawl options:
  --domain, -d DOMAIN   Domain to crawl, starting at http://<domain>/
  --json PATH           Also save a JSON report
  --html PATH           Also save an HTML report
  --template DIR        Directory with Jinja2 templates for --html
  --concurrency INT     Maximum fetches in flight (overrides config)
  --max-pages INT       Page cap (overrides config)
  --crawl-timeout SEC   Deadline for the whole crawl

Also:
  --version, -v       Show the SiteMapper version

Example:
  site_mapper crawl --domain example.com --json sitemap.json
"""
import asyncio
import sys
from pathlib import Path

import click

from site_mapper import __version__
from site_mapper.config import load_config
from site_mapper.engine import crawl
from site_mapper.logger import DEFAULT_FORMAT, init_logging
from site_mapper.report.html_report import render_html
from site_mapper.report.json_report import render_json
from site_mapper.utils import build_seed_url

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


class AliasedGroup(click.Group):
    """Group that also accepts short aliases for its commands."""

    aliases = {"c": "crawl"}

    def get_command(self, ctx, cmd_name):
        return super().get_command(ctx, self.aliases.get(cmd_name, cmd_name))

    def resolve_command(self, ctx, args):
        _, cmd, args = super().resolve_command(ctx, args)
        return (cmd.name if cmd else None), cmd, args


@click.group(cls=AliasedGroup, context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteMapper, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON config file.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stderr only when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """SiteMapper: map the pages and assets of one domain."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--domain', '-d', 'domain',
    required=True,
    metavar='DOMAIN',
    help='Domain to crawl'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save a JSON report to this file'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save an HTML report to this file'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Directory with Jinja2 templates (built-in template when omitted)'
)
@click.option('--concurrency', type=click.IntRange(min=1), default=None,
              help='Maximum fetches in flight')
@click.option('--max-pages', 'max_pages', type=click.IntRange(min=1), default=None,
              help='Stop claiming new pages after this many')
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Deadline for the whole crawl (seconds)'
)
@click.pass_context
def crawl_command(ctx, domain, json_output, html_output, template_dir,
                  concurrency, max_pages, crawl_timeout):
    """Crawl DOMAIN and print its site map."""
    try:
        cfg = load_config(ctx.obj['config_path'], concurrency=concurrency, max_pages=max_pages)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')

    seed = build_seed_url(domain)
    try:
        if crawl_timeout is not None:
            sitemap = asyncio.run(asyncio.wait_for(crawl(seed, cfg), timeout=crawl_timeout))
        else:
            sitemap = asyncio.run(crawl(seed, cfg))
    except asyncio.TimeoutError:
        print_error(f'Crawl did not finish within {crawl_timeout} seconds')
    except Exception as e:
        print_error(f'Crawl failed: {e}')

    if not sitemap.pages:
        print_error(f'Could not fetch {seed}')

    click.echo(str(sitemap))

    if json_output:
        try:
            saved_json = render_json(sitemap, json_output)
            click.echo(f'JSON report: {saved_json}', err=True)
        except Exception as e:
            print_error(f'Failed to save JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(sitemap, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}', err=True)
        except Exception as e:
            print_error(f'Failed to save HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    try:
        cfg = load_config(ctx.obj['config_path'])
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')
    click.echo(cfg.model_dump_json(indent=2))


def main() -> None:
    cli(prog_name='site_mapper')


if __name__ == "__main__":
    main()
