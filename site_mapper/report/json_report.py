# site_mapper/report/json_report.py

"""
JSON report for SiteMapper.

Serialises a Sitemap to a file.
"""
import json
from pathlib import Path

from site_mapper.crawler.models import Sitemap


def render_json(sitemap: Sitemap, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Save *sitemap* as JSON at *output_path*.

    :param sitemap: the crawl result
    :param output_path: path of the JSON file
    :param pretty: indent the output by 2 spaces
    :return: Path of the saved file

    Example:
    ```python
    from site_mapper.report.json_report import render_json
    report_path = render_json(sitemap, 'reports/sitemap.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(sitemap.to_dict(), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
