"""check_pages.report: JSON и HTML отчёты по итогам проверки."""

from check_pages.report.html_report import render_html
from check_pages.report.json_report import render_json

__all__ = ["render_json", "render_html"]
