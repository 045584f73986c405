"""check_pages.report.html_report: Генерация HTML-отчёта с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import BaseLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from check_pages.issues import CheckResult


def _loader(template_dir: Optional[Union[Path, str]]) -> BaseLoader:
    if template_dir is None:
        return PackageLoader("check_pages", "templates")
    return FileSystemLoader(str(template_dir))


def render_html(
    result: CheckResult,
    output_path: Union[Path, str],
    template_dir: Optional[Union[Path, str]] = None,
) -> Path:
    """Рендерит HTML-отчёт из шаблона и сохраняет его по указанному пути.

    Args:
        result: объект CheckResult.
        output_path: путь к итоговому HTML-файлу.
        template_dir: директория с шаблоном ``report.html.j2``; по умолчанию
            используется шаблон из пакета.

    Returns:
        Path до сохранённого HTML-файла.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=_loader(template_dir),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template("report.html.j2")

    context: dict[str, Any] = {
        "issue_count": result.issue_count,
        "error": result.error,
        "pages": result.grouped(),
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
