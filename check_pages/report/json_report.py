# check_pages/report/json_report.py

"""
Генерация JSON-отчёта для check_pages.

Сериализация CheckResult в файл.
"""
import json
from pathlib import Path

from check_pages.issues import CheckResult


def render_json(result: CheckResult, output_path: Path | str) -> Path:
    """
    Сохраняет итог проверки в формате JSON по указанному пути.

    :param result: объект CheckResult
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(result.as_dict(), f, ensure_ascii=False, indent=2)

    return output
