# File: check_pages/issues.py
"""check_pages.issues: сбор найденных проблем и итог запуска."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from check_pages.logger import Host


@dataclass(frozen=True, slots=True)
class Issue:
    """Проблема, привязанная к странице, на которой она найдена."""

    page: str
    message: str


@dataclass(slots=True)
class CheckResult:
    """Итог запуска: список проблем и текст ошибки (None, если проблем нет)."""

    issues: List[Issue] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def issue_count(self) -> int:
        return len(self.issues)

    @property
    def ok(self) -> bool:
        return not self.issues

    def grouped(self) -> Dict[str, List[str]]:
        """Сообщения по страницам в порядке первого появления страницы."""
        groups: Dict[str, List[str]] = {}
        for issue in self.issues:
            groups.setdefault(issue.page, []).append(issue.message)
        return groups

    def as_dict(self) -> Dict[str, Any]:
        return {
            "issue_count": self.issue_count,
            "error": self.error,
            "issues": [{"page": i.page, "message": i.message} for i in self.issues],
        }

    def json(self, *, pretty: bool = False) -> str:
        return json.dumps(self.as_dict(), ensure_ascii=False, indent=2 if pretty else None)


class IssueCollector:
    """Журнал проблем: только добавление, порядок обнаружения."""

    def __init__(self, host: Host) -> None:
        self.host = host
        self.issues: List[Issue] = []

    def add(self, page: str, message: str) -> None:
        self.host.error(message)
        self.issues.append(Issue(page, message))

    def render_summary(self) -> str:
        result = CheckResult(issues=list(self.issues))
        summary = "Summary of issues:\n"
        for page, messages in result.grouped().items():
            summary += f" {page}\n"
            for message in messages:
                summary += f"  {message}\n"
        return summary

    def finish(self, summary: bool) -> CheckResult:
        """Собирает итог; при summary=True выводит сводку в канал ошибок."""
        result = CheckResult(issues=list(self.issues))
        count = result.issue_count
        if count:
            if summary:
                self.host.error(self.render_summary())
            result.error = (
                f"{count} issue{'s' if count > 1 else ''}."
                + ("" if summary else " (Set summary for a summary.)")
            )
        return result
