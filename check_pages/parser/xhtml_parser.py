"""check_pages.parser.xhtml_parser: strict XML well-formedness check of a page body."""

from __future__ import annotations

from typing import List, Tuple

from lxml import etree


def _offending_char(lines: List[str], line: int, column: int) -> str:
    # libxml2 advances its column once per decoded character, so the 1-based
    # column indexes the decoded line, never the raw bytes of a multibyte char.
    if 1 <= line <= len(lines):
        text = lines[line - 1]
        index = max(column - 1, 0)
        if index < len(text):
            return text[index]
    return ""


def _violations(body: bytes) -> List[Tuple[str, int, int]]:
    parser = etree.XMLParser(recover=True, resolve_entities=False, no_network=True)
    try:
        etree.fromstring(body, parser=parser)
    except etree.XMLSyntaxError as exc:
        # unrecoverable document, e.g. an empty body
        found = [(e.message, e.line, e.column) for e in parser.error_log.filter_from_errors()]
        if not found:
            line, column = exc.position
            found.append((exc.msg, line, column))
        return found
    return [(e.message, e.line, e.column) for e in parser.error_log.filter_from_errors()]


def validate_xhtml(body: bytes) -> List[str]:
    """Parses *body* as strict XML and returns one message per violation.

    Each message has the form ``<reason>, Line: <n>, Column: <n>, Char: <c>``
    (newlines inside the reason are folded to ``", "``). An empty list means
    the document is well-formed.

    Пример:
    ```python
    for message in validate_xhtml(b"<p><br></p>"):
        print(message)
    ```
    """
    lines = body.decode("utf-8", errors="replace").splitlines()
    messages: List[str] = []
    for message, line, column in _violations(body):
        reason = ", ".join(part.strip() for part in message.strip().splitlines() if part.strip())
        char = _offending_char(lines, line, column)
        messages.append(f"{reason}, Line: {line}, Column: {column}, Char: {char}")
    return messages
