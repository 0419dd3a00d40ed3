"""Markdown Helpers — escaping for text placed inside markdown table cells.

Invariants:
    - escape_markdown() output never contains an unescaped `|` or a newline,
      so one input value always stays in one table cell
    - code_span() output is a single inline code span
"""

import re

_SPECIAL = re.compile(r"([\\|*_\[\]`])")
_NEWLINES = re.compile(r"\s*[\r\n]+\s*")


def escape_markdown(text: str | None) -> str:
    if not text:
        return ""
    return _SPECIAL.sub(r"\\\1", _NEWLINES.sub(" ", text))


def code_span(text: str | None) -> str:
    """Inline code; backticks dropped (backslash escapes are literal inside spans)."""
    if not text:
        return ""
    return "`" + _NEWLINES.sub(" ", text).replace("`", "") + "`"


def markdown_table(headers: list[str], rows: list[list[str]]) -> str:
    """Render pre-escaped cells as a GitHub-flavoured markdown table."""
    lines = [
        "| " + " | ".join(headers) + " |",
        "|" + "|".join("-" * (len(h) + 2) for h in headers) + "|",
    ]
    lines.extend("| " + " | ".join(row) + " |" for row in rows)
    return "\n".join(lines) + "\n"
