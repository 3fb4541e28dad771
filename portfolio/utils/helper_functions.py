from typing import Any


HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)


def escape_html(value: Any) -> str:
    """Replace the five HTML-significant characters with entities.

    Args:
        value: Text to escape, None is treated as an empty string

    Returns:
        Escaped string safe to embed in markup
    """
    text = "" if value is None else str(value)
    # "&" first so the entities added below are left alone
    for char, entity in HTML_ESCAPES:
        text = text.replace(char, entity)
    return text


def single_line(text: str) -> str:
    """Collapse any run of whitespace, newlines included, into one space."""
    return " ".join(str(text).split())
