"""Text escaping for SUMMARY and CATEGORIES values in the events file.

Four characters are reserved by the format: backslash, semicolon, comma and
newline. Escaping must replace backslash first, otherwise the backslashes it
introduces for the other three would themselves be doubled.
"""

import re

_ESCAPE_ORDER: tuple[tuple[str, str], ...] = (
    ("\\", "\\\\"),
    (";", "\\;"),
    (",", "\\,"),
    ("\n", "\\n"),
)

_UNESCAPES: dict[str, str] = {
    "n": "\n",
    ",": ",",
    ";": ";",
    "\\": "\\",
}

_ESCAPE_SEQUENCE = re.compile(r"\\([\\;,n])")


def escape_text(value: str) -> str:
    """Escape reserved characters so the value fits on one content line.

    Args:
        value: Arbitrary text (may be empty)

    Returns:
        Escaped text containing no raw newline, semicolon or comma

    Examples:
        >>> escape_text("Meeting; Q&A, notes\\nline2")
        'Meeting\\\\; Q&A\\\\, notes\\\\nline2'
    """
    for raw, escaped in _ESCAPE_ORDER:
        value = value.replace(raw, escaped)
    return value


def unescape_text(value: str) -> str:
    """Reverse escape_text().

    Escape sequences are consumed in a single left-to-right pass so that an
    escaped backslash followed by a literal ``n`` is not mistaken for an
    escaped newline. Unknown sequences (``\\x``) and a lone trailing backslash
    are left as they are.

    Args:
        value: Escaped text as stored in the file

    Returns:
        The original text
    """
    if "\\" not in value:
        return value
    return _ESCAPE_SEQUENCE.sub(lambda match: _UNESCAPES[match.group(1)], value)
