"""Terminal-safe text handling.

Detects terminal encoding and provides ASCII alternatives for the few Unicode
glyphs the audit prints, so Windows consoles without UTF-8 do not crash.
"""
import locale
import sys


# Unicode to ASCII mapping for non-UTF-8 terminals
ICON_MAP = {
    '✓': 'OK',
    '✔': 'OK',
    '✗': 'x',
    '⚠': '!',
    '→': '->',
    '…': '...',
    '•': '*',
    '—': '-',
}


def detect_terminal_encoding(stream=None) -> str:
    """Detect the encoding of a stream, falling back to the locale.

    Returns:
        str: Lower-cased encoding name ('utf-8', 'cp1252', 'ascii', ...)
    """
    stream = stream if stream is not None else sys.stdout
    encoding = getattr(stream, 'encoding', None)
    if encoding:
        return encoding.lower()

    try:
        return locale.getpreferredencoding().lower()
    except Exception:
        return 'ascii'


def is_utf8_capable(stream=None) -> bool:
    """Check if a stream can take UTF-8 text."""
    return detect_terminal_encoding(stream).replace('_', '-') in ('utf-8', 'utf8')


def sanitize_for_terminal(text: str, stream=None) -> str:
    """Replace Unicode glyphs with ASCII equivalents if the stream isn't UTF-8."""
    if is_utf8_capable(stream):
        return text

    for unicode_char, ascii_replacement in ICON_MAP.items():
        text = text.replace(unicode_char, ascii_replacement)
    return text
