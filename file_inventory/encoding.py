"""
Text encoding for the delimited output.

The content preview is always escaped and quoted. Every other field is passed
through unchanged unless it contains a character that would break the line
structure (separator, quote, CR, LF), in which case it is escaped the same way.
"""
import codecs

from . import config

_UNSAFE_FIELD_CHARS = (config.FIELD_SEPARATOR, '"', "\n", "\r")


def decode_preview(data: bytes) -> str:
    """
    Decodes a truncated byte prefix as UTF-8.

    Invalid sequences inside the prefix become U+FFFD. A multi-byte sequence
    cut off by the byte budget is dropped instead of being replaced.
    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    # final=False keeps an incomplete trailing sequence buffered (and discarded)
    return decoder.decode(data, final=False)


def _escape_control(text: str) -> str:
    return (text.replace('"', '""')
                .replace("\n", "\\n")
                .replace("\r", "\\r")
                .replace("\t", "\\t"))


def escape_for_csv(content: str) -> str:
    """Escapes a content preview and wraps it in quotes (even when empty)."""
    content = _escape_control(content).strip(config.TRIM_CHARS)
    return f'"{content}"'


def encode_field(value) -> str:
    """Encodes a non-content field; safe values are returned as-is."""
    text = str(value)
    if not any(ch in text for ch in _UNSAFE_FIELD_CHARS):
        return text
    return f'"{_escape_control(text)}"'
