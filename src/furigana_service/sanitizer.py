"""Allow-list sanitizer for model-produced furigana HTML.

The only markup that survives is the canonical fragment
`<ruby>BASE<rt>READING</rt></ruby>` with no attributes. Everything else in the
input, including malformed or attributed ruby tags, is emitted as escaped text.

Escaping leaves well-formed character references (`&amp;`, `&#12354;`, ...)
as they are, so sanitizing already sanitized output returns it unchanged.
"""

from __future__ import annotations

import re

from furigana_service.types import SanitizedHtml

_RUBY_PATTERN = re.compile(
    r"<ruby\s*>(?P<base>.*?)<rt\s*>(?P<reading>.*?)</rt\s*>.*?</ruby>",
    flags=re.IGNORECASE | re.DOTALL,
)
_TAG_PATTERN = re.compile(r"<[^>]+>")
_BARE_AMPERSAND = re.compile(r"&(?![A-Za-z][A-Za-z0-9]*;|#[0-9]+;|#[xX][0-9A-Fa-f]+;)")
# Unicode whitespace plus the byte order mark, which `str.strip` keeps.
_EDGE_SPACE = re.compile(r"\A[\s\ufeff]+|[\s\ufeff]+\Z")


def trim_text(text: str) -> str:
    """Trim surrounding whitespace and byte order marks."""
    return _EDGE_SPACE.sub("", text)


def escape_text(text: str) -> str:
    """Escape `&`, `<`, `>` and `"` for use as HTML text content."""
    text = _BARE_AMPERSAND.sub("&amp;", text)
    return text.replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")


def strip_tags(text: str) -> str:
    return _TAG_PATTERN.sub("", text)


def sanitize(raw_html: object) -> SanitizedHtml:
    """Rebuild `raw_html` keeping only canonical ruby fragments.

    Never raises. Input that is not a string is treated as empty.
    """
    if not isinstance(raw_html, str) or not raw_html:
        return SanitizedHtml("")

    parts: list[str] = []
    last_index = 0
    for match in _RUBY_PATTERN.finditer(raw_html):
        parts.append(escape_text(raw_html[last_index : match.start()]))
        base = trim_text(strip_tags(match.group("base")))
        # Nested markup in readings is dropped too, so a misbehaving model
        # cannot leave escaped tag text above the base characters.
        reading = trim_text(strip_tags(match.group("reading")))
        parts.append(f"<ruby>{escape_text(base)}<rt>{escape_text(reading)}</rt></ruby>")
        last_index = match.end()

    parts.append(escape_text(raw_html[last_index:]))
    return SanitizedHtml("".join(parts))
