"""HTML sanitization for free-text bookmark fields."""
from bleach.sanitizer import Cleaner

ALLOWED_TAGS = frozenset({
    "a",
    "abbr",
    "acronym",
    "b",
    "blockquote",
    "code",
    "em",
    "i",
    "li",
    "ol",
    "strong",
    "ul",
})

ALLOWED_ATTRIBUTES = {
    "a": ["href", "title"],
    "abbr": ["title"],
    "acronym": ["title"],
}

ALLOWED_PROTOCOLS = ["http", "https", "mailto"]

# strip=False escapes disallowed tags instead of dropping them, so
# "<script>" comes back as "&lt;script&gt;" and the text stays visible.
_CLEANER = Cleaner(
    tags=ALLOWED_TAGS,
    attributes=ALLOWED_ATTRIBUTES,
    protocols=ALLOWED_PROTOCOLS,
    strip=False,
    strip_comments=True,
)


def sanitize_html(value: str | None) -> str | None:
    """Escape markup that could execute in a browser, keep benign inline tags."""
    if value is None:
        return None
    return _CLEANER.clean(value)
