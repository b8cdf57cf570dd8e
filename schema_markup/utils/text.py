"""
Text helpers shared by the field extractors.
"""
import re

# Only these references are decoded; anything else is left untouched.
HTML_ENTITIES = {
    "&#x27;": "'",
    "&quot;": '"',
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&#39;": "'",
    "&apos;": "'",
    "&#x2F;": "/",
    "&#x60;": "`",
    "&#x3D;": "=",
}

ENTITY_PATTERN = re.compile(r"&#?\w+;")
TAG_PATTERN = re.compile(r"<[^>]*>")
WHITESPACE_PATTERN = re.compile(r"\s+")


def decode_html_entities(text: str) -> str:
    """Replace the known HTML character references in text."""
    if not text:
        return ""
    return ENTITY_PATTERN.sub(lambda m: HTML_ENTITIES.get(m.group(0), m.group(0)), text)


def strip_tags(html: str) -> str:
    """Replace every tag with a space (no whitespace normalization)."""
    return TAG_PATTERN.sub(" ", html)


def to_plain_text(html: str) -> str:
    """Strip tags and collapse runs of whitespace to a single space."""
    return WHITESPACE_PATTERN.sub(" ", strip_tags(html))


def clean_text(text: str) -> str:
    """Trim and decode a captured text fragment."""
    if not text:
        return ""
    return decode_html_entities(text.strip())
