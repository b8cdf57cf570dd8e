"""
Breadcrumb extractor.

Tier order:
1. Breadcrumb container markup (nav / ol / ul / div)
2. "Home > Section > Page" text trails
3. Segments of the page URL path
"""
import re
from typing import List, Optional
from urllib.parse import urlparse

from schema_markup.extractors.base import FallbackExtractor
from schema_markup.models.content import BreadcrumbItem
from schema_markup.utils.text import clean_text, to_plain_text

_FLAGS = re.IGNORECASE | re.DOTALL

CONTAINER_PATTERNS = [
    re.compile(r"""<nav[^>]*aria-label=["']breadcrumb["'][^>]*>(.*?)</nav>""", _FLAGS),
    re.compile(r"""<nav[^>]*class=["'][^"']*breadcrumb[^"']*["'][^>]*>(.*?)</nav>""", _FLAGS),
    re.compile(r"""<ol[^>]*class=["'][^"']*breadcrumb[^"']*["'][^>]*>(.*?)</ol>""", _FLAGS),
    re.compile(r"""<ul[^>]*class=["'][^"']*breadcrumb[^"']*["'][^>]*>(.*?)</ul>""", _FLAGS),
    re.compile(r"""<div[^>]*class=["'][^"']*breadcrumb[^"']*["'][^>]*>(.*?)</div>""", _FLAGS),
]

LINK_PATTERN = re.compile(r"""<a[^>]*href=["']([^"']+)["'][^>]*>([^<]+)</a>""", re.IGNORECASE)

# Separators: >, › (U+203A), » (U+00BB)
_SEP = "[>\u203a\u00bb]"
_SEGMENT = "([^>\u203a\u00bb]+)"
TEXT_TRAIL_PATTERN = re.compile(
    rf"Home\s*{_SEP}\s*{_SEGMENT}(?:\s*{_SEP}\s*{_SEGMENT})?(?:\s*{_SEP}\s*{_SEGMENT})?",
    re.IGNORECASE,
)
MAX_TEXT_SEGMENT_LENGTH = 50


class BreadcrumbExtractor(FallbackExtractor):
    """Extracts an ordered root-to-leaf breadcrumb trail."""
    
    schema_type = "breadcrumb"
    
    def strategies(self):
        return [
            ("container_links", self._from_container),
            ("text_trail", self._from_text_trail),
            ("url_path", self._from_url_path),
        ]
    
    def _from_container(self, html: str, url: Optional[str]) -> List[BreadcrumbItem]:
        # Only the first container found is used, even if it has no links.
        for pattern in CONTAINER_PATTERNS:
            container = pattern.search(html)
            if container:
                return [
                    BreadcrumbItem(name=clean_text(text), url=clean_text(href))
                    for href, text in LINK_PATTERN.findall(container.group(1))
                    if text.strip()
                ]
        return []
    
    def _from_text_trail(self, html: str, url: Optional[str]) -> List[BreadcrumbItem]:
        match = TEXT_TRAIL_PATTERN.search(to_plain_text(html))
        if not match:
            return []
        
        items = [BreadcrumbItem(name="Home", url="/")]
        for segment in match.groups():
            if not segment:
                continue
            name = segment.strip()
            if name and len(name) < MAX_TEXT_SEGMENT_LENGTH:
                items.append(BreadcrumbItem(name=clean_text(name), url="#"))
        return items
    
    def _from_url_path(self, html: str, url: Optional[str]) -> List[BreadcrumbItem]:
        if not url:
            return []
        
        parsed = urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            return []
        
        parts = [part for part in parsed.path.split("/") if part]
        if not parts:
            return []
        
        origin = f"{parsed.scheme}://{parsed.netloc}"
        items = [BreadcrumbItem(name="Home", url=origin)]
        
        current_path = ""
        for part in parts:
            current_path += "/" + part
            items.append(BreadcrumbItem(
                name=part[0].upper() + part[1:].replace("-", " "),
                url=origin + current_path
            ))
        return items
