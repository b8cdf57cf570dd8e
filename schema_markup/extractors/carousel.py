"""
Carousel extractor.

Tier order:
1. Repeated carousel / testimonial / card containers
2. Section headings (h2-h4)
3. List items
"""
import re
from typing import List, Optional

from schema_markup.extractors.base import FallbackExtractor
from schema_markup.models.content import CarouselItem
from schema_markup.utils.text import clean_text, to_plain_text

_FLAGS = re.IGNORECASE | re.DOTALL


def _container_pattern(classes: str) -> re.Pattern:
    return re.compile(
        rf"""<(?:div|section)[^>]*class=["'][^"']*(?:{classes})[^"']*["'][^>]*>(.*?)</(?:div|section)>""",
        _FLAGS,
    )


CONTAINER_PATTERNS = [
    ("carousel", _container_pattern("carousel|slider|swiper")),
    ("testimonial", _container_pattern("testimonial|review")),
    ("card", _container_pattern("card|item")),
]

ITEM_HEADING_PATTERN = re.compile(r"<h[1-6][^>]*>([^<]+)</h[1-6]>", re.IGNORECASE)
ITEM_TITLE_PATTERN = re.compile(
    r"""<[^>]*class=["'][^"']*(?:title|name|heading)[^"']*["'][^>]*>([^<]+)</[^>]*>""", re.IGNORECASE
)
ITEM_LINK_PATTERN = re.compile(r"""<a[^>]*href=["']([^"']+)["'][^>]*>""", re.IGNORECASE)
ITEM_IMAGE_PATTERN = re.compile(r"""<img[^>]*src=["']([^"']+)["'][^>]*>""", re.IGNORECASE)
ITEM_DESCRIPTION_PATTERN = re.compile(r"<p[^>]*>([^<]+)</p>", re.IGNORECASE)

SECTION_HEADING_PATTERN = re.compile(r"<h[2-4][^>]*>([^<]+)</h[2-4]>", re.IGNORECASE)
LIST_ITEM_PATTERN = re.compile(r"<li[^>]*>(.*?)</li>", _FLAGS)

MIN_CONTAINERS = 2
MIN_HEADINGS = 3
MIN_LIST_ITEMS = 3
EXCLUDED_HEADING_WORDS = ("about", "contact")


class CarouselExtractor(FallbackExtractor):
    """Extracts up to 6 carousel items."""
    
    schema_type = "carousel"
    max_items = 6
    
    def strategies(self):
        return [
            ("containers", self._from_containers),
            ("headings", self._from_headings),
            ("list_items", self._from_list_items),
        ]
    
    def _from_containers(self, html: str, url: Optional[str]) -> List[CarouselItem]:
        # Items accumulate across patterns until at least two are collected.
        items: List[CarouselItem] = []
        for label, pattern in CONTAINER_PATTERNS:
            containers = pattern.findall(html)
            if len(containers) < MIN_CONTAINERS:
                continue
            
            found = [
                item
                for item in (self._parse_container(body) for body in containers[:self.max_items])
                if item is not None
            ]
            items.extend(found)
            if len(items) >= MIN_CONTAINERS:
                break
            
            self.logger.log_decision(
                decision="try_next_container_pattern",
                reason="fewer than 2 qualifying items so far",
                url=url,
                pattern=label,
                containers=len(containers),
                items=len(items)
            )
        return items
    
    def _parse_container(self, body: str) -> Optional[CarouselItem]:
        title = ITEM_HEADING_PATTERN.search(body) or ITEM_TITLE_PATTERN.search(body)
        if not title or len(title.group(1).strip()) <= 2:
            return None
        
        name = clean_text(title.group(1))
        if len(name) >= 100:
            return None
        
        link = ITEM_LINK_PATTERN.search(body)
        image = ITEM_IMAGE_PATTERN.search(body)
        description = ITEM_DESCRIPTION_PATTERN.search(body)
        return CarouselItem(
            name=name,
            url=clean_text(link.group(1)) if link else "#",
            image=clean_text(image.group(1)) if image else "",
            description=clean_text(description.group(1)) if description else "",
        )
    
    def _from_headings(self, html: str, url: Optional[str]) -> List[CarouselItem]:
        headings = SECTION_HEADING_PATTERN.findall(html)
        if len(headings) < MIN_HEADINGS:
            return []
        
        items = []
        for heading in headings[:8]:
            title = heading.strip()
            lowered = title.lower()
            if not 5 < len(title) < 80:
                continue
            if any(word in lowered for word in EXCLUDED_HEADING_WORDS):
                continue
            items.append(CarouselItem(name=clean_text(title)))
        return items
    
    def _from_list_items(self, html: str, url: Optional[str]) -> List[CarouselItem]:
        list_items = LIST_ITEM_PATTERN.findall(html)
        if len(list_items) < MIN_LIST_ITEMS:
            return []
        
        items = []
        for body in list_items[:6]:
            text = to_plain_text(body).strip()
            if 5 < len(text) < 60:
                items.append(CarouselItem(name=clean_text(text)))
        return items
