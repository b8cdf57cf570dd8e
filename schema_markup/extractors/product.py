"""
Product extractor: page title, meta description, og:image and a USD price.
"""
import re
from typing import Optional

from schema_markup.models.content import ProductRecord
from schema_markup.utils.logger import LayerLogger
from schema_markup.utils.text import clean_text

TITLE_PATTERN = re.compile(r"<title[^>]*>([^<]+)</title>", re.IGNORECASE)
DESCRIPTION_PATTERN = re.compile(
    r"""<meta\s+name=["']description["']\s+content=["']([^"']+)["']""", re.IGNORECASE
)
OG_IMAGE_PATTERN = re.compile(
    r"""<meta\s+property=["']og:image["']\s+content=["']([^"']+)["']""", re.IGNORECASE
)
# $19.99 or 19.99 USD; the first occurrence in the document wins
PRICE_PATTERN = re.compile(r"\$(\d+(?:\.\d{2})?)|(\d+(?:\.\d{2})?)\s*USD", re.IGNORECASE)


class ProductExtractor:
    """Builds a ProductRecord from head metadata and the first price found."""
    
    schema_type = "product"
    
    def __init__(self):
        self.logger = LayerLogger("product_extractor")
    
    def extract(self, html: str, url: Optional[str] = None) -> ProductRecord:
        record = ProductRecord(
            name=self._first_group(TITLE_PATTERN, html),
            description=self._first_group(DESCRIPTION_PATTERN, html),
        )
        
        image = self._first_group(OG_IMAGE_PATTERN, html)
        if image:
            record.image = image
        
        price_match = PRICE_PATTERN.search(html)
        if price_match:
            record.price = price_match.group(1) or price_match.group(2)
            record.currency = "USD"
        
        self.logger.log_extraction(
            schema_type=self.schema_type,
            strategy="head_metadata",
            items_found=1 if record.name else 0,
            has_image=record.image is not None,
            has_price=record.price is not None,
            url=url
        )
        return record
    
    @staticmethod
    def _first_group(pattern: re.Pattern, html: str) -> str:
        match = pattern.search(html)
        return clean_text(match.group(1)) if match else ""
