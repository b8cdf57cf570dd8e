"""Field extractors, one per schema type."""
from schema_markup.extractors.base import FallbackExtractor
from schema_markup.extractors.product import ProductExtractor
from schema_markup.extractors.breadcrumb import BreadcrumbExtractor
from schema_markup.extractors.faq import FAQExtractor
from schema_markup.extractors.carousel import CarouselExtractor
from schema_markup.extractors.existing_schema import ExistingSchemaExtractor

__all__ = [
    "FallbackExtractor",
    "ProductExtractor",
    "BreadcrumbExtractor",
    "FAQExtractor",
    "CarouselExtractor",
    "ExistingSchemaExtractor",
]
