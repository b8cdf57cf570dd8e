"""
Extraction record models for the Schema Markup Generator.
These records are the contract between the extractors, the HTTP API and
the schema generator. Every field is a best-effort string: missing data is
an empty string or an omitted key, never a meaningful null.
"""
from typing import Any, Dict, List, Optional
from enum import Enum
from pydantic import BaseModel, Field


class SchemaType(str, Enum):
    """Schema types that can be requested for extraction."""
    PRODUCT = "product"
    BREADCRUMB = "breadcrumb"
    FAQ = "faq"
    CAROUSEL = "carousel"


class ProductRecord(BaseModel):
    """Product facts pulled from the page head and body."""
    name: str = ""
    description: str = ""
    image: Optional[str] = None
    price: Optional[str] = None
    currency: Optional[str] = None
    
    def to_dict(self) -> Dict[str, Any]:
        """Serialize, omitting optional fields that were not found."""
        return self.model_dump(exclude_none=True)


class BreadcrumbItem(BaseModel):
    """One step of a breadcrumb trail (root first)."""
    name: str
    url: str


class FAQItem(BaseModel):
    """FAQ question and answer pair."""
    question: str
    answer: str


class CarouselItem(BaseModel):
    """Item of a carousel / list-style section."""
    name: str
    url: str = "#"
    image: str = ""
    description: str = ""
    price: str = ""


class ExistingSchemaEntry(BaseModel):
    """
    A structured data island already present on the page.
    
    JSON-LD entries carry index/raw plus either data or error.
    Microdata and RDFa entries only carry a count and a note.
    """
    type: str
    index: Optional[int] = None
    data: Optional[Any] = None
    error: Optional[str] = None
    raw: Optional[str] = None
    types: Optional[List[Any]] = None
    warning: Optional[str] = None
    count: Optional[int] = None
    note: Optional[str] = None
    
    def to_dict(self) -> Dict[str, Any]:
        """Serialize without None fields; parsed data is passed through as-is."""
        return {
            key: getattr(self, key)
            for key in type(self).model_fields
            if getattr(self, key) is not None
        }


class ExtractionRequest(BaseModel):
    """
    A URL plus the schema type names to extract.
    
    Fields are left untyped: ExtractionLayer rejects malformed values with
    InvalidInputError instead of a model validation error.
    """
    url: Any = ""
    types: Any = Field(default_factory=list)


class ExtractionResult(BaseModel):
    """
    Combined extraction record.
    
    Only requested types are populated; existing schema detection always runs.
    """
    url: str
    product: Optional[ProductRecord] = None
    breadcrumb: Optional[List[BreadcrumbItem]] = None
    faq: Optional[List[FAQItem]] = None
    carousel: Optional[List[CarouselItem]] = None
    existing_schema: List[ExistingSchemaEntry] = Field(default_factory=list)
    
    def to_dict(self) -> Dict[str, Any]:
        """Return the response shape keyed by requested type name."""
        data: Dict[str, Any] = {}
        if self.product is not None:
            data["product"] = self.product.to_dict()
        if self.breadcrumb is not None:
            data["breadcrumb"] = [item.model_dump() for item in self.breadcrumb]
        if self.faq is not None:
            data["faq"] = [item.model_dump() for item in self.faq]
        if self.carousel is not None:
            data["carousel"] = [item.model_dump() for item in self.carousel]
        data["existingSchema"] = [entry.to_dict() for entry in self.existing_schema]
        return data
    
    def get_extracted_types(self) -> List[str]:
        """Return the names of the types that were extracted."""
        return [
            schema_type.value
            for schema_type in SchemaType
            if getattr(self, schema_type.value) is not None
        ]
