"""
schema.org models for the JSON-LD the generator emits.

Top-level types render with @context; nested ones (ListItem, Offer, Brand,
Answer) render bare. None values and empty lists never reach the output.
"""
import json
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class SchemaBase(BaseModel):
    """Top-level schema.org node."""
    
    model_config = ConfigDict(populate_by_name=True)
    
    def to_jsonld(self) -> Dict[str, Any]:
        data = {"@context": "https://schema.org"}
        data.update(
            (key, value)
            for key, value in self.model_dump(exclude_none=True, by_alias=True).items()
            if value != []
        )
        return data


class BreadcrumbListItem(BaseModel):
    """Item within a BreadcrumbList."""
    type: str = Field(default="ListItem", alias="@type")
    position: int
    name: str
    item: Optional[str] = None  # URL


class BreadcrumbListSchema(SchemaBase):
    """BreadcrumbList schema for navigation."""
    type: str = Field(default="BreadcrumbList", alias="@type")
    itemListElement: List[BreadcrumbListItem] = Field(default_factory=list)


class FAQAnswer(BaseModel):
    """Answer within an FAQ."""
    type: str = Field(default="Answer", alias="@type")
    text: str


class FAQQuestion(BaseModel):
    """Question within an FAQ."""
    type: str = Field(default="Question", alias="@type")
    name: str
    acceptedAnswer: FAQAnswer


class FAQPageSchema(SchemaBase):
    """FAQPage schema for FAQ content."""
    type: str = Field(default="FAQPage", alias="@type")
    mainEntity: List[FAQQuestion] = Field(default_factory=list)


class BrandSchema(BaseModel):
    type: str = Field(default="Brand", alias="@type")
    name: str


class OfferSchema(BaseModel):
    """Offer schema for product pricing."""
    type: str = Field(default="Offer", alias="@type")
    price: str
    priceCurrency: str = "USD"
    availability: Optional[str] = None  # https://schema.org/InStock etc.


class AggregateRatingSchema(BaseModel):
    """AggregateRating schema for product reviews."""
    type: str = Field(default="AggregateRating", alias="@type")
    ratingValue: Union[float, str]
    reviewCount: Union[int, str]


class ProductSchema(SchemaBase):
    """Product schema for e-commerce."""
    type: str = Field(default="Product", alias="@type")
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    brand: Optional[BrandSchema] = None
    sku: Optional[str] = None
    offers: Optional[OfferSchema] = None
    aggregateRating: Optional[AggregateRatingSchema] = None


class CarouselProduct(BaseModel):
    """Product nested in a carousel ListItem (no @context)."""
    type: str = Field(default="Product", alias="@type")
    name: str
    url: str
    description: Optional[str] = None
    image: Optional[str] = None
    offers: Optional[OfferSchema] = None


class ItemListElement(BaseModel):
    """ListItem wrapping a carousel product."""
    type: str = Field(default="ListItem", alias="@type")
    position: int
    item: CarouselProduct


class ItemListSchema(SchemaBase):
    """ItemList schema used for carousels."""
    type: str = Field(default="ItemList", alias="@type")
    itemListElement: List[ItemListElement] = Field(default_factory=list)


class SchemaCollection(BaseModel):
    """Collection of schemas for a single page."""
    schemas: List[Dict[str, Any]] = Field(default_factory=list)
    
    def to_script_tag(self) -> str:
        """Render one ld+json script block per schema."""
        return "\n\n".join(
            f'<script type="application/ld+json">\n{json.dumps(schema, indent=2)}\n</script>'
            for schema in self.schemas
        )
