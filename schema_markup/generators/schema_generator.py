"""
Schema Generator for the Schema Markup Generator.
Builds schema.org JSON-LD from an edit session (extracted data merged
with manual edits).
"""
from typing import Any, Dict, List, Optional

from schema_markup.models.content import SchemaType
from schema_markup.models.schema import (
    AggregateRatingSchema,
    BrandSchema,
    BreadcrumbListItem,
    BreadcrumbListSchema,
    CarouselProduct,
    FAQAnswer,
    FAQPageSchema,
    FAQQuestion,
    ItemListElement,
    ItemListSchema,
    OfferSchema,
    ProductSchema,
    SchemaCollection,
)
from schema_markup.models.session import EditSession
from schema_markup.utils.logger import LayerLogger


def _text(value: Any) -> str:
    """Coerce an edited value to a trimmed string."""
    if value is None:
        return ""
    return str(value).strip()


class SchemaGenerator:
    """
    Deterministic JSON-LD schema generator.
    
    Principles:
    - Only selected types are generated
    - Items missing required fields are dropped, never filled in
    - Manual edits win over extracted values
    """
    
    def __init__(self):
        self.logger = LayerLogger("schema_generator")
    
    def generate(self, session: EditSession) -> SchemaCollection:
        """
        Generate JSON-LD for every selected type that has usable data.
        
        Args:
            session: EditSession with selections, extraction and edits
        
        Returns:
            SchemaCollection in Product, BreadcrumbList, ItemList, FAQPage order
        """
        self.logger.log_action(
            "schema_generation",
            "started",
            selected_types=[t.value for t in session.selected_types]
        )
        
        selected = set(session.selected_types)
        collection = SchemaCollection()
        
        builders = [
            (SchemaType.PRODUCT, self._generate_product),
            (SchemaType.BREADCRUMB, self._generate_breadcrumb),
            (SchemaType.CAROUSEL, self._generate_carousel),
            (SchemaType.FAQ, self._generate_faq),
        ]
        for schema_type, builder in builders:
            if schema_type not in selected:
                continue
            schema = builder(session)
            if schema is None:
                self.logger.log_decision(
                    decision="skip_schema",
                    reason="no usable data",
                    schema_type=schema_type.value
                )
                continue
            collection.schemas.append(schema)
        
        self.logger.log_action(
            "schema_generation",
            "completed",
            schema_types=[s.get("@type") for s in collection.schemas]
        )
        return collection
    
    def _generate_product(self, session: EditSession) -> Optional[Dict[str, Any]]:
        data = session.merged_record(SchemaType.PRODUCT)
        name = _text(data.get("name"))
        if not name:
            return None
        
        product = ProductSchema(
            name=name,
            description=_text(data.get("description")) or None,
            image=_text(data.get("image")) or None,
            sku=_text(data.get("sku")) or None,
        )
        
        brand = _text(data.get("brand"))
        if brand:
            product.brand = BrandSchema(name=brand)
        
        price = _text(data.get("price"))
        if price:
            product.offers = OfferSchema(
                price=price,
                priceCurrency=_text(data.get("currency")) or "USD",
                availability=_text(data.get("availability")) or None,
            )
        
        rating_value = data.get("ratingValue")
        review_count = data.get("reviewCount")
        if rating_value and review_count:
            product.aggregateRating = AggregateRatingSchema(
                ratingValue=rating_value,
                reviewCount=review_count,
            )
        
        return product.to_jsonld()
    
    def _generate_breadcrumb(self, session: EditSession) -> Optional[Dict[str, Any]]:
        items = [
            item for item in session.merged_items(SchemaType.BREADCRUMB)
            if _text(item.get("name")) and _text(item.get("url"))
        ]
        if not items:
            return None
        
        return BreadcrumbListSchema(
            itemListElement=[
                BreadcrumbListItem(
                    position=position,
                    name=_text(item["name"]),
                    item=_text(item["url"]),
                )
                for position, item in enumerate(items, start=1)
            ]
        ).to_jsonld()
    
    def _generate_carousel(self, session: EditSession) -> Optional[Dict[str, Any]]:
        items = [
            item for item in session.merged_items(SchemaType.CAROUSEL)
            if _text(item.get("name")) and _text(item.get("url"))
        ]
        if not items:
            return None
        
        elements: List[ItemListElement] = []
        for position, item in enumerate(items, start=1):
            product = CarouselProduct(
                name=_text(item["name"]),
                url=_text(item["url"]),
                description=_text(item.get("description")) or None,
                image=_text(item.get("image")) or None,
            )
            price = _text(item.get("price"))
            if price:
                product.offers = OfferSchema(price=price)
            elements.append(ItemListElement(position=position, item=product))
        
        return ItemListSchema(itemListElement=elements).to_jsonld()
    
    def _generate_faq(self, session: EditSession) -> Optional[Dict[str, Any]]:
        items = [
            item for item in session.merged_items(SchemaType.FAQ)
            if _text(item.get("question")) and _text(item.get("answer"))
        ]
        if not items:
            return None
        
        return FAQPageSchema(
            mainEntity=[
                FAQQuestion(
                    name=_text(item["question"]),
                    acceptedAnswer=FAQAnswer(text=_text(item["answer"])),
                )
                for item in items
            ]
        ).to_jsonld()
