"""Tests for the edit session and JSON-LD generation."""
import json

import pytest

from schema_markup.generators.schema_generator import SchemaGenerator
from schema_markup.models.content import (
    BreadcrumbItem,
    ExtractionResult,
    FAQItem,
    ProductRecord,
    SchemaType,
)
from schema_markup.models.session import EditSession


@pytest.fixture
def extraction():
    return ExtractionResult(
        url="https://example.com/shop/widget",
        product=ProductRecord(name="Widget", description="A widget", price="19.99", currency="USD"),
        breadcrumb=[
            BreadcrumbItem(name="Home", url="https://example.com"),
            BreadcrumbItem(name="Shop", url="https://example.com/shop"),
        ],
        faq=[FAQItem(question="Is it blue?", answer="Yes, always.")],
    )


def test_apply_extraction_seeds_manual_edits(extraction):
    session = EditSession(selected_types=[SchemaType.PRODUCT])
    session.apply_extraction(extraction)
    
    assert session.manual["product"]["name"] == "Widget"
    assert session.manual["breadcrumb"][1] == {"name": "Shop", "url": "https://example.com/shop"}
    assert "carousel" not in session.manual
    
    session.manual["breadcrumb"][0]["name"] = "Start"
    assert session.extracted["breadcrumb"][0]["name"] == "Home"


def test_list_item_editing(extraction):
    session = EditSession()
    session.apply_extraction(extraction)
    
    index = session.add_item(SchemaType.BREADCRUMB)
    session.update_item(SchemaType.BREADCRUMB, index, "name", "Widget")
    session.update_item(SchemaType.BREADCRUMB, index, "url", "https://example.com/shop/widget")
    session.remove_item(SchemaType.BREADCRUMB, 0)
    
    assert [item["name"] for item in session.merged_items(SchemaType.BREADCRUMB)] == ["Shop", "Widget"]


def test_add_item_to_type_without_extraction():
    session = EditSession()
    index = session.add_item(SchemaType.CAROUSEL)
    
    assert index == 0
    assert session.manual["carousel"] == [
        {"name": "", "url": "", "image": "", "description": "", "price": ""}
    ]


def test_product_is_not_a_list_type():
    with pytest.raises(ValueError):
        EditSession().add_item(SchemaType.PRODUCT)


def test_product_schema_merges_manual_over_extracted(extraction):
    session = EditSession(selected_types=[SchemaType.PRODUCT])
    session.apply_extraction(extraction)
    session.update_field(SchemaType.PRODUCT, "brand", "Acme")
    session.update_field(SchemaType.PRODUCT, "description", "Edited description")
    session.update_field(SchemaType.PRODUCT, "availability", "https://schema.org/InStock")
    
    schemas = SchemaGenerator().generate(session).schemas
    
    assert schemas == [{
        "@context": "https://schema.org",
        "@type": "Product",
        "name": "Widget",
        "description": "Edited description",
        "brand": {"@type": "Brand", "name": "Acme"},
        "offers": {
            "@type": "Offer",
            "price": "19.99",
            "priceCurrency": "USD",
            "availability": "https://schema.org/InStock",
        },
    }]


def test_product_rating_requires_value_and_count():
    session = EditSession(
        selected_types=[SchemaType.PRODUCT],
        manual={"product": {"name": "Widget", "ratingValue": "4.5", "reviewCount": "12"}},
    )
    schema = SchemaGenerator().generate(session).schemas[0]
    
    assert schema["aggregateRating"] == {
        "@type": "AggregateRating",
        "ratingValue": "4.5",
        "reviewCount": "12",
    }
    assert "offers" not in schema


def test_product_without_name_is_skipped():
    session = EditSession(selected_types=[SchemaType.PRODUCT], manual={"product": {"description": "x"}})
    assert SchemaGenerator().generate(session).schemas == []


def test_breadcrumb_and_faq_schemas(extraction):
    session = EditSession(selected_types=[SchemaType.FAQ, SchemaType.BREADCRUMB])
    session.apply_extraction(extraction)
    session.add_item(SchemaType.BREADCRUMB)  # blank, dropped
    
    schemas = SchemaGenerator().generate(session).schemas
    
    assert [s["@type"] for s in schemas] == ["BreadcrumbList", "FAQPage"]
    assert schemas[0]["itemListElement"] == [
        {"@type": "ListItem", "position": 1, "name": "Home", "item": "https://example.com"},
        {"@type": "ListItem", "position": 2, "name": "Shop", "item": "https://example.com/shop"},
    ]
    assert schemas[1]["mainEntity"] == [{
        "@type": "Question",
        "name": "Is it blue?",
        "acceptedAnswer": {"@type": "Answer", "text": "Yes, always."},
    }]


def test_carousel_item_list():
    session = EditSession(
        selected_types=[SchemaType.CAROUSEL],
        extracted={"carousel": [
            {"name": "Blue", "url": "/blue", "image": "/blue.png", "description": "", "price": "5"},
            {"name": "Red", "url": "#", "image": "", "description": "Red one", "price": ""},
            {"name": "", "url": "/nameless", "image": "", "description": "", "price": ""},
        ]},
    )
    schema = SchemaGenerator().generate(session).schemas[0]
    
    assert schema["@type"] == "ItemList"
    assert schema["itemListElement"] == [
        {"@type": "ListItem", "position": 1, "item": {
            "@type": "Product", "name": "Blue", "url": "/blue", "image": "/blue.png",
            "offers": {"@type": "Offer", "price": "5", "priceCurrency": "USD"},
        }},
        {"@type": "ListItem", "position": 2, "item": {
            "@type": "Product", "name": "Red", "url": "#", "description": "Red one",
        }},
    ]


def test_unselected_types_are_not_generated(extraction):
    session = EditSession(selected_types=[])
    session.apply_extraction(extraction)
    
    assert SchemaGenerator().generate(session).schemas == []


def test_script_tag_has_one_block_per_schema(extraction):
    session = EditSession(selected_types=[SchemaType.PRODUCT, SchemaType.BREADCRUMB])
    session.apply_extraction(extraction)
    collection = SchemaGenerator().generate(session)
    
    tag = collection.to_script_tag()
    
    assert tag.count('<script type="application/ld+json">') == 2
    first_block = tag.split("</script>")[0].split(">", 1)[1]
    assert json.loads(first_block)["@type"] == "Product"


def test_merged_dispatches_on_type(extraction):
    session = EditSession()
    session.apply_extraction(extraction)
    session.update_field(SchemaType.PRODUCT, "sku", "W-1")
    
    assert session.merged(SchemaType.PRODUCT)["sku"] == "W-1"
    assert session.merged(SchemaType.PRODUCT)["name"] == "Widget"
    assert session.merged(SchemaType.FAQ) == [{"question": "Is it blue?", "answer": "Yes, always."}]


def test_apply_extraction_discards_previous_edits(extraction):
    session = EditSession(selected_types=[SchemaType.CAROUSEL])
    session.add_item(SchemaType.CAROUSEL)
    session.update_item(SchemaType.CAROUSEL, 0, "name", "Stale slide")
    session.update_item(SchemaType.CAROUSEL, 0, "url", "/stale")
    
    session.apply_extraction(extraction)
    
    assert "carousel" not in session.manual
    assert SchemaGenerator().generate(session).schemas == []


def test_non_dict_entries_are_skipped():
    session = EditSession(
        selected_types=[SchemaType.PRODUCT, SchemaType.FAQ],
        extracted={"product": "Widget"},
        manual={"faq": ["oops", {"question": "Is it blue?", "answer": "Yes, always."}]},
    )
    schemas = SchemaGenerator().generate(session).schemas
    
    assert [s["@type"] for s in schemas] == ["FAQPage"]
    assert len(schemas[0]["mainEntity"]) == 1
