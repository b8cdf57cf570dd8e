"""Tests for the product extractor."""
from schema_markup.extractors.product import ProductExtractor


def test_head_metadata_is_extracted():
    html = """
    <html><head>
      <title>Tom &amp; Jerry&#x27;s Widgets</title>
      <meta name="description" content="Hand made &quot;classic&quot; widgets">
      <meta property="og:image" content="https://cdn.example.com/widget.png">
    </head><body></body></html>
    """
    record = ProductExtractor().extract(html)
    
    assert record.name == "Tom & Jerry's Widgets"
    assert record.description == 'Hand made "classic" widgets'
    assert record.image == "https://cdn.example.com/widget.png"
    assert record.price is None


def test_dollar_price_sets_usd():
    record = ProductExtractor().extract("<title>Widget</title><span>Now $19.99!</span>")
    
    assert record.price == "19.99"
    assert record.currency == "USD"


def test_usd_suffix_price():
    record = ProductExtractor().extract("<p>Price: 25 USD</p>")
    
    assert record.price == "25"
    assert record.currency == "USD"


def test_first_price_wins():
    record = ProductExtractor().extract("<p>$5.00</p><p>$99.99</p>")
    assert record.price == "5.00"


def test_missing_fields_are_empty_or_omitted():
    record = ProductExtractor().extract("<html><body>nothing here</body></html>")
    
    assert record.name == ""
    assert record.description == ""
    assert record.to_dict() == {"name": "", "description": ""}
