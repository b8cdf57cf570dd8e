"""Schema Markup Generator - extract page data and build schema.org JSON-LD."""

__version__ = "1.0.0"
