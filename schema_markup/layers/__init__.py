"""Layers package initialization."""
from schema_markup.layers.extraction import ExtractionLayer

__all__ = ["ExtractionLayer"]
