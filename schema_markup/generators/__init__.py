"""Generators package initialization."""
from schema_markup.generators.schema_generator import SchemaGenerator

__all__ = ["SchemaGenerator"]
