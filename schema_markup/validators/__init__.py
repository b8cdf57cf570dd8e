"""Validators package initialization."""
from schema_markup.validators.jsonld import (
    ValidationVerdict,
    ValidationErrorType,
    validate_jsonld,
    validate_schema_content,
    extract_schema_types,
)

__all__ = [
    "ValidationVerdict",
    "ValidationErrorType",
    "validate_jsonld",
    "validate_schema_content",
    "extract_schema_types",
]
