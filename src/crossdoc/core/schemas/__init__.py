"""JSON Schema definitions and validation for serialized documents."""

from .validator import ValidationError, validate_document

__all__ = ["ValidationError", "validate_document"]
