"""
Data models for form_state.

This module contains Pydantic models for:
- Form schema declaration (leaf fields and nested groups)
- Validation results
"""

from form_state.models.schema import (
    FieldSchema,
    FormSchema,
    ObjectSchema,
    SchemaField,
)
from form_state.models.validation_result import (
    FieldValidationError,
    ValidationResult,
)

__all__ = [
    # Schema
    "FieldSchema",
    "FormSchema",
    "ObjectSchema",
    "SchemaField",
    # Validation
    "ValidationResult",
    "FieldValidationError",
]
