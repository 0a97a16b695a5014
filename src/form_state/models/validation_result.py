"""
Validation result models for form validation.

These models represent the output of a schema validation run.
"""

from typing import Any

from pydantic import BaseModel, Field


class FieldValidationError(BaseModel):
    """Validation error for a specific field."""

    path: str = Field(..., description="Dotted path of the field with error")
    error_type: str = Field(..., description="Type of validation error")
    message: str = Field(..., description="Human-readable error message")
    expected: Any | None = Field(default=None, description="Expected value/format")
    received: Any | None = Field(default=None, description="Received value")


class ValidationResult(BaseModel):
    """Result of form validation."""

    is_valid: bool = Field(..., description="Whether the form data is valid")
    errors: list[FieldValidationError] = Field(
        default_factory=list, description="Validation errors in schema declaration order"
    )
    validated_data: dict[str, Any] | None = Field(
        default=None, description="Validated data if valid"
    )
    typed_value: Any | None = Field(
        default=None,
        exclude=True,
        repr=False,
        description="Typed model instance built from the validated data",
    )

    @property
    def error_count(self) -> int:
        """Get the number of validation errors."""
        return len(self.errors)

    @property
    def paths(self) -> list[str]:
        """Paths of the failing fields, in report order."""
        return [e.path for e in self.errors]

    def get_field_errors(self, path: str) -> list[FieldValidationError]:
        """Get all errors for a specific field."""
        return [e for e in self.errors if e.path == path]

    def to_error_map(self) -> dict[str, str]:
        """Convert errors to a dict mapping each field path to its first message."""
        result: dict[str, str] = {}
        for error in self.errors:
            result.setdefault(error.path, error.message)
        return result
