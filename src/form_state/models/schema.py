"""
Form schema models.

These models declare the shape a form value must have: leaf fields with
their constraints, and nested groups of fields. A schema is immutable once
constructed. On construction it is compiled into a typed pydantic model,
which performs the actual validation and is handed to submit callbacks as
the typed value.
"""

import re
from collections.abc import Mapping
from typing import Annotated, Any, Iterator, Literal, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    Strict,
    ValidationError,
    create_model,
    field_validator,
    model_validator,
)

from form_state.exceptions import SchemaDefinitionError
from form_state.models.validation_result import FieldValidationError, ValidationResult
from form_state.paths import FieldPath, split_path
from form_state.rules import (
    email_rule,
    enum_rule,
    max_length_rule,
    min_length_rule,
    pattern_rule,
    required_rule,
)
from form_state.rules.constants import (
    BUILTIN_ERROR_MESSAGES,
    MAX_FIELD_NAME_LENGTH,
    VALID_FIELD_NAME,
)
from form_state.rules.leaf_rules import LeafRule


def _check_field_name(name: str) -> tuple[bool, str | None]:
    """Validate a field name."""
    if not name:
        return False, "Field name cannot be empty"
    if len(name) > MAX_FIELD_NAME_LENGTH:
        return False, "Field name too long"
    if not VALID_FIELD_NAME.match(name):
        return False, "Invalid characters in field name"
    # The name becomes an attribute of the compiled model
    if name.startswith("model_") or hasattr(BaseModel, name):
        return False, "Field name is reserved"
    return True, None


def _check_unique_names(fields: tuple["SchemaField", ...]) -> None:
    seen: set[str] = set()
    for field in fields:
        if field.name in seen:
            raise SchemaDefinitionError(f"Duplicate field name '{field.name}'")
        seen.add(field.name)


class _SchemaNode(BaseModel):
    """Attributes shared by leaf fields and field groups."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., description="Field name/key")
    title: str | None = Field(default=None, description="Human-readable label")
    description: str | None = Field(default=None, description="Help text")
    required: bool = Field(default=True, description="Whether field is required")
    message: str | None = Field(
        default=None, description="Message reported for any error on this field"
    )

    @field_validator("name")
    @classmethod
    def _valid_name(cls, value: str) -> str:
        is_valid, error = _check_field_name(value)
        if not is_valid:
            raise SchemaDefinitionError(f"Invalid field name '{value}': {error}")
        return value


class FieldSchema(_SchemaNode):
    """Schema for a single leaf field. Leaf values are always strings."""

    format: Literal["email"] | None = Field(default=None, description="Format: email")
    min_length: int | None = Field(default=None, ge=0, description="Minimum string length")
    max_length: int | None = Field(default=None, ge=0, description="Maximum string length")
    pattern: str | None = Field(default=None, description="Regex the whole value must match")
    enum_values: tuple[str, ...] | None = Field(default=None, description="Allowed values")

    @field_validator("pattern")
    @classmethod
    def _compilable_pattern(cls, value: str | None) -> str | None:
        if value is not None:
            try:
                re.compile(value)
            except re.error as e:
                raise SchemaDefinitionError(f"Invalid pattern {value!r}: {e}") from e
        return value

    @model_validator(mode="after")
    def _consistent_lengths(self) -> "FieldSchema":
        if (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        ):
            raise SchemaDefinitionError(
                f"Field '{self.name}': min_length {self.min_length} exceeds max_length {self.max_length}"
            )
        return self

    def rules(self) -> list[LeafRule]:
        """Leaf rules in the order they are checked. The first failure wins."""
        rules: list[LeafRule] = []
        if self.required:
            rules.append(required_rule)
        if self.format == "email":
            rules.append(email_rule)
        if self.min_length is not None:
            rules.append(min_length_rule(self.min_length))
        if self.max_length is not None:
            rules.append(max_length_rule(self.max_length))
        if self.pattern is not None:
            rules.append(pattern_rule(self.pattern))
        if self.enum_values is not None:
            rules.append(enum_rule(self.enum_values))
        return rules


class ObjectSchema(_SchemaNode):
    """Schema for a nested group of fields."""

    fields: tuple[Union[FieldSchema, "ObjectSchema"], ...] = Field(
        ..., description="Fields of the group, in declaration order"
    )

    @model_validator(mode="after")
    def _unique_names(self) -> "ObjectSchema":
        _check_unique_names(self.fields)
        return self


SchemaField = Union[FieldSchema, ObjectSchema]


def _model_name(form_id: str) -> str:
    parts = re.split(r"[^a-zA-Z0-9]+", form_id)
    return "".join(part[:1].upper() + part[1:] for part in parts if part) or "Form"


def _compile_model(model_name: str, fields: tuple[SchemaField, ...]) -> type[BaseModel]:
    """Build the typed pydantic model that validates values of this shape."""
    definitions: dict[str, Any] = {}
    for field in fields:
        if isinstance(field, ObjectSchema):
            annotation: Any = _compile_model(model_name + _model_name(field.name), field.fields)
        else:
            validators = [AfterValidator(rule) for rule in field.rules()]
            annotation = Annotated[(str, Strict(), *validators)]
        # Optional fields default to None, which pydantic does not validate
        definitions[field.name] = (annotation, ... if field.required else None)
    return create_model(model_name, __config__=ConfigDict(extra="ignore"), **definitions)


def _iter_leaf_paths(fields: tuple[SchemaField, ...], prefix: tuple[str, ...]) -> Iterator[str]:
    for field in fields:
        path = prefix + (field.name,)
        if isinstance(field, ObjectSchema):
            yield from _iter_leaf_paths(field.fields, path)
        else:
            yield ".".join(path)


def _fields_json_schema(fields: tuple[SchemaField, ...]) -> dict[str, Any]:
    properties: dict[str, Any] = {}
    required: list[str] = []

    for field in fields:
        if isinstance(field, ObjectSchema):
            prop = _fields_json_schema(field.fields)
        else:
            prop = {"type": "string"}
            if field.format:
                prop["format"] = field.format
            if field.required:
                prop["minLength"] = max(1, field.min_length or 0)
            elif field.min_length is not None:
                prop["minLength"] = field.min_length
            if field.max_length is not None:
                prop["maxLength"] = field.max_length
            if field.pattern:
                prop["pattern"] = f"^(?:{field.pattern})$"
            if field.enum_values:
                prop["enum"] = list(field.enum_values)
        if field.title:
            prop["title"] = field.title
        if field.description:
            prop["description"] = field.description

        properties[field.name] = prop
        if field.required:
            required.append(field.name)

    return {"type": "object", "properties": properties, "required": required}


class FormSchema(BaseModel):
    """
    Complete declaration of a form's data shape.

    Example:
        >>> schema = FormSchema(
        ...     form_id="signup",
        ...     fields=[
        ...         FieldSchema(name="email", format="email"),
        ...         ObjectSchema(
        ...             name="dateOfBirth",
        ...             required=False,
        ...             fields=[FieldSchema(name="year", required=False)],
        ...         ),
        ...     ],
        ... )
        >>> schema.validate({"email": "joe@acme.com"}).is_valid
        True
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    form_id: str = Field(default="form", description="Form identifier")
    title: str | None = Field(default=None, description="Form title")
    description: str | None = Field(default=None, description="Form description")
    fields: tuple[SchemaField, ...] = Field(..., description="Top-level fields, in declaration order")

    _typed_model: type[BaseModel] = PrivateAttr()

    @model_validator(mode="after")
    def _unique_names(self) -> "FormSchema":
        _check_unique_names(self.fields)
        return self

    def model_post_init(self, __context: Any) -> None:
        self._typed_model = _compile_model(_model_name(self.form_id), self.fields)

    @property
    def typed_model(self) -> type[BaseModel]:
        """The pydantic model that represents a validated value."""
        return self._typed_model

    def validate(self, candidate: Any) -> ValidationResult:
        """
        Validate a candidate form value in one pass.

        Every leaf is checked, even after an earlier one fails, and errors
        are reported in declaration order. Constraint violations are
        returned as data; this method does not raise for bad user input.

        Args:
            candidate: Nested mapping of field values.

        Returns:
            ValidationResult with either the validated data and typed value,
            or the ordered list of field errors.
        """
        if isinstance(candidate, Mapping) and not isinstance(candidate, dict):
            candidate = dict(candidate)
        try:
            typed = self._typed_model.model_validate(candidate)
        except ValidationError as exc:
            return ValidationResult(is_valid=False, errors=self._collect_errors(exc))

        return ValidationResult(
            is_valid=True,
            validated_data=typed.model_dump(exclude_unset=True),
            typed_value=typed,
        )

    def _collect_errors(self, exc: ValidationError) -> list[FieldValidationError]:
        errors: list[FieldValidationError] = []
        for item in exc.errors(include_url=False):
            path = ".".join(str(part) for part in item["loc"])
            node = self.get_field(path) if path else None
            if node is not None and node.message:
                message = node.message
            else:
                message = BUILTIN_ERROR_MESSAGES.get(item["type"], item["msg"])

            missing = item["type"] == "missing"
            errors.append(
                FieldValidationError(
                    path=path,
                    error_type="required" if missing else item["type"],
                    message=message,
                    expected=(item.get("ctx") or {}).get("expected"),
                    received=None if missing else item.get("input"),
                )
            )
        return errors

    def get_field(self, path: FieldPath) -> SchemaField | None:
        """Return the field or group declared at ``path``, or None if undeclared."""
        fields: tuple[SchemaField, ...] = self.fields
        node: SchemaField | None = None
        for segment in split_path(path):
            node = next((f for f in fields if f.name == segment), None)
            if node is None:
                return None
            fields = node.fields if isinstance(node, ObjectSchema) else ()
        return node

    def has_leaf(self, path: FieldPath) -> bool:
        """Whether ``path`` names a declared leaf field."""
        return isinstance(self.get_field(path), FieldSchema)

    def leaf_paths(self) -> list[str]:
        """Dotted paths of all leaf fields, depth-first in declaration order."""
        return list(_iter_leaf_paths(self.fields, ()))

    def to_json_schema(self) -> dict[str, Any]:
        """Export as JSON Schema dict."""
        schema = _fields_json_schema(self.fields)
        return {
            "$schema": "https://json-schema.org/draft/2020-12/schema",
            "title": self.title,
            "description": self.description,
            **schema,
        }
