"""
form_state: Schema-driven form state and validation.

Declare the shape of a form, bind controls to its fields, and validate the
whole value on submit. Errors come back as a map from field path to
message.

Simple Usage:
    from form_state import FieldSchema, FormController, FormSchema, ObjectSchema

    schema = FormSchema(
        form_id="signup",
        fields=[
            FieldSchema(name="firstName"),
            FieldSchema(name="email", format="email"),
            ObjectSchema(
                name="dateOfBirth",
                required=False,
                fields=[FieldSchema(name="year", required=False)],
            ),
        ],
    )

    controller = FormController(schema)
    controller.bind("firstName").on_change("Joe")
    controller.set_value("dateOfBirth.year", "1990")

    result = controller.submit(on_valid=print)
    controller.error_for("email")  # "This field is required"

Logging:
    from form_state.log import setup_logging

    setup_logging("DEBUG")
"""

from form_state.controller import (
    BindingMode,
    FieldAdapter,
    FormController,
    FormState,
    RegisteredField,
)
from form_state.exceptions import (
    BindingError,
    FormStateError,
    SchemaDefinitionError,
)
from form_state.models.schema import (
    FieldSchema,
    FormSchema,
    ObjectSchema,
)
from form_state.models.validation_result import (
    FieldValidationError,
    ValidationResult,
)
from form_state.config import (
    get_config,
    get_theme,
    set_theme,
    update_config,
)
from form_state.log import setup_logging

__all__ = [
    # Main interface
    "FormController",
    "FieldAdapter",
    "FormState",
    "BindingMode",
    "RegisteredField",
    # Schema
    "FieldSchema",
    "FormSchema",
    "ObjectSchema",
    # Validation
    "ValidationResult",
    "FieldValidationError",
    # Errors
    "FormStateError",
    "BindingError",
    "SchemaDefinitionError",
    # Configuration
    "get_config",
    "update_config",
    "get_theme",
    "set_theme",
    "setup_logging",
]

__version__ = "0.1.0"
