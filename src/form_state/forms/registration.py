"""
Registration form.

Schema and choice lists for the user registration page: first and last
name, company, e-mail, and an optional date of birth picked from three
drop-downs. The date parts are all optional, so a partial date passes
validation.
"""

from typing import Any, Callable, Mapping

from form_state.config import get_config
from form_state.controller import FormController
from form_state.models.schema import FieldSchema, FormSchema, ObjectSchema
from form_state.models.validation_result import ValidationResult

# Controls that report their own changes
TEXT_FIELDS = ("firstName", "lastName", "company", "email")

# Drop-downs that report a single selection
CHOICE_FIELDS = ("dateOfBirth.month", "dateOfBirth.day", "dateOfBirth.year")

FIRST_BIRTH_YEAR = 1901
BIRTH_YEAR_COUNT = 124


def month_options() -> list[str]:
    """Months as two-digit strings, "01" to "12"."""
    return [str(month).zfill(2) for month in range(1, 13)]


def day_options() -> list[str]:
    """Days as two-digit strings, "01" to "31"."""
    return [str(day).zfill(2) for day in range(1, 32)]


def year_options() -> list[str]:
    """Years as four-digit strings, "1901" to "2024"."""
    return [str(year).zfill(4) for year in range(FIRST_BIRTH_YEAR, FIRST_BIRTH_YEAR + BIRTH_YEAR_COUNT)]


def choice_options() -> dict[str, list[str]]:
    """Options offered by each choice control, keyed by field path."""
    return {
        "dateOfBirth.month": month_options(),
        "dateOfBirth.day": day_options(),
        "dateOfBirth.year": year_options(),
    }


def build_registration_schema(error_message: str | None = None) -> FormSchema:
    """
    Build the registration form schema.

    Args:
        error_message: Message reported for every invalid field. If None,
            uses config.error_message.
    """
    message = error_message or get_config().error_message
    return FormSchema(
        form_id="registration",
        title="Registration",
        fields=[
            FieldSchema(name="firstName", title="First Name", message=message),
            FieldSchema(name="lastName", title="Last Name", message=message),
            FieldSchema(name="company", title="Company", message=message),
            FieldSchema(name="email", title="E-mail", format="email", message=message),
            ObjectSchema(
                name="dateOfBirth",
                title="Date of birth",
                required=False,
                message=message,
                fields=[
                    FieldSchema(name="month", title="Month", required=False, message=message),
                    FieldSchema(name="day", title="Day", required=False, message=message),
                    FieldSchema(name="year", title="Year", required=False, message=message),
                ],
            ),
        ],
    )


def create_registration_controller(error_message: str | None = None) -> FormController:
    """Create a controller for the registration form with every control registered."""
    controller = FormController(build_registration_schema(error_message))
    for path in TEXT_FIELDS:
        controller.bind(path)
    for path in CHOICE_FIELDS:
        controller.register(path)
    return controller


def submit_registration(
    fields: Mapping[str, Any],
    on_valid: Callable[[Any], Any] | None = None,
    controller: FormController | None = None,
) -> tuple[ValidationResult, dict[str, str | None]]:
    """
    Fill a registration controller from flat control values and submit it.

    Text controls are written through their adapters. A choice control with
    no selection (None or missing) is left unset.

    Args:
        fields: Control values keyed by field path.
        on_valid: Called with the typed value when validation succeeds.
        controller: Controller to fill. If None, a new one is created.

    Returns:
        The validation result and the error message (or None) for every
        control, keyed by field path.
    """
    controller = controller or create_registration_controller()

    for path in TEXT_FIELDS:
        controller.bind(path).on_change(fields.get(path) or "")
    for path in CHOICE_FIELDS:
        selected = fields.get(path)
        if selected is None:
            controller.clear_value(path)
        else:
            controller.set_value(path, selected)

    result = controller.submit(on_valid)
    field_errors = {path: controller.error_for(path) for path in TEXT_FIELDS + CHOICE_FIELDS}
    return result, field_errors
