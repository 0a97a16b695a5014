"""Ready-made form schemas."""

from form_state.forms.registration import (
    build_registration_schema,
    choice_options,
    create_registration_controller,
    submit_registration,
)

__all__ = [
    "build_registration_schema",
    "choice_options",
    "create_registration_controller",
    "submit_registration",
]
