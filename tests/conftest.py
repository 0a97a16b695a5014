"""Shared fixtures for form_state tests."""

import pytest

from form_state import config as config_module
from form_state.models.schema import FieldSchema, FormSchema, ObjectSchema


@pytest.fixture
def signup_schema() -> FormSchema:
    """Registration-shaped schema without message overrides."""
    return FormSchema(
        form_id="signup",
        title="Sign up",
        fields=[
            FieldSchema(name="firstName", title="First Name"),
            FieldSchema(name="lastName", title="Last Name"),
            FieldSchema(name="company", title="Company"),
            FieldSchema(name="email", title="E-mail", format="email"),
            ObjectSchema(
                name="dateOfBirth",
                required=False,
                fields=[
                    FieldSchema(name="month", required=False),
                    FieldSchema(name="day", required=False),
                    FieldSchema(name="year", required=False),
                ],
            ),
        ],
    )


@pytest.fixture
def valid_signup() -> dict:
    return {
        "firstName": "Joe",
        "lastName": "Doe",
        "company": "Acme",
        "email": "joe@acme.com",
    }


@pytest.fixture
def restore_config():
    """Undo changes made to the global configuration by a test."""
    saved = dict(vars(config_module.config))
    yield config_module.config
    for key, value in saved.items():
        setattr(config_module.config, key, value)
