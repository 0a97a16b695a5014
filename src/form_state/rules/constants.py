"""
Constants for the leaf validation rules.

This module contains the patterns and messages used by the rule
functions. Centralizing these makes them easier to maintain and update.
"""

import re

# Local part, "@", then a domain made of at least two dot-separated labels
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@.]+(?:\.[^\s@.]+)+$")

# Field names must be usable as attribute names on the typed value
VALID_FIELD_NAME = re.compile(r"^[a-zA-Z][a-zA-Z0-9_]*$")

MAX_FIELD_NAME_LENGTH = 100

# Messages for the rules defined in this package
REQUIRED_MESSAGE = "This field is required"
EMAIL_MESSAGE = "Must be a valid email address"
MIN_LENGTH_MESSAGE = "Must be at least {expected} characters"
MAX_LENGTH_MESSAGE = "Must be at most {expected} characters"
PATTERN_MESSAGE = "Does not match the expected format"
ENUM_MESSAGE = "Must be one of the allowed values"

# Replacement messages for errors reported by pydantic itself, keyed by error type
BUILTIN_ERROR_MESSAGES = {
    "missing": REQUIRED_MESSAGE,
    "string_type": "Must be text",
    "model_type": "Must be a group of fields",
    "model_attributes_type": "Must be a group of fields",
}
