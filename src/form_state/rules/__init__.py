"""
Leaf validation rules for form fields.

Each rule takes the string value of a leaf and either returns it unchanged
or raises a ``PydanticCustomError`` describing the failure.
"""

from form_state.rules.leaf_rules import (
    email_rule,
    enum_rule,
    max_length_rule,
    min_length_rule,
    pattern_rule,
    required_rule,
)

__all__ = [
    "required_rule",
    "email_rule",
    "min_length_rule",
    "max_length_rule",
    "pattern_rule",
    "enum_rule",
]
