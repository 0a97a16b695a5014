"""
Leaf validation rules.

Rules are plain callables that pydantic runs as after-validators on the
string value of a leaf. A failing rule raises ``PydanticCustomError`` so the
error keeps its own type and message in the validation report.
"""

import re
from typing import Callable, Iterable

from pydantic_core import PydanticCustomError

from form_state.rules.constants import (
    EMAIL_MESSAGE,
    EMAIL_PATTERN,
    ENUM_MESSAGE,
    MAX_LENGTH_MESSAGE,
    MIN_LENGTH_MESSAGE,
    PATTERN_MESSAGE,
    REQUIRED_MESSAGE,
)

LeafRule = Callable[[str], str]


def required_rule(value: str) -> str:
    """Reject the empty string. Absence is reported by pydantic as ``missing``."""
    if value == "":
        raise PydanticCustomError("required", REQUIRED_MESSAGE)
    return value


def email_rule(value: str) -> str:
    """Accept ``local@domain.tld``; the domain needs at least one dot."""
    if not EMAIL_PATTERN.fullmatch(value):
        raise PydanticCustomError("email", EMAIL_MESSAGE)
    return value


def min_length_rule(limit: int) -> LeafRule:
    def rule(value: str) -> str:
        if len(value) < limit:
            raise PydanticCustomError("min_length", MIN_LENGTH_MESSAGE, {"expected": limit})
        return value

    return rule


def max_length_rule(limit: int) -> LeafRule:
    def rule(value: str) -> str:
        if len(value) > limit:
            raise PydanticCustomError("max_length", MAX_LENGTH_MESSAGE, {"expected": limit})
        return value

    return rule


def pattern_rule(pattern: str) -> LeafRule:
    """Build a rule requiring the whole value to match ``pattern``."""
    compiled = re.compile(pattern)

    def rule(value: str) -> str:
        if not compiled.fullmatch(value):
            raise PydanticCustomError("pattern", PATTERN_MESSAGE, {"expected": pattern})
        return value

    return rule


def enum_rule(allowed: Iterable[str]) -> LeafRule:
    choices = tuple(allowed)

    def rule(value: str) -> str:
        if value not in choices:
            raise PydanticCustomError("enum", ENUM_MESSAGE, {"expected": list(choices)})
        return value

    return rule
