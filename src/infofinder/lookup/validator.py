"""Input validation against per-category grammars."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .registry import CategoryId, definition_for


class ValidationFailure(str, Enum):
    """Reasons a raw identifier is rejected before any lookup."""

    EMPTY = "empty"
    PATTERN_MISMATCH = "pattern-mismatch"


@dataclass(frozen=True)
class Valid:
    """Accepted input, already trimmed."""

    value: str


@dataclass(frozen=True)
class Invalid:
    """Rejected input with the inline banner message."""

    reason: ValidationFailure
    message: str


ValidationResult = Union[Valid, Invalid]


def validate(category_id: CategoryId | str, raw_input: str | None) -> ValidationResult:
    """Trim ``raw_input`` and check it against the category grammar."""

    definition = definition_for(category_id)
    value = (raw_input or "").strip()
    if not value:
        return Invalid(ValidationFailure.EMPTY, "Please enter a value")
    if not definition.matches(value):
        return Invalid(ValidationFailure.PATTERN_MISMATCH, f"Please enter a valid {definition.label}")
    return Valid(value)
