"""Validation utilities for TourneyKit.

This module provides reusable validation functions with consistent error handling.
Each ``validate_*`` function returns a :class:`ValidationResult`, whose
``unwrap`` raises :class:`~tourneykit.exceptions.ValidationError` for an
invalid value.
"""

from typing import Any, Iterable, Optional

from tourneykit.constants import BYE, SIDES
from tourneykit.exceptions import ValidationError
from tourneykit.type_hints import ScoreInput


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"

    def unwrap(self) -> Any:
        """Return the sanitized value, raising ValidationError if invalid."""
        if not self.is_valid:
            raise ValidationError(self.error_message)
        return self.sanitized_value


# ========== Name Validation ==========


def validate_team_name(name: Optional[str]) -> ValidationResult:
    """Validate a team name.

    Surrounding whitespace is stripped; anything else is kept as typed.
    The knockout bye marker cannot be used as a name, in any casing.

    Args:
        name: Name to validate

    Returns:
        ValidationResult with the trimmed name as sanitized value
    """
    if name is None or not isinstance(name, str):
        return ValidationResult(
            is_valid=False,
            error_message="Team name is required",
        )

    name = name.strip()
    if not name:
        return ValidationResult(
            is_valid=False,
            error_message="Team name cannot be empty",
        )

    if name_key(name) == name_key(BYE):
        return ValidationResult(
            is_valid=False,
            error_message=f"{name!r} is reserved for knockout byes",
        )

    return ValidationResult(is_valid=True, sanitized_value=name)


def name_key(name: str) -> str:
    """Key used to compare team names for uniqueness."""
    return name.strip().casefold()


def find_name_collision(name: str, existing: Iterable[str]) -> Optional[str]:
    """Return the existing name that collides with ``name``, if any."""
    key = name_key(name)
    for other in existing:
        if name_key(other) == key:
            return other
    return None


# ========== Score Validation ==========


def validate_score(value: ScoreInput) -> ValidationResult:
    """Validate a league score entry.

    ``None``, an empty string or a blank string mean "not yet played" and
    are valid with a sanitized value of ``None``. Otherwise the value must be
    a non-negative integer, given either as an int or as a string of ASCII
    digits.

    Args:
        value: Score to validate

    Returns:
        ValidationResult with an ``int`` or ``None`` as sanitized value
    """
    if value is None:
        return ValidationResult(is_valid=True, sanitized_value=None)

    # bool is an int subclass; True is not a score
    if isinstance(value, bool):
        return ValidationResult(
            is_valid=False,
            error_message=f"Score must be a whole number: {value!r}",
        )

    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return ValidationResult(is_valid=True, sanitized_value=None)
        if text.startswith("-") and text[1:].isascii() and text[1:].isdigit():
            return ValidationResult(
                is_valid=False,
                error_message=f"Score cannot be negative: {value!r}",
            )
        # int() alone would also take "1_0", "+3" and non-ASCII digits
        if not (text.isascii() and text.isdigit()):
            return ValidationResult(
                is_valid=False,
                error_message=f"Score must be a whole number: {value!r}",
            )
        int_value = int(text)
    else:
        return ValidationResult(
            is_valid=False,
            error_message=f"Score must be a whole number: {value!r}",
        )

    if int_value < 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"Score cannot be negative: {value!r}",
        )
    return ValidationResult(is_valid=True, sanitized_value=int_value)


def validate_side(side: str) -> ValidationResult:
    """Validate a match side ("A" or "B")."""
    if side not in SIDES:
        return ValidationResult(
            is_valid=False,
            error_message=f"Side must be one of {', '.join(SIDES)}: {side!r}",
        )
    return ValidationResult(is_valid=True, sanitized_value=side)
