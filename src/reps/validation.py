"""Validation utilities for the Renewable Energy Plant System."""

import math
from datetime import datetime
from numbers import Real
from typing import Any, Type, Tuple, Union

from .exceptions import ValidationError, ValidationTypeError, ValidationRangeError

class Validator:
    """Base validator class."""

    @staticmethod
    def validate_type(value: Any, expected_type: Union[Type, Tuple[Type, ...]]) -> None:
        """Validate value type."""
        if not isinstance(value, expected_type):
            if isinstance(expected_type, tuple):
                expected = " or ".join(t.__name__ for t in expected_type)
            else:
                expected = expected_type.__name__
            raise ValidationTypeError(
                f"Expected type {expected}, got {type(value).__name__}"
            )

class ReadingValidator(Validator):
    """Validator for reading values."""

    @staticmethod
    def validate_timestamp(timestamp: datetime) -> None:
        """Validate reading timestamp."""
        Validator.validate_type(timestamp, datetime)

    @staticmethod
    def validate_output(output: float) -> None:
        """Validate energy output value."""
        # bool is an int subclass but never a meaningful reading
        if isinstance(output, bool):
            raise ValidationTypeError("Expected type Real, got bool")
        Validator.validate_type(output, Real)
        try:
            value = float(output)
        except OverflowError as e:
            raise ValidationRangeError(f"Output too large for a float: {output}") from e
        if not math.isfinite(value):
            raise ValidationRangeError(f"Output must be finite, got {value}")

class SourceValidator(Validator):
    """Validator for energy source data."""

    @staticmethod
    def validate_id(source_id: str) -> None:
        """Validate source identifier."""
        if not source_id or not isinstance(source_id, str):
            raise ValidationError("Source id must be a non-empty string")
        if source_id != source_id.strip():
            raise ValidationError(f"Source id cannot have surrounding whitespace: {source_id!r}")
        if any(c in source_id for c in ",|\r\n"):
            raise ValidationError(f"Source id cannot contain separators: {source_id!r}")

def validate_source_type(source_type: str) -> None:
    """Validate source type tag."""
    valid_types = ("Solar", "Wind", "Hydropower")
    if source_type not in valid_types:
        raise ValidationError(f"Invalid source type. Must be one of: {valid_types}")
