"""Validation module for inputs and generated schedules."""

from shifthelper.validation.validator import (
    ScheduleValidator,
    ValidationError,
    ValidationErrorType,
    ValidationResult,
    validate_employee,
    validate_establishment,
    validate_inputs,
    validate_shift_definitions,
    validate_week_start,
)

__all__ = [
    "ScheduleValidator",
    "ValidationError",
    "ValidationErrorType",
    "ValidationResult",
    "validate_employee",
    "validate_establishment",
    "validate_inputs",
    "validate_shift_definitions",
    "validate_week_start",
]
