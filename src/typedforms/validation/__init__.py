"""Validation pipeline: configuration, coercion and per-field checks."""

from typedforms.validation.caster import cast_value
from typedforms.validation.config import DEFAULT_VALIDATION_CONFIG, ValidationConfig
from typedforms.validation.validator import process_value, validate_data

__all__ = [
    "DEFAULT_VALIDATION_CONFIG",
    "ValidationConfig",
    "cast_value",
    "process_value",
    "validate_data",
]
