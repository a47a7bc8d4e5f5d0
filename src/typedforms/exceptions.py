"""Package exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typedforms.paths import FieldPath
    from typedforms.requirements import Requirement
    from typedforms.types import ValueType


class PackageError(Exception):
    """Root exception for the package."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


class FormError(PackageError):
    """Root exception for form declaration, validation and data access."""


@dataclass(frozen=True)
class FormDeclarationError(FormError):
    """Raised when a form schema is malformed."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class FormStateError(FormError):
    """Raised when a form instance is used in the wrong lifecycle state."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


class FieldValueError(FormError):
    """Base class for errors located at a field value.

    `path` is `None` unless the validation ran with detailed location enabled.
    """

    path: FieldPath | None


@dataclass(frozen=True)
class MissingFieldValueError(FieldValueError):
    """Raised when a required field has no value."""

    path: FieldPath | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Missing required field value at path: '{self.path}'"


@dataclass(frozen=True)
class FieldValueTypeMismatchError(FieldValueError):
    """Raised when a value cannot be reconciled with the declared type."""

    path: FieldPath | None
    actual_type: type | None
    expected_type: ValueType

    def __str__(self) -> str:
        """Return error message payload."""
        message = f"Field value at path '{self.path}' does not match expected type '{self.expected_type}'"
        if self.actual_type is not None:
            message += f", but was of type '{self.actual_type.__name__}'"
        return message


@dataclass(frozen=True)
class InvalidFieldValueError(FieldValueError):
    """Raised when a value does not meet its requirement."""

    path: FieldPath | None
    requirement: Requirement

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Field value at path '{self.path}' does not meet requirement '{self.requirement}'"


class DataAccessError(FormError):
    """Raised on inappropriate access to form data."""


@dataclass(frozen=True)
class FieldNotFoundError(DataAccessError):
    """Raised when a field id is not declared by the form."""

    field_id: str
    form_class: type

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Field with ID '{self.field_id}' not found in form '{self.form_class.__name__}'"


@dataclass(frozen=True)
class UnexpectedFieldError(DataAccessError):
    """Raised when a field handle of another form is used against an instance."""

    field_id: str
    form_class: type

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Unexpected field '{self.field_id}' for form '{self.form_class.__name__}'"


@dataclass(frozen=True)
class ForbiddenFieldAccessError(DataAccessError):
    """Raised when a field is hidden by the access scope the form was validated with."""

    field_id: str
    form_class: type

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Access to field '{self.field_id}' of form '{self.form_class.__name__}' is forbidden"
