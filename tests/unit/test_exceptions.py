from __future__ import annotations

from typedforms.exceptions import (
    DataAccessError,
    FieldNotFoundError,
    FieldValueError,
    FieldValueTypeMismatchError,
    ForbiddenFieldAccessError,
    FormDeclarationError,
    FormError,
    FormStateError,
    InvalidFieldValueError,
    MissingFieldValueError,
    PackageError,
    SettingsError,
    UnexpectedFieldError,
)
from typedforms.paths import FieldPath
from typedforms.requirements import IS_POSITIVE
from typedforms.types import integer


class _Sample:
    pass


def test_root_exception_hierarchy() -> None:
    assert issubclass(SettingsError, PackageError)
    assert issubclass(FormError, PackageError)
    assert issubclass(FormDeclarationError, FormError)
    assert issubclass(FormStateError, FormError)
    assert issubclass(FieldValueError, FormError)
    assert issubclass(DataAccessError, FormError)


def test_field_value_errors_share_a_base() -> None:
    for error_type in (MissingFieldValueError, FieldValueTypeMismatchError, InvalidFieldValueError):
        assert issubclass(error_type, FieldValueError)


def test_data_access_errors_share_a_base() -> None:
    for error_type in (FieldNotFoundError, UnexpectedFieldError, ForbiddenFieldAccessError):
        assert issubclass(error_type, DataAccessError)


def test_settings_error_message_includes_cause() -> None:
    assert str(SettingsError(exc=ValueError("boom"))) == "Failed to load settings: boom"
    assert str(SettingsError()) == "Failed to load settings"


def test_missing_value_message_renders_path() -> None:
    error = MissingFieldValueError(FieldPath.of(3))
    assert str(error) == "Missing required field value at path: '#3'"
    assert MissingFieldValueError().path is None


def test_type_mismatch_message_names_both_types() -> None:
    error = FieldValueTypeMismatchError(None, str, integer())
    assert "Integer" in str(error)
    assert "'str'" in str(error)


def test_invalid_value_keeps_requirement() -> None:
    error = InvalidFieldValueError(None, IS_POSITIVE)
    assert error.requirement is IS_POSITIVE
    assert "in range" in str(error)


def test_data_access_messages_name_the_form() -> None:
    assert "_Sample" in str(FieldNotFoundError("x", _Sample))
    assert "'x'" in str(UnexpectedFieldError("x", _Sample))
    assert "forbidden" in str(ForbiddenFieldAccessError("x", _Sample))
