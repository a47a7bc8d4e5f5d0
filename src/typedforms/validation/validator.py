"""Validation of raw data against the fields of a form class."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from typedforms.exceptions import FieldValueTypeMismatchError, MissingFieldValueError
from typedforms.paths import extend_path
from typedforms.registry import resolve_fields
from typedforms.scopes import grants_access_to
from typedforms.types import FormType, NullableType
from typedforms.typing.enums import ValidationMode
from typedforms.validation.caster import cast_value

if TYPE_CHECKING:
    from typedforms.forms import Form
    from typedforms.paths import FieldPath
    from typedforms.types import ValueType
    from typedforms.validation.config import ValidationConfig


def validate_data(form_class: type[Form], raw: Any, config: ValidationConfig) -> dict[str, Any]:
    """Validate raw data into the values of a form.

    Fields are visited in declared order. Fields hidden from
    `config.access_scope` are dropped without being looked at, and input keys
    that are not declared fields are ignored.

    Args:
        form_class (type[Form]): Form class.
        raw (Any): Raw input mapping.
        config (ValidationConfig): Validation configuration.

    Raises:
        FieldValueTypeMismatchError: If `raw` is not a mapping or a value has the wrong type.
        MissingFieldValueError: If a required value is missing in `FULL` mode.
        InvalidFieldValueError: If a value does not meet its requirement.

    Returns:
        dict[str, Any]: Validated values keyed by field id.
    """
    if not isinstance(raw, Mapping):
        path = config.parent_path if config.detailed_location else None
        raise FieldValueTypeMismatchError(path, type(raw), FormType(form_class=form_class))

    values: dict[str, Any] = {}
    for spec in resolve_fields(form_class):
        if not grants_access_to(config.access_scope, spec.access_scope):
            continue

        if config.mode is ValidationMode.NONE:
            if spec.id in raw:
                values[spec.id] = raw[spec.id]
            continue

        path = extend_path(config.parent_path, spec) if config.detailed_location else None
        value = raw.get(spec.id)
        if value is None:
            if config.mode is ValidationMode.PROVIDED:
                continue
            if spec.is_required:
                raise MissingFieldValueError(path)
            if spec.default is not None:
                values[spec.id] = spec.default
            continue

        values[spec.id] = process_value(spec.type, value, default=spec.default, config=config, path=path)
    return values


def process_value(
    value_type: ValueType,
    value: Any,
    *,
    config: ValidationConfig,
    path: FieldPath | None,
    default: Any = None,
) -> Any:
    """Reconcile, pre-process and check a single value.

    Args:
        value_type (ValueType): Declared type.
        value (Any): Raw value.
        config (ValidationConfig): Validation configuration.
        path (FieldPath | None): Location of the value.
        default (Any): Substitute for a missing value of an optional field.

    Raises:
        MissingFieldValueError: If the value is missing and nothing may replace it.
        FieldValueTypeMismatchError: If the value cannot be reconciled with the type.
        InvalidFieldValueError: If the value does not meet the type's requirement.

    Returns:
        Any: Validated value.
    """
    if value is None:
        # defaults are trusted as declared
        if default is not None or isinstance(value_type, NullableType):
            return default
        raise MissingFieldValueError(path)

    value_type = value_type.non_null
    if value_type.is_walkable(value) or (config.lenient_types and not value_type.accepts(value)):
        value = cast_value(value_type, value, config=config, path=path, process=process_value)
    elif not value_type.accepts(value):
        raise FieldValueTypeMismatchError(path, type(value), value_type)

    if value_type.pre_processor is not None:
        value = value_type.pre_processor(value)

    if value_type.requirement is not None:
        value_type.requirement.ensure_valid(path, value, optimized=config.optimized_requirement_checks)
    return value
