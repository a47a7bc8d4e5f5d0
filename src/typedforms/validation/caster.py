"""Coercion of raw values into the runtime shape of a value type."""

from __future__ import annotations

from collections.abc import Callable, Collection, Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any

from typedforms.binary import APPLICATION_OCTET_STREAM, ArrayBinarySource, parse_binary
from typedforms.exceptions import FieldValueTypeMismatchError
from typedforms.paths import MapKeySegment, extend_path
from typedforms.requirements import INT64_MAX, INT64_MIN
from typedforms.types import (
    BinaryType,
    BooleanType,
    DecimalType,
    EnumType,
    FormType,
    IntegerType,
    ListType,
    MapType,
    NullableType,
    TextType,
    ValueType,
)

if TYPE_CHECKING:
    from typedforms.paths import FieldPath, Segment
    from typedforms.validation.config import ValidationConfig

    ElementProcessor = Callable[..., Any]

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off"})


def cast_value(
    value_type: ValueType,
    value: Any,
    *,
    config: ValidationConfig,
    path: FieldPath | None,
    process: ElementProcessor,
) -> Any:
    """Convert a non-null raw value to the runtime shape of `value_type`.

    Container elements, map keys and map values are handed to `process`, which
    validates them as values of the element type under the same configuration.

    Args:
        value_type (ValueType): Target type.
        value (Any): Raw value, never None.
        config (ValidationConfig): Active validation configuration.
        path (FieldPath | None): Location of the value, None without detailed location.
        process (ElementProcessor): Validator for nested values, called as
            `process(element_type, element, config=..., path=...)`.

    Raises:
        FieldValueTypeMismatchError: If the value cannot be converted.

    Returns:
        Any: Converted value.
    """
    match value_type:
        case NullableType():
            return cast_value(value_type.inner, value, config=config, path=path, process=process)
        case BooleanType():
            return _cast_boolean(value_type, value, path)
        case IntegerType():
            number = _parse_number(int, value_type, value, path)
            if not INT64_MIN <= number <= INT64_MAX:
                raise _mismatch(value_type, value, path)
            return number
        case DecimalType():
            return _parse_number(float, value_type, value, path)
        case TextType():
            return value.name if isinstance(value, Enum) else str(value)
        case EnumType():
            return _cast_enum(value_type, value, path)
        case BinaryType():
            return _cast_binary(value_type, value, path)
        case ListType():
            if isinstance(value, str | bytes | bytearray | Mapping) or not isinstance(value, Collection):
                raise _mismatch(value_type, value, path)
            return [
                process(value_type.element_type, item, config=config, path=_child(config, path, index))
                for index, item in enumerate(value)
            ]
        case MapType():
            if not isinstance(value, Mapping):
                raise _mismatch(value_type, value, path)
            entries: dict[Any, Any] = {}
            for key, item in value.items():
                key_path = _child(config, path, MapKeySegment(key, value_target=False))
                item_path = _child(config, path, MapKeySegment(key, value_target=True))
                cast_key = process(value_type.key_type, key, config=config, path=key_path)
                entries[cast_key] = process(value_type.value_type, item, config=config, path=item_path)
            return entries
        case FormType():
            if not isinstance(value, Mapping):
                raise _mismatch(value_type, value, path)
            return value_type.form_class.from_data(value, config=config.with_parent(path))
        case _:
            raise _mismatch(value_type, value, path)


def _child(config: ValidationConfig, path: FieldPath | None, segment: Segment | int) -> FieldPath | None:
    if not config.detailed_location:
        return None
    return extend_path(path, segment)


def _mismatch(value_type: ValueType, value: Any, path: FieldPath | None) -> FieldValueTypeMismatchError:
    return FieldValueTypeMismatchError(path, type(value), value_type)


def _cast_boolean(value_type: BooleanType, value: Any, path: FieldPath | None) -> bool:
    token = str(value).strip().lower()
    if token in _TRUE_STRINGS:
        return True
    if token in _FALSE_STRINGS:
        return False
    raise _mismatch(value_type, value, path)


def _parse_number[T: (int, float)](
    parser: Callable[[str], T],
    value_type: ValueType,
    value: Any,
    path: FieldPath | None,
) -> T:
    try:
        return parser(str(value).strip())
    except ValueError as exc:
        raise _mismatch(value_type, value, path) from exc


def _cast_enum(value_type: EnumType, value: Any, path: FieldPath | None) -> Enum:
    members = list(value_type.enum_class)
    if isinstance(value, int) and not isinstance(value, bool):
        if 0 <= value < len(members):
            return members[value]
        raise _mismatch(value_type, value, path)

    name = value.name if isinstance(value, Enum) else str(value)
    for member in members:
        if member.name == name:
            return member
    raise _mismatch(value_type, value, path)


def _cast_binary(value_type: BinaryType, value: Any, path: FieldPath | None) -> ArrayBinarySource:
    if isinstance(value, bytes | bytearray | memoryview):
        return ArrayBinarySource(APPLICATION_OCTET_STREAM, bytes(value))
    source = parse_binary(str(value))
    if source is None:
        raise _mismatch(value_type, value, path)
    return source
