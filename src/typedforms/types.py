"""Value-type descriptors for form fields."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, field_validator

from typedforms.exceptions import FormDeclarationError
from typedforms.requirements import INT64_MAX, INT64_MIN, Requirement
from typedforms.typing.protocol import BinarySource

_NULLABLE_TAG_OFFSET = 10

PreProcessor = Callable[[Any], Any]


class ValueType(BaseModel):
    """Base of the closed set of value types.

    Each concrete type exposes a stable numeric tag (`type_id`), the runtime
    shape it accepts and, except for `NullableType`, an optional pre-processor
    and requirement applied after type reconciliation.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    TYPE_ID: ClassVar[int]
    TYPE_NAME: ClassVar[str]

    @property
    def type_id(self) -> int:
        """Return the stable numeric tag of this type."""
        return self.TYPE_ID

    @property
    def is_container(self) -> bool:
        """Return whether values of this type hold nested values."""
        return False

    @property
    def pre_processor(self) -> PreProcessor | None:
        return None

    @property
    def requirement(self) -> Requirement | None:
        return None

    @property
    def nullable(self) -> NullableType:
        """Return the nullable variant of this type."""
        return NullableType(inner=self)

    @property
    def non_null(self) -> ValueType:
        """Return this type without nullability."""
        return self

    def accepts(self, value: Any) -> bool:
        """Return whether the value already has the runtime shape of this type.

        Args:
            value (Any): Candidate value.

        Returns:
            bool: True when no coercion is needed.
        """
        raise NotImplementedError

    def is_walkable(self, value: Any) -> bool:  # noqa: ARG002
        """Return whether the value is a container that must be walked element-wise."""
        return False

    def __str__(self) -> str:
        return self.TYPE_NAME


class ConstrainedType(ValueType):
    """Type carrying its own pre-processor and requirement."""

    pre_processor_fn: PreProcessor | None = None
    constraint: Requirement | None = None

    @property
    def pre_processor(self) -> PreProcessor | None:
        return self.pre_processor_fn

    @property
    def requirement(self) -> Requirement | None:
        return self.constraint


class BooleanType(ConstrainedType):
    TYPE_ID: ClassVar[int] = 1
    TYPE_NAME: ClassVar[str] = "Boolean"

    def accepts(self, value: Any) -> bool:
        return isinstance(value, bool)


class IntegerType(ConstrainedType):
    TYPE_ID: ClassVar[int] = 2
    TYPE_NAME: ClassVar[str] = "Integer"

    def accepts(self, value: Any) -> bool:
        return isinstance(value, int) and not isinstance(value, bool) and INT64_MIN <= value <= INT64_MAX


class DecimalType(ConstrainedType):
    TYPE_ID: ClassVar[int] = 3
    TYPE_NAME: ClassVar[str] = "Decimal"

    def accepts(self, value: Any) -> bool:
        return isinstance(value, float)


class TextType(ConstrainedType):
    TYPE_ID: ClassVar[int] = 4
    TYPE_NAME: ClassVar[str] = "Text"

    def accepts(self, value: Any) -> bool:
        return isinstance(value, str)


class BinaryType(ConstrainedType):
    TYPE_ID: ClassVar[int] = 5
    TYPE_NAME: ClassVar[str] = "Binary"

    def accepts(self, value: Any) -> bool:
        return isinstance(value, BinarySource)


class EnumType(ConstrainedType):
    """Enumeration type backed by an `enum.Enum` subclass."""

    TYPE_ID: ClassVar[int] = 6
    TYPE_NAME: ClassVar[str] = "Enum"

    enum_class: type[Enum]

    def accepts(self, value: Any) -> bool:
        return isinstance(value, self.enum_class)

    def __str__(self) -> str:
        return f"Enum<{self.enum_class.__name__}>"


class ListType(ConstrainedType):
    """Homogeneous list of `element_type` values."""

    TYPE_ID: ClassVar[int] = 7
    TYPE_NAME: ClassVar[str] = "List"

    element_type: ValueType

    @property
    def is_container(self) -> bool:
        return True

    def accepts(self, value: Any) -> bool:
        return isinstance(value, list)

    def is_walkable(self, value: Any) -> bool:
        return isinstance(value, list)

    def __str__(self) -> str:
        return f"List<{self.element_type}>"


class FormType(ConstrainedType):
    """Nested form of class `form_class`."""

    TYPE_ID: ClassVar[int] = 8
    TYPE_NAME: ClassVar[str] = "Form"

    form_class: type

    @field_validator("form_class", mode="before")
    @classmethod
    def _check_form_class(cls, value: Any) -> type:
        if not isinstance(value, type) or not callable(getattr(value, "declare_fields", None)):
            name = getattr(value, "__name__", repr(value))
            raise FormDeclarationError(f"'{name}' is not a form class")  # noqa: TRY003
        return value

    @property
    def is_container(self) -> bool:
        return True

    def accepts(self, value: Any) -> bool:
        return isinstance(value, self.form_class)

    def __str__(self) -> str:
        return f"Form<{self.form_class.__name__}>"


class MapType(ConstrainedType):
    """Mapping from `key_type` values to `value_type` values."""

    TYPE_ID: ClassVar[int] = 9
    TYPE_NAME: ClassVar[str] = "Map"

    key_type: ValueType
    value_type: ValueType

    @property
    def is_container(self) -> bool:
        return True

    def accepts(self, value: Any) -> bool:
        return isinstance(value, Mapping)

    def is_walkable(self, value: Any) -> bool:
        return isinstance(value, Mapping)

    def __str__(self) -> str:
        return f"Map<{self.key_type}, {self.value_type}>"


class NullableType(ValueType):
    """Wrapper allowing `None` in addition to the inner type's values."""

    TYPE_NAME: ClassVar[str] = "Nullable"

    inner: ValueType

    @field_validator("inner")
    @classmethod
    def _collapse(cls, value: ValueType) -> ValueType:
        return value.non_null

    @property
    def type_id(self) -> int:
        return self.inner.type_id + _NULLABLE_TAG_OFFSET

    @property
    def is_container(self) -> bool:
        return self.inner.is_container

    @property
    def nullable(self) -> NullableType:
        return self

    @property
    def non_null(self) -> ValueType:
        return self.inner

    def accepts(self, value: Any) -> bool:
        return value is None or self.inner.accepts(value)

    def is_walkable(self, value: Any) -> bool:
        return self.inner.is_walkable(value)

    def __str__(self) -> str:
        return f"Nullable<{self.inner}>"


def boolean(*, requirement: Requirement | None = None, pre_processor: PreProcessor | None = None) -> BooleanType:
    """Return a boolean type."""
    return BooleanType(constraint=requirement, pre_processor_fn=pre_processor)


def integer(*, requirement: Requirement | None = None, pre_processor: PreProcessor | None = None) -> IntegerType:
    """Return a 64-bit integer type."""
    return IntegerType(constraint=requirement, pre_processor_fn=pre_processor)


def decimal(*, requirement: Requirement | None = None, pre_processor: PreProcessor | None = None) -> DecimalType:
    """Return a floating point type."""
    return DecimalType(constraint=requirement, pre_processor_fn=pre_processor)


def text(*, requirement: Requirement | None = None, pre_processor: PreProcessor | None = None) -> TextType:
    """Return a text type."""
    return TextType(constraint=requirement, pre_processor_fn=pre_processor)


def binary(*, requirement: Requirement | None = None, pre_processor: PreProcessor | None = None) -> BinaryType:
    """Return a binary payload type."""
    return BinaryType(constraint=requirement, pre_processor_fn=pre_processor)


def enum_of(
    enum_class: type[Enum],
    *,
    requirement: Requirement | None = None,
    pre_processor: PreProcessor | None = None,
) -> EnumType:
    """Return an enumeration type for `enum_class`."""
    return EnumType(enum_class=enum_class, constraint=requirement, pre_processor_fn=pre_processor)


def list_of(
    element_type: ValueType,
    *,
    requirement: Requirement | None = None,
    pre_processor: PreProcessor | None = None,
) -> ListType:
    """Return a list type whose elements have `element_type`."""
    return ListType(element_type=element_type, constraint=requirement, pre_processor_fn=pre_processor)


def map_of(
    key_type: ValueType,
    value_type: ValueType,
    *,
    requirement: Requirement | None = None,
    pre_processor: PreProcessor | None = None,
) -> MapType:
    """Return a map type from `key_type` to `value_type`."""
    return MapType(
        key_type=key_type,
        value_type=value_type,
        constraint=requirement,
        pre_processor_fn=pre_processor,
    )


def form_of(
    form_class: type,
    *,
    requirement: Requirement | None = None,
    pre_processor: PreProcessor | None = None,
) -> FormType:
    """Return a nested form type.

    Raises:
        FormDeclarationError: If `form_class` is not a form class.
    """
    return FormType(form_class=form_class, constraint=requirement, pre_processor_fn=pre_processor)


def nullable(value_type: ValueType) -> NullableType:
    """Return the nullable variant of `value_type`."""
    return value_type.nullable
