"""Value requirements and their logical combinators."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Hashable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from typedforms.binary import MimeType
from typedforms.exceptions import InvalidFieldValueError
from typedforms.typing.enums import LogicOp

if TYPE_CHECKING:
    from typedforms.paths import FieldPath
    from typedforms.typing.protocol import BinarySource

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class Requirement(ABC):
    """Predicate a validated value must satisfy."""

    @abstractmethod
    def check_valid(self, value: Any) -> bool:
        """Return whether the value meets the requirement.

        Args:
            value (Any): Value already reconciled with the field type.

        Returns:
            bool: True when the value is valid.
        """

    def ensure_valid(self, path: FieldPath | None, value: Any, *, optimized: bool = True) -> None:
        """Raise when the value does not meet the requirement.

        Args:
            path (FieldPath | None): Location reported in the error.
            value (Any): Value to check.
            optimized (bool): Only meaningful for composite requirements, see `Requirements`.

        Raises:
            InvalidFieldValueError: If the value is invalid.
        """
        if not self.check_valid(value):
            raise InvalidFieldValueError(path, self)

    def __invert__(self) -> Not:
        return Not(self)

    def __and__(self, other: Requirement) -> Requirements:
        return Requirements((self, other), LogicOp.AND)

    def __or__(self, other: Requirement) -> Requirements:
        return Requirements((self, other), LogicOp.OR)

    def __xor__(self, other: Requirement) -> Requirements:
        return Requirements((self, other), LogicOp.XOR)


@dataclass(frozen=True)
class Requirements(Requirement):
    """Requirements combined with a logical operation.

    Failure reporting depends on the operation:

    - AND with `optimized=True` stops at the first failing requirement (in
      declaration order) and reports it through its own `ensure_valid`.
    - AND with `optimized=False` evaluates everything and reports the failing
      subset as a new AND composite.
    - OR and XOR report the whole composite.
    """

    requirements: tuple[Requirement, ...]
    mode: LogicOp = LogicOp.AND

    def check_valid(self, value: Any) -> bool:
        if self.mode is LogicOp.AND:
            return all(requirement.check_valid(value) for requirement in self.requirements)
        if self.mode is LogicOp.OR:
            return any(requirement.check_valid(value) for requirement in self.requirements)
        return _count_valid(self.requirements, value) == 1

    def ensure_valid(self, path: FieldPath | None, value: Any, *, optimized: bool = True) -> None:
        if self.mode is not LogicOp.AND:
            super().ensure_valid(path, value, optimized=optimized)
            return

        if optimized:
            for requirement in self.requirements:
                if not requirement.check_valid(value):
                    requirement.ensure_valid(path, value, optimized=True)
                    raise InvalidFieldValueError(path, requirement)
            return

        violated = tuple(requirement for requirement in self.requirements if not requirement.check_valid(value))
        if violated:
            raise InvalidFieldValueError(path, Requirements(violated, LogicOp.AND))

    def __str__(self) -> str:
        joined = f" {self.mode.value} ".join(str(requirement) for requirement in self.requirements)
        return f"({joined})"


@dataclass(frozen=True)
class Not(Requirement):
    """Negation of another requirement."""

    requirement: Requirement

    def check_valid(self, value: Any) -> bool:
        return not self.requirement.check_valid(value)

    def __str__(self) -> str:
        return f"not {self.requirement}"


@dataclass(frozen=True)
class OneOf(Requirement):
    """Value must equal one of the listed values."""

    values: tuple[Any, ...]
    case_sensitive: bool = True

    def check_valid(self, value: Any) -> bool:
        if not self.case_sensitive and isinstance(value, str):
            folded = value.casefold()
            return any(isinstance(item, str) and item.casefold() == folded for item in self.values)
        return value in self.values

    def __str__(self) -> str:
        return f"one of {list(self.values)}"


@dataclass(frozen=True)
class IntegerRange(Requirement):
    """Integer within `[min, max]`."""

    min: int
    max: int

    def check_valid(self, value: int) -> bool:
        return self.min <= value <= self.max

    def __str__(self) -> str:
        return f"in range [{self.min}, {self.max}]"


@dataclass(frozen=True)
class MultipleOf(Requirement):
    """Integer that is a multiple of `multiple`."""

    multiple: int

    def check_valid(self, value: int) -> bool:
        return value % self.multiple == 0

    def __str__(self) -> str:
        return f"multiple of {self.multiple}"


@dataclass(frozen=True)
class DecimalRange(Requirement):
    """Decimal within `[min, max]`."""

    min: float
    max: float

    def check_valid(self, value: float) -> bool:
        return self.min <= value <= self.max

    def __str__(self) -> str:
        return f"in range [{self.min}, {self.max}]"


@dataclass(frozen=True)
class DecimalLessThan(Requirement):
    """Decimal strictly lower than `bound`."""

    bound: float

    def check_valid(self, value: float) -> bool:
        return value < self.bound

    def __str__(self) -> str:
        return f"less than {self.bound}"


@dataclass(frozen=True)
class DecimalGreaterThan(Requirement):
    """Decimal strictly greater than `bound`."""

    bound: float

    def check_valid(self, value: float) -> bool:
        return value > self.bound

    def __str__(self) -> str:
        return f"greater than {self.bound}"


@dataclass(frozen=True)
class TextLengthRange(Requirement):
    """Text whose length is within `[min, max]`."""

    min: int
    max: int

    def check_valid(self, value: str) -> bool:
        return self.min <= len(value) <= self.max

    def __str__(self) -> str:
        return f"length in range [{self.min}, {self.max}]"


@dataclass(frozen=True)
class TextPattern(Requirement):
    """Text fully matching a regular expression."""

    pattern: re.Pattern[str]
    description: str | None = None

    def check_valid(self, value: str) -> bool:
        return self.pattern.fullmatch(value) is not None

    def __str__(self) -> str:
        return self.description or f"matches /{self.pattern.pattern}/"


@dataclass(frozen=True)
class BinarySizeRange(Requirement):
    """Binary payload whose known size is within `[min, max]` bytes."""

    min: int
    max: int

    def check_valid(self, value: BinarySource) -> bool:
        size = value.size
        return size is not None and self.min <= size <= self.max

    def __str__(self) -> str:
        return f"byte size in range [{self.min}, {self.max}]"


@dataclass(frozen=True)
class BinaryMimeTypes(Requirement):
    """Binary payload matching one of the listed MIME types."""

    mime_types: tuple[MimeType, ...]

    def check_valid(self, value: BinarySource) -> bool:
        return any(value.mime_type.matches(mime_type) for mime_type in self.mime_types)

    def __str__(self) -> str:
        return f"mime type one of {[str(mime_type) for mime_type in self.mime_types]}"


@dataclass(frozen=True)
class ListSizeRange(Requirement):
    """List whose size is within `[min, max]`."""

    min: int
    max: int

    def check_valid(self, value: Sequence[Any]) -> bool:
        return self.min <= len(value) <= self.max

    def __str__(self) -> str:
        return f"list size in range [{self.min}, {self.max}]"


@dataclass(frozen=True)
class ListUniqueItems(Requirement):
    """List without duplicated items."""

    def check_valid(self, value: Sequence[Any]) -> bool:
        return _all_distinct(value)

    def __str__(self) -> str:
        return "unique items"


@dataclass(frozen=True)
class MapSizeRange(Requirement):
    """Map whose size is within `[min, max]`."""

    min: int
    max: int

    def check_valid(self, value: Mapping[Any, Any]) -> bool:
        return self.min <= len(value) <= self.max

    def __str__(self) -> str:
        return f"map size in range [{self.min}, {self.max}]"


@dataclass(frozen=True)
class MapUniqueValues(Requirement):
    """Map without duplicated values."""

    def check_valid(self, value: Mapping[Any, Any]) -> bool:
        return _all_distinct(list(value.values()))

    def __str__(self) -> str:
        return "unique values"


def all_of(*requirements: Requirement) -> Requirements:
    """Require every requirement to pass."""
    return Requirements(requirements, LogicOp.AND)


def any_of(*requirements: Requirement) -> Requirements:
    """Require at least one requirement to pass."""
    return Requirements(requirements, LogicOp.OR)


def exactly_one_of(*requirements: Requirement) -> Requirements:
    """Require exactly one requirement to pass."""
    return Requirements(requirements, LogicOp.XOR)


def is_equal(*values: Any, case_sensitive: bool = True) -> OneOf:
    """Require the value to equal one of `values`."""
    return OneOf(tuple(values), case_sensitive=case_sensitive)


def is_multiple_of(multiple: int) -> MultipleOf:
    """Require an integer to be a multiple of `multiple`."""
    return MultipleOf(multiple)


def is_in_range(minimum: float, maximum: float) -> IntegerRange | DecimalRange:
    """Require a number within inclusive bounds.

    Integer bounds produce an `IntegerRange`, anything else a `DecimalRange`.
    """
    if _is_int(minimum) and _is_int(maximum):
        return IntegerRange(int(minimum), int(maximum))
    return DecimalRange(float(minimum), float(maximum))


def is_greater_than(bound: float) -> IntegerRange | DecimalGreaterThan:
    """Require a number strictly greater than `bound`."""
    if _is_int(bound):
        return IntegerRange(int(bound) + 1, INT64_MAX)
    return DecimalGreaterThan(float(bound))


def is_less_than(bound: float) -> IntegerRange | DecimalLessThan:
    """Require a number strictly lower than `bound`."""
    if _is_int(bound):
        return IntegerRange(INT64_MIN, int(bound) - 1)
    return DecimalLessThan(float(bound))


def is_length_in_range(minimum: int, maximum: int) -> TextLengthRange:
    """Require a text length within inclusive bounds."""
    return TextLengthRange(minimum, maximum)


def is_pattern(
    pattern: str | re.Pattern[str],
    *,
    case_sensitive: bool = True,
    description: str | None = None,
) -> TextPattern:
    """Require a text to fully match `pattern`."""
    if isinstance(pattern, str):
        pattern = re.compile(pattern, 0 if case_sensitive else re.IGNORECASE)
    elif not case_sensitive:
        pattern = re.compile(pattern.pattern, pattern.flags | re.IGNORECASE)
    return TextPattern(pattern, description)


def is_byte_size_in_range(minimum: int, maximum: int) -> BinarySizeRange:
    """Require a binary payload size within inclusive bounds."""
    return BinarySizeRange(minimum, maximum)


def is_mime_type_one_of(*mime_types: MimeType | str) -> BinaryMimeTypes:
    """Require a binary payload to match one of the MIME types (wildcards allowed)."""
    parsed = tuple(MimeType.parse(item) if isinstance(item, str) else item for item in mime_types)
    return BinaryMimeTypes(parsed)


def is_list_size_in_range(minimum: int, maximum: int) -> ListSizeRange:
    """Require a list size within inclusive bounds."""
    return ListSizeRange(minimum, maximum)


def is_map_size_in_range(minimum: int, maximum: int) -> MapSizeRange:
    """Require a map size within inclusive bounds."""
    return MapSizeRange(minimum, maximum)


IS_TRUE = is_equal(True)
IS_FALSE = is_equal(False)
IS_EVEN = is_multiple_of(2)
IS_ODD = Not(IS_EVEN)
IS_POSITIVE = IntegerRange(1, INT64_MAX)
IS_NON_POSITIVE = IntegerRange(INT64_MIN, 0)
IS_NEGATIVE = IntegerRange(INT64_MIN, -1)
IS_NON_NEGATIVE = IntegerRange(0, INT64_MAX)
UNIQUE_ITEMS = ListUniqueItems()
UNIQUE_VALUES = MapUniqueValues()


def _count_valid(requirements: Iterable[Requirement], value: Any) -> int:
    return sum(1 for requirement in requirements if requirement.check_valid(value))


def _is_int(value: float) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _all_distinct(items: Sequence[Any]) -> bool:
    if all(isinstance(item, Hashable) for item in items):
        try:
            return len(set(items)) == len(items)
        except TypeError:
            pass
    seen: list[Any] = []
    for item in items:
        if item in seen:
            return False
        seen.append(item)
    return True
