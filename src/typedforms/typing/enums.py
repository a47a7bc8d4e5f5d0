"""Project enums."""

from __future__ import annotations

from enum import StrEnum


class _EnumMixin(StrEnum):
    """Shared conversion helpers for user-facing enums."""

    @classmethod
    def from_str(cls, value: str) -> _EnumMixin:
        """Parse enum from string.

        Args:
            value: Raw string value.

        Raises:
            ValueError: If the value is not supported.

        Returns:
            _EnumMixin: Parsed enum value.
        """
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            supported = ", ".join(member.value for member in cls)
            message = f"Unsupported {cls.__name__} value '{value}'. Expected one of: {supported}"
            raise ValueError(message) from exc

    def to_str(self) -> str:
        """Return string representation.

        Returns:
            str: Enum string value.
        """
        return self.value


class ValidationMode(_EnumMixin):
    """How strictly input data is validated."""

    # missing required fields are errors, defaults are substituted
    FULL = "full"
    # missing fields are omitted, supplied values are fully validated
    PROVIDED = "provided"
    # input is trusted verbatim
    NONE = "none"


class LogicOp(_EnumMixin):
    """Logical operation combining several requirements."""

    AND = "and"
    OR = "or"
    XOR = "xor"
