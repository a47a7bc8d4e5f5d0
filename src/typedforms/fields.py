"""Field descriptors and field-level enablement rules."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, InstanceOf

from typedforms.requirements import Requirement
from typedforms.scopes import AccessScope
from typedforms.types import NullableType, ValueType
from typedforms.typing.enums import LogicOp

FormClass = type


class FieldRequirement(BaseModel):
    """Condition on the value of another field of the same form.

    A `None` requirement only checks that the field has a value.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    field_id: str
    requirement: Requirement | None = None

    def check(self, data: Mapping[str, Any]) -> bool:
        """Evaluate the condition against form data.

        Args:
            data (Mapping[str, Any]): Validated form data.

        Returns:
            bool: True when the condition holds.
        """
        value = data.get(self.field_id)
        if value is None:
            return False
        if self.requirement is None:
            return True
        return self.requirement.check_valid(value)


class FieldRequirements(BaseModel):
    """Field conditions combined with a logical operation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    requirements: tuple[FieldRequirement, ...] = ()
    mode: LogicOp = LogicOp.AND

    def check(self, data: Mapping[str, Any]) -> bool:
        """Evaluate every condition and combine the results.

        An empty set of conditions always holds.

        Args:
            data (Mapping[str, Any]): Validated form data.

        Returns:
            bool: Combined result.
        """
        if not self.requirements:
            return True
        results = [requirement.check(data) for requirement in self.requirements]
        if self.mode is LogicOp.AND:
            return all(results)
        if self.mode is LogicOp.OR:
            return any(results)
        return results.count(True) == 1


NO_FIELD_REQUIREMENTS = FieldRequirements()


class FieldSpec(BaseModel):
    """Declared form field.

    `owner` is set by the registry when the field is bound to a form class;
    field handles returned by `Form.field()` always carry it.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    id: str = Field(description="Identifier, unique within the form.")
    type: ValueType
    default: Any = None
    doc_name: str | None = None
    description: str | None = None
    description_detailed: str | None = None
    order_key: int = Field(default=0, description="Fields sort by descending order key.")
    access_scope: InstanceOf[AccessScope] | None = AccessScope.NONE
    enabled_rules: FieldRequirements = NO_FIELD_REQUIREMENTS
    sensitive: bool = False
    examples: tuple[Any, ...] | None = None
    extras: dict[str, Any] | None = None
    owner: FormClass | None = None

    @property
    def is_optional(self) -> bool:
        """Return whether a missing value is acceptable."""
        return self.default is not None or isinstance(self.type, NullableType)

    @property
    def is_required(self) -> bool:
        return not self.is_optional

    @property
    def label(self) -> str:
        """Return the documentation name, falling back to the id."""
        return self.doc_name or self.id

    def __hash__(self) -> int:
        return hash((self.owner, self.id))

    def __str__(self) -> str:
        return self.id


def field(field_id: str, value_type: ValueType, **kwargs: Any) -> FieldSpec:
    """Declare a field.

    Args:
        field_id (str): Field identifier.
        value_type (ValueType): Field value type.
        **kwargs (Any): Other `FieldSpec` attributes.

    Returns:
        FieldSpec: Unbound field descriptor.
    """
    return FieldSpec(id=field_id, type=value_type, **kwargs)


def require(field_id: str, requirement: Requirement | None = None) -> FieldRequirement:
    """Build a condition on another field's value."""
    return FieldRequirement(field_id=field_id, requirement=requirement)


def enabled_when(*requirements: FieldRequirement, mode: LogicOp = LogicOp.AND) -> FieldRequirements:
    """Combine field conditions into enablement rules."""
    return FieldRequirements(requirements=requirements, mode=mode)
