"""Primitive-safe description of form schemas."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from typedforms.registry import resolve_fields
from typedforms.scopes import grants_access_to
from typedforms.snapshot import snapshot_value
from typedforms.types import EnumType, FormType, ListType, MapType, NullableType, ValueType

if TYPE_CHECKING:
    from typedforms.fields import FieldSpec
    from typedforms.forms import Form
    from typedforms.scopes import AccessScope


def describe_form(form_class: type[Form], *, access_scope: AccessScope | None = None) -> dict[str, Any]:
    """Describe the fields of a form visible to `access_scope`.

    Nested forms are described inline; a form nested in itself is described
    once and then referenced by name.

    Args:
        form_class (type[Form]): Form class.
        access_scope (AccessScope | None): Caller scope, None for full access.

    Returns:
        dict[str, Any]: Description made of primitives only.
    """
    return _describe_form(form_class, access_scope, ())


def describe_type(value_type: ValueType, *, access_scope: AccessScope | None = None) -> dict[str, Any]:
    """Describe a value type."""
    return _describe_type(value_type, access_scope, ())


def _describe_form(
    form_class: type[Form],
    access_scope: AccessScope | None,
    stack: tuple[type, ...],
) -> dict[str, Any]:
    if form_class in stack:
        return {"form": form_class.__name__, "recursive": True}
    nested_stack = (*stack, form_class)
    return {
        "form": form_class.__name__,
        "fields": [
            _describe_field(spec, access_scope, nested_stack)
            for spec in resolve_fields(form_class)
            if grants_access_to(access_scope, spec.access_scope)
        ],
    }


def _describe_field(spec: FieldSpec, access_scope: AccessScope | None, stack: tuple[type, ...]) -> dict[str, Any]:
    description: dict[str, Any] = {
        "id": spec.id,
        "name": spec.label,
        "type": _describe_type(spec.type, access_scope, stack),
        "required": spec.is_required,
        "default": snapshot_value(spec.default),
        "order_key": spec.order_key,
        "access_scope": None if spec.access_scope is None else str(spec.access_scope),
        "sensitive": spec.sensitive,
    }
    if spec.description:
        description["description"] = spec.description
    if spec.description_detailed:
        description["description_detailed"] = spec.description_detailed
    if spec.examples is not None:
        description["examples"] = [snapshot_value(example) for example in spec.examples]
    if spec.extras:
        description["extras"] = snapshot_value(spec.extras)
    return description


def _describe_type(value_type: ValueType, access_scope: AccessScope | None, stack: tuple[type, ...]) -> dict[str, Any]:
    description: dict[str, Any] = {
        "type_id": value_type.type_id,
        "name": value_type.non_null.TYPE_NAME,
        "nullable": isinstance(value_type, NullableType),
    }
    value_type = value_type.non_null
    if value_type.requirement is not None:
        description["requirement"] = str(value_type.requirement)

    match value_type:
        case EnumType():
            description["values"] = [member.name for member in value_type.enum_class]
        case ListType():
            description["element"] = _describe_type(value_type.element_type, access_scope, stack)
        case MapType():
            description["key"] = _describe_type(value_type.key_type, access_scope, stack)
            description["value"] = _describe_type(value_type.value_type, access_scope, stack)
        case FormType():
            description["form"] = _describe_form(value_type.form_class, access_scope, stack)
    return description
