"""Process-wide cache of the bound fields declared by each form class."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from typedforms import logger
from typedforms.exceptions import FormDeclarationError
from typedforms.fields import FieldSpec

if TYPE_CHECKING:
    from typedforms.forms import Form

_FIELD_CACHE: dict[type, tuple[FieldSpec, ...]] = {}
_FIELD_CACHE_LOCK = threading.RLock()


def resolve_fields(form_class: type[Form]) -> tuple[FieldSpec, ...]:
    """Return the ordered, bound fields of a form class.

    Fields are declared once per class through `declare_fields()`, bound to the
    class and sorted by descending `order_key` (declaration order on ties).

    Args:
        form_class (type[Form]): Form class.

    Raises:
        FormDeclarationError: If the declaration is malformed.

    Returns:
        tuple[FieldSpec, ...]: Bound fields.
    """
    cached = _FIELD_CACHE.get(form_class)
    if cached is not None:
        return cached

    with _FIELD_CACHE_LOCK:
        cached = _FIELD_CACHE.get(form_class)
        if cached is None:
            cached = _bind_fields(form_class)
            _FIELD_CACHE[form_class] = cached
            logger.debug(
                "Resolved form fields",
                extra={"form": form_class.__name__, "fields": [spec.id for spec in cached]},
            )
        return cached


def clear_field_cache() -> None:
    """Forget every resolved form class."""
    with _FIELD_CACHE_LOCK:
        _FIELD_CACHE.clear()


def _bind_fields(form_class: type[Form]) -> tuple[FieldSpec, ...]:
    declared = list(form_class.declare_fields())
    seen: set[str] = set()
    for spec in declared:
        if not isinstance(spec, FieldSpec):
            message = f"Form '{form_class.__name__}' declared a non-field entry: {spec!r}"
            raise FormDeclarationError(message)
        if not spec.id.strip():
            raise FormDeclarationError(f"Form '{form_class.__name__}' declared a field with an empty id")  # noqa: TRY003
        if spec.id in seen:
            message = f"Form '{form_class.__name__}' declared field '{spec.id}' more than once"
            raise FormDeclarationError(message)
        seen.add(spec.id)

    bound = [spec.model_copy(update={"owner": form_class}) for spec in declared]
    return tuple(sorted(bound, key=lambda spec: -spec.order_key))
