"""Primitive-safe snapshots of validated form data."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from typedforms.binary import as_base64_string
from typedforms.typing.protocol import BinarySource, Snapshottable


def snapshot_value(value: Any) -> Any:
    """Flatten a validated value into primitives.

    Nested forms become dicts, binary sources `data:` URIs keeping their MIME
    type, mappings dicts and lists or tuples lists. Scalars and enum members
    are returned unchanged.

    Args:
        value (Any): Validated value.

    Returns:
        Any: Primitive-safe value.
    """
    if isinstance(value, Snapshottable):
        return value.snapshot()
    if isinstance(value, BinarySource):
        return as_base64_string(value)
    if isinstance(value, Mapping):
        return {key: snapshot_value(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [snapshot_value(item) for item in value]
    return value
