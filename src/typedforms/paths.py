"""Field paths locating a value inside a nested form."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from typedforms.fields import FieldSpec

_MAP_KEY_MAX_LENGTH = 300


@dataclass(frozen=True)
class FieldSegment:
    """Step into a form field."""

    field: FieldSpec

    def __str__(self) -> str:
        """Return the field id."""
        return self.field.id


@dataclass(frozen=True)
class IndexSegment:
    """Step into a list element."""

    index: int

    def __str__(self) -> str:
        """Return the index prefixed with `#`."""
        return f"#{self.index}"


@dataclass(frozen=True)
class MapKeySegment:
    """Step into a map entry, either its key (`value_target=False`) or its value."""

    key: Any
    value_target: bool

    def __str__(self) -> str:
        """Return the key, truncated when very long."""
        rendered = str(self.key)
        if len(rendered) > _MAP_KEY_MAX_LENGTH:
            return rendered[:_MAP_KEY_MAX_LENGTH] + "..."
        return rendered


Segment = FieldSegment | IndexSegment | MapKeySegment


class FieldPath:
    """Immutable sequence of segments, used only for error reporting."""

    def __init__(self, segments: tuple[Segment, ...] = ()) -> None:
        self.segments = tuple(segments)

    @classmethod
    def of(cls, *parts: Segment | FieldSpec | int) -> FieldPath:
        """Build a path from segments, field specs and list indices."""
        path = cls()
        for part in parts:
            path = path + part
        return path

    def __add__(self, other: FieldPath | Segment | FieldSpec | int) -> FieldPath:
        """Return a new path extended by another path, a segment, a field or an index."""
        if isinstance(other, FieldPath):
            return FieldPath(self.segments + other.segments)
        return FieldPath((*self.segments, _as_segment(other)))

    @cached_property
    def last_field(self) -> FieldSpec | None:
        """Return the last field stepped into, if any."""
        for segment in reversed(self.segments):
            if isinstance(segment, FieldSegment):
                return segment.field
        return None

    @property
    def last_segment(self) -> Segment | None:
        """Return the last segment, if any."""
        return self.segments[-1] if self.segments else None

    def __len__(self) -> int:
        return len(self.segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldPath):
            return NotImplemented
        return self.segments == other.segments

    def __hash__(self) -> int:
        return hash(str(self))

    @cached_property
    def _rendered(self) -> str:
        return ".".join(str(segment) for segment in self.segments)

    def __str__(self) -> str:
        return self._rendered

    def __repr__(self) -> str:
        return f"FieldPath('{self}')"


def extend_path(path: FieldPath | None, part: Segment | FieldSpec | int) -> FieldPath:
    """Extend a possibly absent path.

    Args:
        path (FieldPath | None): Parent path, None at the root.
        part (Segment | FieldSpec | int): Segment to append.

    Returns:
        FieldPath: Extended path.
    """
    return (path or FieldPath()) + part


def _as_segment(part: Segment | FieldSpec | int) -> Segment:
    if isinstance(part, FieldSegment | IndexSegment | MapKeySegment):
        return part
    if isinstance(part, bool):
        raise TypeError("Boolean is not a valid path index")  # noqa: TRY003
    if isinstance(part, int):
        return IndexSegment(part)
    return FieldSegment(part)
