"""Structural interfaces shared across the package."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from typing import BinaryIO

    from typedforms.binary import MimeType


@runtime_checkable
class BinarySource(Protocol):
    """Source of binary data consumed by binary fields."""

    @property
    def mime_type(self) -> MimeType:
        """MIME type of the payload."""

    @property
    def size(self) -> int | None:
        """Payload size in bytes, or None when unknown."""

    def open(self) -> BinaryIO:
        """Open a fresh stream over the payload.

        Each call returns a new stream; callers close it after use.

        Returns:
            BinaryIO: Readable byte stream.
        """


@runtime_checkable
class Snapshottable(Protocol):
    """Object able to flatten itself into a primitive-safe tree."""

    def snapshot(self) -> dict[str, Any]:
        """Return the primitive-safe representation.

        Returns:
            dict[str, Any]: Snapshot mapping.
        """
