from __future__ import annotations

import io

from typedforms.binary import ArrayBinarySource, MimeType
from typedforms.typing.protocol import BinarySource, Snapshottable


class _StreamedSource:
    mime_type = MimeType("image", "png")
    size = None

    def open(self) -> io.BytesIO:
        return io.BytesIO(b"\x89PNG")


def test_array_source_is_a_binary_source() -> None:
    assert isinstance(ArrayBinarySource(MimeType("text", "plain"), b"x"), BinarySource)


def test_custom_source_satisfies_protocol() -> None:
    assert isinstance(_StreamedSource(), BinarySource)
    assert not isinstance(b"raw", BinarySource)


def test_snapshottable_is_structural() -> None:
    class _Snap:
        def snapshot(self) -> dict:
            return {}

    assert isinstance(_Snap(), Snapshottable)
    assert not isinstance({}, Snapshottable)
