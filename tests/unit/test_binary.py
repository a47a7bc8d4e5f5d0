from __future__ import annotations

import base64

import pytest

from typedforms.binary import (
    ANY_MIME_TYPE,
    APPLICATION_OCTET_STREAM,
    ArrayBinarySource,
    MimeType,
    as_base64_string,
    parse_binary,
    read_bytes,
)


def test_mime_type_parse_with_parameters() -> None:
    mime = MimeType.parse("Text/Plain; Charset=\"utf-8\"")

    assert mime.base_type == "Text/Plain"
    assert mime.get_parameter("charset") == "utf-8"
    assert str(mime) == "Text/Plain; charset=utf-8"


@pytest.mark.parametrize("raw", ["plain", "text/", "/plain", "text/plain; charset"])
def test_mime_type_parse_rejects_invalid_values(raw: str) -> None:
    with pytest.raises(ValueError):
        MimeType.parse(raw)


def test_mime_type_matching_is_case_insensitive_and_wildcard_aware() -> None:
    png = MimeType.parse("image/png")

    assert png.matches(MimeType.parse("IMAGE/PNG; q=1"))
    assert png.matches(MimeType.parse("image/*"))
    assert png.matches(ANY_MIME_TYPE)
    assert not png.matches(MimeType.parse("image/jpeg"))
    assert png.matches_pattern("*/png")
    assert not png.matches_pattern("not a mime")


def test_parse_binary_plain_base64_has_any_mime_type() -> None:
    source = parse_binary(base64.b64encode(b"hello").decode())

    assert source is not None
    assert source.mime_type == ANY_MIME_TYPE
    assert source.data == b"hello"
    assert source.size == 5


def test_parse_binary_data_uri() -> None:
    source = parse_binary("data:image/png;base64," + base64.b64encode(b"\x89PNG").decode())

    assert source is not None
    assert source.mime_type == MimeType("image", "png")
    assert read_bytes(source) == b"\x89PNG"


@pytest.mark.parametrize("raw", ["not base64!", "data:text/plain,hello", "data:bad;base64,aGVsbG8="])
def test_parse_binary_returns_none_on_invalid_input(raw: str) -> None:
    assert parse_binary(raw) is None


def test_array_source_opens_fresh_streams() -> None:
    source = ArrayBinarySource(APPLICATION_OCTET_STREAM, b"abc")

    with source.open() as first:
        assert first.read() == b"abc"
    with source.open() as second:
        assert second.read() == b"abc"
    assert "size=3" in repr(source)


def test_as_base64_string_round_trips_through_parse_binary() -> None:
    source = ArrayBinarySource(MimeType("application", "pdf"), b"%PDF")

    encoded = as_base64_string(source)

    assert encoded.startswith("data:application/pdf;base64,")
    assert parse_binary(encoded) == source
