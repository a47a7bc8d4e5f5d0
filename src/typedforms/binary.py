"""Binary payloads: MIME types, in-memory sources and base64 helpers."""

from __future__ import annotations

import base64
import binascii
import io
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import BinaryIO

    from typedforms.typing.protocol import BinarySource

_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
_DATA_URI_PREFIX = "data:"
_DATA_URI_BASE64_MARKER = ";base64,"


@dataclass(frozen=True)
class MimeType:
    """MIME type with primary type, subtype and optional parameters."""

    primary_type: str
    sub_type: str
    parameters: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        """Validate MIME tokens.

        Raises:
            ValueError: If a type or parameter token is blank or invalid.
        """
        for token in (self.primary_type, self.sub_type, *(name for name, _ in self.parameters)):
            if not _TOKEN_RE.match(token):
                raise ValueError(f"Invalid MIME token: '{token}'")  # noqa: TRY003

    @classmethod
    def parse(cls, value: str) -> MimeType:
        """Parse a MIME type such as `application/json; charset=utf-8`.

        Args:
            value (str): Raw MIME type string.

        Raises:
            ValueError: If the value is not a valid MIME type.

        Returns:
            MimeType: Parsed MIME type.
        """
        base, *raw_params = (part.strip() for part in value.split(";"))
        primary, sep, sub = base.partition("/")
        if not sep:
            raise ValueError(f"Invalid MIME type: '{value}'")  # noqa: TRY003
        params: list[tuple[str, str]] = []
        for raw in raw_params:
            if not raw:
                continue
            name, eq, param_value = raw.partition("=")
            if not eq:
                raise ValueError(f"Invalid MIME parameter: '{raw}'")  # noqa: TRY003
            params.append((name.strip().lower(), param_value.strip().strip('"')))
        return cls(primary.strip(), sub.strip(), tuple(params))

    @property
    def base_type(self) -> str:
        """Return the type without parameters, e.g. `text/plain`."""
        return f"{self.primary_type}/{self.sub_type}"

    def get_parameter(self, name: str) -> str | None:
        """Return a parameter value by case-insensitive name."""
        lowered = name.lower()
        return next((value for key, value in self.parameters if key == lowered), None)

    def matches(self, other: MimeType) -> bool:
        """Return whether both types share primary and sub type, ignoring parameters and case.

        Wildcards (`*`) on either side match any token.
        """
        return _token_matches(self.primary_type, other.primary_type) and _token_matches(
            self.sub_type,
            other.sub_type,
        )

    def matches_pattern(self, pattern: str) -> bool:
        """Return whether this type matches a pattern such as `image/*`."""
        try:
            return self.matches(MimeType.parse(pattern))
        except ValueError:
            return False

    def __str__(self) -> str:
        """Return the full MIME type string with parameters."""
        if not self.parameters:
            return self.base_type
        params = "; ".join(f"{name}={value}" for name, value in self.parameters)
        return f"{self.base_type}; {params}"


APPLICATION_OCTET_STREAM = MimeType("application", "octet-stream")
ANY_MIME_TYPE = MimeType("*", "*")


@dataclass(frozen=True)
class ArrayBinarySource:
    """Binary source backed by an in-memory byte string."""

    mime_type: MimeType
    data: bytes

    @property
    def size(self) -> int:
        """Return the payload size in bytes."""
        return len(self.data)

    def open(self) -> BinaryIO:
        """Return a new stream over the payload."""
        return io.BytesIO(self.data)

    def __repr__(self) -> str:
        """Return a compact representation without the payload."""
        return f"ArrayBinarySource(mime_type={self.mime_type}, size={self.size})"


def read_bytes(source: BinarySource) -> bytes:
    """Read the whole payload of a binary source.

    Args:
        source (BinarySource): Binary source.

    Returns:
        bytes: Payload bytes.
    """
    if isinstance(source, ArrayBinarySource):
        return source.data
    with source.open() as stream:
        return stream.read()


def parse_binary(value: str) -> ArrayBinarySource | None:
    """Decode plain base64 or a `data:<mime>;base64,<payload>` URI.

    Args:
        value (str): Encoded payload.

    Returns:
        ArrayBinarySource | None: Decoded source, or None when the input is not valid base64.
    """
    mime_type = ANY_MIME_TYPE
    payload = value
    if value.startswith(_DATA_URI_PREFIX):
        marker = value.find(_DATA_URI_BASE64_MARKER)
        if marker == -1:
            return None
        raw_mime = value[len(_DATA_URI_PREFIX) : marker].strip()
        payload = value[marker + len(_DATA_URI_BASE64_MARKER) :]
        if raw_mime:
            try:
                mime_type = MimeType.parse(raw_mime)
            except ValueError:
                return None

    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        return None
    return ArrayBinarySource(mime_type=mime_type, data=data)


def as_base64_string(source: BinarySource) -> str:
    """Encode a binary source as a data URI.

    Args:
        source (BinarySource): Binary source.

    Returns:
        str: `data:<mime>;base64,<payload>` string.
    """
    encoded = base64.b64encode(read_bytes(source)).decode("ascii")
    return f"{_DATA_URI_PREFIX}{source.mime_type}{_DATA_URI_BASE64_MARKER}{encoded}"


def _token_matches(left: str, right: str) -> bool:
    return left == "*" or right == "*" or left.lower() == right.lower()
