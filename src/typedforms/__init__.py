"""TypedForms package."""

from typedforms.exceptions import (
    DataAccessError,
    FieldNotFoundError,
    FieldValueError,
    FieldValueTypeMismatchError,
    ForbiddenFieldAccessError,
    FormDeclarationError,
    FormError,
    FormStateError,
    InvalidFieldValueError,
    MissingFieldValueError,
    PackageError,
    SettingsError,
    UnexpectedFieldError,
)
from typedforms.logging import configure_logging, get_logger
from typedforms.settings import Settings, get_settings

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("typedforms")

from typedforms.binary import ArrayBinarySource, MimeType, as_base64_string, parse_binary, read_bytes  # noqa: E402
from typedforms.describe import describe_form  # noqa: E402
from typedforms.fields import FieldRequirement, FieldRequirements, FieldSpec, enabled_when, field, require  # noqa: E402
from typedforms.forms import Form, FormDataMap, build  # noqa: E402
from typedforms.paths import FieldPath  # noqa: E402
from typedforms.scopes import AccessScope, grants_access_to  # noqa: E402
from typedforms.typing.enums import LogicOp, ValidationMode  # noqa: E402
from typedforms.validation import ValidationConfig  # noqa: E402

__all__ = [
    "AccessScope",
    "ArrayBinarySource",
    "DataAccessError",
    "FieldNotFoundError",
    "FieldPath",
    "FieldRequirement",
    "FieldRequirements",
    "FieldSpec",
    "FieldValueError",
    "FieldValueTypeMismatchError",
    "ForbiddenFieldAccessError",
    "Form",
    "FormDataMap",
    "FormDeclarationError",
    "FormError",
    "FormStateError",
    "InvalidFieldValueError",
    "LogicOp",
    "MimeType",
    "MissingFieldValueError",
    "PackageError",
    "Settings",
    "SettingsError",
    "UnexpectedFieldError",
    "ValidationConfig",
    "ValidationMode",
    "__version__",
    "as_base64_string",
    "build",
    "configure_logging",
    "describe_form",
    "enabled_when",
    "field",
    "get_logger",
    "get_settings",
    "grants_access_to",
    "logger",
    "parse_binary",
    "read_bytes",
    "require",
]
