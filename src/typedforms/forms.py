"""Forms: declared schemas bound to validated data."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Self

from typedforms import logger
from typedforms.exceptions import (
    FieldNotFoundError,
    FieldValueError,
    ForbiddenFieldAccessError,
    FormDeclarationError,
    FormStateError,
    UnexpectedFieldError,
)
from typedforms.fields import FieldSpec
from typedforms.registry import resolve_fields
from typedforms.scopes import grants_access_to
from typedforms.snapshot import snapshot_value
from typedforms.validation.config import DEFAULT_VALIDATION_CONFIG, ValidationConfig
from typedforms.validation.validator import validate_data

_MASK = "***"


class FormDataMap(Mapping[str, Any]):
    """Read-only validated values of one form instance."""

    def __init__(self, values: Mapping[str, Any], *, form: Form, validation_config: ValidationConfig) -> None:
        self._values = dict(values)
        self.form = form
        self.validation_config = validation_config

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"FormDataMap({self.form!r})"


class Form:
    """Base class of every form.

    Subclasses declare their fields by overriding `declare_fields()` and extend
    a parent form's fields through `super().declare_fields()`:

        class Address(Form):
            @classmethod
            def declare_fields(cls):
                return (
                    field("street", text()),
                    field("zip", text(requirement=is_pattern(r"\\d{2}-\\d{3}"))),
                )

    Instances are created by `build()` or `from_data()` and hold read-only data.
    """

    _data: FormDataMap | None = None

    @classmethod
    def declare_fields(cls) -> Iterable[FieldSpec]:
        """Return the fields of this form, in declaration order."""
        return ()

    @classmethod
    def fields(cls) -> tuple[FieldSpec, ...]:
        """Return the bound fields, in validation order."""
        return resolve_fields(cls)

    @classmethod
    def field(cls, field_id: str) -> FieldSpec:
        """Return the bound field handle for `field_id`.

        Raises:
            FieldNotFoundError: If the form declares no such field.
        """
        for spec in cls.fields():
            if spec.id == field_id:
                return spec
        raise FieldNotFoundError(field_id, cls)

    @classmethod
    def from_data(cls, data: Any, *, config: ValidationConfig | None = None) -> Self:
        """Validate `data` into a new instance of this form."""
        return build(cls, data, config)

    def _initialize(self, data: FormDataMap) -> None:
        if self._data is not None:
            raise FormStateError(f"Form '{type(self).__name__}' is already initialized")  # noqa: TRY003
        self._data = data

    @property
    def is_initialized(self) -> bool:
        return self._data is not None

    @property
    def data(self) -> FormDataMap:
        """Return the validated data.

        Raises:
            FormStateError: If the form has not been built yet.
        """
        if self._data is None:
            raise FormStateError(f"Form '{type(self).__name__}' is not initialized")  # noqa: TRY003
        return self._data

    def __getitem__(self, key: str | FieldSpec) -> Any:
        """Return the value of a field, or its default when no value was supplied.

        Args:
            key (str | FieldSpec): Field id or bound field handle.

        Raises:
            FieldNotFoundError: If the form declares no such field id.
            UnexpectedFieldError: If the handle belongs to another form class.
            ForbiddenFieldAccessError: If the field was hidden by the validation access scope.

        Returns:
            Any: Field value.
        """
        spec = self._resolve(key)
        data = self.data
        if not grants_access_to(data.validation_config.access_scope, spec.access_scope):
            raise ForbiddenFieldAccessError(spec.id, type(self))
        return data.get(spec.id, spec.default)

    def get(self, key: str | FieldSpec, default: Any = None) -> Any:
        """Return the value of a field, or `default` when it is absent."""
        value = self[key]
        return default if value is None else value

    def is_enabled(self, key: str | FieldSpec) -> bool:
        """Evaluate the enablement rules of a field against this form's data."""
        return self._resolve(key).enabled_rules.check(self.data)

    def snapshot(self) -> dict[str, Any]:
        """Return the data as a primitive-safe tree."""
        return {field_id: snapshot_value(value) for field_id, value in self.data.items()}

    def copy(
        self,
        updates: Mapping[str | FieldSpec, Any] | None = None,
        *,
        config: ValidationConfig | None = None,
    ) -> Self:
        """Return a new form with `updates` merged over the current data.

        The merged data is validated again, with `config` or the configuration
        this form was validated with.
        """
        merged: dict[str, Any] = dict(self.data)
        for key, value in (updates or {}).items():
            merged[self._resolve(key).id] = value
        return build(type(self), merged, config or self.data.validation_config)

    def _resolve(self, key: str | FieldSpec) -> FieldSpec:
        if isinstance(key, FieldSpec):
            if key.owner is not type(self):
                raise UnexpectedFieldError(key.id, type(self))
            return key
        return self.field(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Form):
            return NotImplemented
        if type(self) is not type(other) or self._data is None or other._data is None:
            return self is other
        return dict(self._data) == dict(other._data)

    def __hash__(self) -> int:
        if self._data is None:
            return id(self)
        return hash((type(self), repr(self.snapshot())))

    def __repr__(self) -> str:
        if self._data is None:
            return f"{type(self).__name__}(<uninitialized>)"
        sensitive = {spec.id for spec in self.fields() if spec.sensitive}
        rendered = ", ".join(
            f"{field_id}={_MASK if field_id in sensitive else repr(value)}" for field_id, value in self._data.items()
        )
        return f"{type(self).__name__}({rendered})"


def build[F: Form](form_class: type[F], data: Any, config: ValidationConfig | None = None) -> F:
    """Create a form and validate `data` into it.

    Args:
        form_class (type[F]): Form class, constructible without arguments.
        data (Any): Raw input mapping.
        config (ValidationConfig | None): Validation configuration, defaults apply when omitted.

    Raises:
        FormDeclarationError: If the form class cannot be instantiated without arguments.
        FieldValueError: If the data does not validate.

    Returns:
        F: Initialized form.
    """
    config = config or DEFAULT_VALIDATION_CONFIG
    try:
        form = form_class()
    except TypeError as exc:
        message = f"Form '{form_class.__name__}' cannot be created without arguments"
        raise FormDeclarationError(message) from exc

    try:
        values = validate_data(form_class, data, config)
    except FieldValueError as exc:
        logger.debug(
            "Form validation failed",
            extra={"form": form_class.__name__, "error": type(exc).__name__, "path": exc.path},
        )
        raise

    form._initialize(FormDataMap(values, form=form, validation_config=config))  # noqa: SLF001
    return form
