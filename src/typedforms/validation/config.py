"""Validation configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, InstanceOf

from typedforms.paths import FieldPath
from typedforms.scopes import AccessScope
from typedforms.settings import Settings, get_settings
from typedforms.typing.enums import ValidationMode


class ValidationConfig(BaseModel):
    """How raw data is validated into form data."""

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    mode: ValidationMode = ValidationMode.FULL
    access_scope: InstanceOf[AccessScope] | None = Field(
        default=None,
        description="Caller scope; None grants access to every field.",
    )
    optimized_requirement_checks: bool = Field(
        default=True,
        description="Stop at the first failing requirement of an AND composite.",
    )
    lenient_types: bool = Field(default=True, description="Coerce values whose runtime shape mismatches.")
    detailed_location: bool = Field(default=False, description="Build field paths for error reporting.")
    parent_path: FieldPath | None = None

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **overrides: object) -> ValidationConfig:
        """Build a configuration from runtime settings.

        Args:
            settings (Settings | None): Settings; loaded when omitted.
            **overrides (object): Attributes taking precedence over settings.

        Returns:
            ValidationConfig: Configuration.
        """
        config = settings or get_settings()
        values: dict[str, object] = {
            "lenient_types": config.lenient_types,
            "optimized_requirement_checks": config.optimized_requirement_checks,
            "detailed_location": config.detailed_location,
        }
        values.update(overrides)
        return cls.model_validate(values)

    def with_parent(self, path: FieldPath | None) -> ValidationConfig:
        """Return this configuration nested under `path`."""
        return self.model_copy(update={"parent_path": path})


DEFAULT_VALIDATION_CONFIG = ValidationConfig()
