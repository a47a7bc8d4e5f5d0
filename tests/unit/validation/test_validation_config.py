from __future__ import annotations

import pytest
from pydantic import ValidationError

from typedforms.paths import FieldPath
from typedforms.scopes import AccessScope
from typedforms.settings import Settings
from typedforms.typing.enums import ValidationMode
from typedforms.validation.config import DEFAULT_VALIDATION_CONFIG, ValidationConfig


def test_default_configuration() -> None:
    config = ValidationConfig()

    assert config.mode is ValidationMode.FULL
    assert config.access_scope is None
    assert config.optimized_requirement_checks is True
    assert config.lenient_types is True
    assert config.detailed_location is False
    assert config.parent_path is None
    assert config == DEFAULT_VALIDATION_CONFIG


def test_from_settings_reads_defaults_and_applies_overrides() -> None:
    settings = Settings(LENIENT_TYPES=False, OPTIMIZED_REQUIREMENT_CHECKS=False, DETAILED_LOCATION=True)

    config = ValidationConfig.from_settings(settings, mode=ValidationMode.PROVIDED, detailed_location=False)

    assert config.lenient_types is False
    assert config.optimized_requirement_checks is False
    assert config.detailed_location is False
    assert config.mode is ValidationMode.PROVIDED


def test_with_parent_keeps_other_settings() -> None:
    scope = AccessScope("user")
    config = ValidationConfig(access_scope=scope, lenient_types=False)

    nested = config.with_parent(FieldPath.of(0))

    assert nested.parent_path == FieldPath.of(0)
    assert nested.access_scope is scope
    assert nested.lenient_types is False
    assert config.parent_path is None


def test_configuration_is_frozen() -> None:
    with pytest.raises(ValidationError):
        DEFAULT_VALIDATION_CONFIG.lenient_types = False  # type: ignore[misc]
