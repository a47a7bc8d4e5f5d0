from __future__ import annotations

import json
import textwrap
from argparse import Namespace
from enum import Enum
from typing import TYPE_CHECKING

import pytest

from typedforms import cli
from typedforms.binary import ArrayBinarySource, MimeType
from typedforms.exceptions import FormDeclarationError
from typedforms.settings import Settings
from typedforms.typing.enums import ValidationMode

if TYPE_CHECKING:
    from pathlib import Path

FORMS_MODULE = textwrap.dedent(
    """
    from typedforms import Form, field
    from typedforms.requirements import is_pattern
    from typedforms.types import integer, text


    class Address(Form):
        @classmethod
        def declare_fields(cls):
            return (
                field("city", text()),
                field("zip", text(requirement=is_pattern(r"\\d{5}"))),
                field("floor", integer(), default=0),
            )


    NOT_A_FORM = 1
    """,
)


class Shade(Enum):
    DARK = 1


@pytest.fixture
def forms_module(tmp_path: Path, monkeypatch) -> str:
    (tmp_path / "cli_forms_module.py").write_text(FORMS_MODULE, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    return "cli_forms_module"


def test_build_parser_supports_version_flag(capsys) -> None:
    parser = cli.build_parser()

    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args(["--version"])
    assert exc_info.value.code == 0

    captured = capsys.readouterr()
    assert "0.1.0" in captured.out


def test_parser_rejects_unknown_mode() -> None:
    parser = cli.build_parser()

    with pytest.raises(SystemExit):
        parser.parse_args(["validate", "--form", "m:C", "--input", "x.json", "--mode", "partial"])


def test_load_form_class(forms_module: str) -> None:
    form_class = cli.load_form_class(f"{forms_module}:Address")

    assert form_class.__name__ == "Address"


@pytest.mark.parametrize("suffix", ["", ":Missing", ":NOT_A_FORM"])
def test_load_form_class_rejects_bad_references(forms_module: str, suffix: str) -> None:
    with pytest.raises(FormDeclarationError):
        cli.load_form_class(f"{forms_module}{suffix}")


def test_load_form_class_rejects_unknown_module() -> None:
    with pytest.raises(FormDeclarationError, match="Cannot import"):
        cli.load_form_class("no_such_module_for_tests:Form")


def test_validation_config_from_flags() -> None:
    args = Namespace(mode=ValidationMode.PROVIDED, strict=True, exhaustive=True, detailed=True)

    config = cli._build_validation_config(args, Settings())

    assert config.mode is ValidationMode.PROVIDED
    assert config.lenient_types is False
    assert config.optimized_requirement_checks is False
    assert config.detailed_location is True


def test_to_json_value_encodes_binary_and_enums() -> None:
    value = {
        "file": ArrayBinarySource(MimeType("text", "plain"), b"hi"),
        "shade": Shade.DARK,
        "raw": b"\x00",
        "items": (1, 2),
    }

    assert cli.to_json_value(value) == {
        "file": "data:text/plain;base64,aGk=",
        "shade": "DARK",
        "raw": "data:application/octet-stream;base64,AA==",
        "items": [1, 2],
    }


def test_main_validate_writes_output(mocker, tmp_path: Path, forms_module: str) -> None:
    input_path = tmp_path / "input.json"
    output_path = tmp_path / "out" / "result.json"
    input_path.write_text(json.dumps({"city": "Paris", "zip": 75001}), encoding="utf-8")
    mocker.patch("typedforms.cli.get_settings", return_value=Settings())
    mocker.patch("typedforms.cli.configure_logging")

    code = cli.main(
        ["validate", "--form", f"{forms_module}:Address", "--input", str(input_path), "--output", str(output_path)],
    )

    assert code == 0
    assert json.loads(output_path.read_text(encoding="utf-8")) == {"city": "Paris", "zip": "75001", "floor": 0}


def test_main_validate_returns_error_code_on_invalid_data(mocker, tmp_path: Path, forms_module: str) -> None:
    input_path = tmp_path / "input.json"
    input_path.write_text(json.dumps({"city": "Paris", "zip": "7500"}), encoding="utf-8")
    mocker.patch("typedforms.cli.get_settings", return_value=Settings())
    mocker.patch("typedforms.cli.configure_logging")
    error = mocker.patch("typedforms.cli.logger.error")

    code = cli.main(["validate", "--form", f"{forms_module}:Address", "--input", str(input_path)])

    assert code == 1
    error.assert_called_once()


def test_main_returns_error_code_on_missing_input(mocker, tmp_path: Path, forms_module: str) -> None:
    mocker.patch("typedforms.cli.get_settings", return_value=Settings())
    mocker.patch("typedforms.cli.configure_logging")
    mocker.patch("typedforms.cli.logger.exception")

    code = cli.main(["validate", "--form", f"{forms_module}:Address", "--input", str(tmp_path / "missing.json")])

    assert code == 1


def test_main_returns_130_on_interrupt(mocker) -> None:
    mocker.patch("typedforms.cli.get_settings", return_value=Settings())
    mocker.patch("typedforms.cli.configure_logging")
    mocker.patch("typedforms.cli._run_describe", side_effect=KeyboardInterrupt)

    assert cli.main(["describe", "--form", "m:C"]) == 130


def test_main_describe_prints_schema(mocker, capsys, forms_module: str) -> None:
    mocker.patch("typedforms.cli.get_settings", return_value=Settings())
    mocker.patch("typedforms.cli.configure_logging")

    code = cli.main(["describe", "--form", f"{forms_module}:Address"])

    assert code == 0
    description = json.loads(capsys.readouterr().out)
    assert [entry["id"] for entry in description["fields"]] == ["city", "zip", "floor"]


def test_main_without_command_prints_help(mocker, capsys) -> None:
    mocker.patch("typedforms.cli.get_settings", return_value=Settings())
    mocker.patch("typedforms.cli.configure_logging")

    assert cli.main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()
