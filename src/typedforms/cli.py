"""CLI entry point for TypedForms."""

from __future__ import annotations

import argparse
import importlib
import json
import sys
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from typedforms import __version__, logger
from typedforms.binary import APPLICATION_OCTET_STREAM, ArrayBinarySource, as_base64_string
from typedforms.describe import describe_form
from typedforms.exceptions import FormDeclarationError, PackageError
from typedforms.forms import Form, build
from typedforms.logging import configure_logging
from typedforms.settings import Settings, get_settings
from typedforms.typing.enums import ValidationMode
from typedforms.typing.protocol import BinarySource
from typedforms.validation.config import ValidationConfig


def _mode_from_cli(value: str) -> ValidationMode:
    """Convert `--mode` CLI value into a validation mode.

    Args:
        value (str): CLI value.

    Raises:
        argparse.ArgumentTypeError: If value is not supported.

    Returns:
        ValidationMode: Selected mode.
    """
    try:
        return ValidationMode.from_str(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="typedforms")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    validate_parser = subparsers.add_parser("validate", help="Validate a JSON document against a form")
    validate_parser.add_argument("--form", required=True, dest="form_ref", help="Form class as 'module:Class'")
    validate_parser.add_argument("--input", required=True, type=Path, dest="input_path")
    validate_parser.add_argument("--output", type=Path, default=None, dest="output_path")
    validate_parser.add_argument("--mode", default=ValidationMode.FULL, type=_mode_from_cli)
    validate_parser.add_argument("--strict", action="store_true", help="Disable lenient type coercion")
    validate_parser.add_argument("--exhaustive", action="store_true", help="Report every failing requirement")
    validate_parser.add_argument("--detailed", action="store_true", help="Report field paths in errors")

    describe_parser = subparsers.add_parser("describe", help="Print the schema of a form")
    describe_parser.add_argument("--form", required=True, dest="form_ref", help="Form class as 'module:Class'")

    return parser


def load_form_class(reference: str) -> type[Form]:
    """Import a form class from a `module:Class` reference.

    Args:
        reference (str): Form reference.

    Raises:
        FormDeclarationError: If the reference does not name a form class.

    Returns:
        type[Form]: Form class.
    """
    module_name, sep, class_name = reference.partition(":")
    if not sep or not module_name or not class_name:
        raise FormDeclarationError(f"Form reference '{reference}' must look like 'module:Class'")  # noqa: TRY003
    try:
        target: Any = importlib.import_module(module_name)
        for attribute in class_name.split("."):
            target = getattr(target, attribute)
    except (ImportError, AttributeError) as exc:
        raise FormDeclarationError(f"Cannot import form '{reference}': {exc}") from exc  # noqa: TRY003
    if not isinstance(target, type) or not issubclass(target, Form):
        raise FormDeclarationError(f"'{reference}' is not a form class")  # noqa: TRY003
    return target


def to_json_value(value: Any) -> Any:
    """Convert validated form data into JSON-compatible values.

    Binary payloads become data URIs and enum members their names.

    Args:
        value (Any): Validated value.

    Returns:
        Any: JSON-compatible value.
    """
    if isinstance(value, Form):
        return to_json_value(value.data)
    if isinstance(value, BinarySource):
        return as_base64_string(value)
    if isinstance(value, bytes | bytearray):
        return as_base64_string(ArrayBinarySource(APPLICATION_OCTET_STREAM, bytes(value)))
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, Mapping):
        return {str(to_json_value(key)): to_json_value(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [to_json_value(item) for item in value]
    return value


def _build_validation_config(args: argparse.Namespace, settings: Settings) -> ValidationConfig:
    """Build validation configuration from CLI arguments.

    Args:
        args (argparse.Namespace): Parsed CLI args.
        settings (Settings): Runtime settings.

    Returns:
        ValidationConfig: Configuration.
    """
    overrides: dict[str, object] = {"mode": args.mode}
    if args.strict:
        overrides["lenient_types"] = False
    if args.exhaustive:
        overrides["optimized_requirement_checks"] = False
    if args.detailed:
        overrides["detailed_location"] = True
    return ValidationConfig.from_settings(settings, **overrides)


def _run_validate(args: argparse.Namespace, settings: Settings) -> None:
    form_class = load_form_class(args.form_ref)
    raw = json.loads(args.input_path.read_text(encoding="utf-8"))
    form = build(form_class, raw, _build_validation_config(args, settings))
    payload = json.dumps(to_json_value(form), indent=2, ensure_ascii=False)

    if args.output_path is None:
        sys.stdout.write(payload + "\n")
        return
    args.output_path.parent.mkdir(parents=True, exist_ok=True)
    args.output_path.write_text(payload + "\n", encoding="utf-8")
    logger.info("Validation completed", extra={"output_path": str(args.output_path)})


def _run_describe(args: argparse.Namespace) -> None:
    description = describe_form(load_form_class(args.form_ref))
    sys.stdout.write(json.dumps(to_json_value(description), indent=2, ensure_ascii=False) + "\n")


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv (list[str] | None): Arguments, `sys.argv[1:]` when omitted.

    Returns:
        int: Exit code (0 for success, 1 for error, 130 when interrupted).
    """
    settings = get_settings()
    configure_logging(settings=settings)

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command not in {"validate", "describe"}:
        parser.print_help()
        return 0

    try:
        if args.command == "validate":
            _run_validate(args, settings)
        else:
            _run_describe(args)
    except PackageError as exc:
        logger.error("Command failed", extra={"command": args.command, "error": str(exc)})
        return 1
    except (OSError, json.JSONDecodeError):
        logger.exception("Cannot read input document")
        return 1
    except KeyboardInterrupt:
        logger.info("Command aborted by user")
        return 130
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
