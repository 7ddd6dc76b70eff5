"""
Command-line interface for the registration form validator.

Usage:
    python -m regform.cli.form_cli validate --name <name> --email <email> --password <pw> --confirm-password <pw>
    python -m regform.cli.form_cli validate --input <record.json> [--field <field>] [--json]
    python -m regform.cli.form_cli submit --input <record.json>
    python -m regform.cli.form_cli rules [--summary]
    python -m regform.cli.form_cli registry list|clear
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from regform.adapter import EmailRegistry, create_form_adapter
from regform.config import FormSettings
from regform.core.models import FIELD_ORDER, FieldId, FormRecord
from regform.core.rules import build_registration_engine
from regform.observability.logger import get_logger, log_operation, setup_logger

logger = get_logger(__name__)


def load_record(args) -> FormRecord:
    """
    Build a FormRecord from --input or the individual field flags.

    Flags override values read from the input file.
    """
    values: dict[str, Any] = {field.value: "" for field in FieldId}

    if args.input:
        input_path = Path(args.input)
        if not input_path.exists():
            raise FileNotFoundError(f"Input file not found: {args.input}")
        with open(input_path) as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("Input file must hold a JSON object of field values")
        values.update(data)

    flags = {
        FieldId.NAME: args.name,
        FieldId.EMAIL: args.email,
        FieldId.PASSWORD: args.password,
        FieldId.CONFIRM_PASSWORD: args.confirm_password,
    }
    for field, value in flags.items():
        if value is not None:
            values[field.value] = value

    return FormRecord.from_mapping(values)


def build_settings(args) -> FormSettings:
    """Environment settings with command-line overrides applied."""
    settings = FormSettings.from_env()
    overrides: dict[str, Any] = {}
    if args.rules_file:
        overrides["rules_path"] = Path(args.rules_file)
    if args.registry:
        overrides["registry_path"] = Path(args.registry)
    if args.unique_email:
        overrides["unique_email"] = True
    return settings.model_copy(update=overrides)


def validate_command(args) -> int:
    """
    Validate a record and print per-field outcomes.

    Returns:
        0 if the checked field(s) are valid, 1 otherwise
    """
    settings = build_settings(args)
    registry = EmailRegistry(settings.registry_path) if settings.unique_email else None
    engine = build_registration_engine(email_registry=registry, rules_path=settings.rules_path)
    record = load_record(args)

    if args.field:
        outcomes = [engine.evaluate_field(args.field, record)]
        passed = outcomes[0].valid
    else:
        result = engine.evaluate_all(record)
        outcomes = list(result.outcomes.values())
        passed = result.passed

    if args.json:
        print(json.dumps({
            "passed": passed,
            "fields": {
                str(outcome.field): {"valid": outcome.valid, "message": outcome.message}
                for outcome in outcomes
            },
        }, indent=2))
    else:
        print(f"\n{'=' * 60}")
        print("VALIDATION RESULT")
        print(f"{'=' * 60}")
        for outcome in outcomes:
            status = "OK" if outcome.valid else "ERROR"
            detail = "" if outcome.valid else f"  {outcome.message}"
            print(f"  {str(outcome.field):<16} {status:<6}{detail}")
        print(f"{'=' * 60}")
        print(f"Form is {'valid' if passed else 'invalid'}")

    return 0 if passed else 1


def submit_command(args) -> int:
    """
    Run the full submit path (including email registration) for a record.

    Returns:
        0 if the submission was accepted, 1 otherwise
    """
    settings = build_settings(args)
    adapter = create_form_adapter(settings)
    if adapter is None:
        return 2

    record = load_record(args)
    with adapter, log_operation("Submitting form", logger=logger):
        for field in FIELD_ORDER:
            adapter.dispatch("input", field, record[field])
        result = adapter.dispatch("submit")

        if result.passed:
            print(adapter.success_message)
            return 0

        for field, message in result.errors.items():
            print(f"{field}: {message}")
        return 1


def rules_command(args) -> int:
    """List the active rule catalog."""
    settings = build_settings(args)
    registry = EmailRegistry(settings.registry_path) if settings.unique_email else None
    engine = build_registration_engine(email_registry=registry, rules_path=settings.rules_path)

    if args.summary:
        print(json.dumps(engine.get_rule_summary(), indent=2))
        return 0

    for field in engine.fields:
        print(f"\n{field}:")
        for position, (rule_name, validator) in enumerate(engine.rule_set(field), start=1):
            print(f"  {position}. [{validator.rule_type}] {rule_name}: {validator.message}")
    return 0


def registry_command(args) -> int:
    """List or clear the registered-email store."""
    settings = build_settings(args)
    if settings.registry_path is None:
        print("No registry configured (set REGFORM_REGISTRY_PATH or pass --registry)")
        return 1

    registry = EmailRegistry(settings.registry_path)
    if args.action == "clear":
        count = len(registry)
        registry.clear()
        print(f"Removed {count} registered email(s)")
        return 0

    emails = registry.emails()
    if not emails:
        print("No registered emails")
    for email in emails:
        print(email)
    return 0


def add_record_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--input", help="JSON file with field values")
    parser.add_argument("--name", help="Name field value")
    parser.add_argument("--email", help="Email field value")
    parser.add_argument("--password", help="Password field value")
    parser.add_argument("--confirm-password", dest="confirm_password", help="Password confirmation value")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="regform",
        description="Registration form validator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate every field
  regform validate --name "Ada Lovelace" --email ada@example.com \\
      --password 'Engine#1843' --confirm-password 'Engine#1843'

  # Validate one field from a JSON record
  regform validate --input record.json --field email --json

  # Submit and register the email
  regform --registry data/emails.json --unique-email submit --input record.json
        """
    )
    parser.add_argument("--rules-file", help="YAML rule file replacing the built-in catalog")
    parser.add_argument("--registry", help="JSON file of registered emails")
    parser.add_argument("--unique-email", action="store_true", help="Reject already registered emails")
    parser.add_argument("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    validate_parser = subparsers.add_parser("validate", help="Validate field values")
    add_record_arguments(validate_parser)
    validate_parser.add_argument(
        "--field",
        choices=[field.value for field in FieldId],
        help="Validate only this field",
    )
    validate_parser.add_argument("--json", action="store_true", help="Print JSON output")
    validate_parser.set_defaults(func=validate_command)

    submit_parser = subparsers.add_parser("submit", help="Submit field values")
    add_record_arguments(submit_parser)
    submit_parser.set_defaults(func=submit_command)

    rules_parser = subparsers.add_parser("rules", help="List validation rules")
    rules_parser.add_argument("--summary", action="store_true", help="Print rule counts only")
    rules_parser.set_defaults(func=rules_command)

    registry_parser = subparsers.add_parser("registry", help="Manage registered emails")
    registry_parser.add_argument("action", choices=["list", "clear"])
    registry_parser.set_defaults(func=registry_command)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        settings = FormSettings.from_env()
        setup_logger(level=args.log_level or settings.log_level, format_type=settings.log_format)
        return args.func(args)
    except (OSError, ValueError) as e:
        logger.error(f"Command '{args.command}' failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
