"""
CLI commands for inspecting and checking NATS credentials.

    nats-credentials schema [--auth-type token]
    nats-credentials validate credential.json
    nats-credentials options --env
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from nats_credentials.env import values_from_env
from nats_credentials.errors import CredentialError, CredentialValidationError
from nats_credentials.instance import SECRET_MASK, NatsCredential
from nats_credentials.options import build_connection_options
from nats_credentials.schema import NATS_API_CREDENTIAL, AuthType
from nats_credentials.validation import validate_instance

logger = logging.getLogger(__name__)


def register_credential_commands(subparsers: argparse._SubParsersAction) -> None:
    """Register credential CLI commands."""

    # schema
    schema_parser = subparsers.add_parser(
        "schema",
        help="Print the credential form schema as JSON",
    )
    schema_parser.add_argument(
        "--auth-type",
        "-a",
        choices=[auth_type.value for auth_type in AuthType],
        help="Only list the fields visible for this authentication type",
    )
    schema_parser.add_argument(
        "--tls",
        action="store_true",
        help="With --auth-type, evaluate visibility with TLS enabled",
    )
    schema_parser.set_defaults(func=cmd_schema)

    # validate
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate a stored credential instance",
    )
    _add_source_arguments(validate_parser)
    validate_parser.set_defaults(func=cmd_validate)

    # options
    options_parser = subparsers.add_parser(
        "options",
        help="Print the connection options derived from a credential (secrets masked)",
    )
    _add_source_arguments(options_parser)
    options_parser.set_defaults(func=cmd_options)


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "path",
        nargs="?",
        help="JSON file holding the credential key/value map",
    )
    source.add_argument(
        "--env",
        action="store_true",
        help="Read the credential from NATS_* environment variables",
    )
    parser.add_argument(
        "--dotenv",
        help="Path of a .env file to load with --env",
    )


def _load_values(args: argparse.Namespace) -> dict[str, Any]:
    if args.env:
        return values_from_env(dotenv_path=args.dotenv)

    try:
        with open(Path(args.path), encoding="utf-8") as f:
            data = json.load(f)
    except UnicodeDecodeError:
        raise CredentialError(f"{args.path} is not valid UTF-8 JSON") from None
    if not isinstance(data, dict):
        raise CredentialError(f"{args.path} must hold a JSON object")
    return data


def _masked(values: dict[str, Any]) -> dict[str, Any]:
    secret_names = set(NATS_API_CREDENTIAL.secret_field_names)
    return {k: (SECRET_MASK if k in secret_names else v) for k, v in values.items()}


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


def cmd_schema(args: argparse.Namespace) -> int:
    """Print the form schema, optionally narrowed to one authentication type."""
    schema = NATS_API_CREDENTIAL.to_form_schema()
    if args.auth_type:
        values = {"authType": args.auth_type, "tlsEnabled": args.tls}
        visible = {prop.name for prop in NATS_API_CREDENTIAL.visible_fields(values)}
        schema["properties"] = [p for p in schema["properties"] if p["name"] in visible]
    _print_json(schema)
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a credential instance and report every issue."""
    values = _load_values(args)
    result = validate_instance(values)
    _print_json(
        {
            "valid": result.valid,
            "errors": result.reasons,
            "visible": result.visible,
            "ignored": result.ignored,
            "values": _masked(result.values),
        }
    )
    return 0 if result.valid else 1


def cmd_options(args: argparse.Namespace) -> int:
    """Print the derived connection options with secrets masked."""
    values = _load_values(args)
    credential = NatsCredential.from_values(values)
    options = build_connection_options(credential)
    _print_json(options.to_client_dict())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nats-credentials",
        description="Inspect and validate NATS connection credentials",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    register_credential_commands(subparsers)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except CredentialValidationError as e:
        for reason in e.reasons:
            print(f"error: {reason}", file=sys.stderr)
        return 1
    except (CredentialError, OSError, json.JSONDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
