"""NATS connection credential schema.

Declares the credential fields a workflow host renders for a NATS
connection, validates stored instances against them and derives the
options handed to a NATS client.

Quick-start::

    from nats_credentials import NatsCredential, build_connection_options

    credential = NatsCredential.from_values(
        {"servers": "nats://nats1:4222", "authType": "token", "token": "abc123"}
    )
    options = build_connection_options(credential)
    options.to_client_dict()["auth"]["token"]   # '**********'
"""

from nats_credentials.creds import format_creds, parse_creds
from nats_credentials.env import values_from_env
from nats_credentials.errors import (
    CredentialError,
    CredentialValidationError,
    CredsFormatError,
)
from nats_credentials.instance import NatsCredential
from nats_credentials.options import (
    AuthOptions,
    ConnectionOptions,
    JetStreamOptions,
    TlsOptions,
    build_connection_options,
)
from nats_credentials.schema import (
    NATS_API_CREDENTIAL,
    AuthType,
    CredentialField,
    CredentialTypeDefinition,
    FieldType,
)
from nats_credentials.validation import (
    ValidationIssue,
    ValidationResult,
    ensure_valid,
    validate_instance,
)

__all__ = [
    # Schema
    "NATS_API_CREDENTIAL",
    "AuthType",
    "CredentialField",
    "CredentialTypeDefinition",
    "FieldType",
    # Validation
    "ValidationIssue",
    "ValidationResult",
    "validate_instance",
    "ensure_valid",
    # Credential
    "NatsCredential",
    "values_from_env",
    "format_creds",
    "parse_creds",
    # Options
    "AuthOptions",
    "ConnectionOptions",
    "JetStreamOptions",
    "TlsOptions",
    "build_connection_options",
    # Errors
    "CredentialError",
    "CredentialValidationError",
    "CredsFormatError",
]
