"""
Credential schema descriptor.

Declares the fields of the NATS connection credential, their defaults and
the rules deciding which of them are shown and required.

Usage:
    from nats_credentials.schema import NATS_API_CREDENTIAL

    for prop in NATS_API_CREDENTIAL.visible_fields({"authType": "token"}):
        print(prop.name, prop.required)
"""

from nats_credentials.schema.auth import AUTH_TYPE_OPTIONS, AuthType
from nats_credentials.schema.definition import (
    AUTH_TYPE_FIELD,
    CredentialTypeDefinition,
    is_unset,
)
from nats_credentials.schema.fields import (
    CredentialField,
    DisplayOptions,
    FieldOption,
    FieldType,
    TypeOptions,
)
from nats_credentials.schema.nats_api import NATS_API_CREDENTIAL

__all__ = [
    "AUTH_TYPE_FIELD",
    "AUTH_TYPE_OPTIONS",
    "AuthType",
    "CredentialField",
    "CredentialTypeDefinition",
    "DisplayOptions",
    "FieldOption",
    "FieldType",
    "NATS_API_CREDENTIAL",
    "TypeOptions",
    "is_unset",
]
