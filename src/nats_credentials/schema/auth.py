"""Authentication variants supported by the NATS credential."""

from __future__ import annotations

from enum import StrEnum

from nats_credentials.schema.fields import FieldOption

AUTH_DOCS_URL = "https://docs.nats.io/running-a-nats-service/configuration/securing_nats/auth_intro"


class AuthType(StrEnum):
    """Mechanism used to authenticate to the NATS server.

    Exactly one is active per credential instance.
    """

    NONE = "none"
    USER = "user"
    TOKEN = "token"
    TLS = "tls"
    NKEY = "nkey"
    JWT = "jwt"
    CREDS = "creds"

    @classmethod
    def parse(cls, value: object) -> AuthType | None:
        """Return the variant for *value*, or ``None`` if it is unknown."""
        try:
            return cls(value)
        except (TypeError, ValueError):
            return None


AUTH_TYPE_OPTIONS = [
    FieldOption(name="None", value=AuthType.NONE.value, description="No Authentication"),
    FieldOption(
        name="Plain Text Username/Password credentials",
        value=AuthType.USER.value,
        description="authentication with username and password",
    ),
    FieldOption(
        name="Token Authentication",
        value=AuthType.TOKEN.value,
        description="authentication with a token",
    ),
    FieldOption(
        name="TLS Certificate",
        value=AuthType.TLS.value,
        description="authentication with a tls certificate",
    ),
    FieldOption(
        name="NKEY with Challenge",
        value=AuthType.NKEY.value,
        description="authentication with a nkey challenge",
    ),
    FieldOption(
        name="Decentralized JWT Authentication",
        value=AuthType.JWT.value,
        description="authentication with a jwt and nkey",
    ),
    FieldOption(
        name="Creds file",
        value=AuthType.CREDS.value,
        description="authentication with a creds file",
    ),
]
