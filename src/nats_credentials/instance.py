"""Typed NATS credential built from a validated credential instance."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic.alias_generators import to_camel

from nats_credentials.schema import NATS_API_CREDENTIAL, AuthType, defaults
from nats_credentials.validation import ensure_valid

logger = logging.getLogger(__name__)

SECRET_MASK = "**********"


class NatsCredential(BaseModel):
    """An immutable, validated NATS connection credential.

    Attribute names are the snake_case form of the stored keys
    (``tlsEnabled`` -> ``tls_enabled``); the password is stored under
    ``pass``.  Only fields visible for the active variant are populated.
    Secret fields are ``SecretStr`` so that ``repr`` and default dumps
    never show them.

    Example::

        credential = NatsCredential.from_values({"authType": "token", "token": "abc123"})
        credential.auth_type            # AuthType.TOKEN
        credential.to_values()["token"] # '**********'
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    name: str | None = None
    servers: str = defaults.DEFAULT_SERVERS
    tls_enabled: bool = False
    tls_ca: str | None = None
    auth_type: AuthType

    tls_cert: str | None = None
    tls_key: SecretStr | None = None
    user: str | None = None
    password: SecretStr | None = Field(default=None, alias="pass")
    token: SecretStr | None = None
    seed: SecretStr | None = None
    jwt_seed: SecretStr | None = None
    jwt: SecretStr | None = None
    creds: SecretStr | None = None
    ignore_auth_error_abort: bool = defaults.DEFAULT_IGNORE_AUTH_ERROR_ABORT

    js_api_prefix: str = defaults.DEFAULT_JS_API_PREFIX
    js_timeout: int | float = defaults.DEFAULT_JS_TIMEOUT
    js_domain: str | None = None

    max_ping_out: int | float = defaults.DEFAULT_MAX_PING_OUT
    ping_interval: int | float = defaults.DEFAULT_PING_INTERVAL

    reconnect: bool = defaults.DEFAULT_RECONNECT
    max_reconnect_attempts: int | float = defaults.DEFAULT_MAX_RECONNECT_ATTEMPTS
    reconnect_jitter: int | float = defaults.DEFAULT_RECONNECT_JITTER
    reconnect_time_wait: int | float = defaults.DEFAULT_RECONNECT_TIME_WAIT
    timeout: int | float = defaults.DEFAULT_TIMEOUT

    no_echo: bool = defaults.DEFAULT_NO_ECHO
    no_randomize: bool = defaults.DEFAULT_NO_RANDOMIZE
    wait_on_first_connect: bool = defaults.DEFAULT_WAIT_ON_FIRST_CONNECT
    ignore_cluster_updates: bool = defaults.DEFAULT_IGNORE_CLUSTER_UPDATES
    inbox_prefix: str = defaults.DEFAULT_INBOX_PREFIX
    debug: bool = defaults.DEFAULT_DEBUG

    @classmethod
    def from_values(cls, values: Mapping[str, Any]) -> NatsCredential:
        """Validate a stored credential instance and build the typed credential.

        Raises:
            CredentialValidationError: If the instance is invalid.
        """
        resolved = ensure_valid(values, NATS_API_CREDENTIAL)
        credential = cls.model_validate(resolved)
        logger.info(
            f"Loaded NATS credential (authType={credential.auth_type}, "
            f"servers={len(credential.server_list)}, tls={credential.tls_enabled})"
        )
        return credential

    @property
    def server_list(self) -> list[str]:
        return [server.strip() for server in self.servers.split(",") if server.strip()]

    def to_values(self, reveal_secrets: bool = False) -> dict[str, Any]:
        """Return the flat key/value map the host stores.

        Args:
            reveal_secrets: Include secret values in plaintext.  Only the
                storage layer should ask for this; everything that echoes
                the credential back must use the masked default.
        """
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        if reveal_secrets:
            for field_name, info in type(self).model_fields.items():
                value = getattr(self, field_name)
                if isinstance(value, SecretStr):
                    data[info.alias or field_name] = value.get_secret_value()
        return data

    def redacted(self) -> dict[str, Any]:
        """Stored map with every secret replaced by a mask."""
        return self.to_values(reveal_secrets=False)

    def reedit(self, **changes: Any) -> NatsCredential:
        """Return a new credential with *changes* applied and re-validated.

        Keys are the stored (camelCase) keys.  Fields hidden by the new
        values are dropped.

        Raises:
            CredentialValidationError: If the edited instance is invalid.
        """
        values = self.to_values(reveal_secrets=True)
        values.update(changes)
        return type(self).from_values(values)
