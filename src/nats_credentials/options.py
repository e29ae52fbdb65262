"""Derive NATS client connection options from a credential.

The options object carries only what the active authentication variant
needs; material belonging to other variants never leaves the credential.
Connection establishment itself is left to the NATS client.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic.alias_generators import to_camel

from nats_credentials.creds import format_creds
from nats_credentials.instance import SECRET_MASK, NatsCredential
from nats_credentials.schema import AuthType, defaults

logger = logging.getLogger(__name__)

_CLIENT_CONFIG = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class TlsOptions(BaseModel):
    """PEM material for the TLS connection."""

    model_config = _CLIENT_CONFIG

    ca: str | None = Field(default=None, description="CA certificate(s) to trust")
    cert: str | None = Field(default=None, description="Client certificate")
    key: SecretStr | None = Field(default=None, description="Client private key")


class AuthOptions(BaseModel):
    """Authentication material of the active variant."""

    model_config = _CLIENT_CONFIG

    auth_type: AuthType
    user: str | None = None
    password: SecretStr | None = Field(default=None, alias="pass")
    token: SecretStr | None = None
    nkey_seed: SecretStr | None = None
    creds: SecretStr | None = Field(
        default=None,
        description="Creds file text (also used for JWT + seed)",
    )


class JetStreamOptions(BaseModel):
    """Options for the JetStream context."""

    model_config = _CLIENT_CONFIG

    api_prefix: str = defaults.DEFAULT_JS_API_PREFIX
    timeout: int | float = defaults.DEFAULT_JS_TIMEOUT
    domain: str | None = None


class ConnectionOptions(BaseModel):
    """Client-neutral connection options.  Durations are milliseconds."""

    model_config = _CLIENT_CONFIG

    servers: list[str]
    name: str | None = None
    tls: TlsOptions | None = None
    auth: AuthOptions

    ping_interval: int | float = defaults.DEFAULT_PING_INTERVAL
    max_ping_out: int | float = defaults.DEFAULT_MAX_PING_OUT
    reconnect: bool = defaults.DEFAULT_RECONNECT
    max_reconnect_attempts: int | float = defaults.DEFAULT_MAX_RECONNECT_ATTEMPTS
    reconnect_jitter: int | float = defaults.DEFAULT_RECONNECT_JITTER
    reconnect_time_wait: int | float = defaults.DEFAULT_RECONNECT_TIME_WAIT
    timeout: int | float = defaults.DEFAULT_TIMEOUT
    ignore_auth_error_abort: bool = defaults.DEFAULT_IGNORE_AUTH_ERROR_ABORT

    no_echo: bool = defaults.DEFAULT_NO_ECHO
    no_randomize: bool = defaults.DEFAULT_NO_RANDOMIZE
    wait_on_first_connect: bool = defaults.DEFAULT_WAIT_ON_FIRST_CONNECT
    ignore_cluster_updates: bool = defaults.DEFAULT_IGNORE_CLUSTER_UPDATES
    inbox_prefix: str = defaults.DEFAULT_INBOX_PREFIX
    debug: bool = defaults.DEFAULT_DEBUG

    jetstream: JetStreamOptions = Field(default_factory=JetStreamOptions)

    def to_client_dict(self, reveal_secrets: bool = False) -> dict[str, Any]:
        """Dump the options in the client's camelCase vocabulary.

        Secrets are masked unless *reveal_secrets* is set; only the code
        handing the options to the client should reveal them.
        """
        data = self.model_dump(by_alias=True, exclude_none=True)
        return _render_secrets(data, reveal_secrets)


def _render_secrets(value: Any, reveal: bool) -> Any:
    if isinstance(value, SecretStr):
        return value.get_secret_value() if reveal else SECRET_MASK
    if isinstance(value, dict):
        return {k: _render_secrets(v, reveal) for k, v in value.items()}
    if isinstance(value, list):
        return [_render_secrets(v, reveal) for v in value]
    if isinstance(value, AuthType):
        return value.value
    return value


def build_auth_options(credential: NatsCredential) -> AuthOptions:
    """Pick the authentication material of the active variant."""
    auth_type = credential.auth_type
    if auth_type == AuthType.USER:
        return AuthOptions(auth_type=auth_type, user=credential.user, password=credential.password)
    if auth_type == AuthType.TOKEN:
        return AuthOptions(auth_type=auth_type, token=credential.token)
    if auth_type == AuthType.NKEY:
        return AuthOptions(auth_type=auth_type, nkey_seed=credential.seed)
    if auth_type == AuthType.JWT:
        text = format_creds(
            credential.jwt.get_secret_value(),
            credential.jwt_seed.get_secret_value(),
        )
        return AuthOptions(auth_type=auth_type, creds=SecretStr(text))
    if auth_type == AuthType.CREDS:
        return AuthOptions(auth_type=auth_type, creds=credential.creds)
    # none, and tls which authenticates through the client certificate
    return AuthOptions(auth_type=auth_type)


def build_tls_options(credential: NatsCredential) -> TlsOptions | None:
    if not credential.tls_enabled:
        return None
    if credential.auth_type == AuthType.TLS:
        return TlsOptions(ca=credential.tls_ca, cert=credential.tls_cert, key=credential.tls_key)
    return TlsOptions(ca=credential.tls_ca)


def build_jetstream_options(credential: NatsCredential) -> JetStreamOptions:
    """JetStream options; a domain rewrites the API prefix."""
    api_prefix = credential.js_api_prefix
    domain = credential.js_domain.strip() if credential.js_domain else None
    if domain:
        if api_prefix != defaults.DEFAULT_JS_API_PREFIX:
            logger.warning(
                f"JetStream domain '{domain}' overrides the configured API prefix '{api_prefix}'"
            )
        api_prefix = defaults.js_api_prefix_for_domain(domain)
    return JetStreamOptions(api_prefix=api_prefix, timeout=credential.js_timeout, domain=domain)


def build_connection_options(credential: NatsCredential) -> ConnectionOptions:
    """Derive the options handed to the NATS client for *credential*."""
    options = ConnectionOptions(
        servers=credential.server_list,
        name=credential.name,
        tls=build_tls_options(credential),
        auth=build_auth_options(credential),
        ping_interval=credential.ping_interval,
        max_ping_out=credential.max_ping_out,
        reconnect=credential.reconnect,
        max_reconnect_attempts=credential.max_reconnect_attempts,
        reconnect_jitter=credential.reconnect_jitter,
        reconnect_time_wait=credential.reconnect_time_wait,
        timeout=credential.timeout,
        ignore_auth_error_abort=credential.ignore_auth_error_abort,
        no_echo=credential.no_echo,
        no_randomize=credential.no_randomize,
        wait_on_first_connect=credential.wait_on_first_connect,
        ignore_cluster_updates=credential.ignore_cluster_updates,
        inbox_prefix=credential.inbox_prefix,
        debug=credential.debug,
        jetstream=build_jetstream_options(credential),
    )
    logger.debug(
        f"Built connection options for {len(options.servers)} server(s) "
        f"with {options.auth.auth_type} authentication"
    )
    return options
