"""
Load a credential instance from environment variables.

Every field maps to ``NATS_<UPPER_SNAKE_KEY>``:

    NATS_SERVERS=nats://nats1:4222,nats://nats2:4222
    NATS_AUTH_TYPE=token
    NATS_TOKEN=s3cr3t
    NATS_TLS_ENABLED=true
    NATS_JS_DOMAIN=hub

A ``.env`` file is read first when present; variables already set in the
process environment win.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv

from nats_credentials.errors import CredentialValidationError
from nats_credentials.schema import NATS_API_CREDENTIAL, CredentialTypeDefinition
from nats_credentials.validation import ValidationIssue

logger = logging.getLogger(__name__)

DEFAULT_ENV_PREFIX = "NATS_"


def values_from_env(
    environ: Mapping[str, str] | None = None,
    prefix: str = DEFAULT_ENV_PREFIX,
    dotenv_path: str | Path | None = None,
    definition: CredentialTypeDefinition = NATS_API_CREDENTIAL,
) -> dict[str, Any]:
    """Collect a credential instance from environment variables.

    Args:
        environ: Mapping to read from.  Defaults to ``os.environ`` after
            loading *dotenv_path*, or the nearest ``.env`` searching upward
            from the working directory.
        prefix: Variable name prefix.
        dotenv_path: Explicit ``.env`` file to load.
        definition: Credential type whose fields are looked up.

    Returns:
        The credential instance, typed per field.  Unset variables are left
        out so that defaults apply.

    Raises:
        CredentialValidationError: If a variable cannot be converted to its
            field type.
    """
    if environ is None:
        load_dotenv(dotenv_path or find_dotenv(usecwd=True), override=False)
        environ = os.environ

    values: dict[str, Any] = {}
    issues: list[ValidationIssue] = []
    for prop in definition.properties:
        var = prop.env_var(prefix)
        raw = environ.get(var)
        if raw is None or not raw.strip():
            continue
        try:
            values[prop.name] = prop.parse_text(raw)
        except ValueError as e:
            issues.append(ValidationIssue(field=prop.name, message=f"{var}: {e}"))

    if issues:
        raise CredentialValidationError(issues)

    logger.info(f"Read {len(values)} credential field(s) from {prefix}* environment variables")
    return values
