"""Validation of credential instances against a credential type definition.

A credential instance is the flat key/value map the host stores.  It is
valid when:

1. ``authType`` names a known authentication variant
2. every visible required field holds a value
3. every visible value has the field's type and honours its bounds
4. variant-specific content checks pass (TLS on for certificate auth,
   NKey seed, JWT and creds shapes, at least one server)

Hidden fields are ignored whatever they hold.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from nats_credentials.creds import looks_like_jwt, looks_like_seed, parse_creds
from nats_credentials.errors import CredentialValidationError, CredsFormatError
from nats_credentials.schema import (
    AUTH_TYPE_FIELD,
    NATS_API_CREDENTIAL,
    AuthType,
    CredentialTypeDefinition,
    is_unset,
)

logger = logging.getLogger(__name__)


class ValidationIssue(BaseModel):
    """One reason a credential instance is invalid."""

    field: str = Field(description="Key of the offending field")
    message: str = Field(description="Human-readable reason, free of secret values")

    model_config = {"frozen": True}


class ValidationResult(BaseModel):
    """Outcome of validating a credential instance."""

    issues: list[ValidationIssue] = Field(default_factory=list)
    visible: list[str] = Field(
        default_factory=list,
        description="Keys of fields shown for the instance",
    )
    ignored: list[str] = Field(
        default_factory=list,
        description="Keys present in the instance but hidden by their predicate",
    )
    values: dict[str, Any] = Field(
        default_factory=dict,
        description="Visible fields resolved to their value or default",
    )

    @property
    def valid(self) -> bool:
        return not self.issues

    @property
    def reasons(self) -> list[str]:
        return [issue.message for issue in self.issues]


def _missing(name: str) -> ValidationIssue:
    return ValidationIssue(field=name, message=f"missing required field: {name}")


def _check_content(resolved: Mapping[str, Any], visible: set[str]) -> list[ValidationIssue]:
    """Checks that go beyond presence and type."""
    issues: list[ValidationIssue] = []

    servers = resolved.get("servers")
    if "servers" in visible and isinstance(servers, str):
        if not [s for s in servers.split(",") if s.strip()]:
            issues.append(ValidationIssue(field="servers", message="servers must list at least one host"))

    for name in ("seed", "jwtSeed"):
        value = resolved.get(name)
        if name in visible and isinstance(value, str) and not is_unset(value):
            if not looks_like_seed(value):
                issues.append(
                    ValidationIssue(field=name, message=f"field {name} must be an NKey seed starting with 'S'")
                )

    jwt = resolved.get("jwt")
    if "jwt" in visible and isinstance(jwt, str) and not is_unset(jwt) and not looks_like_jwt(jwt):
        issues.append(ValidationIssue(field="jwt", message="field jwt must have three dot-separated segments"))

    creds = resolved.get("creds")
    if "creds" in visible and isinstance(creds, str) and not is_unset(creds):
        try:
            parse_creds(creds)
        except CredsFormatError as e:
            issues.append(ValidationIssue(field="creds", message=str(e)))

    return issues


def validate_instance(
    values: Mapping[str, Any],
    definition: CredentialTypeDefinition = NATS_API_CREDENTIAL,
) -> ValidationResult:
    """Validate a credential instance.

    Args:
        values: Flat key/value map as stored by the host.
        definition: Credential type to validate against.

    Returns:
        A ``ValidationResult``; ``result.valid`` is False when any issue
        was found.
    """
    issues: list[ValidationIssue] = []
    resolved = definition.apply_defaults(values)

    auth_value = resolved.get(AUTH_TYPE_FIELD)
    auth_type = None if is_unset(auth_value) else AuthType.parse(auth_value)
    if not is_unset(auth_value) and auth_type is None:
        # The visibility of every variant field hinges on this value
        issues.append(
            ValidationIssue(
                field=AUTH_TYPE_FIELD,
                message=f"unknown authentication type: {auth_value!r}",
            )
        )

    visible_fields = [prop for prop in definition.properties if prop.is_visible(resolved)]
    visible = {prop.name for prop in visible_fields}

    for prop in visible_fields:
        value = resolved[prop.name]
        if is_unset(value):
            if prop.required:
                issues.append(_missing(prop.name))
            continue
        if prop.name == AUTH_TYPE_FIELD and auth_type is None:
            continue
        problem = prop.check_value(value)
        if problem is not None:
            issues.append(ValidationIssue(field=prop.name, message=problem))

    if auth_type == AuthType.TLS and resolved.get("tlsEnabled") is not True:
        issues.append(
            ValidationIssue(
                field="tlsEnabled",
                message="TLS certificate authentication requires tlsEnabled",
            )
        )

    issues.extend(_check_content(resolved, visible))

    ignored = [
        prop.name
        for prop in definition.hidden_fields(values)
        if not is_unset(values.get(prop.name))
    ]
    if ignored:
        logger.debug(f"Ignoring hidden credential fields: {ignored}")

    return ValidationResult(
        issues=issues,
        visible=[prop.name for prop in visible_fields],
        ignored=ignored,
        values={
            prop.name: resolved[prop.name]
            for prop in visible_fields
            if resolved[prop.name] is not None
        },
    )


def ensure_valid(
    values: Mapping[str, Any],
    definition: CredentialTypeDefinition = NATS_API_CREDENTIAL,
) -> dict[str, Any]:
    """Validate and return the resolved visible values.

    Raises:
        CredentialValidationError: If the instance is invalid.
    """
    result = validate_instance(values, definition)
    if not result.valid:
        logger.warning(f"Rejected credential '{definition.name}': {'; '.join(result.reasons)}")
        raise CredentialValidationError(result.issues)
    return result.values
