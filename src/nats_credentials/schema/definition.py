"""Credential type definition: the ordered field table and the rules over it."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, model_validator

from nats_credentials.schema.auth import AuthType
from nats_credentials.schema.fields import CredentialField

logger = logging.getLogger(__name__)

AUTH_TYPE_FIELD = "authType"


def is_unset(value: Any) -> bool:
    """A value the form leaves empty: ``None`` or a blank string."""
    return value is None or (isinstance(value, str) and not value.strip())


class CredentialTypeDefinition(BaseModel):
    """Declarative description of one credential type.

    The definition is the single source of truth for the form renderer, the
    validator and the options builder.  It holds no per-instance state.

    Example::

        definition = NATS_API_CREDENTIAL
        visible = definition.visible_fields({"authType": "token"})
        [f.name for f in visible if f.required]   # ['authType', 'token']
    """

    name: str = Field(description="Credential type identifier used by the host")
    display_name: str
    documentation_url: str = ""
    properties: list[CredentialField] = Field(default_factory=list)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_properties(self) -> CredentialTypeDefinition:
        seen: set[str] = set()
        for prop in self.properties:
            if prop.name in seen:
                raise ValueError(f"Duplicate field '{prop.name}' in credential '{self.name}'")
            seen.add(prop.name)

        for prop in self.properties:
            if prop.display_options is None:
                continue
            unknown = prop.display_options.depends_on() - seen
            if unknown:
                raise ValueError(
                    f"Field '{prop.name}' depends on unknown field(s): {', '.join(sorted(unknown))}"
                )
        return self

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def field_names(self) -> list[str]:
        return [prop.name for prop in self.properties]

    @property
    def secret_field_names(self) -> list[str]:
        return [prop.name for prop in self.properties if prop.secret]

    def get_field(self, name: str) -> CredentialField:
        """Return the field called *name*.

        Raises:
            KeyError: If the credential type has no such field.
        """
        for prop in self.properties:
            if prop.name == name:
                return prop
        raise KeyError(f"Credential '{self.name}' has no field '{name}'")

    def auth_types(self) -> list[AuthType]:
        """Authentication variants offered by the ``authType`` field."""
        return [AuthType(value) for value in self.get_field(AUTH_TYPE_FIELD).option_values]

    # ------------------------------------------------------------------
    # Instance evaluation
    # ------------------------------------------------------------------

    def apply_defaults(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Resolve every schema field to its stored value or its default.

        Keys unknown to the schema are dropped.  Fields with neither a value
        nor a default resolve to ``None``.
        """
        resolved: dict[str, Any] = {}
        for prop in self.properties:
            value = values.get(prop.name)
            resolved[prop.name] = prop.default if is_unset(value) else value

        unknown = set(values) - set(resolved)
        if unknown:
            logger.debug(f"Ignoring unknown credential keys: {sorted(unknown)}")
        return resolved

    def visible_fields(self, values: Mapping[str, Any]) -> list[CredentialField]:
        """Fields shown for the instance, in declaration order."""
        resolved = self.apply_defaults(values)
        return [prop for prop in self.properties if prop.is_visible(resolved)]

    def hidden_fields(self, values: Mapping[str, Any]) -> list[CredentialField]:
        """Fields whose predicate hides them for the instance."""
        resolved = self.apply_defaults(values)
        return [prop for prop in self.properties if not prop.is_visible(resolved)]

    def required_fields(self, values: Mapping[str, Any]) -> list[CredentialField]:
        """Visible fields that must hold a value."""
        return [prop for prop in self.visible_fields(values) if prop.required]

    def required_fields_for(self, auth_type: AuthType | str) -> tuple[str, ...]:
        """Fields an authentication variant adds to the required set.

        Only fields gated on ``authType`` are listed.  The ``tls`` variant
        also needs ``tlsEnabled`` switched on, which is a value precondition
        rather than a required field; without it the certificate fields stay
        hidden and validation reports ``requires tlsEnabled``.

        Raises:
            ValueError: If *auth_type* is not a known variant.
        """
        variant = AuthType.parse(auth_type)
        if variant is None or variant not in self.auth_types():
            raise ValueError(f"unknown authentication type: {auth_type!r}")

        names = []
        for prop in self.properties:
            if not prop.required or prop.display_options is None:
                continue
            allowed = prop.display_options.show.get(AUTH_TYPE_FIELD)
            if allowed is not None and variant in allowed:
                names.append(prop.name)
        return tuple(names)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_form_schema(self) -> dict[str, Any]:
        """JSON-ready description consumed by the host's form renderer."""
        schema: dict[str, Any] = {
            "name": self.name,
            "displayName": self.display_name,
            "properties": [prop.to_form_property() for prop in self.properties],
        }
        if self.documentation_url:
            schema["documentationUrl"] = self.documentation_url
        return schema
