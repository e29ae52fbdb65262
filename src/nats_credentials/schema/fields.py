"""Field models for credential declarations.

A credential type is an ordered list of ``CredentialField`` entries.  Each
field carries what a host form renderer needs (label, placeholder, type
options) plus the rules the package evaluates itself:

- ``display_options``: the visibility predicate over other fields' values
- ``required``: whether a visible field must hold a value
- ``secret``: whether the value must be masked wherever it is echoed
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


class FieldType(StrEnum):
    """Value types a credential field can hold."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OPTIONS = "options"


class FieldOption(BaseModel):
    """One selectable value of an ``options`` field."""

    name: str = Field(description="Label shown in the select box")
    value: str = Field(description="Value stored in the credential instance")
    description: str = ""

    model_config = {"frozen": True}


class TypeOptions(BaseModel):
    """Rendering hints and value constraints attached to a field."""

    password: bool = Field(default=False, description="Mask the input widget")
    rows: int | None = Field(default=None, description="Textarea height")
    always_open_edit_window: bool = False
    min_value: float | None = Field(default=None, description="Lower bound for numbers")

    model_config = {"frozen": True}


class DisplayOptions(BaseModel):
    """Visibility predicate of a field.

    ``show`` maps a field name to the values that make this field visible;
    every entry must match.  ``hide`` maps a field name to values that hide
    this field; any match hides it.
    """

    show: dict[str, list[Any]] = Field(default_factory=dict)
    hide: dict[str, list[Any]] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def matches(self, values: Mapping[str, Any]) -> bool:
        """Evaluate the predicate against resolved instance values."""
        for key, allowed in self.show.items():
            if values.get(key) not in allowed:
                return False
        for key, blocked in self.hide.items():
            if values.get(key) in blocked:
                return False
        return True

    def depends_on(self) -> set[str]:
        return set(self.show) | set(self.hide)


class CredentialField(BaseModel):
    """A single field of a credential type."""

    name: str = Field(description="Unique key inside the credential instance")
    display_name: str = Field(description="Label shown by the form renderer")
    type: FieldType = FieldType.STRING
    default: Any = None
    placeholder: str = ""
    description: str = ""
    required: bool = Field(
        default=False,
        description="A visible field must hold a value",
    )
    secret: bool = Field(
        default=False,
        description="Value must never be echoed back in plaintext",
    )
    no_data_expression: bool = False
    options: list[FieldOption] = Field(default_factory=list)
    type_options: TypeOptions = Field(default_factory=TypeOptions)
    display_options: DisplayOptions | None = None

    model_config = {"frozen": True}

    @property
    def option_values(self) -> list[str]:
        return [option.value for option in self.options]

    def is_visible(self, values: Mapping[str, Any]) -> bool:
        """Return True if the field is shown for the given resolved values."""
        if self.display_options is None:
            return True
        return self.display_options.matches(values)

    def to_form_property(self) -> dict[str, Any]:
        """Render the field in the host form's property vocabulary."""
        prop: dict[str, Any] = {
            "displayName": self.display_name,
            "name": self.name,
            "type": self.type.value,
            "default": self.default,
        }
        if self.placeholder:
            prop["placeholder"] = self.placeholder
        if self.description:
            prop["description"] = self.description
        if self.required:
            prop["required"] = True
        if self.no_data_expression:
            prop["noDataExpression"] = True

        type_options: dict[str, Any] = {}
        if self.secret or self.type_options.password:
            type_options["password"] = True
        if self.type_options.rows is not None:
            type_options["rows"] = self.type_options.rows
        if self.type_options.always_open_edit_window:
            type_options["alwaysOpenEditWindow"] = True
        if self.type_options.min_value is not None:
            type_options["minValue"] = self.type_options.min_value
        if type_options:
            prop["typeOptions"] = type_options

        if self.options:
            prop["options"] = [option.model_dump() for option in self.options]
        if self.display_options is not None:
            display: dict[str, Any] = {}
            if self.display_options.show:
                display["show"] = dict(self.display_options.show)
            if self.display_options.hide:
                display["hide"] = dict(self.display_options.hide)
            prop["displayOptions"] = display
        return prop

    def env_var(self, prefix: str = "NATS_") -> str:
        """Environment variable name carrying this field (``authType`` -> ``NATS_AUTH_TYPE``)."""
        chars = []
        for index, char in enumerate(self.name):
            if char.isupper() and index:
                chars.append("_")
            chars.append(char.upper())
        return prefix + "".join(chars)

    def check_value(self, value: Any) -> str | None:
        """Type-check a non-empty value.

        Returns:
            An error message, or ``None`` if the value is acceptable.
            Messages never include the value of a secret field.
        """
        if self.type == FieldType.BOOLEAN:
            if not isinstance(value, bool):
                return f"field {self.name} must be a boolean"
            return None

        if self.type == FieldType.NUMBER:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return f"field {self.name} must be a number"
            if isinstance(value, float) and not math.isfinite(value):
                return f"field {self.name} must be a finite number"
            minimum = self.type_options.min_value
            if minimum is not None and value < minimum:
                return f"field {self.name} must be >= {minimum:g}"
            return None

        if not isinstance(value, str):
            return f"field {self.name} must be a string"

        if self.type == FieldType.OPTIONS and value not in self.option_values:
            return f"field {self.name} must be one of: {', '.join(self.option_values)}"
        return None

    def parse_text(self, raw: str) -> Any:
        """Convert a textual value (environment variable, CLI) to the field type.

        Raises:
            ValueError: If the text cannot be converted.
        """
        text = raw.strip()
        if self.type == FieldType.BOOLEAN:
            lowered = text.lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
            raise ValueError(f"field {self.name} expects a boolean, got {raw!r}")

        if self.type == FieldType.NUMBER:
            try:
                return int(text)
            except ValueError:
                pass
            try:
                number = float(text)
            except ValueError:
                raise ValueError(f"field {self.name} expects a number") from None
            if not math.isfinite(number):
                raise ValueError(f"field {self.name} expects a finite number")
            return number

        # PEM and creds bodies keep their line breaks
        return raw
