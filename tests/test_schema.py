"""
Tests for the credential schema descriptor.

Covers field models, visibility predicates, the NATS field table, client
defaults and the form export.
"""

import pytest

from nats_credentials.schema import (
    NATS_API_CREDENTIAL,
    AuthType,
    CredentialField,
    CredentialTypeDefinition,
    DisplayOptions,
    FieldType,
    TypeOptions,
    defaults,
)


# =====================================================================
# Field model
# =====================================================================


class TestDisplayOptions:
    """Tests for visibility predicates."""

    def test_show_requires_every_entry(self):
        predicate = DisplayOptions(show={"authType": ["tls"], "tlsEnabled": [True]})

        assert predicate.matches({"authType": "tls", "tlsEnabled": True}) is True
        assert predicate.matches({"authType": "tls", "tlsEnabled": False}) is False
        assert predicate.matches({"authType": "user", "tlsEnabled": True}) is False

    def test_hide_on_any_match(self):
        predicate = DisplayOptions(hide={"authType": ["none"]})

        assert predicate.matches({"authType": "none"}) is False
        assert predicate.matches({"authType": "token"}) is True

    def test_enum_values_compare_as_strings(self):
        predicate = DisplayOptions(show={"authType": ["token"]})
        assert predicate.matches({"authType": AuthType.TOKEN}) is True


class TestCredentialField:
    """Tests for CredentialField."""

    def test_always_visible_without_display_options(self):
        prop = CredentialField(name="servers", display_name="Servers")
        assert prop.is_visible({}) is True

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("authType", "NATS_AUTH_TYPE"),
            ("jsApiPrefix", "NATS_JS_API_PREFIX"),
            ("servers", "NATS_SERVERS"),
            ("pass", "NATS_PASS"),
        ],
    )
    def test_env_var(self, name, expected):
        prop = CredentialField(name=name, display_name=name)
        assert prop.env_var() == expected

    def test_check_number_rejects_bool_and_text(self):
        prop = CredentialField(name="timeout", display_name="Timeout", type=FieldType.NUMBER)

        assert prop.check_value(5) is None
        assert prop.check_value(2.5) is None
        assert prop.check_value(True) == "field timeout must be a number"
        assert prop.check_value("5") == "field timeout must be a number"

    def test_check_number_rejects_non_finite(self):
        prop = CredentialField(name="timeout", display_name="Timeout", type=FieldType.NUMBER)

        assert prop.check_value(float("nan")) == "field timeout must be a finite number"
        assert prop.check_value(float("inf")) == "field timeout must be a finite number"
        assert prop.check_value(float("-inf")) == "field timeout must be a finite number"

    def test_check_number_minimum(self):
        prop = CredentialField(
            name="maxReconnectAttempts",
            display_name="Max",
            type=FieldType.NUMBER,
            type_options=TypeOptions(min_value=-1),
        )

        assert prop.check_value(-1) is None
        assert prop.check_value(-2) == "field maxReconnectAttempts must be >= -1"

    def test_check_options(self):
        prop = NATS_API_CREDENTIAL.get_field("authType")

        assert prop.check_value("jwt") is None
        assert "must be one of" in prop.check_value("kerberos")

    def test_check_secret_message_hides_value(self):
        prop = NATS_API_CREDENTIAL.get_field("token")
        message = prop.check_value(12345)

        assert message == "field token must be a string"
        assert "12345" not in message

    def test_parse_text(self):
        assert NATS_API_CREDENTIAL.get_field("tlsEnabled").parse_text("Yes") is True
        assert NATS_API_CREDENTIAL.get_field("reconnect").parse_text("off") is False
        assert NATS_API_CREDENTIAL.get_field("pingInterval").parse_text("60000") == 60000
        assert NATS_API_CREDENTIAL.get_field("jsTimeout").parse_text("1.5") == 1.5
        assert NATS_API_CREDENTIAL.get_field("tlsCa").parse_text("a\nb\n") == "a\nb\n"

    def test_parse_text_invalid(self):
        with pytest.raises(ValueError):
            NATS_API_CREDENTIAL.get_field("debug").parse_text("maybe")
        with pytest.raises(ValueError):
            NATS_API_CREDENTIAL.get_field("timeout").parse_text("soon")

    @pytest.mark.parametrize("text", ["nan", "inf", "-Infinity"])
    def test_parse_text_non_finite(self, text):
        with pytest.raises(ValueError, match="expects a finite number"):
            NATS_API_CREDENTIAL.get_field("timeout").parse_text(text)


class TestCredentialTypeDefinition:
    """Tests for definition-level checks."""

    def test_duplicate_field_rejected(self):
        with pytest.raises(ValueError, match="Duplicate field"):
            CredentialTypeDefinition(
                name="dup",
                display_name="Dup",
                properties=[
                    CredentialField(name="a", display_name="A"),
                    CredentialField(name="a", display_name="A again"),
                ],
            )

    def test_predicate_on_unknown_field_rejected(self):
        with pytest.raises(ValueError, match="unknown field"):
            CredentialTypeDefinition(
                name="bad",
                display_name="Bad",
                properties=[
                    CredentialField(
                        name="a",
                        display_name="A",
                        display_options=DisplayOptions(show={"missing": [True]}),
                    ),
                ],
            )

    def test_get_field_unknown(self):
        with pytest.raises(KeyError):
            NATS_API_CREDENTIAL.get_field("password")


# =====================================================================
# NATS field table
# =====================================================================


class TestNatsApiCredential:
    """Tests for the concrete NATS declaration."""

    def test_identity(self):
        assert NATS_API_CREDENTIAL.name == "natsApi"
        assert NATS_API_CREDENTIAL.display_name == "NATS API"

    def test_field_order(self):
        names = NATS_API_CREDENTIAL.field_names
        assert names[:5] == ["name", "servers", "tlsEnabled", "tlsCa", "authType"]
        assert names[-1] == "debug"
        assert len(names) == len(set(names)) == 31

    def test_auth_types(self):
        assert NATS_API_CREDENTIAL.auth_types() == [
            AuthType.NONE,
            AuthType.USER,
            AuthType.TOKEN,
            AuthType.TLS,
            AuthType.NKEY,
            AuthType.JWT,
            AuthType.CREDS,
        ]

    def test_secret_fields(self):
        assert set(NATS_API_CREDENTIAL.secret_field_names) == {
            "tlsKey",
            "pass",
            "token",
            "seed",
            "jwtSeed",
            "jwt",
            "creds",
        }

    @pytest.mark.parametrize(
        "auth_type,expected",
        [
            (AuthType.NONE, ()),
            (AuthType.USER, ("user", "pass")),
            (AuthType.TOKEN, ("token",)),
            (AuthType.TLS, ("tlsCert", "tlsKey")),
            (AuthType.NKEY, ("seed",)),
            (AuthType.JWT, ("jwtSeed", "jwt")),
            (AuthType.CREDS, ("creds",)),
        ],
    )
    def test_required_fields_for(self, auth_type, expected):
        assert NATS_API_CREDENTIAL.required_fields_for(auth_type) == expected

    def test_required_fields_for_unknown(self):
        with pytest.raises(ValueError, match="unknown authentication type"):
            NATS_API_CREDENTIAL.required_fields_for("kerberos")

    def test_tls_variant_needs_tls_enabled(self):
        """Certificate fields stay hidden until TLS is switched on."""
        names = NATS_API_CREDENTIAL.required_fields_for(AuthType.TLS)

        without_tls = [p.name for p in NATS_API_CREDENTIAL.required_fields({"authType": "tls"})]
        with_tls = [
            p.name
            for p in NATS_API_CREDENTIAL.required_fields({"authType": "tls", "tlsEnabled": True})
        ]
        assert not set(names) & set(without_tls)
        assert set(names) <= set(with_tls)

    def test_hidden_fields(self):
        hidden = [p.name for p in NATS_API_CREDENTIAL.hidden_fields({"authType": "token"})]
        visible = [p.name for p in NATS_API_CREDENTIAL.visible_fields({"authType": "token"})]

        assert {"user", "pass", "seed", "tlsCa", "tlsCert"} <= set(hidden)
        assert "token" not in hidden
        assert len(hidden) + len(visible) == len(NATS_API_CREDENTIAL.properties)

    def test_client_defaults(self):
        """Unset numeric and flag fields fall back to the client defaults."""
        resolved = NATS_API_CREDENTIAL.apply_defaults({})

        assert resolved["servers"] == "127.0.0.1:4222"
        assert resolved["maxPingOut"] == 2
        assert resolved["pingInterval"] == 120000
        assert resolved["reconnect"] is True
        assert resolved["maxReconnectAttempts"] == 10
        assert resolved["reconnectJitter"] == 100
        assert resolved["reconnectTimeWait"] == 2000
        assert resolved["timeout"] == 20000
        assert resolved["jsApiPrefix"] == "$JS.API"
        assert resolved["jsTimeout"] == 5000
        assert resolved["inboxPrefix"] == "_INBOX"
        assert resolved["tlsEnabled"] is False
        assert resolved["authType"] is None
        assert resolved["jsDomain"] is None

    def test_apply_defaults_treats_blank_as_unset(self):
        resolved = NATS_API_CREDENTIAL.apply_defaults({"servers": "  ", "extra": 1})

        assert resolved["servers"] == defaults.DEFAULT_SERVERS
        assert "extra" not in resolved

    def test_visible_fields_for_token(self):
        visible = [p.name for p in NATS_API_CREDENTIAL.visible_fields({"authType": "token"})]

        assert "token" in visible
        assert "user" not in visible
        assert "tlsCa" not in visible
        assert "tlsCert" not in visible

    def test_tls_fields_follow_tls_enabled(self):
        shown = NATS_API_CREDENTIAL.visible_fields({"authType": "tls", "tlsEnabled": True})
        hidden = NATS_API_CREDENTIAL.visible_fields({"authType": "tls", "tlsEnabled": False})

        assert {"tlsCa", "tlsCert", "tlsKey"} <= {p.name for p in shown}
        assert not {"tlsCa", "tlsCert", "tlsKey"} & {p.name for p in hidden}

    def test_required_fields(self):
        required = NATS_API_CREDENTIAL.required_fields({"authType": "user"})
        assert [p.name for p in required] == ["authType", "user", "pass"]


class TestFormSchema:
    """Tests for the host-facing form export."""

    def test_top_level(self):
        schema = NATS_API_CREDENTIAL.to_form_schema()

        assert schema["name"] == "natsApi"
        assert schema["displayName"] == "NATS API"
        assert len(schema["properties"]) == len(NATS_API_CREDENTIAL.properties)

    def test_auth_type_property(self):
        props = {p["name"]: p for p in NATS_API_CREDENTIAL.to_form_schema()["properties"]}
        auth = props["authType"]

        assert auth["type"] == "options"
        assert auth["required"] is True
        assert auth["noDataExpression"] is True
        assert [o["value"] for o in auth["options"]][:3] == ["none", "user", "token"]

    def test_secret_and_display_options(self):
        props = {p["name"]: p for p in NATS_API_CREDENTIAL.to_form_schema()["properties"]}

        assert props["pass"]["typeOptions"] == {"password": True}
        assert props["pass"]["displayOptions"] == {"show": {"authType": ["user"]}}
        assert props["tlsCa"]["typeOptions"] == {"rows": 4, "alwaysOpenEditWindow": True}
        assert props["tlsCa"]["displayOptions"] == {"show": {"tlsEnabled": [True]}}
        assert props["maxReconnectAttempts"]["typeOptions"] == {"minValue": -1}
        assert "displayOptions" not in props["servers"]
