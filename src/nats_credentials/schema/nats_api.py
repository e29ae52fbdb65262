"""
NATS API credential declaration.

Contains the ordered field table the host renders into the NATS connection
form: servers, TLS, authentication variants, JetStream, ping and
reconnection tuning.
"""

from nats_credentials.schema import defaults
from nats_credentials.schema.auth import AUTH_DOCS_URL, AUTH_TYPE_OPTIONS, AuthType
from nats_credentials.schema.definition import CredentialTypeDefinition
from nats_credentials.schema.fields import (
    CredentialField,
    DisplayOptions,
    FieldType,
    TypeOptions,
)

_PEM = TypeOptions(rows=4, always_open_edit_window=True)
_SECRET = TypeOptions(password=True)
_SECRET_PEM = TypeOptions(rows=4, always_open_edit_window=True, password=True)


def _show_for(auth_type: AuthType, **extra: list) -> DisplayOptions:
    return DisplayOptions(show={"authType": [auth_type.value], **extra})


NATS_API_CREDENTIAL = CredentialTypeDefinition(
    name="natsApi",
    display_name="NATS API",
    documentation_url=AUTH_DOCS_URL,
    properties=[
        CredentialField(
            name="name",
            display_name="Client Name",
            placeholder="Client Name",
            description=(
                "Sets the client name. When set, the server monitoring pages will "
                "display this name when referring to this client."
            ),
        ),
        # Server connection
        CredentialField(
            name="servers",
            display_name="Servers",
            default=defaults.DEFAULT_SERVERS,
            placeholder="nats://nats1:4222,nats://nats2:4222,nats://nats3:4222",
            description="Set the hostport(s) where the client should attempt to connect.",
        ),
        CredentialField(
            name="tlsEnabled",
            display_name="Enable TLS",
            type=FieldType.BOOLEAN,
            default=False,
            placeholder="Enable TLS",
            description="When set to true, TLS will be enabled for the connection.",
        ),
        CredentialField(
            name="tlsCa",
            display_name="CA Cert",
            placeholder="PEM ca",
            description="TLS Certificate Authority",
            type_options=_PEM,
            display_options=DisplayOptions(show={"tlsEnabled": [True]}),
        ),
        # Server authentication
        CredentialField(
            name="authType",
            display_name="Authentication Type",
            type=FieldType.OPTIONS,
            required=True,
            no_data_expression=True,
            description=AUTH_DOCS_URL,
            options=AUTH_TYPE_OPTIONS,
        ),
        CredentialField(
            name="tlsCert",
            display_name="TLS Certificate",
            required=True,
            placeholder="PEM Cert",
            description="TLS Certificate",
            type_options=_PEM,
            display_options=_show_for(AuthType.TLS, tlsEnabled=[True]),
        ),
        CredentialField(
            name="tlsKey",
            display_name="TLS Key",
            required=True,
            secret=True,
            placeholder="PEM key",
            description="TLS Key",
            type_options=_SECRET_PEM,
            display_options=_show_for(AuthType.TLS, tlsEnabled=[True]),
        ),
        CredentialField(
            name="user",
            display_name="Username",
            required=True,
            placeholder="user",
            description="Sets the username for a client connection.",
            display_options=_show_for(AuthType.USER),
        ),
        CredentialField(
            name="pass",
            display_name="Password",
            required=True,
            secret=True,
            placeholder="pass",
            description="Sets the password for a client connection.",
            type_options=_SECRET,
            display_options=_show_for(AuthType.USER),
        ),
        CredentialField(
            name="token",
            display_name="Token",
            required=True,
            secret=True,
            placeholder="token",
            description=(
                "Set to a client authentication token. Note that these tokens are "
                "a specific authentication strategy on the nats-server."
            ),
            type_options=_SECRET,
            display_options=_show_for(AuthType.TOKEN),
        ),
        CredentialField(
            name="seed",
            display_name="NKey",
            required=True,
            secret=True,
            placeholder="NKEY",
            description="NKey seed",
            type_options=_SECRET,
            display_options=_show_for(AuthType.NKEY),
        ),
        CredentialField(
            name="jwtSeed",
            display_name="NKey",
            required=True,
            secret=True,
            placeholder="NKEY",
            description="NKey seed",
            type_options=_SECRET,
            display_options=_show_for(AuthType.JWT),
        ),
        CredentialField(
            name="jwt",
            display_name="JWT",
            required=True,
            secret=True,
            placeholder="JWT",
            description="JWT token",
            type_options=_SECRET,
            display_options=_show_for(AuthType.JWT),
        ),
        CredentialField(
            name="creds",
            display_name="Creds",
            required=True,
            secret=True,
            placeholder="Creds content",
            description="Content of the creds file",
            type_options=TypeOptions(always_open_edit_window=True, password=True),
            display_options=_show_for(AuthType.CREDS),
        ),
        CredentialField(
            name="ignoreAuthErrorAbort",
            display_name="Ignore auth error abort",
            type=FieldType.BOOLEAN,
            default=defaults.DEFAULT_IGNORE_AUTH_ERROR_ABORT,
            placeholder="ignoreAuthErrorAbort",
            description=(
                "By default, NATS clients will abort reconnect if they fail "
                "authentication twice in a row with the same error, regardless of "
                "the reconnect policy. This option should be used with care as it "
                "will disable this behaviour when true."
            ),
        ),
        # JetStream
        CredentialField(
            name="jsApiPrefix",
            display_name="[JetStream] API Prefix",
            default=defaults.DEFAULT_JS_API_PREFIX,
            placeholder="apiPrefix",
            description="Prefix required to interact with JetStream. Must match server configuration.",
        ),
        CredentialField(
            name="jsTimeout",
            display_name="[JetStream] Timeout",
            type=FieldType.NUMBER,
            default=defaults.DEFAULT_JS_TIMEOUT,
            placeholder="timeout",
            description="Number of milliseconds to wait for a JetStream API request.",
            type_options=TypeOptions(min_value=0),
        ),
        CredentialField(
            name="jsDomain",
            display_name="[JetStream] Domain",
            placeholder="domain",
            description=(
                "Name of the JetStream domain. This value automatically modifies "
                "the default JetStream apiPrefix."
            ),
        ),
        # Ping
        CredentialField(
            name="maxPingOut",
            display_name="Max ping out",
            type=FieldType.NUMBER,
            default=defaults.DEFAULT_MAX_PING_OUT,
            placeholder="maxPingOut",
            description=(
                "Sets the maximum count of ping commands that can be awaiting a "
                "response before raising a stale connection status notification "
                "and initiating a reconnect."
            ),
            type_options=TypeOptions(min_value=0),
        ),
        CredentialField(
            name="pingInterval",
            display_name="Ping interval",
            type=FieldType.NUMBER,
            default=defaults.DEFAULT_PING_INTERVAL,
            placeholder="pingInterval",
            description="Sets the number of milliseconds between client initiated ping commands.",
            type_options=TypeOptions(min_value=0),
        ),
        # Reconnection
        CredentialField(
            name="reconnect",
            display_name="Reconnect",
            type=FieldType.BOOLEAN,
            default=defaults.DEFAULT_RECONNECT,
            placeholder="reconnect",
            description=(
                "When set to true, the client will attempt to reconnect when the "
                "connection is lost."
            ),
        ),
        CredentialField(
            name="maxReconnectAttempts",
            display_name="Max reconnect attempts",
            type=FieldType.NUMBER,
            default=defaults.DEFAULT_MAX_RECONNECT_ATTEMPTS,
            placeholder="maxReconnectAttempts",
            description=(
                "Sets the maximum count of per-server reconnect attempts before "
                "giving up. Set to `-1` to never give up."
            ),
            type_options=TypeOptions(min_value=defaults.UNLIMITED_RECONNECT_ATTEMPTS),
        ),
        CredentialField(
            name="reconnectJitter",
            display_name="Reconnect jitter",
            type=FieldType.NUMBER,
            default=defaults.DEFAULT_RECONNECT_JITTER,
            placeholder="reconnectJitter",
            description=(
                "Set the upper bound for a random delay in milliseconds added to "
                "reconnectTimeWait."
            ),
            type_options=TypeOptions(min_value=0),
        ),
        CredentialField(
            name="reconnectTimeWait",
            display_name="Reconnect time wait",
            type=FieldType.NUMBER,
            default=defaults.DEFAULT_RECONNECT_TIME_WAIT,
            placeholder="reconnectTimeWait",
            description="Set the number of milliseconds between reconnect attempts.",
            type_options=TypeOptions(min_value=0),
        ),
        CredentialField(
            name="timeout",
            display_name="Timeout",
            type=FieldType.NUMBER,
            default=defaults.DEFAULT_TIMEOUT,
            placeholder="timeout",
            description=(
                "Sets the number of milliseconds the client should wait for a "
                "server handshake to be established."
            ),
            type_options=TypeOptions(min_value=0),
        ),
        # Misc
        CredentialField(
            name="noEcho",
            display_name="No echo",
            type=FieldType.BOOLEAN,
            default=defaults.DEFAULT_NO_ECHO,
            placeholder="noEcho",
            description=(
                "When set to true, messages published by this client will not be "
                "delivered to its own subscriptions."
            ),
        ),
        CredentialField(
            name="noRandomize",
            display_name="No randomize",
            type=FieldType.BOOLEAN,
            default=defaults.DEFAULT_NO_RANDOMIZE,
            placeholder="noRandomize",
            description="If set to true, the client will not randomize its server connection list.",
        ),
        CredentialField(
            name="waitOnFirstConnect",
            display_name="Wait on first connect",
            type=FieldType.BOOLEAN,
            default=defaults.DEFAULT_WAIT_ON_FIRST_CONNECT,
            placeholder="waitOnFirstConnect",
            description=(
                "When set to true, maxReconnectAttempts will not trigger until the "
                "client has established one connection."
            ),
        ),
        CredentialField(
            name="ignoreClusterUpdates",
            display_name="Ignore cluster updates",
            type=FieldType.BOOLEAN,
            default=defaults.DEFAULT_IGNORE_CLUSTER_UPDATES,
            placeholder="ignoreClusterUpdates",
            description=(
                "When set to true, cluster information gossiped by the nats-server "
                "will not augment the lists of server(s) known by the client."
            ),
        ),
        CredentialField(
            name="inboxPrefix",
            display_name="Inbox prefix",
            default=defaults.DEFAULT_INBOX_PREFIX,
            placeholder="_INBOX",
            description=(
                "A string prefix (must be a valid subject prefix) prepended to "
                "inboxes generated by client. This allows a client with limited "
                "subject permissions to specify a subject where requests can "
                "deliver responses."
            ),
        ),
        CredentialField(
            name="debug",
            display_name="Debug",
            type=FieldType.BOOLEAN,
            default=defaults.DEFAULT_DEBUG,
            placeholder="debug",
            description=(
                "When set to `true` the client will print protocol messages that "
                "it receives or sends to the server."
            ),
        ),
    ],
)
