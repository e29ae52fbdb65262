"""Defaults of the NATS client library.

Unset numeric and boolean fields fall back to these values, so a stored
credential behaves exactly like a client configured with no options.
Durations are milliseconds.
"""

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 4222
DEFAULT_SERVERS = f"{DEFAULT_HOST}:{DEFAULT_PORT}"

DEFAULT_MAX_PING_OUT = 2
DEFAULT_PING_INTERVAL = 2 * 60 * 1000
DEFAULT_RECONNECT = True
DEFAULT_MAX_RECONNECT_ATTEMPTS = 10
DEFAULT_RECONNECT_JITTER = 100
DEFAULT_RECONNECT_TIME_WAIT = 2 * 1000
DEFAULT_TIMEOUT = 20 * 1000

DEFAULT_NO_ECHO = False
DEFAULT_NO_RANDOMIZE = False
DEFAULT_WAIT_ON_FIRST_CONNECT = False
DEFAULT_IGNORE_CLUSTER_UPDATES = False
DEFAULT_IGNORE_AUTH_ERROR_ABORT = False
DEFAULT_DEBUG = False
DEFAULT_INBOX_PREFIX = "_INBOX"

# JetStream
DEFAULT_JS_API_PREFIX = "$JS.API"
DEFAULT_JS_TIMEOUT = 5 * 1000

# -1 disables the reconnect attempt limit
UNLIMITED_RECONNECT_ATTEMPTS = -1


def js_api_prefix_for_domain(domain: str) -> str:
    """API prefix used to reach JetStream in *domain*."""
    return f"$JS.{domain}.API"
