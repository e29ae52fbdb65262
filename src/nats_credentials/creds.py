"""
Decorated creds file text.

A creds file bundles a user JWT and the NKey seed that signs the server
nonce, each wrapped in dashed BEGIN/END lines.
"""

from __future__ import annotations

import re

from nats_credentials.errors import CredsFormatError

# Dashed header line, the payload, dashed footer line
_BLOCK_RE = re.compile(r"-{3,}[^\n]*?-{3,}[ \t]*\r?\n\s*(\S+)\s*?\r?\n[ \t]*-{3,}[^\n]*?-{3,}")

_CREDS_TEMPLATE = """-----BEGIN NATS USER JWT-----
{jwt}
------END NATS USER JWT------

************************* IMPORTANT *************************
NKEY Seed printed below can be used to sign and prove identity.
NKEYs are sensitive and should be treated as secrets.

-----BEGIN USER NKEY SEED-----
{seed}
------END USER NKEY SEED------

*************************************************************
"""


def looks_like_seed(value: str) -> bool:
    """NKey seeds are base32 strings starting with ``S``."""
    value = value.strip()
    return len(value) > 2 and value.startswith("S") and value.isalnum()


def looks_like_jwt(value: str) -> bool:
    parts = value.strip().split(".")
    return len(parts) == 3 and all(parts)


def format_creds(jwt: str, seed: str) -> str:
    """Build creds file text from a user JWT and its NKey seed."""
    return _CREDS_TEMPLATE.format(jwt=jwt.strip(), seed=seed.strip())


def parse_creds(text: str) -> tuple[str, str]:
    """Extract ``(jwt, seed)`` from creds file text.

    Raises:
        CredsFormatError: If either block is missing or malformed.  The
            message never contains the secret material.
    """
    blocks = _BLOCK_RE.findall(text)
    if len(blocks) < 2:
        raise CredsFormatError("creds content must contain a JWT block and an NKey seed block")

    jwt, seed = blocks[0], blocks[1]
    if not looks_like_jwt(jwt):
        raise CredsFormatError("creds content has a malformed JWT block")
    if not looks_like_seed(seed):
        raise CredsFormatError("creds content has a malformed NKey seed block")
    return jwt, seed
