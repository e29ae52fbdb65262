"""Entry point for ``python -m nats_credentials``."""

import sys

from nats_credentials.cli import main

sys.exit(main())
