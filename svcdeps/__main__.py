"""Entry point for `python -m svcdeps`."""

from __future__ import annotations

import sys

from svcdeps.cli import cli

sys.exit(cli())
