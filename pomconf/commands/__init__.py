"""CLI subcommands for pomconf."""

from __future__ import annotations

from pomconf.commands.describe import describe
from pomconf.commands.extras import extras

__all__ = ["describe", "extras"]
