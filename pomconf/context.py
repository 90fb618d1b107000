"""
Shared context object for pomconf CLI commands.

This module defines the global Click context used to share configuration
and runtime options across CLI subcommands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from pomconf.config import PomConfConfig


class PomConfContext:
    """Global context object for pomconf CLI commands.

    Attributes:
        config_path: Path to the pomconf configuration file, if any.
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
        config: Loaded configuration, defaults until the group callback runs.
    """

    __slots__ = ("config_path", "verbose", "color", "config")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.color: bool = True
        self.config: PomConfConfig = PomConfConfig()


#: Click decorator for injecting :class:`PomConfContext` into commands.
pass_context = click.make_pass_decorator(PomConfContext, ensure=True)
