"""
Command-line interface for pomconf.

This module provides the main CLI entry point and handles global options,
configuration loading, and command registration.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from pomconf.config import load_config
from pomconf.__version__ import __version__
from pomconf.context import PomConfContext
from pomconf.exceptions import ConfigError, PomConfError
from pomconf.utils.logger import get_logger, level_for_verbosity, setup_logging
from pomconf.utils.console import print_error, print_warning, reconfigure_console

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar="POMCONF_CONFIG",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (can be repeated: -v, -vv).",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Enable or disable colored output.",
    envvar="POMCONF_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="pomconf",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """pomconf: POM dependency declarations as configuration-based descriptors.

    \b
    Available commands:
      pomconf describe FILE        Build and show a module descriptor
      pomconf extras FILE          Decode management data from extra infos

    \b
    Examples:
      pomconf describe app.records.json
      pomconf describe app.records.json --format json
      pomconf -v extras app.extra-infos.json

    Use ``pomconf COMMAND --help`` for command-specific options.
    """
    _configure_logging(verbose)

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    pomconf_ctx = PomConfContext()
    pomconf_ctx.config_path = config or loaded_config.source_path
    pomconf_ctx.color = color
    pomconf_ctx.verbose = verbose
    pomconf_ctx.config = loaded_config
    ctx.obj = pomconf_ctx

    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    logger.debug("pomconf v%s", __version__)
    logger.debug("Config path: %s", pomconf_ctx.config_path)
    if loaded_config.source_path:
        logger.debug("Loaded configuration: %s", loaded_config.to_log_dict())
    logger.debug("Verbosity: %s | Color: %s", verbose, color)


def _configure_logging(verbose: int) -> None:
    """Configure logging level based on verbosity flags."""
    level = level_for_verbosity(verbose)
    setup_logging(level=level, verbose=verbose >= 2)
    logger.debug("Logging initialized at %s level", logging.getLevelName(level))


# Register CLI subcommands
from pomconf.commands import describe, extras  # noqa: E402

cli.add_command(describe)
cli.add_command(extras)


def main() -> int:
    """Main entry point for the pomconf CLI.

    Returns:
        Exit code:
            0   Success
            1   Unhandled or application error
            2   Usage error (Click)
            130 Interrupted by user (Ctrl+C)
    """
    try:
        cli(standalone_mode=False)
        return 0

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except click.exceptions.Abort:
        print_warning("\nOperation cancelled by user")
        return 130

    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1

    except PomConfError as exc:
        print_error(str(exc))
        logger.debug(
            "PomConfError details: %s",
            exc.details or "<none>",
            exc_info=True,
        )
        return 1

    except KeyboardInterrupt:
        print_warning("\nOperation cancelled by user")
        return 130

    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1


if __name__ == "__main__":
    sys.exit(main())
