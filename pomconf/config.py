"""Configuration file loader for pomconf.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``pomconf.toml``: settings under ``[pomconf]`` table
- ``pyproject.toml``: settings under ``[tool.pomconf]`` table

Discovery order:

1. Explicit path from ``--config`` or ``POMCONF_CONFIG``
2. ``pomconf.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.pomconf]`` section

Configuration precedence: defaults < config file < CLI args.

Typical usage::

    config = load_config()  # Auto-discover
    config = load_config(Path("custom.toml"))  # Explicit path

Example (``pomconf.toml``)::

    [pomconf]
    repository_url = "https://repo.example.org/maven2"
    probe_pom_artifacts = true
    timeout = 10
"""

from __future__ import annotations


import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

from pomconf.exceptions import ConfigError
from pomconf.utils.logger import get_logger
from pomconf.constants import (
    DEFAULT_PROBE_POM_ARTIFACTS,
    DEFAULT_REPOSITORY_URL,
    DEFAULT_TIMEOUT,
)

logger = get_logger("config")


@dataclass
class PomConfConfig:
    """Parsed and validated pomconf configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        repository_url: Maven-layout repository probed for the implicit jar
            of ``pom`` packaged modules.
        probe_pom_artifacts: Whether to probe the repository at all. When
            ``False``, ``pom`` packaged modules never get a main artifact.
        timeout: Network timeout in seconds for repository probes.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    repository_url: str = DEFAULT_REPOSITORY_URL
    probe_pom_artifacts: bool = DEFAULT_PROBE_POM_ARTIFACTS
    timeout: int = DEFAULT_TIMEOUT

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary for debug logging."""
        return {
            "repository_url": self.repository_url,
            "probe_pom_artifacts": self.probe_pom_artifacts,
            "timeout": self.timeout,
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Search order:

    1. ``explicit_path`` (from ``--config`` or ``POMCONF_CONFIG``)
    2. ``pomconf.toml`` in current directory
    3. ``pyproject.toml`` with ``[tool.pomconf]`` section in current directory

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    pomconf_toml = cwd / "pomconf.toml"
    if pomconf_toml.is_file():
        logger.debug("Found pomconf.toml: %s", pomconf_toml)
        return pomconf_toml

    pyproject_toml = cwd / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_pomconf_section(pyproject_toml):
        logger.debug("Found [tool.pomconf] in pyproject.toml: %s", pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_pomconf_section(path: Path) -> bool:
    """Check if pyproject.toml contains a [tool.pomconf] section.

    Parse errors count as "no section".
    """
    try:
        raw = _read_toml(path)
    except ConfigError:
        return False
    return "pomconf" in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> PomConfConfig:
    """Load and validate pomconf configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`PomConfConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return PomConfConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get("pomconf", {})
    else:
        section = raw.get("pomconf", {})

    if not section:
        logger.debug("Config file found but no pomconf section, using defaults")
        return PomConfConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> PomConfConfig:
    """Parse and validate a ``[pomconf]`` or ``[tool.pomconf]`` table.

    Raises:
        ConfigError: Unknown keys or incorrect types (e.g., string for boolean).
    """
    config = PomConfConfig()

    known_top = {
        "repository_url",
        "probe_pom_artifacts",
        "timeout",
    }

    unknown_top = set(section.keys()) - known_top
    if unknown_top:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown_top))}",
            config_path=config_path,
        )

    if "repository_url" in section:
        val = section["repository_url"]
        if not isinstance(val, str) or not val.startswith(("http://", "https://")):
            raise ConfigError(
                f"repository_url must be an http(s) URL, got {val!r}",
                config_path=config_path,
                option="repository_url",
            )
        config.repository_url = val

    if "probe_pom_artifacts" in section:
        val = section["probe_pom_artifacts"]
        if not isinstance(val, bool):
            raise ConfigError(
                f"probe_pom_artifacts must be a boolean, got {type(val).__name__}",
                config_path=config_path,
                option="probe_pom_artifacts",
            )
        config.probe_pom_artifacts = val

    if "timeout" in section:
        val = section["timeout"]
        # bool is an int subclass
        if isinstance(val, bool) or not isinstance(val, int) or val <= 0:
            raise ConfigError(
                f"timeout must be a positive integer, got {val!r}",
                config_path=config_path,
                option="timeout",
            )
        config.timeout = val

    return config
