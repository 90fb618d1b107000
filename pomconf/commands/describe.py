"""Describe command implementation for pomconf.

Reads a POM record document, builds its module descriptor and prints it:
module metadata, configurations, module artifacts, dependencies with their
configuration mappings and exclusions, and the extra infos.

Typical usage::

    # Human-readable tables
    $ pomconf describe app.records.json

    # Machine-readable JSON output
    $ pomconf describe app.records.json --format json > descriptor.json

    # Don't probe the repository for jars of pom packaged modules
    $ pomconf describe parent.records.json --no-probe
"""

from __future__ import annotations

import sys
import json
import click
from pathlib import Path
from typing import Any, Dict, List, Optional

from pomconf.config import PomConfConfig
from pomconf.exceptions import PomConfError
from pomconf.context import pass_context, PomConfContext
from pomconf.models import DependencyDescriptor, PomModuleDescriptor
from pomconf.core import RepositoryArtifactLocator, load_descriptor
from pomconf.utils import (
    HTTPClient,
    get_logger,
    get_raw_console,
    print_error,
    print_table,
)

logger = get_logger("commands.describe")


@click.command()
@click.argument(
    "file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@click.option(
    "--probe/--no-probe",
    default=None,
    help="Probe the repository for the jar of pom packaged modules "
    "(default: from configuration).",
)
@pass_context
def describe(
    ctx: PomConfContext,
    file: Path,
    format: str,
    probe: Optional[bool],
) -> None:
    """Build and display the module descriptor of a POM record document.

    Args:
        ctx: pomconf context with configuration and verbosity settings.
        file: Path to the JSON record document.
        format: Output format (``table`` or ``json``).
        probe: Override of the ``probe_pom_artifacts`` option.

    Exits:
        0 on success, 1 if the document cannot be read or is invalid.
    """
    config = ctx.config
    should_probe = config.probe_pom_artifacts if probe is None else probe

    try:
        descriptor = _build(file, config, should_probe)
    except PomConfError as e:
        print_error(f"{e}")
        sys.exit(1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        logger.exception("Error in describe command")
        sys.exit(1)

    if format == "json":
        print(json.dumps(descriptor.to_json(), indent=2))
    else:
        _display_tables(descriptor)


def _build(file: Path, config: PomConfConfig, probe: bool) -> PomModuleDescriptor:
    if not probe:
        return load_descriptor(file)

    logger.debug("Probing %s for implicit jars", config.repository_url)
    with HTTPClient(timeout=config.timeout) as http:
        locator = RepositoryArtifactLocator(config.repository_url, http_client=http)
        return load_descriptor(file, locator=locator)


# ---------------------------------------------------------------------------
# Table rendering
# ---------------------------------------------------------------------------


def _display_tables(md: PomModuleDescriptor) -> None:
    console = get_raw_console()
    mrid = md.module_revision_id

    console.print(f"\n[bold]{mrid}[/bold] [dim]({md.status})[/dim]")
    if md.description:
        console.print(md.description)
    if md.home_page:
        console.print(f"[dim]{md.home_page}[/dim]")
    for license in md.licenses:
        console.print(f"[dim]License: {license.name}[/dim]")
    console.print()

    print_table(
        [
            {"Name": conf.name, "Extends": ", ".join(conf.extends)}
            for conf in md.configurations
        ],
        title="Configurations",
    )

    print_table(
        [
            {
                "Name": artifact.name,
                "Type": artifact.type,
                "Ext": artifact.ext,
                "Classifier": artifact.classifier,
                "Configurations": ", ".join(artifact.configurations),
            }
            for artifact in md.all_artifacts
        ],
        title="Artifacts",
    )

    print_table(
        [_dependency_row(dd) for dd in md.dependencies],
        title="Dependencies",
        column_styles={"Module": {"style": "cyan", "no_wrap": True}},
        show_row_lines=True,
    )

    print_table(
        [{"Name": name, "Content": content} for name, content in md.extra_infos.to_dict().items()],
        title="Extra infos",
    )


def _dependency_row(dd: DependencyDescriptor) -> Dict[str, Any]:
    mappings: List[str] = []
    for conf in dd.module_configurations:
        mappings.append(f"{conf}->{','.join(dd.get_dependency_configurations(conf))}")

    artifacts = [
        artifact.ext + (f" ({artifact.classifier})" if artifact.classifier else "")
        for artifact in dd.all_dependency_artifacts
    ]
    excludes = [str(rule.module_id) for rule in dd.all_exclude_rules]

    return {
        "Module": str(dd.dependency_id),
        "Revision": dd.dependency_revision_id.version or "?",
        "Mapping": "\n".join(mappings),
        "Artifacts": ", ".join(artifacts),
        "Excludes": ", ".join(excludes),
        "Transitive": "yes" if dd.transitive else "no",
    }
