"""Extras command implementation for pomconf.

Decodes the dependency management, properties and plugins stored in a
flat extra-info document, i.e. the ``{name: content}`` map a descriptor
carries once it has been written out and read back without its
structured records.

Typical usage::

    $ pomconf extras app.extra-infos.json
    $ pomconf extras app.extra-infos.json --format json
"""

from __future__ import annotations

import sys
import json
import click
from pathlib import Path

from pomconf.exceptions import PomConfError
from pomconf.models import ModuleDescriptor
from pomconf.context import pass_context, PomConfContext
from pomconf.core import (
    extract_pom_properties,
    get_dependency_managements,
    get_plugins,
    load_extra_infos,
)
from pomconf.utils import get_logger, print_error, print_table, print_warning

logger = get_logger("commands.extras")


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
@pass_context
def extras(ctx: PomConfContext, file: Path, format: str) -> None:
    """Decode dependency management, properties and plugins from extra infos."""
    try:
        entries = load_extra_infos(file)
    except PomConfError as e:
        print_error(f"{e}")
        sys.exit(1)

    md = ModuleDescriptor()
    for entry in entries:
        md.extra_infos.add_if_absent(entry.name, entry.content)

    managements = get_dependency_managements(md)
    properties = extract_pom_properties(md.extra_infos)
    plugins = get_plugins(md)
    logger.debug(
        "Decoded %d management records, %d properties, %d plugins from %s",
        len(managements),
        len(properties),
        len(plugins),
        file,
    )

    if format == "json":
        data = {
            "dependency_management": [record.to_json() for record in managements],
            "properties": properties,
            "plugins": [plugin.to_json() for plugin in plugins],
        }
        print(json.dumps(data, indent=2))
        return

    if not (managements or properties or plugins):
        print_warning("No dependency management, properties or plugins found")
        return

    print_table(
        [
            {
                "Module": f"{record.group_id}:{record.artifact_id}",
                "Classifier": record.classifier,
                "Version": record.version,
                "Scope": record.scope,
                "Exclusions": ", ".join(str(excluded) for excluded in record.excluded_modules),
            }
            for record in managements
        ],
        title="Dependency management",
    )
    print_table(
        [{"Name": name, "Value": value} for name, value in properties.items()],
        title="Properties",
    )
    print_table(
        [
            {
                "Plugin": f"{plugin.group_id}:{plugin.artifact_id}",
                "Version": plugin.version,
            }
            for plugin in plugins
        ],
        title="Plugins",
    )
