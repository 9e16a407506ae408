"""
Registry Exporter CLI — Configuration-as-code export for an MCP registry.

Usage:
    registry-exporter export
    registry-exporter export --dir ~/mcp-config --registry-url http://localhost:8080
"""

import asyncio
import logging

import click

from registry_exporter.client.http import DEFAULT_REGISTRY_URL
from registry_exporter.core.target import DEFAULT_EXPORT_DIR

EXPORT_HELP = (
    "Export configuration files of all entities.\n\n"
    "Creates a configuration file for every entity (MCP servers, tool groups) "
    "registered in the registry. This is useful when you want to track all "
    "registered entities as code.\n\n"
    f"By default, the configurations are exported to a directory named {DEFAULT_EXPORT_DIR} "
    "in the current working directory. The target directory must be empty.\n\n"
    "NOTE: In enterprise mode, you must be an admin to export all configurations successfully."
)


@click.group()
@click.version_option(package_name="registry-exporter")
def cli():
    """Registry Exporter — export MCP registry configuration as code."""
    pass


@cli.command(help=EXPORT_HELP, short_help="Export configuration files of all entities.")
@click.option(
    "--dir",
    "-d",
    "target_dir",
    type=click.Path(file_okay=False),
    default=DEFAULT_EXPORT_DIR,
    show_default=True,
    help="Directory to export configuration files to.",
)
@click.option(
    "--registry-url",
    "-r",
    envvar="MCPJUNGLE_REGISTRY_URL",
    default=DEFAULT_REGISTRY_URL,
    show_default=True,
    help="Base URL of the registry server.",
)
@click.option(
    "--token",
    "-t",
    envvar="MCPJUNGLE_ACCESS_TOKEN",
    default=None,
    help="Access token for enterprise mode.",
)
@click.option("--timeout", type=float, default=30.0, show_default=True, help="Request timeout in seconds.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
def export(target_dir, registry_url, token, timeout, verbose):
    from registry_exporter.client.http import RegistryClient
    from registry_exporter.core.errors import ExportError, TargetResolutionError
    from registry_exporter.core.exporter import ConfigExporter
    from registry_exporter.core.target import resolve_target_dir

    # Configure logging
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        root_dir = resolve_target_dir(target_dir)
    except TargetResolutionError as e:
        raise click.ClickException(f"failed to resolve target directory for export: {e}") from e

    async def _run():
        async with RegistryClient(registry_url, token=token, timeout=timeout) as client:
            return await ConfigExporter(client).run(root_dir)

    try:
        asyncio.run(_run())
    except ExportError as e:
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    cli()
