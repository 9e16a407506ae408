"""
Registry Exporter - Configuration-as-code export for an MCP registry.

Fetches the configuration of every tool group and MCP server registered in
the registry and writes each one as a standalone JSON file on local disk.
"""

__version__ = "0.1.0"


def __getattr__(name: str):
    """Lazy import for heavy dependencies."""
    if name == "ConfigExporter":
        from registry_exporter.core.exporter import ConfigExporter

        return ConfigExporter
    if name == "RegistryClient":
        from registry_exporter.client.http import RegistryClient

        return RegistryClient
    if name == "resolve_target_dir":
        from registry_exporter.core.target import resolve_target_dir

        return resolve_target_dir
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["ConfigExporter", "RegistryClient", "resolve_target_dir", "__version__"]
