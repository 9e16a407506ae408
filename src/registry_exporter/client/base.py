"""
Remote Config Client Protocol — Read interface the exporter depends on.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from registry_exporter.models.entity import ExportableEntity


@runtime_checkable
class RemoteConfigClient(Protocol):
    """
    Protocol that registry clients must implement.

    Each listing returns the full configuration of every entity of one kind.
    Every config carries at least a ``name``; other keys are passed through
    to the exported files untouched. Failures are raised as exceptions.
    """

    async def list_tool_group_configs(self) -> list[ExportableEntity]:
        """Return the configuration of every tool group."""
        ...

    async def list_server_configs(self) -> list[ExportableEntity]:
        """Return the configuration of every MCP server."""
        ...
