"""
Entity Model — categories of exportable registry entities.

Entities themselves are kept schema-less: a config is whatever mapping the
registry returns, and only its ``name`` key is ever read.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Opaque, key-ordered config as decoded from the registry's JSON.
ExportableEntity = dict[str, Any]


class EntityCategory(Enum):
    """Kinds of entity that get exported, in processing order."""

    TOOL_GROUP = ("groups", "Tool Group", "Tool Groups", "list_tool_group_configs")
    MCP_SERVER = ("servers", "MCP Server", "MCP Servers", "list_server_configs")

    def __init__(self, subdir: str, label: str, plural: str, list_operation: str):
        self.subdir = subdir
        self.label = label
        self.plural = plural
        self.list_operation = list_operation


@dataclass
class ExportSummary:
    """Outcome of a single export run."""

    root_dir: str
    written: dict[str, int] = field(default_factory=dict)  # subdir -> files written
    warnings: list[str] = field(default_factory=list)

    @property
    def total_written(self) -> int:
        return sum(self.written.values())
