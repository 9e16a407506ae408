"""
JSON Config Writer — writes one entity per JSON file.

Output structure:
    <root>/
    ├── groups/
    │   └── prod-group.json
    └── servers/
        ├── github.json
        └── time.json
"""

import json
import logging
import os
from pathlib import Path

import aiofiles

from registry_exporter.core.errors import FileWriteError, SerializationError
from registry_exporter.models.entity import ExportableEntity

logger = logging.getLogger(__name__)


def config_filename(entity_name) -> str:
    """Return ``<basename>.json`` for an entity name, or raise if it has none."""
    if not isinstance(entity_name, str):
        raise SerializationError(f"entity name must be a string, got {entity_name!r}")
    base = os.path.basename(entity_name.rstrip("/"))
    if not base:
        raise SerializationError(f"entity name {entity_name!r} has no usable file name")
    return f"{base}.json"


class JSONConfigWriter:
    """
    Writes ExportableEntity configs as indented JSON files.

    The entity is fully serialized before its file is opened, so a
    serialization failure never leaves a truncated file behind. A second
    entity with the same basename overwrites the first.
    """

    def __init__(self):
        self.count = 0

    async def write(self, entity_dir: Path, entity: ExportableEntity) -> Path:
        """Write a single entity into ``entity_dir`` and return the file path."""
        name = entity.get("name") if isinstance(entity, dict) else None
        filepath = Path(entity_dir) / config_filename(name)

        try:
            data = json.dumps(entity, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"failed to serialize entity {entity_dir}/{name}: {e}") from e

        try:
            async with aiofiles.open(filepath, "w", encoding="utf-8") as f:
                await f.write(data)
        except OSError as e:
            raise FileWriteError(f"failed to write entity file {filepath}: {e}") from e

        self.count += 1
        logger.debug(f"[JSON] Wrote {filepath}")
        return filepath

    async def finalize(self) -> None:
        """Log write summary."""
        logger.info(f"[JSON] Export complete: {self.count} config files written")
