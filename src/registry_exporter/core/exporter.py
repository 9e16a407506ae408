"""
Config Exporter — Writes every registry entity's configuration to disk.

Runs strictly in sequence, one category after another and one file after
another. There are two failure tiers:
- A failed listing for one category is reported as a warning. That
  category is skipped and the run carries on.
- Anything that goes wrong creating subdirectories or writing a file
  aborts the run. Files already written stay where they are.
"""

import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from registry_exporter.client.base import RemoteConfigClient
from registry_exporter.core.errors import SubdirectoryCreateError
from registry_exporter.exporters.json_export import JSONConfigWriter
from registry_exporter.models.entity import EntityCategory, ExportSummary

logger = logging.getLogger(__name__)


class ConfigExporter:
    """
    Exports tool group and MCP server configs into a resolved target directory.

    The target must already be validated as existing and empty (see
    ``resolve_target_dir``).
    """

    def __init__(
        self,
        client: RemoteConfigClient,
        writer: JSONConfigWriter | None = None,
        console: Console | None = None,
    ):
        self.client = client
        self.writer = writer or JSONConfigWriter()
        self.console = console or Console(highlight=False, soft_wrap=True)

    # ──────────────────────────────────────────────
    # Filesystem Layout
    # ──────────────────────────────────────────────

    def _create_subdirectories(self, root_dir: Path) -> dict[EntityCategory, Path]:
        """Create one subdirectory per category. Any failure is fatal."""
        self.console.print(f"Creating subdirectories inside {escape(str(root_dir))}\n")

        dirs = {}
        for category in EntityCategory:
            entity_dir = root_dir / category.subdir
            try:
                entity_dir.mkdir(mode=0o755)
            except OSError as e:
                raise SubdirectoryCreateError(
                    f"failed to create {category.plural} directory {entity_dir}: {e}"
                ) from e
            dirs[category] = entity_dir
        return dirs

    # ──────────────────────────────────────────────
    # Per-Category Export
    # ──────────────────────────────────────────────

    async def _export_category(
        self, category: EntityCategory, entity_dir: Path, summary: ExportSummary
    ) -> None:
        self.console.print(f"Fetching {category.label} configurations...")

        list_configs = getattr(self.client, category.list_operation)
        try:
            entities = await list_configs()
        except Exception as e:
            message = f"failed to fetch {category.label.lower()} configurations: {e}"
            logger.warning(message)
            summary.warnings.append(message)
            self.console.print(f"[yellow]warning:[/yellow] {escape(message)}")
            return

        if not entities:
            self.console.print(f"No {category.plural} found.")
            return

        self.console.print(
            f"Writing {category.label} configurations to {escape(str(entity_dir))}"
        )
        for entity in entities:
            await self.writer.write(entity_dir, entity)
            summary.written[category.subdir] += 1

        count = summary.written[category.subdir]
        self.console.print(f"Wrote {count} {category.label} configuration file(s)")
        logger.info(f"Exported {count} {category.plural} to {entity_dir}")

    # ──────────────────────────────────────────────
    # Main Run
    # ──────────────────────────────────────────────

    async def run(self, root_dir: str | Path) -> ExportSummary:
        """
        Export all entity configurations under ``root_dir``.

        Args:
            root_dir: Resolved, existing and empty target directory.

        Returns:
            Summary with per-category counts and listing warnings.

        Raises:
            SubdirectoryCreateError: A category subdirectory could not be made.
            SerializationError: An entity could not be serialized.
            FileWriteError: A config file could not be written.
        """
        root_dir = Path(root_dir)
        summary = ExportSummary(root_dir=str(root_dir))

        # --- 1. LAYOUT ---
        dirs = self._create_subdirectories(root_dir)

        # --- 2. FETCH & WRITE ---
        for category in EntityCategory:
            summary.written[category.subdir] = 0
            await self._export_category(category, dirs[category], summary)

        # --- 3. FINALIZE ---
        await self.writer.finalize()
        self.console.print("\n[bold green]Export complete![/bold green]")
        return summary
