"""
Example: Export every registry entity into a config-as-code directory.

Usage:
    export MCPJUNGLE_REGISTRY_URL=http://localhost:8080
    python examples/export_to_dir.py
"""

import asyncio
import os

from registry_exporter import ConfigExporter, RegistryClient, resolve_target_dir


async def main():
    # Resolve and validate the (empty) target directory
    target_dir = resolve_target_dir("~/mcp-config")

    registry_url = os.environ.get("MCPJUNGLE_REGISTRY_URL", "http://127.0.0.1:8080")
    async with RegistryClient(registry_url) as client:
        summary = await ConfigExporter(client).run(target_dir)

    print(f"\n✅ {summary.total_written} config files exported to: {target_dir}")
    for warning in summary.warnings:
        print(f"⚠️  {warning}")


if __name__ == "__main__":
    asyncio.run(main())
