"""Tests for the ConfigExporter orchestration."""

import io
import json

import pytest
from rich.console import Console

from registry_exporter.client.base import RemoteConfigClient
from registry_exporter.core.errors import (
    FileWriteError,
    RegistryClientError,
    SerializationError,
    SubdirectoryCreateError,
)
from registry_exporter.core.exporter import ConfigExporter
from registry_exporter.core.target import resolve_target_dir


class FakeClient:
    """In-memory registry client; a listing given as an exception is raised."""

    def __init__(self, groups=(), servers=()):
        self.groups = groups
        self.servers = servers
        self.calls: list[str] = []

    async def _listing(self, value):
        if isinstance(value, Exception):
            raise value
        return list(value)

    async def list_tool_group_configs(self):
        self.calls.append("groups")
        return await self._listing(self.groups)

    async def list_server_configs(self):
        self.calls.append("servers")
        return await self._listing(self.servers)


def make_exporter(client):
    buffer = io.StringIO()
    console = Console(file=buffer, highlight=False, soft_wrap=True)
    return ConfigExporter(client, console=console), buffer


@pytest.fixture
def root(tmp_path):
    return resolve_target_dir(str(tmp_path / "export"))


def listing(path):
    return sorted(p.name for p in path.iterdir())


# ═══════════════════════════════════════════
# Happy Path Tests
# ═══════════════════════════════════════════


class TestConfigExporter:
    def test_fake_client_satisfies_protocol(self):
        assert isinstance(FakeClient(), RemoteConfigClient)

    @pytest.mark.asyncio
    async def test_exports_both_categories(self, root):
        client = FakeClient(
            groups=[{"name": "prod-group", "included_tools": ["a__b"]}],
            servers=[{"name": "github", "transport": "streamable_http"}, {"name": "time"}],
        )
        exporter, output = make_exporter(client)

        summary = await exporter.run(root)

        assert listing(root) == ["groups", "servers"]
        assert listing(root / "groups") == ["prod-group.json"]
        assert listing(root / "servers") == ["github.json", "time.json"]
        assert summary.written == {"groups": 1, "servers": 2}
        assert summary.total_written == 3
        assert summary.warnings == []
        assert client.calls == ["groups", "servers"]
        assert "Export complete!" in output.getvalue()

    @pytest.mark.asyncio
    async def test_group_file_content_is_reproducible(self, tmp_path):
        group = {"name": "prod-group", "description": "prod", "included_tools": ["x__y"]}
        contents = []
        for run in ("first", "second"):
            root = resolve_target_dir(str(tmp_path / run))
            exporter, _ = make_exporter(FakeClient(groups=[group]))
            await exporter.run(root)
            contents.append((root / "groups" / "prod-group.json").read_bytes())

        assert contents[0] == contents[1]
        assert contents[0] == json.dumps(group, indent=2).encode("utf-8")

    @pytest.mark.asyncio
    async def test_both_listings_empty(self, root):
        exporter, output = make_exporter(FakeClient())

        summary = await exporter.run(root)

        assert listing(root / "groups") == []
        assert listing(root / "servers") == []
        assert summary.total_written == 0
        assert summary.warnings == []
        text = output.getvalue()
        assert "No Tool Groups found." in text
        assert "No MCP Servers found." in text
        assert "Export complete!" in text

    @pytest.mark.asyncio
    async def test_duplicate_basenames_last_wins(self, root):
        client = FakeClient(servers=[{"name": "dup", "v": 1}, {"name": "dup", "v": 2}])
        exporter, _ = make_exporter(client)

        await exporter.run(root)

        assert listing(root / "servers") == ["dup.json"]
        assert json.loads((root / "servers" / "dup.json").read_text()) == {"name": "dup", "v": 2}


# ═══════════════════════════════════════════
# Failure Policy Tests
# ═══════════════════════════════════════════


class TestFailurePolicy:
    @pytest.mark.asyncio
    async def test_group_listing_failure_is_warning(self, root):
        client = FakeClient(
            groups=RegistryClientError("connection refused"),
            servers=[{"name": "A"}, {"name": "B"}],
        )
        exporter, output = make_exporter(client)

        summary = await exporter.run(root)

        assert listing(root / "groups") == []
        assert listing(root / "servers") == ["A.json", "B.json"]
        assert len(summary.warnings) == 1
        assert "tool group" in summary.warnings[0]
        assert "connection refused" in summary.warnings[0]
        text = output.getvalue()
        assert "warning: failed to fetch tool group configurations: connection refused" in text
        assert "Export complete!" in text

    @pytest.mark.asyncio
    async def test_both_listings_fail(self, root):
        client = FakeClient(groups=RuntimeError("boom"), servers=RegistryClientError("503"))
        exporter, _ = make_exporter(client)

        summary = await exporter.run(root)

        assert len(summary.warnings) == 2
        assert summary.total_written == 0
        assert client.calls == ["groups", "servers"]

    @pytest.mark.asyncio
    async def test_subdirectory_failure_aborts_before_fetch(self, tmp_path):
        root = tmp_path / "export"
        (root / "servers").mkdir(parents=True)
        client = FakeClient(groups=[{"name": "g"}])
        exporter, _ = make_exporter(client)

        with pytest.raises(SubdirectoryCreateError):
            await exporter.run(root)

        assert client.calls == []

    @pytest.mark.asyncio
    async def test_serialization_failure_aborts_and_keeps_partial_output(self, root):
        client = FakeClient(
            groups=[{"name": "ok-group"}],
            servers=[{"name": "first"}, {"name": "broken", "bad": {1, 2}}, {"name": "never"}],
        )
        exporter, output = make_exporter(client)

        with pytest.raises(SerializationError):
            await exporter.run(root)

        assert listing(root / "groups") == ["ok-group.json"]
        assert listing(root / "servers") == ["first.json"]
        assert "Export complete!" not in output.getvalue()

    @pytest.mark.asyncio
    async def test_write_failure_aborts_run(self, root):
        # File names longer than NAME_MAX make the open itself fail with OSError
        long_name = "g" * 300
        client = FakeClient(
            groups=[{"name": "first"}, {"name": long_name}, {"name": "never"}],
            servers=[{"name": "s"}],
        )
        exporter, output = make_exporter(client)

        with pytest.raises(FileWriteError) as exc_info:
            await exporter.run(root)

        assert f"{long_name}.json" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, OSError)
        assert client.calls == ["groups"]
        assert listing(root / "groups") == ["first.json"]
        assert listing(root / "servers") == []
        assert "Export complete!" not in output.getvalue()
