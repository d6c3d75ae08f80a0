"""
Tests for the MCP export tool
"""

import pytest

from dato_hugo import mcp_server
from dato_hugo.exporter import ExportReport


def test_export_tool_returns_written_paths(monkeypatch, tmp_path):
    monkeypatch.setenv("DATOCMS_API_TOKEN", "secret")
    seen = {}

    def fake_run_export(config):
        seen["config"] = config
        return ExportReport(written=[tmp_path / "data" / "settings.yml"])

    monkeypatch.setattr(mcp_server, "run_export", fake_run_export)

    paths = mcp_server.export(str(tmp_path), locale="it")

    assert paths == [str(tmp_path / "data" / "settings.yml")]
    assert seen["config"].api_token == "secret"
    assert seen["config"].locale == "it"


def test_export_tool_requires_existing_root(tmp_path):
    with pytest.raises(FileNotFoundError):
        mcp_server.export(str(tmp_path / "missing"))


def test_export_tool_requires_token(monkeypatch, tmp_path):
    monkeypatch.delenv("DATOCMS_API_TOKEN", raising=False)

    with pytest.raises(ValueError):
        mcp_server.export(str(tmp_path))
