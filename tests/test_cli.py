"""Tests for CLI commands."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from lanscope import cli
from lanscope.cli import app

from .conftest import RESPONSE, FakeTransport

runner = CliRunner()


@pytest.fixture
def scripted_transport(monkeypatch: pytest.MonkeyPatch) -> FakeTransport:
    """Replace the HTTP transport used by ``lanscope scan``."""
    transport = FakeTransport(outcomes={("10.0.0.2", 80): RESPONSE})
    monkeypatch.setattr(cli, "HTTPProbeTransport", lambda: transport)
    return transport


class TestScanCommand:
    """Test the scan command."""

    def test_scan_reports_responding_hosts(self, scripted_transport: FakeTransport):
        result = runner.invoke(app, ["scan", "10.0.0.1", "10.0.0.3", "--ports", "80,443"])

        assert result.exit_code == 0, result.output
        assert "Scan complete." in result.output
        assert "10.0.0.2" in result.output
        assert len(scripted_transport.calls) == 6

    def test_single_address(self, scripted_transport: FakeTransport):
        result = runner.invoke(app, ["scan", "10.0.0.2", "-p", "80"])

        assert result.exit_code == 0, result.output
        assert len(scripted_transport.calls) == 1

    def test_default_ports_from_config(
        self, scripted_transport: FakeTransport, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setenv("LANSCOPE_PORTS", "8080")
        result = runner.invoke(app, ["scan", "10.0.0.1"])

        assert result.exit_code == 0, result.output
        assert scripted_transport.calls[0].startswith("http://10.0.0.1:8080/?probe=")

    def test_profile_only(self, scripted_transport: FakeTransport):
        result = runner.invoke(app, ["scan", "10.0.0.1", "--profile", "iot"])

        assert result.exit_code == 0, result.output
        ports = sorted(int(url.split(":")[2].split("/")[0]) for url in scripted_transport.calls)
        assert ports == [1883, 5683, 8883]

    def test_writes_csv(self, scripted_transport: FakeTransport, tmp_path: Path):
        target = tmp_path / "results.csv"
        result = runner.invoke(
            app, ["scan", "10.0.0.1", "10.0.0.2", "-p", "80", "--output", str(target)]
        )

        assert result.exit_code == 0, result.output
        assert "CSV written" in result.output
        lines = target.read_text(encoding="utf-8").split("\n")
        assert lines[0] == "IP,Porta,Protocolo,Status,Latência(ms),Mensagem"
        assert len(lines) == 3

    def test_inverted_range_fails(self, scripted_transport: FakeTransport):
        result = runner.invoke(app, ["scan", "10.0.0.9", "10.0.0.1", "-p", "80"])

        assert result.exit_code == 1
        assert "must be greater" in result.output
        assert scripted_transport.calls == []

    def test_invalid_address_fails(self, scripted_transport: FakeTransport):
        result = runner.invoke(app, ["scan", "10.0.0", "-p", "80"])

        assert result.exit_code == 1
        assert "Invalid IPv4 address" in result.output

    def test_no_valid_ports_fails(self, scripted_transport: FakeTransport):
        result = runner.invoke(app, ["scan", "10.0.0.1", "-p", "abc, 70000"])

        assert result.exit_code == 1
        assert "at least one port" in result.output

    def test_unknown_profile_fails(self, scripted_transport: FakeTransport):
        result = runner.invoke(app, ["scan", "10.0.0.1", "--profile", "database"])

        assert result.exit_code == 1
        assert "Unknown port profile" in result.output

    def test_interrupt_exits_130(self, monkeypatch: pytest.MonkeyPatch):
        def interrupted(coro, on_interrupt=None):
            coro.close()
            raise KeyboardInterrupt

        monkeypatch.setattr(cli, "safe_async_run", interrupted)
        result = runner.invoke(app, ["scan", "10.0.0.1", "-p", "80"])

        assert result.exit_code == 130


class TestInfoCommands:
    """Test profiles, config and version."""

    def test_profiles(self):
        result = runner.invoke(app, ["profiles"])

        assert result.exit_code == 0
        for name in ("web", "admin", "sharing", "iot"):
            assert name in result.output
        assert "80,443,3389,445,22" in result.output

    def test_config_show(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("LANSCOPE_CONCURRENCY", "12")
        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0
        assert "LANSCOPE_CONCURRENCY=12" in result.output
        assert "LANSCOPE_TIMEOUT_MS=2000" in result.output
        assert "No global config found" in result.output

    def test_config_init(self, isolated_config: Path):
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        assert (isolated_config / ".lanscope" / "config.yml").exists()

    def test_config_unknown_action(self):
        result = runner.invoke(app, ["config", "reset"])
        assert result.exit_code == 1

    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "LanScope" in result.output
