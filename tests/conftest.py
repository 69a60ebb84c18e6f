"""Test configuration and fixtures for LanScope."""

import asyncio
import tempfile
from collections.abc import Generator
from pathlib import Path
from urllib.parse import urlsplit

import pytest

from lanscope.modules.scan import ScanConfiguration
from lanscope.tools.http import OutcomeKind, ProbeOutcome

RESPONSE = ProbeOutcome(OutcomeKind.RESPONSE, "200")
REFUSED = ProbeOutcome(OutcomeKind.REFUSED, "Connection refused")
TIMEOUT = ProbeOutcome(OutcomeKind.TIMEOUT)
HANG = "hang"


class FakeTransport:
    """Scripted probe transport keyed by (ip, port).

    Values may be a ProbeOutcome, an exception instance to raise, or ``HANG``
    to block until the attempt is cancelled.
    """

    def __init__(
        self,
        outcomes: dict | None = None,
        default=REFUSED,
        delays: dict | None = None,
    ):
        self.outcomes = outcomes or {}
        self.default = default
        self.delays = delays or {}
        self.calls: list[str] = []
        self.active_hosts: dict[str, int] = {}
        self.max_active_hosts = 0

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None

    async def attempt(self, url: str, timeout: float) -> ProbeOutcome:
        self.calls.append(url)
        parts = urlsplit(url)
        key = (parts.hostname, parts.port)

        self.active_hosts[parts.hostname] = self.active_hosts.get(parts.hostname, 0) + 1
        self.max_active_hosts = max(self.max_active_hosts, len(self.active_hosts))
        try:
            delay = self.delays.get(key, self.delays.get(parts.port, 0))
            if delay:
                await asyncio.sleep(delay)
            outcome = self.outcomes.get(key, self.outcomes.get(parts.hostname, self.default))
            if outcome == HANG:
                await asyncio.sleep(3600)
            if isinstance(outcome, BaseException):
                raise outcome
            return outcome
        finally:
            self.active_hosts[parts.hostname] -= 1
            if not self.active_hosts[parts.hostname]:
                del self.active_hosts[parts.hostname]


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Keep tests away from the real home directory, .env and LANSCOPE_* variables."""
    for key in ("LANSCOPE_TIMEOUT_MS", "LANSCOPE_CONCURRENCY", "LANSCOPE_PORTS", "LANSCOPE_VERBOSE"):
        monkeypatch.delenv(key, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return home


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Transport answering every probe with a refusal unless scripted otherwise."""
    return FakeTransport()


@pytest.fixture
def small_config() -> ScanConfiguration:
    """Five hosts, two ports, one worker."""
    return ScanConfiguration(
        start_address="10.0.0.1",
        end_address="10.0.0.5",
        ports=(80, 443),
        timeout_ms=1000,
        concurrency=1,
    )
