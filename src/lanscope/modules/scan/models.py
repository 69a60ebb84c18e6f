"""Data models for probe results, host results and scan configuration."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from .ports import ProtocolHint, parse_ports, protocol_for_port

DEFAULT_TIMEOUT_MS = 2000
MIN_TIMEOUT_MS = 200
DEFAULT_CONCURRENCY = 24
MAX_CONCURRENCY = 128
MAX_TARGETS = 2048


class PortStatus(Enum):
    """Outcome of a single port probe."""

    OPEN = "open"
    CLOSED = "closed"
    TIMEOUT = "timeout"
    ERROR = "error"


class ScanState(Enum):
    """Lifecycle of a scan run."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(frozen=True)
class PortProbeResult:
    """Classified result of probing one port."""

    port: int
    protocol: ProtocolHint
    status: PortStatus
    latency_ms: int | None = None
    error_message: str | None = None


@dataclass(frozen=True)
class HostResult:
    """All port results for one address."""

    ip: str
    ports: tuple[PortProbeResult, ...]
    responded: bool

    @classmethod
    def from_ports(cls, ip: str, ports: Iterable[PortProbeResult]) -> HostResult:
        """Build a host result, deriving ``responded`` from the port statuses.

        A host counts as responded when any port is open, or when every port
        timed out (a uniformly silent host is reported apart from one whose
        ports are merely closed).
        """
        ports = tuple(ports)
        responded = any(item.status is PortStatus.OPEN for item in ports) or (
            bool(ports) and all(item.status is PortStatus.TIMEOUT for item in ports)
        )
        return cls(ip=ip, ports=ports, responded=responded)

    @classmethod
    def failed(cls, ip: str, ports: Iterable[int], message: str) -> HostResult:
        """Build the all-error record for a host that could not be processed."""
        return cls(
            ip=ip,
            ports=tuple(
                PortProbeResult(
                    port=port,
                    protocol=protocol_for_port(port),
                    status=PortStatus.ERROR,
                    error_message=message,
                )
                for port in ports
            ),
            responded=False,
        )

    @property
    def open_ports(self) -> list[int]:
        return [item.port for item in self.ports if item.status is PortStatus.OPEN]


@dataclass(frozen=True)
class ScanProgress:
    """Hosts finished so far out of the total for the run."""

    completed: int = 0
    total: int = 0

    def advance(self) -> ScanProgress:
        return ScanProgress(completed=self.completed + 1, total=self.total)

    @property
    def percent(self) -> int:
        if self.total == 0:
            return 0
        return round(self.completed / self.total * 100)


@dataclass(frozen=True)
class ScanUpdate:
    """Event published after each finished host."""

    progress: ScanProgress
    host: HostResult


@dataclass(frozen=True)
class ScanSummary:
    """Terminal view of a scan run."""

    state: ScanState
    progress: ScanProgress
    hosts: tuple[HostResult, ...]
    message: str


def _clamp(value: int, low: int, high: int | None = None) -> int:
    value = max(low, int(value))
    if high is not None:
        value = min(high, value)
    return value


@dataclass(frozen=True)
class ScanConfiguration:
    """Immutable inputs of one scan run.

    ``timeout_ms`` is raised to at least ``MIN_TIMEOUT_MS`` and
    ``concurrency`` is clamped into ``[1, MAX_CONCURRENCY]``.
    """

    start_address: str
    end_address: str
    ports: tuple[int, ...]
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    concurrency: int = DEFAULT_CONCURRENCY
    max_targets: int = field(default=MAX_TARGETS)

    def __post_init__(self) -> None:
        object.__setattr__(self, "ports", tuple(self.ports))
        object.__setattr__(self, "timeout_ms", _clamp(self.timeout_ms, MIN_TIMEOUT_MS))
        object.__setattr__(self, "concurrency", _clamp(self.concurrency, 1, MAX_CONCURRENCY))

    @classmethod
    def from_input(
        cls,
        start_address: str,
        end_address: str,
        ports_text: str,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        concurrency: int = DEFAULT_CONCURRENCY,
    ) -> ScanConfiguration:
        """Build a configuration from raw user input."""
        return cls(
            start_address=start_address.strip(),
            end_address=end_address.strip(),
            ports=tuple(parse_ports(ports_text)),
            timeout_ms=timeout_ms,
            concurrency=concurrency,
        )
