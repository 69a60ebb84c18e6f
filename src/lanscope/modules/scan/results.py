"""Append-only store of finished host results."""

from __future__ import annotations

from .address_range import ip_to_int
from .models import HostResult, PortStatus


class ResultStore:
    """Collects HostResults in completion order.

    Only ``append`` mutates the store; readers always get an immutable
    snapshot.
    """

    def __init__(self) -> None:
        self._hosts: list[HostResult] = []

    def __len__(self) -> int:
        return len(self._hosts)

    def append(self, host: HostResult) -> None:
        self._hosts.append(host)

    def snapshot(self) -> tuple[HostResult, ...]:
        return tuple(self._hosts)

    def clear(self) -> None:
        self._hosts = []

    @property
    def total(self) -> int:
        return len(self._hosts)

    @property
    def responsive(self) -> int:
        """Hosts with at least one open port."""
        return sum(
            1
            for host in self.snapshot()
            if any(item.status is PortStatus.OPEN for item in host.ports)
        )

    @property
    def unresponsive(self) -> int:
        """Hosts where every port timed out."""
        return sum(
            1
            for host in self.snapshot()
            if all(item.status is PortStatus.TIMEOUT for item in host.ports)
        )

    def ordered(self) -> list[HostResult]:
        """Return hosts for display: responded first, then by numeric address."""
        return sorted(
            self.snapshot(),
            key=lambda host: (not host.responded, ip_to_int(host.ip)),
        )
