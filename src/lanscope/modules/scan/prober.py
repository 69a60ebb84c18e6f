"""Single-port probing and status classification."""

from __future__ import annotations

import asyncio
import logging
import secrets
import time
from collections.abc import Callable

from lanscope.tools.http import OutcomeKind, ProbeOutcome, ProbeTransport

from .models import PortProbeResult, PortStatus
from .ports import protocol_for_port

logger = logging.getLogger(__name__)

MAX_ERROR_LENGTH = 200


def _new_token() -> str:
    return secrets.token_hex(8)


class Prober:
    """Runs one bounded-time probe per (address, port) and classifies it."""

    def __init__(
        self,
        transport: ProbeTransport,
        clock: Callable[[], float] = time.perf_counter,
        token_factory: Callable[[], str] = _new_token,
    ):
        self.transport = transport
        self.clock = clock
        self.token_factory = token_factory

    def build_url(self, ip: str, port: int) -> str:
        """Return a probe URL carrying a fresh token so no cached answer is reused."""
        protocol = protocol_for_port(port)
        return f"{protocol.value}://{ip}:{port}/?probe={self.token_factory()}"

    async def probe(
        self,
        ip: str,
        port: int,
        timeout_ms: int,
        cancel_event: asyncio.Event | None = None,
    ) -> PortProbeResult:
        """Probe ``ip:port`` and return its classified result.

        Never raises. The attempt is abandoned when ``timeout_ms`` elapses or
        ``cancel_event`` is set, and is then reported as a timeout.
        """
        url = self.build_url(ip, port)
        timeout = timeout_ms / 1000
        started = self.clock()

        outcome = await self._attempt(url, timeout, cancel_event)
        elapsed_ms = (self.clock() - started) * 1000

        return self._classify(port, outcome, elapsed_ms)

    async def _attempt(
        self,
        url: str,
        timeout: float,
        cancel_event: asyncio.Event | None,
    ) -> ProbeOutcome:
        attempt = asyncio.ensure_future(self.transport.attempt(url, timeout))
        waiters: set[asyncio.Future] = {attempt}
        cancel_waiter = None
        if cancel_event is not None:
            cancel_waiter = asyncio.ensure_future(cancel_event.wait())
            waiters.add(cancel_waiter)

        try:
            done, _ = await asyncio.wait(
                waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            if cancel_waiter is not None:
                cancel_waiter.cancel()
            # also reached when the probe itself is cancelled
            if not attempt.done():
                attempt.cancel()
                await asyncio.gather(attempt, return_exceptions=True)

        if attempt not in done:
            return ProbeOutcome(OutcomeKind.TIMEOUT)

        try:
            return attempt.result()
        except Exception as exc:
            logger.debug("Transport raised for %s", url, exc_info=True)
            return ProbeOutcome(OutcomeKind.FAILURE, str(exc).strip() or exc.__class__.__name__)

    def _classify(self, port: int, outcome: ProbeOutcome, elapsed_ms: float) -> PortProbeResult:
        protocol = protocol_for_port(port)

        if outcome.kind is OutcomeKind.RESPONSE:
            return PortProbeResult(
                port=port,
                protocol=protocol,
                status=PortStatus.OPEN,
                latency_ms=max(0, round(elapsed_ms)),
            )
        if outcome.kind is OutcomeKind.TIMEOUT:
            return PortProbeResult(port=port, protocol=protocol, status=PortStatus.TIMEOUT)
        if outcome.kind is OutcomeKind.REFUSED:
            return PortProbeResult(port=port, protocol=protocol, status=PortStatus.CLOSED)

        message = outcome.detail or "Unknown error"
        return PortProbeResult(
            port=port,
            protocol=protocol,
            status=PortStatus.ERROR,
            error_message=message[:MAX_ERROR_LENGTH],
        )
