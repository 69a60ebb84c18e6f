"""Bounded-concurrency scan coordination."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import AsyncIterator, Callable, Sequence
from contextlib import aclosing

from lanscope.tools.http import ProbeTransport

from .address_range import expand
from .errors import NoPortsSpecified, NoTargetsResolved, ScanValidationError
from .models import (
    HostResult,
    ScanConfiguration,
    ScanProgress,
    ScanState,
    ScanSummary,
    ScanUpdate,
)
from .ports import MAX_PORT, MIN_PORT
from .prober import Prober
from .results import ResultStore

logger = logging.getLogger(__name__)

COMPLETED_MESSAGE = "Scan complete."
CANCELLED_MESSAGE = "Scan interrupted by user."

# Marks the end of one worker on the event channel.
_WORKER_DONE = object()


class ScanCoordinator:
    """Owns one scan run: its queue, workers, progress, results and cancel flag.

    Workers publish finished hosts onto a channel; the coordinator applies
    them to the result store and the progress counter one at a time, so the
    aggregate is only ever written from a single place.

    ``cancel`` must be called from the thread running the event loop.
    """

    def __init__(
        self,
        transport: ProbeTransport | None = None,
        *,
        prober: Prober | None = None,
        on_update: Callable[[ScanUpdate], None] | None = None,
    ):
        if prober is None:
            if transport is None:
                raise ValueError("Either a transport or a prober is required.")
            prober = Prober(transport)
        self.prober = prober
        self.on_update = on_update

        self._state = ScanState.IDLE
        self._progress = ScanProgress()
        self._results = ResultStore()
        self._message = ""
        self._cancel_event: asyncio.Event | None = None

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def progress(self) -> ScanProgress:
        return self._progress

    @property
    def results(self) -> ResultStore:
        return self._results

    @property
    def message(self) -> str:
        return self._message

    @property
    def is_running(self) -> bool:
        return self._state is ScanState.RUNNING

    def cancel(self) -> None:
        """Request cancellation. Safe to call repeatedly or when idle."""
        if not self.is_running or self._cancel_event is None:
            return
        if not self._cancel_event.is_set():
            logger.debug("Cancellation requested at %s/%s hosts", *self._progress_tuple())
            self._cancel_event.set()

    def clear(self) -> None:
        """Discard all results and progress."""
        if self.is_running:
            raise RuntimeError("Cannot clear results while a scan is running.")
        self._results = ResultStore()
        self._progress = ScanProgress()
        self._message = ""
        self._state = ScanState.IDLE

    def summary(self) -> ScanSummary:
        return ScanSummary(
            state=self._state,
            progress=self._progress,
            hosts=self._results.snapshot(),
            message=self._message,
        )

    async def start(self, config: ScanConfiguration) -> ScanSummary:
        """Run a scan to the end and return its summary.

        ``on_update`` is called after every finished host. Validation errors
        propagate before any work starts.
        """
        async with aclosing(self.run(config)) as updates:
            async for update in updates:
                if self.on_update:
                    self.on_update(update)
        return self.summary()

    async def run(self, config: ScanConfiguration) -> AsyncIterator[ScanUpdate]:
        """Run a scan, yielding one update per finished host."""
        if self.is_running:
            raise RuntimeError("A scan is already running.")

        try:
            ports, targets = self.validate(config)
        except ScanValidationError as exc:
            self._state = ScanState.FAILED
            self._message = str(exc)
            logger.debug("Scan rejected: %s", exc)
            raise

        cancel_event = asyncio.Event()
        self._cancel_event = cancel_event
        self._results = ResultStore()
        self._progress = ScanProgress(completed=0, total=len(targets))
        self._message = ""
        self._state = ScanState.RUNNING

        pending = deque(targets)
        events: asyncio.Queue = asyncio.Queue()
        worker_count = min(config.concurrency, len(targets))
        logger.debug(
            "Scanning %d hosts x %d ports with %d workers (timeout %d ms)",
            len(targets),
            len(ports),
            worker_count,
            config.timeout_ms,
        )
        workers = [
            asyncio.create_task(
                self._worker(pending, ports, config.timeout_ms, cancel_event, events)
            )
            for _ in range(worker_count)
        ]

        drained = False
        try:
            running = worker_count
            while running:
                item = await events.get()
                if item is _WORKER_DONE:
                    running -= 1
                    continue
                self._results.append(item)
                self._progress = self._progress.advance()
                yield ScanUpdate(progress=self._progress, host=item)
            drained = True
        finally:
            if not drained:
                cancel_event.set()
                for worker in workers:
                    worker.cancel()
                await asyncio.gather(*workers, return_exceptions=True)
            self._finish(cancel_event)

    def validate(self, config: ScanConfiguration) -> tuple[list[int], list[str]]:
        """Return the ports and target addresses of ``config`` or raise a ScanValidationError."""
        ports = [port for port in dict.fromkeys(config.ports) if MIN_PORT <= port <= MAX_PORT]
        if not ports:
            raise NoPortsSpecified()

        targets = expand(config.start_address, config.end_address, config.max_targets)
        if not targets:
            raise NoTargetsResolved()
        return ports, targets

    def _finish(self, cancel_event: asyncio.Event) -> None:
        if cancel_event.is_set():
            self._state = ScanState.CANCELLED
            self._message = CANCELLED_MESSAGE
        else:
            self._state = ScanState.COMPLETED
            self._message = COMPLETED_MESSAGE
        logger.debug(
            "Scan %s at %s/%s hosts", self._state.value, *self._progress_tuple()
        )

    def _progress_tuple(self) -> tuple[int, int]:
        return self._progress.completed, self._progress.total

    async def _worker(
        self,
        pending: deque[str],
        ports: Sequence[int],
        timeout_ms: int,
        cancel_event: asyncio.Event,
        events: asyncio.Queue,
    ) -> None:
        try:
            while not cancel_event.is_set():
                try:
                    ip = pending.popleft()
                except IndexError:
                    return

                try:
                    host = await self._scan_host(ip, ports, timeout_ms, cancel_event)
                except Exception as exc:
                    logger.warning("Failed to scan host %s", ip, exc_info=True)
                    host = HostResult.failed(ip, ports, str(exc) or "Unknown failure")
                events.put_nowait(host)
        finally:
            events.put_nowait(_WORKER_DONE)

    async def _scan_host(
        self,
        ip: str,
        ports: Sequence[int],
        timeout_ms: int,
        cancel_event: asyncio.Event,
    ) -> HostResult:
        # gather keeps the requested port order regardless of completion order
        results = await asyncio.gather(
            *(self.prober.probe(ip, port, timeout_ms, cancel_event) for port in ports)
        )
        return HostResult.from_ports(ip, results)
