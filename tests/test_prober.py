"""Tests for single-port probing and classification."""

import asyncio

import pytest

from lanscope.modules.scan import PortStatus, Prober, ProtocolHint
from lanscope.tools.http import OutcomeKind, ProbeOutcome

from .conftest import HANG, REFUSED, RESPONSE, TIMEOUT, FakeTransport


def fixed_clock(*values: float):
    return iter(values).__next__


class TestBuildUrl:
    """Probe URL construction."""

    def test_plain_port_uses_http(self):
        prober = Prober(FakeTransport(), token_factory=lambda: "tok")
        assert prober.build_url("10.0.0.1", 80) == "http://10.0.0.1:80/?probe=tok"

    def test_secure_port_uses_https(self):
        prober = Prober(FakeTransport(), token_factory=lambda: "tok")
        assert prober.build_url("10.0.0.1", 8443) == "https://10.0.0.1:8443/?probe=tok"

    def test_every_attempt_is_unique(self):
        prober = Prober(FakeTransport())
        urls = {prober.build_url("10.0.0.1", 80) for _ in range(20)}
        assert len(urls) == 20


class TestClassification:
    """Outcome to status mapping."""

    async def test_response_is_open_with_latency(self):
        transport = FakeTransport(default=RESPONSE)
        prober = Prober(transport, clock=fixed_clock(10.0, 10.0124))

        result = await prober.probe("10.0.0.1", 80, 1000)

        assert result.status is PortStatus.OPEN
        assert result.latency_ms == 12
        assert result.error_message is None
        assert result.protocol is ProtocolHint.PLAIN

    async def test_latency_rounds_to_nearest(self):
        prober = Prober(FakeTransport(default=RESPONSE), clock=fixed_clock(0.0, 0.0126))
        result = await prober.probe("10.0.0.1", 443, 1000)
        assert result.latency_ms == 13
        assert result.protocol is ProtocolHint.SECURE

    async def test_refused_is_closed(self):
        prober = Prober(FakeTransport(default=REFUSED))
        result = await prober.probe("10.0.0.1", 22, 1000)
        assert result.status is PortStatus.CLOSED
        assert result.latency_ms is None
        assert result.error_message is None

    async def test_transport_timeout_is_timeout(self):
        prober = Prober(FakeTransport(default=TIMEOUT))
        result = await prober.probe("10.0.0.1", 22, 1000)
        assert result.status is PortStatus.TIMEOUT
        assert result.latency_ms is None

    async def test_failure_is_error_with_detail(self):
        outcome = ProbeOutcome(OutcomeKind.FAILURE, "[SSL] wrong version number")
        prober = Prober(FakeTransport(default=outcome))
        result = await prober.probe("10.0.0.1", 443, 1000)
        assert result.status is PortStatus.ERROR
        assert result.error_message == "[SSL] wrong version number"
        assert result.latency_ms is None

    async def test_failure_without_detail_gets_fallback(self):
        prober = Prober(FakeTransport(default=ProbeOutcome(OutcomeKind.FAILURE)))
        result = await prober.probe("10.0.0.1", 80, 1000)
        assert result.error_message == "Unknown error"

    async def test_long_detail_is_trimmed(self):
        outcome = ProbeOutcome(OutcomeKind.FAILURE, "x" * 500)
        prober = Prober(FakeTransport(default=outcome))
        result = await prober.probe("10.0.0.1", 80, 1000)
        assert len(result.error_message) == 200

    async def test_transport_exception_never_escapes(self):
        prober = Prober(FakeTransport(default=RuntimeError("boom")))
        result = await prober.probe("10.0.0.1", 80, 1000)
        assert result.status is PortStatus.ERROR
        assert result.error_message == "boom"

    async def test_exception_without_message_uses_class_name(self):
        prober = Prober(FakeTransport(default=KeyError()))
        result = await prober.probe("10.0.0.1", 80, 1000)
        assert result.error_message == "KeyError"


class TestDeadline:
    """Deadline and cancellation handling."""

    async def test_deadline_elapsed_is_timeout(self):
        prober = Prober(FakeTransport(default=HANG))
        result = await asyncio.wait_for(prober.probe("10.0.0.1", 80, 50), timeout=2)
        assert result.status is PortStatus.TIMEOUT

    async def test_cancel_event_aborts_in_flight_probe(self):
        prober = Prober(FakeTransport(default=HANG))
        cancel_event = asyncio.Event()

        task = asyncio.create_task(prober.probe("10.0.0.1", 80, 60_000, cancel_event))
        await asyncio.sleep(0.01)
        cancel_event.set()
        result = await asyncio.wait_for(task, timeout=2)

        assert result.status is PortStatus.TIMEOUT

    async def test_cancel_event_already_set(self):
        transport = FakeTransport(default=HANG)
        prober = Prober(transport)
        cancel_event = asyncio.Event()
        cancel_event.set()

        result = await asyncio.wait_for(
            prober.probe("10.0.0.1", 80, 60_000, cancel_event), timeout=2
        )
        assert result.status is PortStatus.TIMEOUT

    async def test_cancelling_probe_stops_transport_attempt(self):
        transport = FakeTransport(default=HANG)
        prober = Prober(transport)

        task = asyncio.create_task(prober.probe("10.0.0.1", 80, 60_000, asyncio.Event()))
        await asyncio.sleep(0.01)
        assert transport.active_hosts == {"10.0.0.1": 1}
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert transport.active_hosts == {}

    @pytest.mark.parametrize("outcome", [RESPONSE, REFUSED])
    async def test_fast_answer_not_affected_by_cancel_event(self, outcome):
        prober = Prober(FakeTransport(default=outcome))
        result = await prober.probe("10.0.0.1", 80, 1000, asyncio.Event())
        assert result.status in {PortStatus.OPEN, PortStatus.CLOSED}
