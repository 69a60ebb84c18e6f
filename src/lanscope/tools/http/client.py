"""HTTP probe transport built on httpx."""

from __future__ import annotations

import errno
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

import httpx

logger = logging.getLogger(__name__)

_REFUSAL_ERRNOS = {errno.ECONNREFUSED, errno.ECONNRESET}
_REFUSAL_MARKERS = ("refused", "reset by peer", "connection reset")


class OutcomeKind(Enum):
    """What happened to one connection attempt."""

    RESPONSE = "response"
    TIMEOUT = "timeout"
    REFUSED = "refused"
    FAILURE = "failure"


@dataclass(frozen=True)
class ProbeOutcome:
    """Discriminated result of a transport attempt."""

    kind: OutcomeKind
    detail: str = ""


class ProbeTransport(Protocol):
    """Anything able to make one connection attempt against a URL."""

    async def attempt(self, url: str, timeout: float) -> ProbeOutcome: ...


def _is_refusal(exc: BaseException) -> bool:
    """Return True when the exception chain holds a refused or reset connection."""
    seen: set[int] = set()
    pending: list[BaseException] = [exc]
    while pending:
        current = pending.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))

        if isinstance(current, (ConnectionRefusedError, ConnectionResetError)):
            return True
        if isinstance(current, OSError) and current.errno in _REFUSAL_ERRNOS:
            return True
        if any(marker in str(current).lower() for marker in _REFUSAL_MARKERS):
            return True

        if isinstance(current, BaseExceptionGroup):
            pending.extend(current.exceptions)
        if current.__cause__ is not None:
            pending.append(current.__cause__)
        if current.__context__ is not None:
            pending.append(current.__context__)
    return False


def _describe(exc: BaseException) -> str:
    return str(exc).strip() or exc.__class__.__name__


class HTTPProbeTransport:
    """Async httpx transport making a single GET per attempt.

    Certificates are not verified, redirects are not followed and the body
    is never read: any response at all is enough.
    """

    def __init__(self, verify_ssl: bool = False):
        self.verify_ssl = verify_ssl
        self.client: httpx.AsyncClient | None = None

    async def __aenter__(self):
        self.client = httpx.AsyncClient(
            follow_redirects=False,
            verify=self.verify_ssl,
            headers={"Cache-Control": "no-store", "Pragma": "no-cache"},
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.client:
            await self.client.aclose()
            self.client = None

    async def attempt(self, url: str, timeout: float) -> ProbeOutcome:
        """Make one GET request and classify what happened."""
        if not self.client:
            raise RuntimeError("Client not initialized. Use async context manager.")

        request = self.client.build_request("GET", url, timeout=timeout)
        try:
            response = await self.client.send(request, stream=True)
        except httpx.TimeoutException:
            return ProbeOutcome(OutcomeKind.TIMEOUT)
        except (httpx.ConnectError, httpx.ReadError, httpx.WriteError) as exc:
            if _is_refusal(exc):
                return ProbeOutcome(OutcomeKind.REFUSED, _describe(exc))
            logger.debug("Probe %s failed: %s", url, exc)
            return ProbeOutcome(OutcomeKind.FAILURE, _describe(exc))
        except httpx.HTTPError as exc:
            logger.debug("Probe %s failed: %s", url, exc)
            return ProbeOutcome(OutcomeKind.FAILURE, _describe(exc))

        await response.aclose()
        return ProbeOutcome(OutcomeKind.RESPONSE, str(response.status_code))
