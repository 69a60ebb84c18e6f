"""HTTP helpers for LanScope."""

from .client import HTTPProbeTransport, OutcomeKind, ProbeOutcome, ProbeTransport

__all__ = [
    "HTTPProbeTransport",
    "OutcomeKind",
    "ProbeOutcome",
    "ProbeTransport",
]
