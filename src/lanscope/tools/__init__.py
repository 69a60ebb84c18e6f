"""Tools package for LanScope."""

from lanscope.tools.http import HTTPProbeTransport, OutcomeKind, ProbeOutcome, ProbeTransport

__all__ = [
    "HTTPProbeTransport",
    "OutcomeKind",
    "ProbeOutcome",
    "ProbeTransport",
]
