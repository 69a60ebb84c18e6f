"""Scan engine for LanScope - range expansion, probing and coordination."""

from .address_range import expand, int_to_ip, ip_to_int
from .coordinator import CANCELLED_MESSAGE, COMPLETED_MESSAGE, ScanCoordinator
from .errors import (
    InvalidAddressFormat,
    NoPortsSpecified,
    NoTargetsResolved,
    RangeInverted,
    RangeTooLarge,
    ScanValidationError,
)
from .models import (
    DEFAULT_CONCURRENCY,
    DEFAULT_TIMEOUT_MS,
    MAX_CONCURRENCY,
    MAX_TARGETS,
    MIN_TIMEOUT_MS,
    HostResult,
    PortProbeResult,
    PortStatus,
    ScanConfiguration,
    ScanProgress,
    ScanState,
    ScanSummary,
    ScanUpdate,
)
from .ports import (
    DEFAULT_PORTS,
    PORT_PROFILES,
    SECURE_PORTS,
    ProtocolHint,
    parse_ports,
    profile_ports,
    protocol_for_port,
)
from .prober import Prober
from .results import ResultStore

__all__ = [
    "CANCELLED_MESSAGE",
    "COMPLETED_MESSAGE",
    "DEFAULT_CONCURRENCY",
    "DEFAULT_PORTS",
    "DEFAULT_TIMEOUT_MS",
    "MAX_CONCURRENCY",
    "MAX_TARGETS",
    "MIN_TIMEOUT_MS",
    "PORT_PROFILES",
    "SECURE_PORTS",
    "HostResult",
    "InvalidAddressFormat",
    "NoPortsSpecified",
    "NoTargetsResolved",
    "PortProbeResult",
    "PortStatus",
    "Prober",
    "ProtocolHint",
    "RangeInverted",
    "RangeTooLarge",
    "ResultStore",
    "ScanConfiguration",
    "ScanCoordinator",
    "ScanProgress",
    "ScanState",
    "ScanSummary",
    "ScanUpdate",
    "ScanValidationError",
    "expand",
    "int_to_ip",
    "ip_to_int",
    "parse_ports",
    "profile_ports",
    "protocol_for_port",
]
