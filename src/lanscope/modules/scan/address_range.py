"""IPv4 range expansion."""

from __future__ import annotations

from .errors import InvalidAddressFormat, RangeInverted, RangeTooLarge
from .models import MAX_TARGETS


def ip_to_int(address: str) -> int:
    """Convert dotted-quad text into its 32-bit unsigned value."""
    parts = address.strip().split(".")
    if len(parts) != 4:
        raise InvalidAddressFormat(address)

    value = 0
    for part in parts:
        part = part.strip()
        if not (part.isascii() and part.isdigit()):
            raise InvalidAddressFormat(address)
        octet = int(part)
        if octet > 255:
            raise InvalidAddressFormat(address)
        value = value * 256 + octet
    return value


def int_to_ip(value: int) -> str:
    """Render a 32-bit unsigned value as canonical dotted-quad text."""
    if not 0 <= value <= 0xFFFFFFFF:
        raise ValueError(f"Address value out of range: {value}")
    return ".".join(str((value >> shift) & 0xFF) for shift in (24, 16, 8, 0))


def expand(start: str, end: str, max_count: int = MAX_TARGETS) -> list[str]:
    """Return every address from ``start`` to ``end`` inclusive, ascending.

    Raises:
        InvalidAddressFormat: a boundary is not a valid IPv4 address.
        RangeInverted: ``end`` is lower than ``start``.
        RangeTooLarge: the range holds more than ``max_count`` addresses.
    """
    start_value = ip_to_int(start)
    end_value = ip_to_int(end)
    if end_value < start_value:
        raise RangeInverted(int_to_ip(start_value), int_to_ip(end_value))

    count = end_value - start_value + 1
    if count > max_count:
        raise RangeTooLarge(count, max_count)

    return [int_to_ip(value) for value in range(start_value, end_value + 1)]
