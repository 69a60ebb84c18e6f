"""Pre-flight validation errors raised before a scan starts."""


class ScanValidationError(ValueError):
    """Base class for configuration problems that abort a scan."""


class InvalidAddressFormat(ScanValidationError):
    """An address is not four dot-separated octets in [0, 255]."""

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Invalid IPv4 address: {address!r}")


class RangeInverted(ScanValidationError):
    """The end address sorts before the start address."""

    def __init__(self, start: str, end: str):
        self.start = start
        self.end = end
        super().__init__(
            f"End address {end} must be greater than or equal to start address {start}."
        )


class RangeTooLarge(ScanValidationError):
    """The range holds more addresses than a single scan allows."""

    def __init__(self, count: int, limit: int):
        self.count = count
        self.limit = limit
        super().__init__(
            f"Range covers {count} addresses; the limit per scan is {limit}."
        )


class NoPortsSpecified(ScanValidationError):
    """No valid port survived parsing."""

    def __init__(self) -> None:
        super().__init__("Specify at least one port to scan.")


class NoTargetsResolved(ScanValidationError):
    """The address range expanded to nothing."""

    def __init__(self) -> None:
        super().__init__("No addresses found within the range.")
