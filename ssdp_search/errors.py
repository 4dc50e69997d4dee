"""Error types raised while building, encoding and sending search requests."""

from typing import Optional


class SSDPSearchError(Exception):
    """Base class for all ssdp_search errors."""


class ConfigurationError(SSDPSearchError, ValueError):
    """Invalid search target, MX value, policy or configuration file."""

    def __init__(self, message: str, header_type: Optional[type] = None):
        super().__init__(message)
        self.header_type = header_type


class UnsupportedOperationError(SSDPSearchError):
    """Message operation is neither a request nor a response."""


class EncodingError(SSDPSearchError):
    """Message text can't be represented as US-ASCII."""

    def __init__(self, message: str, data: str = ""):
        super().__init__(message)
        self.data = data


class RouterError(SSDPSearchError):
    """Transport failure while sending or broadcasting a datagram."""
