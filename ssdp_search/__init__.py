"""SSDP search - repeated M-SEARCH discovery broadcasts over UDP."""

from .errors import (
    ConfigurationError,
    EncodingError,
    RouterError,
    SSDPSearchError,
    UnsupportedOperationError,
)
from .message import (
    DeviceTypeHeader,
    OutgoingSearchRequest,
    RootDeviceHeader,
    ServiceTypeHeader,
    STAllHeader,
    UDNHeader,
    build_search_request,
    parse_search_target,
)
from .search import SearchOutcome, SearchPolicy, SearchState, SendingSearch
from .transport import Router, UDPRouter, encode_frame

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "EncodingError",
    "RouterError",
    "SSDPSearchError",
    "UnsupportedOperationError",
    "DeviceTypeHeader",
    "OutgoingSearchRequest",
    "RootDeviceHeader",
    "ServiceTypeHeader",
    "STAllHeader",
    "UDNHeader",
    "build_search_request",
    "parse_search_target",
    "SearchOutcome",
    "SearchPolicy",
    "SearchState",
    "SendingSearch",
    "Router",
    "UDPRouter",
    "encode_frame",
]
