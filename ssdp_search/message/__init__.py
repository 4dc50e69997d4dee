"""Message module - SSDP headers and search requests."""

from .headers import (
    DeviceTypeHeader,
    HeaderType,
    HostHeader,
    MANHeader,
    MULTICAST_ADDRESS,
    MXHeader,
    RootDeviceHeader,
    ServiceTypeHeader,
    STAllHeader,
    ST_HEADER_TYPES,
    UDNHeader,
    UPNP_MULTICAST_PORT,
    UpnpHeader,
    is_search_target,
    parse_search_target,
)
from .request import (
    OutgoingSearchRequest,
    UpnpHeaders,
    UpnpMessage,
    UpnpOperation,
    UpnpRequest,
    UpnpResponse,
    build_search_request,
)

__all__ = [
    "DeviceTypeHeader",
    "HeaderType",
    "HostHeader",
    "MANHeader",
    "MULTICAST_ADDRESS",
    "MXHeader",
    "RootDeviceHeader",
    "ServiceTypeHeader",
    "STAllHeader",
    "ST_HEADER_TYPES",
    "UDNHeader",
    "UPNP_MULTICAST_PORT",
    "UpnpHeader",
    "is_search_target",
    "parse_search_target",
    "OutgoingSearchRequest",
    "UpnpHeaders",
    "UpnpMessage",
    "UpnpOperation",
    "UpnpRequest",
    "UpnpResponse",
    "build_search_request",
]
