"""UPnP header values used in SSDP discovery messages.

Defines the search target (ST) variants plus the other header-shaped
values an M-SEARCH request carries.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..errors import ConfigurationError


# UPnP multicast group and SSDP port
MULTICAST_ADDRESS = "239.255.255.250"
UPNP_MULTICAST_PORT = 1900

DEFAULT_NAMESPACE = "schemas-upnp-org"


class HeaderType(str, Enum):
    """Header names written on the wire."""
    ST = "ST"
    MX = "MX"
    MAN = "MAN"
    HOST = "HOST"


class UpnpHeader:
    """Base class for header values."""

    header_type: HeaderType

    @property
    def value(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class STAllHeader(UpnpHeader):
    """Search for all devices and services."""
    header_type = HeaderType.ST

    @property
    def value(self) -> str:
        return "ssdp:all"


@dataclass(frozen=True)
class RootDeviceHeader(UpnpHeader):
    """Search for root devices only."""
    header_type = HeaderType.ST

    @property
    def value(self) -> str:
        return "upnp:rootdevice"


@dataclass(frozen=True)
class DeviceTypeHeader(UpnpHeader):
    """Search for a device type, e.g. urn:schemas-upnp-org:device:MediaServer:1."""
    device_type: str
    version: int = 1
    namespace: str = DEFAULT_NAMESPACE
    header_type = HeaderType.ST

    def __post_init__(self):
        _check_type_name(self, self.device_type, self.version, self.namespace)

    @property
    def value(self) -> str:
        return f"urn:{self.namespace}:device:{self.device_type}:{self.version}"


@dataclass(frozen=True)
class ServiceTypeHeader(UpnpHeader):
    """Search for a service type, e.g. urn:schemas-upnp-org:service:ContentDirectory:1."""
    service_type: str
    version: int = 1
    namespace: str = DEFAULT_NAMESPACE
    header_type = HeaderType.ST

    def __post_init__(self):
        _check_type_name(self, self.service_type, self.version, self.namespace)

    @property
    def value(self) -> str:
        return f"urn:{self.namespace}:service:{self.service_type}:{self.version}"


@dataclass(frozen=True)
class UDNHeader(UpnpHeader):
    """Search for one device by its unique device name."""
    uuid: str
    header_type = HeaderType.ST

    def __post_init__(self):
        if not self.uuid:
            raise ConfigurationError("UDN search target requires a uuid", type(self))
        check_line_safe(self.uuid, type(self))

    @property
    def value(self) -> str:
        return f"uuid:{self.uuid}"


@dataclass(frozen=True)
class MXHeader(UpnpHeader):
    """Maximum seconds a responder may wait before replying."""
    seconds: int = 3
    header_type = HeaderType.MX

    DEFAULT_VALUE = 3

    @property
    def value(self) -> str:
        return str(self.seconds)


@dataclass(frozen=True)
class MANHeader(UpnpHeader):
    """Mandatory extension declaration."""
    extension: str = "ssdp:discover"
    header_type = HeaderType.MAN

    @property
    def value(self) -> str:
        return f'"{self.extension}"'


@dataclass(frozen=True)
class HostHeader(UpnpHeader):
    """Multicast group and port the request is addressed to."""
    host: str = MULTICAST_ADDRESS
    port: int = UPNP_MULTICAST_PORT
    header_type = HeaderType.HOST

    @property
    def value(self) -> str:
        return f"{self.host}:{self.port}"


# Header classes accepted as a search target
ST_HEADER_TYPES = (
    STAllHeader,
    RootDeviceHeader,
    DeviceTypeHeader,
    ServiceTypeHeader,
    UDNHeader,
)

_URN_PATTERN = re.compile(r"^urn:(?P<ns>[^:]+):(?P<kind>device|service):(?P<name>[^:]+):(?P<version>\d+)$")


def is_search_target(value: object) -> bool:
    """Whether a value may be used as the ST header."""
    return isinstance(value, ST_HEADER_TYPES)


def parse_search_target(text: str) -> UpnpHeader:
    """Parse an ST header string into its search target variant.

    Args:
        text: ST value, e.g. "ssdp:all" or "urn:schemas-upnp-org:device:Basic:1".

    Returns:
        The matching search target header.

    Raises:
        ConfigurationError: If the string isn't a known ST form.
    """
    text = text.strip()

    if text == "ssdp:all":
        return STAllHeader()
    if text == "upnp:rootdevice":
        return RootDeviceHeader()
    if text.startswith("uuid:"):
        return UDNHeader(text[len("uuid:"):])

    match = _URN_PATTERN.match(text)
    if match:
        header_class = DeviceTypeHeader if match["kind"] == "device" else ServiceTypeHeader
        return header_class(match["name"], int(match["version"]), match["ns"])

    raise ConfigurationError(f"Not a valid search target: '{text}'")


def check_line_safe(text: str, header_type: Optional[type] = None) -> None:
    """Reject CR and LF, which would end the header line early."""
    if "\r" in text or "\n" in text:
        raise ConfigurationError(f"Header text must not contain line breaks: {text!r}", header_type)


def _check_type_name(header: UpnpHeader, name: str, version: int, namespace: str) -> None:
    """Validate the parts of a urn: search target."""
    check_line_safe(name, type(header))
    check_line_safe(namespace, type(header))
    if not name or ":" in name:
        raise ConfigurationError(f"Invalid type name '{name}'", type(header))
    if not namespace or ":" in namespace:
        raise ConfigurationError(f"Invalid namespace '{namespace}'", type(header))
    if isinstance(version, bool) or not isinstance(version, int) or version <= 0:
        raise ConfigurationError(f"Version must be a positive integer, got {version!r}", type(header))
