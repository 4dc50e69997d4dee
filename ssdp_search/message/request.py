"""Search request messages.

Builds the immutable M-SEARCH request sent to the UPnP multicast group.
"""

import logging
from dataclasses import dataclass, replace
from typing import Iterator, Optional, Union

from ..errors import ConfigurationError
from .headers import (
    HostHeader,
    MANHeader,
    MULTICAST_ADDRESS,
    MXHeader,
    UPNP_MULTICAST_PORT,
    UpnpHeader,
    check_line_safe,
    is_search_target,
)

logger = logging.getLogger(__name__)


class UpnpOperation:
    """Base class for the first line of an HTTPU message."""


@dataclass(frozen=True)
class UpnpRequest(UpnpOperation):
    """Request line: method and HTTP minor version."""
    method: str = "M-SEARCH"
    http_minor_version: int = 1


@dataclass(frozen=True)
class UpnpResponse(UpnpOperation):
    """Status line: status code, reason and HTTP minor version."""
    status_code: int = 200
    status_message: str = "OK"
    http_minor_version: int = 1


@dataclass(frozen=True)
class UpnpHeaders:
    """Ordered, immutable header block."""
    entries: tuple[tuple[str, str], ...] = ()

    def get(self, name: str) -> Optional[str]:
        """Value of the first header with this name (case-insensitive)."""
        for key, value in self.entries:
            if key.lower() == name.lower():
                return value
        return None

    def with_header(self, name: str, value: Union[str, UpnpHeader]) -> "UpnpHeaders":
        """Copy with a header replaced in place, or appended if absent."""
        value = str(value)
        check_line_safe(name)
        check_line_safe(value)
        entries = list(self.entries)
        for i, (key, _) in enumerate(entries):
            if key.lower() == name.lower():
                entries[i] = (key, value)
                break
        else:
            entries.append((name, value))
        return UpnpHeaders(tuple(entries))

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __str__(self) -> str:
        return "".join(f"{key}: {value}\r\n" for key, value in self.entries)


@dataclass(frozen=True)
class UpnpMessage:
    """An operation plus its headers. Messages never carry a body."""
    operation: UpnpOperation
    headers: UpnpHeaders

    def with_header(self, name: str, value: Union[str, UpnpHeader]):
        """Derived copy of this message with one header set."""
        return replace(self, headers=self.headers.with_header(name, value))


@dataclass(frozen=True)
class OutgoingSearchRequest(UpnpMessage):
    """M-SEARCH request for one search target."""
    search_target: UpnpHeader
    mx_seconds: int


def build_search_request(
    search_target: UpnpHeader,
    mx_seconds: int = MXHeader.DEFAULT_VALUE,
    host: str = MULTICAST_ADDRESS,
    port: int = UPNP_MULTICAST_PORT,
) -> OutgoingSearchRequest:
    """Validate inputs and build an M-SEARCH request.

    Args:
        search_target: One of the ST header variants.
        mx_seconds: Maximum response delay in seconds. Default: 3.
        host: Multicast group written into the HOST header.
        port: Port written into the HOST header.

    Returns:
        The immutable search request.

    Raises:
        ConfigurationError: If the target isn't an ST variant or MX isn't positive.
    """
    if not is_search_target(search_target):
        raise ConfigurationError(
            "Given search target instance is not a valid header class for type ST: "
            f"{type(search_target).__name__}",
            type(search_target),
        )

    if isinstance(mx_seconds, bool) or not isinstance(mx_seconds, int) or mx_seconds <= 0:
        raise ConfigurationError(f"MX must be a positive integer, got {mx_seconds!r}", MXHeader)

    headers = (
        UpnpHeaders()
        .with_header("HOST", HostHeader(host, port))
        .with_header("MAN", MANHeader())
        .with_header("MX", MXHeader(mx_seconds))
        .with_header("ST", search_target)
    )

    logger.debug("Built search request for %s (MX %d)", search_target, mx_seconds)

    return OutgoingSearchRequest(
        operation=UpnpRequest("M-SEARCH", 1),
        headers=headers,
        search_target=search_target,
        mx_seconds=mx_seconds,
    )
