"""Router capability used to put search datagrams on the network.

The scheduler only depends on the ``Router`` protocol. ``UDPRouter`` is a
plain UDP implementation: one socket, no interface selection and no
multicast group membership.
"""

import logging
import socket
from typing import Optional, Protocol

from ..errors import RouterError
from ..message.headers import MULTICAST_ADDRESS, UPNP_MULTICAST_PORT
from ..message.request import UpnpMessage
from .frame_encoder import encode_frame

logger = logging.getLogger(__name__)

# Multicast TTL for SSDP (UDA recommends a small value)
DEFAULT_TTL = 2


class Router(Protocol):
    """Sends messages point-to-point and broadcasts raw frames."""

    def send(self, message: UpnpMessage) -> None:
        ...

    def broadcast(self, data: bytes, port: int) -> None:
        ...


class UDPRouter:
    """Router that sends UDP datagrams from a single socket."""

    def __init__(
        self,
        unicast_endpoint: tuple[str, int] = (MULTICAST_ADDRESS, UPNP_MULTICAST_PORT),
        multicast_address: str = MULTICAST_ADDRESS,
        ttl: int = DEFAULT_TTL,
    ):
        """Initialize UDP router.

        Args:
            unicast_endpoint: (host, port) that send() delivers to.
            multicast_address: Group that broadcast() delivers to.
            ttl: Multicast time-to-live. Default: 2.
        """
        self.unicast_endpoint = unicast_endpoint
        self.multicast_address = multicast_address
        self.ttl = ttl
        self._sock: Optional[socket.socket] = None

    def _create_socket(self) -> socket.socket:
        """Create and configure the UDP socket."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, self.ttl)
        except OSError:
            sock.close()
            raise
        return sock

    def _get_socket(self) -> socket.socket:
        if self._sock is None:
            try:
                self._sock = self._create_socket()
            except OSError as e:
                raise RouterError(f"Can't create UDP socket: {e}") from e
        return self._sock

    def send(self, message: UpnpMessage) -> None:
        """Send a message to the unicast endpoint."""
        self._sendto(encode_frame(message), self.unicast_endpoint)

    def broadcast(self, data: bytes, port: int) -> None:
        """Send raw bytes to the multicast group on the given port."""
        self._sendto(data, (self.multicast_address, port))

    def _sendto(self, data: bytes, address: tuple[str, int]) -> None:
        sock = self._get_socket()
        try:
            sock.sendto(data, address)
        except OSError as e:
            raise RouterError(f"Sending {len(data)} bytes to {address[0]}:{address[1]} failed: {e}") from e
        logger.debug("Sent %d bytes to %s:%d", len(data), address[0], address[1])

    def close(self) -> None:
        """Close the UDP socket."""
        if self._sock:
            try:
                self._sock.close()
            except OSError:
                pass
            self._sock = None

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
