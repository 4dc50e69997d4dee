"""Transport module - frame encoding and UDP routing."""

from .frame_encoder import encode_frame
from .router import DEFAULT_TTL, Router, UDPRouter

__all__ = [
    "encode_frame",
    "DEFAULT_TTL",
    "Router",
    "UDPRouter",
]
