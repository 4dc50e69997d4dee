"""Encodes UPnP messages into HTTPU datagram frames.

Frame layout:
- Request line ("M-SEARCH * HTTP/1.1") or status line ("HTTP/1.1 200 OK")
- One "Name: value" line per header
- A single blank line, no body
"""

from ..errors import EncodingError, UnsupportedOperationError
from ..message.request import UpnpMessage, UpnpRequest, UpnpResponse

CRLF = "\r\n"


def encode_frame(message: UpnpMessage) -> bytes:
    """Serialize a request or response message into datagram bytes.

    Args:
        message: Message with an operation and headers.

    Returns:
        US-ASCII encoded frame.

    Raises:
        UnsupportedOperationError: If the operation is neither request nor response.
        EncodingError: If any part of the message isn't US-ASCII.
    """
    operation = message.operation

    if isinstance(operation, UpnpRequest):
        status_line = f"{operation.method} * HTTP/1.{operation.http_minor_version}{CRLF}"
    elif isinstance(operation, UpnpResponse):
        status_line = (
            f"HTTP/1.{operation.http_minor_version} "
            f"{operation.status_code} {operation.status_message}{CRLF}"
        )
    else:
        raise UnsupportedOperationError(
            f"Message operation is not request or response, don't know how to process: {message!r}"
        )

    # No body, but the header block must end with a blank line
    text = status_line + str(message.headers) + CRLF

    for name, value in message.headers:
        if any(c in name + value for c in CRLF):
            raise EncodingError(f"Line break in header {name!r}: {value!r}", data=text)

    # Header names and values are US-ASCII
    try:
        return text.encode("ascii")
    except UnicodeEncodeError as e:
        raise EncodingError(
            f"Can't convert message content to US-ASCII: {e}", data=text
        ) from e
