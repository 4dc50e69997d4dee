import pytest

from ssdp_search.errors import EncodingError, UnsupportedOperationError
from ssdp_search.message.headers import DeviceTypeHeader, STAllHeader, UDNHeader
from ssdp_search.message.request import (
    UpnpHeaders,
    UpnpMessage,
    UpnpOperation,
    UpnpRequest,
    UpnpResponse,
    build_search_request,
)
from ssdp_search.transport.frame_encoder import encode_frame


def test_search_everything_frame():
    frame = encode_frame(build_search_request(STAllHeader(), 3))

    assert frame == (
        b"M-SEARCH * HTTP/1.1\r\n"
        b"HOST: 239.255.255.250:1900\r\n"
        b'MAN: "ssdp:discover"\r\n'
        b"MX: 3\r\n"
        b"ST: ssdp:all\r\n"
        b"\r\n"
    )
    assert frame.startswith(b"M-SEARCH * HTTP/1.1\r\n")
    assert b"\r\nMX: 3\r\n" in frame
    assert b'\r\nMAN: "ssdp:discover"\r\n' in frame
    assert frame.endswith(b"\r\n\r\n")


def test_encoding_is_deterministic():
    message = build_search_request(DeviceTypeHeader("MediaServer"), 5)
    assert encode_frame(message) == encode_frame(message)
    assert encode_frame(message) == encode_frame(build_search_request(DeviceTypeHeader("MediaServer"), 5))


def test_frame_ends_with_single_blank_line():
    frame = encode_frame(build_search_request(STAllHeader()).with_header("X-EXTRA", "1"))

    head, sep, body = frame.partition(b"\r\n\r\n")
    assert sep == b"\r\n\r\n"
    assert body == b""
    assert not frame.endswith(b"\r\n\r\n\r\n")


def test_response_status_line():
    message = UpnpMessage(
        UpnpResponse(200, "OK", 1),
        UpnpHeaders((("ST", "upnp:rootdevice"), ("EXT", ""))),
    )
    assert encode_frame(message) == b"HTTP/1.1 200 OK\r\nST: upnp:rootdevice\r\nEXT: \r\n\r\n"


def test_response_minor_version():
    message = build_search_request(STAllHeader())
    message = UpnpMessage(UpnpResponse(404, "Not Found", 0), message.headers)
    assert encode_frame(message).startswith(b"HTTP/1.0 404 Not Found\r\n")


def test_unsupported_operation():
    message = UpnpMessage(UpnpOperation(), UpnpHeaders())
    with pytest.raises(UnsupportedOperationError):
        encode_frame(message)


def test_non_ascii_header_value():
    message = build_search_request(UDNHeader("café"))

    with pytest.raises(EncodingError) as exc_info:
        encode_frame(message)

    assert "ST: uuid:café\r\n" in exc_info.value.data
    assert exc_info.value.data.startswith("M-SEARCH * HTTP/1.1\r\n")


@pytest.mark.parametrize("entries", [
    (("ST", "uuid:abc\r\n\r\nBODY"),),
    (("ST", "ssdp:all"), ("X-INJECTED\r\nFOO", "1")),
    (("ST", "ssdp:all\n"),),
])
def test_line_break_in_headers(entries):
    message = UpnpMessage(UpnpRequest(), UpnpHeaders(entries))

    with pytest.raises(EncodingError) as exc_info:
        encode_frame(message)

    assert exc_info.value.data.startswith("M-SEARCH * HTTP/1.1\r\n")
