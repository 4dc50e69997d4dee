import threading

import pytest

from ssdp_search.errors import RouterError


class FakeRouter:
    """Records send/broadcast calls and can fail or cancel on a given round."""

    def __init__(self, fail_send_on=None, fail_broadcast_on=None, cancel_on=None, cancel_event=None):
        self.sent = []
        self.broadcasts = []
        self.calls = []
        self.fail_send_on = fail_send_on
        self.fail_broadcast_on = fail_broadcast_on
        self.cancel_on = cancel_on
        self.cancel_event = cancel_event

    def send(self, message):
        if self.fail_send_on == len(self.sent) + 1:
            raise RouterError("send failed")
        self.sent.append(message)
        self.calls.append("send")

    def broadcast(self, data, port):
        if self.fail_broadcast_on == len(self.broadcasts) + 1:
            raise RouterError("broadcast failed")
        self.broadcasts.append((data, port))
        self.calls.append("broadcast")
        if self.cancel_on == len(self.broadcasts):
            self.cancel_event.set()

    @property
    def pairs(self):
        return len(self.broadcasts)


class RecordingEvent(threading.Event):
    """Event whose wait() returns immediately and records the timeout."""

    def __init__(self):
        super().__init__()
        self.waits = []

    def wait(self, timeout=None):
        self.waits.append(timeout)
        return self.is_set()


@pytest.fixture
def router():
    return FakeRouter()


@pytest.fixture
def cancel_event():
    return RecordingEvent()
