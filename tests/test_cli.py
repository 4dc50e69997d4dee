import json

import pytest
from click.testing import CliRunner

from conftest import FakeRouter
from ssdp_search import cli
from ssdp_search.errors import RouterError
from ssdp_search.search.scheduler import SendingSearch


class FakeUDPRouter(FakeRouter):
    instances = []

    def __init__(self, unicast_endpoint, ttl=2, **kwargs):
        super().__init__(**kwargs)
        self.unicast_endpoint = unicast_endpoint
        self.ttl = ttl
        FakeUDPRouter.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        pass


class FailingUDPRouter(FakeUDPRouter):
    def broadcast(self, data, port):
        raise RouterError("network unreachable")


@pytest.fixture(autouse=True)
def fake_router(monkeypatch):
    FakeUDPRouter.instances = []
    monkeypatch.setattr(cli, "UDPRouter", FakeUDPRouter)


def run(*args):
    return CliRunner().invoke(cli.main, list(args))


def test_search_completes():
    result = run("--repeat", "2", "--interval-ms", "0")

    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert output["success"] is True
    assert output["command"] == "search"
    assert output["data"]["target"] == "ssdp:all"
    assert output["data"]["rounds_completed"] == 2

    router = FakeUDPRouter.instances[0]
    assert router.pairs == 2
    assert router.unicast_endpoint == ("239.255.255.250", 1900)


def test_target_mx_and_unicast_options():
    result = run(
        "-t", "urn:schemas-upnp-org:service:ContentDirectory:1",
        "--mx", "1",
        "--repeat", "1",
        "--no-trailing-wait",
        "--unicast", "10.0.0.5:1900",
    )

    assert result.exit_code == 0
    router = FakeUDPRouter.instances[0]
    frame = router.broadcasts[0][0]
    assert b"ST: urn:schemas-upnp-org:service:ContentDirectory:1\r\n" in frame
    assert b"MX: 1\r\n" in frame
    assert router.unicast_endpoint == ("10.0.0.5", 1900)


def test_config_file_with_overrides(tmp_path):
    path = tmp_path / "search.yaml"
    path.write_text(
        "search:\n  target: upnp:rootdevice\n  mx: 4\n"
        "policy:\n  repeat_count: 3\n  interval_ms: 0\n"
        "router:\n  ttl: 5\n",
        encoding="utf-8",
    )

    result = run("--config", str(path), "--repeat", "1")

    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert output["data"]["target"] == "upnp:rootdevice"
    assert output["data"]["mx"] == 4
    assert output["data"]["rounds_planned"] == 1
    assert FakeUDPRouter.instances[0].ttl == 5


def test_report_saved(tmp_path):
    report_path = tmp_path / "reports" / "search.json"

    result = run("--repeat", "1", "--interval-ms", "0", "--report", str(report_path))

    assert result.exit_code == 0
    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert report["status"] == "completed"
    assert report["frame"].startswith("M-SEARCH * HTTP/1.1\r\n")
    assert json.loads(result.stdout)["data"]["report_path"] == str(report_path)


@pytest.mark.parametrize("args", [
    ["--target", "bogus"],
    ["--mx", "0"],
    ["--repeat", "0"],
    ["--unicast", "no-port"],
    ["--target", "uuid:café"],
    ["--target", "uuid:abc\r\nX-Injected: 1"],
])
def test_invalid_input(args):
    result = run(*args)

    assert result.exit_code == 1
    output = json.loads(result.stdout)
    assert output["success"] is False
    assert all(router.calls == [] for router in FakeUDPRouter.instances)


def test_router_failure(monkeypatch):
    monkeypatch.setattr(cli, "UDPRouter", FailingUDPRouter)

    result = run("--interval-ms", "0")

    assert result.exit_code == 1
    output = json.loads(result.stdout)
    assert output["success"] is False
    assert output["data"]["status"] == "failed"
    assert "network unreachable" in output["message"]


class InterruptedFuture:
    """Future whose result() is interrupted by Ctrl-C."""

    def __init__(self, search):
        self.search = search

    def result(self):
        raise KeyboardInterrupt

    def exception(self):
        self.search.execute()
        return None


def test_keyboard_interrupt_cancels(monkeypatch):
    monkeypatch.setattr(SendingSearch, "start", lambda self, executor=None: InterruptedFuture(self))

    result = run("--interval-ms", "0")

    assert result.exit_code == 130
    output = json.loads(result.stdout)
    assert output["success"] is False
    assert output["data"]["status"] == "cancelled"
    assert output["data"]["rounds_completed"] == 0
    assert FakeUDPRouter.instances[0].calls == []


class BrokenUDPRouter(FakeUDPRouter):
    def send(self, message):
        raise TypeError("bug in router")


def test_unexpected_error_propagates(monkeypatch):
    monkeypatch.setattr(cli, "UDPRouter", BrokenUDPRouter)

    result = run("--interval-ms", "0")

    assert result.exit_code == 1
    assert isinstance(result.exception, TypeError)
