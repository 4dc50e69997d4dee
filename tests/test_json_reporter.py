from ssdp_search.errors import RouterError
from ssdp_search.reporting.json_reporter import JsonReporter
from ssdp_search.search.policy import SearchPolicy
from ssdp_search.search.scheduler import SearchOutcome, SearchState


def make_report(outcome, frame=None):
    return JsonReporter().generate("ssdp:all", 3, SearchPolicy(), outcome, frame)


def test_completed_report():
    report = make_report(SearchOutcome(SearchState.COMPLETED, 5, duration_ms=2500), b"M-SEARCH * HTTP/1.1\r\n\r\n")

    assert report["status"] == "completed"
    assert report["summary"] == {"rounds_completed": 5, "rounds_planned": 5, "duration_ms": 2500}
    assert report["frame"] == "M-SEARCH * HTTP/1.1\r\n\r\n"
    assert report["error"] is None

    output = JsonReporter().generate_cli_output(report)
    assert output["success"] is True
    assert output["message"] == "Sent 5 search rounds"
    assert "report_path" not in output["data"]


def test_cancelled_output():
    report = make_report(SearchOutcome(SearchState.CANCELLED, 2))
    output = JsonReporter().generate_cli_output(report, "out.json")

    assert output["success"] is False
    assert output["message"] == "Search cancelled after 2 of 5 rounds"
    assert output["data"]["report_path"] == "out.json"


def test_failed_output():
    report = make_report(SearchOutcome(SearchState.FAILED, 1, error=RouterError("boom")))
    output = JsonReporter().generate_cli_output(report)

    assert report["error"] == "boom"
    assert output["message"] == "Search failed: boom"


def test_save(tmp_path):
    reporter = JsonReporter()
    path = reporter.save(make_report(SearchOutcome(SearchState.COMPLETED, 5)), tmp_path / "a" / "r.json")
    assert path.exists()
