"""JSON report generator for search runs.

Generates structured JSON reports from search outcomes.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from ..search.policy import SearchPolicy
from ..search.scheduler import SearchOutcome


class JsonReporter:
    """Generates JSON reports from search outcomes."""

    def generate(
        self,
        target: str,
        mx_seconds: int,
        policy: SearchPolicy,
        outcome: SearchOutcome,
        frame: Optional[bytes] = None,
    ) -> dict[str, Any]:
        """Generate a JSON report for one search.

        Args:
            target: ST header value.
            mx_seconds: MX header value.
            policy: Policy the search ran with.
            outcome: Outcome of the search.
            frame: Encoded broadcast frame, included as text when given.

        Returns:
            Report dictionary ready for JSON serialization.
        """
        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "target": target,
            "mx": mx_seconds,
            "status": outcome.state.value,
            "policy": {
                "repeat_count": policy.repeat_count,
                "interval_ms": policy.interval_ms,
                "trailing_wait": policy.trailing_wait,
            },
            "summary": {
                "rounds_completed": outcome.rounds_completed,
                "rounds_planned": policy.repeat_count,
                "duration_ms": outcome.duration_ms,
            },
            "frame": frame.decode("ascii") if frame is not None else None,
            "error": str(outcome.error) if outcome.error else None,
        }

    def save(self, report: dict[str, Any], path: Path) -> Path:
        """Save report to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2, ensure_ascii=False)

        return path

    def to_json_string(self, report: dict[str, Any], pretty: bool = True) -> str:
        if pretty:
            return json.dumps(report, indent=2, ensure_ascii=False)
        return json.dumps(report, ensure_ascii=False)

    def generate_cli_output(
        self,
        report: dict[str, Any],
        report_path: Optional[str] = None,
    ) -> dict[str, Any]:
        """Generate the CLI JSON output.

        {
            "success": bool,
            "command": "search",
            "data": { ... },
            "message": str
        }
        """
        summary = report["summary"]
        status = report["status"]

        data: dict[str, Any] = {
            "target": report["target"],
            "mx": report["mx"],
            "status": status,
            "rounds_completed": summary["rounds_completed"],
            "rounds_planned": summary["rounds_planned"],
            "duration_ms": summary["duration_ms"],
        }

        if report_path:
            data["report_path"] = report_path

        if status == "completed":
            message = f"Sent {summary['rounds_completed']} search rounds"
        elif status == "cancelled":
            message = f"Search cancelled after {summary['rounds_completed']} of {summary['rounds_planned']} rounds"
        else:
            message = f"Search failed: {report.get('error') or 'Unknown error'}"

        return {
            "success": status == "completed",
            "command": "search",
            "data": data,
            "message": message,
        }
