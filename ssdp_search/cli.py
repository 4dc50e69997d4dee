"""CLI entry point for the SSDP search tool.

    ssdp-search --target ssdp:all --mx 3
    python -m ssdp_search.cli --config search.yaml -v
"""

import json
import logging
import sys
from dataclasses import replace
from typing import Optional

import click

from .config.parser import SearchConfig, parse_search_config
from .errors import ConfigurationError, SSDPSearchError
from .message.headers import parse_search_target
from .reporting.json_reporter import JsonReporter
from .search.scheduler import SendingSearch
from .transport.router import UDPRouter

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.command()
@click.option("--target", "-t", help="Search target, e.g. ssdp:all or urn:schemas-upnp-org:device:MediaServer:1.")
@click.option("--mx", type=int, help="Maximum response delay in seconds (default: 3).")
@click.option("--repeat", type=int, help="Number of search rounds (default: 5).")
@click.option("--interval-ms", type=int, help="Wait between rounds in milliseconds (default: 500).")
@click.option("--trailing-wait/--no-trailing-wait", default=None, help="Wait after the final round too.")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="YAML config file.")
@click.option("--unicast", help="HOST:PORT the point-to-point send goes to.")
@click.option("--report", "report_path", type=click.Path(dir_okay=False), help="Save a JSON report to this file.")
@click.option("--pretty", is_flag=True, help="Pretty print output.")
@click.option("-v", "--verbose", count=True, help="Log INFO (-v) or DEBUG (-vv) to stderr.")
def main(
    target: Optional[str],
    mx: Optional[int],
    repeat: Optional[int],
    interval_ms: Optional[int],
    trailing_wait: Optional[bool],
    config_path: Optional[str],
    unicast: Optional[str],
    report_path: Optional[str],
    pretty: bool,
    verbose: int,
):
    """Send SSDP M-SEARCH discovery requests."""
    setup_logging(verbose)

    try:
        config = parse_search_config(config_path) if config_path else SearchConfig()
        config = apply_overrides(config, target, mx, repeat, interval_ms, trailing_wait, unicast)
    except SSDPSearchError as e:
        output_error(f"Invalid configuration: {e}")
        sys.exit(1)

    with UDPRouter(config.router.unicast_endpoint, ttl=config.router.ttl) as router:
        try:
            search = SendingSearch(
                router,
                search_target=config.target,
                mx_seconds=config.mx_seconds,
                policy=config.policy,
            )
        except SSDPSearchError as e:
            output_error(f"Can't prepare search: {e}")
            sys.exit(1)

        future = search.start()
        try:
            future.result()
        except KeyboardInterrupt:
            search.cancel()
            future.exception()
        except SSDPSearchError:
            # reported through search.outcome
            pass

    reporter = JsonReporter()
    report = reporter.generate(
        target=config.target.value,
        mx_seconds=config.mx_seconds,
        policy=config.policy,
        outcome=search.outcome,
        frame=search.frame,
    )

    saved_path = None
    if report_path:
        saved_path = str(reporter.save(report, report_path))

    output = reporter.generate_cli_output(report, saved_path)
    click.echo(reporter.to_json_string(output, pretty=pretty))

    if search.outcome.cancelled:
        sys.exit(130)
    if not output["success"]:
        sys.exit(1)


def apply_overrides(
    config: SearchConfig,
    target: Optional[str],
    mx: Optional[int],
    repeat: Optional[int],
    interval_ms: Optional[int],
    trailing_wait: Optional[bool],
    unicast: Optional[str],
) -> SearchConfig:
    """Apply command-line options on top of the loaded config."""
    if target is not None:
        config.target = parse_search_target(target)
    if mx is not None:
        config.mx_seconds = mx

    policy_changes = {
        key: value
        for key, value in (
            ("repeat_count", repeat),
            ("interval_ms", interval_ms),
            ("trailing_wait", trailing_wait),
        )
        if value is not None
    }
    if policy_changes:
        config.policy = replace(config.policy, **policy_changes)

    if unicast is not None:
        config.router.unicast_host, config.router.unicast_port = parse_endpoint(unicast)

    return config


def parse_endpoint(text: str) -> tuple[str, int]:
    """Parse HOST:PORT."""
    host, sep, port = text.rpartition(":")
    if not sep or not host or not port.isdigit():
        raise ConfigurationError(f"Expected HOST:PORT, got '{text}'")
    return host, int(port)


def setup_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def output_error(message: str):
    """Output error in CLI JSON format."""
    output = {
        "success": False,
        "command": "search",
        "data": None,
        "message": message,
    }
    click.echo(json.dumps(output, ensure_ascii=False))


if __name__ == "__main__":
    main()
