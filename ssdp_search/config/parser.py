"""YAML search configuration parser.

Parses search configuration files into SearchConfig objects:

    search:
      target: "urn:schemas-upnp-org:device:MediaServer:1"
      mx: 3
    policy:
      repeat_count: 5
      interval_ms: 500
      trailing_wait: true
    router:
      unicast_host: 239.255.255.250
      unicast_port: 1900
      ttl: 2
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

import yaml

from ..errors import ConfigurationError
from ..message.headers import (
    MULTICAST_ADDRESS,
    MXHeader,
    STAllHeader,
    UPNP_MULTICAST_PORT,
    UpnpHeader,
    parse_search_target,
)
from ..search.policy import SearchPolicy
from ..transport.router import DEFAULT_TTL


@dataclass
class RouterConfig:
    """Settings for the default UDP router."""
    unicast_host: str = MULTICAST_ADDRESS
    unicast_port: int = UPNP_MULTICAST_PORT
    ttl: int = DEFAULT_TTL

    @property
    def unicast_endpoint(self) -> tuple[str, int]:
        return (self.unicast_host, self.unicast_port)


@dataclass
class SearchConfig:
    """Everything needed to construct a search."""
    target: UpnpHeader = field(default_factory=STAllHeader)
    mx_seconds: int = MXHeader.DEFAULT_VALUE
    policy: SearchPolicy = field(default_factory=SearchPolicy)
    router: RouterConfig = field(default_factory=RouterConfig)


def parse_search_config(file_path: Union[str, Path]) -> SearchConfig:
    """Parse a YAML configuration file into a SearchConfig.

    Args:
        file_path: Path to the YAML file.

    Returns:
        Parsed SearchConfig.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ConfigurationError: If the YAML is malformed or holds invalid values.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")

    if file_path.suffix not in (".yaml", ".yml"):
        raise ConfigurationError(f"Expected .yaml or .yml file, got: {file_path.suffix}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Malformed YAML in {file_path}: {e}") from e

    if data is None:
        raise ConfigurationError(f"Empty config file: {file_path}")

    return parse_search_config_data(data, source=str(file_path))


def parse_search_config_data(data: dict, source: str = "<inline>") -> SearchConfig:
    """Parse a SearchConfig from a dictionary (already loaded YAML).

    Raises:
        ConfigurationError: If a section or value is malformed.
    """
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config must be a YAML mapping, got {type(data).__name__}")

    config = SearchConfig()

    search = _section(data, "search", source)
    if "target" in search:
        target = search["target"]
        if not isinstance(target, str):
            raise ConfigurationError(f"'search.target' must be a string in {source}")
        config.target = parse_search_target(target)
    if "mx" in search:
        config.mx_seconds = _require_int(search["mx"], "search.mx", source, minimum=1)

    policy = _section(data, "policy", source)
    if policy:
        kwargs: dict[str, Any] = {}
        if "repeat_count" in policy:
            kwargs["repeat_count"] = _require_int(policy["repeat_count"], "policy.repeat_count", source, minimum=1)
        if "interval_ms" in policy:
            kwargs["interval_ms"] = _require_int(policy["interval_ms"], "policy.interval_ms", source, minimum=0)
        if "trailing_wait" in policy:
            if not isinstance(policy["trailing_wait"], bool):
                raise ConfigurationError(f"'policy.trailing_wait' must be true or false in {source}")
            kwargs["trailing_wait"] = policy["trailing_wait"]
        config.policy = SearchPolicy(**kwargs)

    router = _section(data, "router", source)
    if "unicast_host" in router:
        config.router.unicast_host = str(router["unicast_host"])
    if "unicast_port" in router:
        config.router.unicast_port = _require_int(router["unicast_port"], "router.unicast_port", source, minimum=1)
    if "ttl" in router:
        config.router.ttl = _require_int(router["ttl"], "router.ttl", source, minimum=1)

    return config


def _section(data: dict, name: str, source: str) -> dict:
    """Get an optional mapping section."""
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"'{name}' must be a mapping in {source}")
    return section


def _require_int(value: Any, context: str, source: str, minimum: int) -> int:
    """Check that a value is an integer no smaller than minimum."""
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ConfigurationError(
            f"'{context}' must be an integer >= {minimum}, got {value!r} ({source})"
        )
    return value
