"""Config module - YAML search configuration."""

from .parser import RouterConfig, SearchConfig, parse_search_config, parse_search_config_data

__all__ = [
    "RouterConfig",
    "SearchConfig",
    "parse_search_config",
    "parse_search_config_data",
]
