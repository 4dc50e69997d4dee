"""Reporting module - JSON search reports."""

from .json_reporter import JsonReporter

__all__ = ["JsonReporter"]
