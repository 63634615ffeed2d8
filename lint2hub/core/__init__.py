"""Shared library utilities."""

from lint2hub.core.deadline import Deadline
from lint2hub.core.logging import configure_logging, get_logger

__all__ = [
    "Deadline",
    "configure_logging",
    "get_logger",
]
