"""Diff parsing service."""

from lint2hub.services.diff.parser import HunkHeader, build_position_index, split_diff_by_file
from lint2hub.services.diff.scanner import iter_lines
from lint2hub.services.diff.snapshot import DiffSnapshot

__all__ = [
    "DiffSnapshot",
    "HunkHeader",
    "build_position_index",
    "iter_lines",
    "split_diff_by_file",
]
