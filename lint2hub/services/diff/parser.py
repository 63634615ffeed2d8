"""Unified diff parsing for GitHub review comment positions.

GitHub anchors inline review comments on a ``position``: the number of lines
below the first ``@@`` hunk header of a file's diff. The header itself is
position 0, the line just below it is position 1, and the count keeps running
across later hunks of the same file.
"""

import re
from dataclasses import dataclass
from typing import Optional

from lint2hub.services.diff.scanner import iter_lines

FILE_HEADER_RE = re.compile(r"^diff --git a/(?P<old_path>.*) b/(?P<new_path>.*)$")
HUNK_HEADER_RE = re.compile(
    r"^@@ -(?P<old_start>\d+)(?:,(?P<old_count>\d+))? "
    r"\+(?P<new_start>\d+)(?:,(?P<new_count>\d+))? @@"
)

ADDITION = "+"
CONTEXT = " "


@dataclass(frozen=True)
class HunkHeader:
    """Line ranges from an ``@@ -a,b +c,d @@`` header."""

    old_start: int
    old_count: int
    new_start: int
    new_count: int

    @classmethod
    def parse(cls, line: str) -> Optional["HunkHeader"]:
        """Parse a hunk header line, or return None if ``line`` is not one."""
        match = HUNK_HEADER_RE.match(line)
        if not match:
            return None
        # An omitted count means a single-line range.
        return cls(
            old_start=int(match.group("old_start")),
            old_count=int(match.group("old_count") or 1),
            new_start=int(match.group("new_start")),
            new_count=int(match.group("new_count") or 1),
        )


def split_diff_by_file(diff: str) -> dict[str, str]:
    """Split a multi-file diff into per-file hunk text.

    Keys are destination paths (the ``b/`` side, so renamed files are keyed by
    their new name). Each value starts at the file's first hunk header and
    runs up to the next file header. Files with no hunks, such as pure renames
    or binary changes, are left out.
    """
    files: dict[str, str] = {}
    current_file: Optional[str] = None
    first_hunk: Optional[int] = None
    offset = 0

    for line in iter_lines(diff):
        header = FILE_HEADER_RE.match(line)
        if header:
            if current_file is not None and first_hunk is not None:
                files[current_file] = diff[first_hunk:offset]
            current_file = header.group("new_path")
            first_hunk = None
        elif first_hunk is None and current_file is not None and HUNK_HEADER_RE.match(line):
            first_hunk = offset

        offset += len(line) + 1

    if current_file is not None and first_hunk is not None:
        files[current_file] = diff[first_hunk:offset]

    return files


def build_position_index(file_diff: str) -> dict[int, int]:
    """Map new-file line numbers to diff positions for one file.

    ``file_diff`` is a single file's hunk text as produced by
    :func:`split_diff_by_file`. Only added lines are indexed; context lines
    advance the new-file line number but cannot be commented on, and
    deletions or ``\\ No newline at end of file`` markers are skipped.
    """
    positions: dict[int, int] = {}
    line_number = 0

    for position, line in enumerate(iter_lines(file_diff)):
        hunk = HunkHeader.parse(line)
        if hunk is not None:
            line_number = hunk.new_start
        elif line.startswith(ADDITION):
            positions[line_number] = position
            line_number += 1
        elif line.startswith(CONTEXT):
            line_number += 1

    return positions
