"""Per-session view of a pull request diff."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from lint2hub.services.diff.parser import build_position_index, split_diff_by_file


@dataclass(frozen=True)
class DiffSnapshot:
    """Line-to-position indexes of every file in one diff, at one commit."""

    commit_id: str
    files: Mapping[str, Mapping[int, int]]

    @classmethod
    def from_diff(cls, diff: str, commit_id: str) -> "DiffSnapshot":
        """Build a snapshot from raw unified diff text."""
        files = {
            path: MappingProxyType(build_position_index(file_diff))
            for path, file_diff in split_diff_by_file(diff).items()
        }
        return cls(commit_id=commit_id, files=MappingProxyType(files))

    def __contains__(self, file: object) -> bool:
        return file in self.files

    def get_position(self, file: str, line: int) -> Optional[int]:
        """Return the diff position of ``line`` in ``file``, or None if absent."""
        positions = self.files.get(file)
        if positions is None:
            return None
        return positions.get(line)
