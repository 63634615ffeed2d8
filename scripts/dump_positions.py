#!/usr/bin/env python3
"""Print the commentable positions of a local diff file."""
import sys

from lint2hub.services.diff import DiffSnapshot


def main(path: str) -> None:
    with open(path, encoding="utf-8") as handle:
        snapshot = DiffSnapshot.from_diff(handle.read(), commit_id="local")

    for file, positions in sorted(snapshot.files.items()):
        for line, position in sorted(positions.items()):
            print(f"{file}:{line}\t{position}")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(f"usage: {sys.argv[0]} DIFF_FILE", file=sys.stderr)
        sys.exit(2)
    main(sys.argv[1])
