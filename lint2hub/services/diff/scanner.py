"""Lazy line iteration over diff text."""

from typing import Iterator


def iter_lines(text: str) -> Iterator[str]:
    """Yield the lines of ``text`` one at a time, without the ``\\n`` terminator.

    The buffer is never split into a list. A final line without a trailing
    newline is still yielded, and an empty buffer yields nothing.
    """
    pos = 0
    size = len(text)
    while pos < size:
        end = text.find("\n", pos)
        if end == -1:
            end = size
        yield text[pos:end]
        pos = end + 1
