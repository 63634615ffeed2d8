"""Batch mode: read lint findings from a stream and post them in order."""

import re
from typing import Callable, Iterable, Iterator, Optional

from lint2hub.core.exceptions import BatchInputError, SoftCommentError
from lint2hub.core.logging import get_logger
from lint2hub.services.commenter.commenter import Commenter
from lint2hub.services.commenter.schemas import BatchResult, PendingComment

logger = get_logger("commenter.batch")

RecordParser = Callable[[str], PendingComment]

REQUIRED_GROUPS = ("file", "line", "body")
LINE_NUMBER_RE = re.compile(r"[+-]?[0-9]+")


def _make_comment(file: str, line: Optional[str], body: str, raw: str) -> PendingComment:
    # Zero and negative numbers pass here and fail the diff lookup instead.
    if line is None or not LINE_NUMBER_RE.fullmatch(line):
        raise BatchInputError(f"cannot convert line number '{line}' to integer", raw)
    return PendingComment(file=file, line=int(line), body=body)


def parse_tab_record(line: str) -> PendingComment:
    """Parse ``file<TAB>line<TAB>body``; the body may contain further tabs."""
    parts = line.split("\t", 2)
    if len(parts) < 3:
        raise BatchInputError(
            f"malformed batch line, must have 3 parts separated by tab characters: '{line}'",
            line,
        )
    return _make_comment(parts[0], parts[1], parts[2], line)


def compile_record_pattern(pattern: str) -> RecordParser:
    """Build a record parser from a regex with ``file``, ``line`` and ``body`` groups."""
    try:
        regex = re.compile(pattern)
    except re.error as e:
        raise BatchInputError(f"invalid batch pattern '{pattern}': {e}") from e

    missing = [name for name in REQUIRED_GROUPS if name not in regex.groupindex]
    if missing:
        raise BatchInputError(
            f"batch pattern is missing named groups: {', '.join(missing)}"
        )

    def parse(line: str) -> PendingComment:
        match = regex.search(line)
        if not match:
            raise BatchInputError(f"batch line does not match pattern: '{line}'", line)
        return _make_comment(match.group("file"), match.group("line"), match.group("body"), line)

    return parse


def iter_records(lines: Iterable[str], parser: RecordParser = parse_tab_record) -> Iterator[PendingComment]:
    """Parse input lines lazily.

    Parsing stops at the first malformed line so no finding is dropped silently.
    """
    for raw in lines:
        yield parser(raw.rstrip("\r\n"))


def process_batch(
    commenter: Commenter,
    lines: Iterable[str],
    pattern: Optional[str] = None,
) -> BatchResult:
    """Post every finding in ``lines``, sequentially.

    Soft errors are logged and counted per finding. Any other error aborts the
    remaining batch.
    """
    parser = compile_record_pattern(pattern) if pattern else parse_tab_record
    result = BatchResult()

    for pending in iter_records(lines, parser):
        result.processed += 1
        if post_finding(commenter, pending):
            result.posted += 1
        else:
            result.skipped += 1

    logger.info(
        f"Batch complete: {result.processed} findings, "
        f"{result.posted} posted, {result.skipped} skipped"
    )
    return result


def post_finding(commenter: Commenter, pending: PendingComment) -> bool:
    """Post one finding. Returns False if a soft error prevented it."""
    try:
        commenter.ensure_comment_posted(pending)
    except SoftCommentError as e:
        logger.warning(f"{e.message}: comment will not be posted")
        return False
    return True
