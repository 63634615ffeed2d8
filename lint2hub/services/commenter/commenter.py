"""Commenter - posts deduplicated inline comments on a pull request diff."""

from typing import Optional, Protocol, runtime_checkable

from lint2hub.core.exceptions import (
    FileNotInDiffError,
    PositionNotInDiffError,
    ShaMismatchError,
)
from lint2hub.core.logging import get_logger
from lint2hub.services.commenter.schemas import CommenterState, PendingComment
from lint2hub.services.diff.snapshot import DiffSnapshot
from lint2hub.services.github.schemas import CommentPage, ReviewComment

logger = get_logger("commenter")


@runtime_checkable
class CodeHostClient(Protocol):
    """Pull request operations a Commenter needs from the hosting platform."""

    def fetch_raw_diff(self) -> str:
        ...

    def fetch_head_sha(self) -> str:
        ...

    def list_review_comments(self, page: int = 0) -> CommentPage:
        ...

    def create_review_comment(
        self,
        body: str,
        path: str,
        commit_id: str,
        position: int,
    ) -> ReviewComment:
        ...


class Commenter:
    """High level client for commenting on one pull request diff.

    The diff, head SHA and existing review comments are fetched once, on
    first use, and cached for the rest of the session. Comments already
    present at the same path, position and body are never posted twice.
    Not safe for concurrent use.
    """

    def __init__(self, client: CodeHostClient, sha: str) -> None:
        self.client = client
        self.sha = sha
        self.state = CommenterState.UNINITIALIZED
        self._snapshot: Optional[DiffSnapshot] = None
        self._comments: list[ReviewComment] = []
        self._sha_mismatch: Optional[ShaMismatchError] = None

    @property
    def comments(self) -> list[ReviewComment]:
        """Review comments known for this pull request, in fetch/post order."""
        return list(self._comments)

    def hydrate(self) -> DiffSnapshot:
        """Load the diff and existing comments, once per session."""
        if self._sha_mismatch is not None:
            raise self._sha_mismatch
        if self.state is CommenterState.UNINITIALIZED:
            self._load_snapshot()
        if self.state is CommenterState.HYDRATED:
            self._load_comments()
        return self._snapshot

    def _load_snapshot(self) -> None:
        # Diff first, SHA right after: a push in between shows up as a mismatch
        # instead of a snapshot of the wrong commit.
        diff = self.client.fetch_raw_diff()
        head_sha = self.client.fetch_head_sha()
        if head_sha != self.sha:
            logger.warning(f"Pull request head is {head_sha}, expected {self.sha}")
            self._sha_mismatch = ShaMismatchError(expected=self.sha, actual=head_sha)
            raise self._sha_mismatch

        self._snapshot = DiffSnapshot.from_diff(diff, head_sha)
        self.state = CommenterState.HYDRATED
        logger.debug(f"Indexed {len(self._snapshot.files)} files from diff at {head_sha}")

    def _load_comments(self) -> None:
        comments: list[ReviewComment] = []
        page: Optional[int] = 0
        while page is not None:
            result = self.client.list_review_comments(page)
            comments.extend(result.comments)
            page = result.next_page

        self._comments = comments
        self.state = CommenterState.READY
        logger.debug(f"Loaded {len(comments)} existing review comments")

    def get_position(self, file: str, line: int) -> Optional[int]:
        """Return the diff position for ``file`` at new-file ``line``.

        Returns None when the file is not in the diff or the line is not an
        added line, meaning no comment can be posted there.
        """
        return self.hydrate().get_position(file, line)

    def find_comment(self, file: str, position: int, body: str) -> Optional[ReviewComment]:
        """Return a cached comment with the same path, position and body."""
        self.hydrate()
        for comment in self._comments:
            if comment.matches(file, position, body):
                return comment
        return None

    def post(self, file: str, position: int, body: str) -> ReviewComment:
        """Post a comment at a diff position unless an identical one exists."""
        existing = self.find_comment(file, position, body)
        if existing is not None:
            logger.info(f"Comment already present on {file} at position {position}")
            return existing

        comment = self.client.create_review_comment(
            body=body,
            path=file,
            commit_id=self.sha,
            position=position,
        )
        self._comments.append(comment)
        return comment

    def ensure_comment_posted(self, pending: PendingComment) -> ReviewComment:
        """Post a lint finding on its new-file line, at most once."""
        snapshot = self.hydrate()
        if pending.file not in snapshot:
            raise FileNotInDiffError(pending.file)

        position = snapshot.get_position(pending.file, pending.line)
        if position is None:
            raise PositionNotInDiffError(pending.file, pending.line)

        return self.post(pending.file, position, pending.body)
