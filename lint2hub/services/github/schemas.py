"""Pydantic schemas for GitHub service."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class ReviewComment(BaseModel):
    """An inline review comment on a pull request diff.

    Only ``path``, ``position`` and ``body`` identify a comment for
    deduplication; the remaining fields are informational.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    position: Optional[int] = None
    body: str
    id: Optional[int] = None
    user: Optional[str] = None
    commit_id: Optional[str] = None

    def matches(self, path: str, position: int, body: str) -> bool:
        """Check whether this comment is byte-for-byte the same finding."""
        return (
            self.position is not None
            and self.path == path
            and self.position == position
            and self.body == body
        )


class CommentPage(BaseModel):
    """One page of review comments and the cursor of the next page."""

    comments: list[ReviewComment] = []
    next_page: Optional[int] = None
