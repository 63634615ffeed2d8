"""GitHub service."""

from lint2hub.services.github.client import GitHubClient, create_github
from lint2hub.services.github.schemas import CommentPage, ReviewComment

__all__ = [
    "CommentPage",
    "GitHubClient",
    "ReviewComment",
    "create_github",
]
