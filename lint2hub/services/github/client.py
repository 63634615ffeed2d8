"""GitHub API client - data layer."""

import math
from contextlib import contextmanager
from typing import Iterator, Optional

import requests
from github import Auth, Github, GithubException
from github.PullRequest import PullRequest
from github.PullRequestComment import PullRequestComment
from pydantic import ValidationError

from lint2hub.core.deadline import Deadline
from lint2hub.core.exceptions import ExternalServiceError, SessionTimeoutError
from lint2hub.core.logging import get_logger
from lint2hub.services.github.schemas import CommentPage, ReviewComment

logger = get_logger("github.client")

DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"


def create_github(
    access_token: str,
    base_url: str = "https://api.github.com",
    per_page: int = 100,
    timeout: float = 30.0,
) -> Github:
    """Build an authenticated PyGithub client.

    The per-request timeout is the whole session budget and retries are
    disabled, so no single call can outlive the session deadline.
    """
    if not access_token:
        raise ValueError("GitHub access token not configured")

    return Github(
        auth=Auth.Token(access_token),
        base_url=base_url,
        per_page=per_page,
        timeout=max(1, math.ceil(timeout)),
        retry=None,
    )


class GitHubClient:
    """Pull request operations needed to post inline review comments."""

    def __init__(
        self,
        github: Github,
        owner: str,
        repo: str,
        pr_number: int,
        deadline: Deadline,
        per_page: int = 100,
    ) -> None:
        self._github = github
        self.owner = owner
        self.repo = repo
        self.pr_number = pr_number
        self.deadline = deadline
        self.per_page = per_page
        self._pull: Optional[PullRequest] = None

    @property
    def pull_url(self) -> str:
        return f"/repos/{self.owner}/{self.repo}/pulls/{self.pr_number}"

    @contextmanager
    def _call(self, operation: str) -> Iterator[None]:
        """Enforce the session deadline and translate client errors."""
        self.deadline.check(operation)
        try:
            yield
        except GithubException as e:
            logger.error(f"GitHub {operation} failed with status {e.status}")
            raise ExternalServiceError("GitHub", f"{operation}: {e.data}", e.status) from e
        except requests.Timeout as e:
            raise SessionTimeoutError(self.deadline.timeout, operation) from e
        except requests.RequestException as e:
            raise ExternalServiceError("GitHub", f"{operation}: {e}") from e
        except ValidationError as e:
            raise ExternalServiceError("GitHub", f"{operation}: malformed response: {e}") from e
        self.deadline.check(operation)

    def _pull_request(self) -> PullRequest:
        if self._pull is None:
            repository = self._github.get_repo(f"{self.owner}/{self.repo}", lazy=True)
            self._pull = repository.get_pull(self.pr_number)
        return self._pull

    def fetch_raw_diff(self) -> str:
        """Fetch the pull request as unified diff text."""
        with self._call("fetch diff"):
            _, data = self._github.requester.requestJsonAndCheck(
                "GET",
                self.pull_url,
                headers={"Accept": DIFF_MEDIA_TYPE},
            )
        if data is None:
            return ""
        if not isinstance(data, dict) or not isinstance(data.get("data"), str):
            raise ExternalServiceError("GitHub", "fetch diff: response is not diff text")
        logger.debug(f"Fetched diff for {self.owner}/{self.repo}#{self.pr_number}")
        return data["data"]

    def fetch_head_sha(self) -> str:
        """Fetch the pull request's current head commit SHA."""
        with self._call("fetch pull request"):
            return self._pull_request().head.sha

    def list_review_comments(self, page: int = 0) -> CommentPage:
        """Fetch one page of existing review comments (0-based pages)."""
        with self._call("list review comments"):
            items = self._pull_request().get_review_comments().get_page(page)
            comments = [_to_review_comment(item) for item in items]
        next_page = page + 1 if len(items) >= self.per_page else None
        return CommentPage(comments=comments, next_page=next_page)

    def create_review_comment(
        self,
        body: str,
        path: str,
        commit_id: str,
        position: int,
    ) -> ReviewComment:
        """Create an inline review comment anchored at a diff position."""
        with self._call("create review comment"):
            _, data = self._github.requester.requestJsonAndCheck(
                "POST",
                f"{self.pull_url}/comments",
                input={
                    "body": body,
                    "path": path,
                    "commit_id": commit_id,
                    "position": position,
                },
            )
            if not isinstance(data, dict):
                raise ExternalServiceError("GitHub", "create review comment: empty response")
            user = data.get("user") or {}
            comment = ReviewComment(
                path=data.get("path"),
                position=data.get("position"),
                body=data.get("body"),
                id=data.get("id"),
                user=user.get("login"),
                commit_id=data.get("commit_id"),
            )
        logger.info(f"Created review comment on {path} at position {position}")
        return comment


def _to_review_comment(comment: PullRequestComment) -> ReviewComment:
    return ReviewComment(
        path=comment.path,
        position=comment.position,
        body=comment.body,
        id=comment.id,
        user=comment.user.login if comment.user else None,
        commit_id=comment.commit_id,
    )
