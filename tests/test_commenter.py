"""Tests for the Commenter state machine and deduplication."""

import pytest

from lint2hub.core.exceptions import (
    ExternalServiceError,
    FileNotInDiffError,
    PositionNotInDiffError,
    ShaMismatchError,
)
from lint2hub.services.commenter import CodeHostClient, Commenter, CommenterState, PendingComment
from lint2hub.services.github.schemas import ReviewComment
from conftest import HEAD_SHA, FakeCodeHost


class TestHydration:
    """Tests for lazy, once-per-session hydration."""

    def test_starts_uninitialized(self, code_host):
        """Nothing is fetched at construction."""
        commenter = Commenter(code_host, sha=HEAD_SHA)

        assert commenter.state is CommenterState.UNINITIALIZED
        assert code_host.calls == []

    def test_fake_satisfies_protocol(self, code_host):
        """The test double implements the collaborator protocol."""
        assert isinstance(code_host, CodeHostClient)

    def test_first_lookup_hydrates(self, code_host):
        """Diff is fetched before the head SHA, then comments."""
        commenter = Commenter(code_host, sha=HEAD_SHA)

        commenter.get_position("BAR.md", 1)

        assert commenter.state is CommenterState.READY
        assert code_host.calls == ["fetch_raw_diff", "fetch_head_sha", "list_review_comments:0"]

    def test_hydrates_once(self, code_host):
        """Repeated lookups never refetch."""
        commenter = Commenter(code_host, sha=HEAD_SHA)

        commenter.get_position("BAR.md", 1)
        commenter.get_position("README.md", 2)
        commenter.get_position("missing.py", 2)

        assert code_host.calls.count("fetch_raw_diff") == 1
        assert code_host.calls.count("fetch_head_sha") == 1

    def test_follows_all_comment_pages(self):
        """Every page of existing comments is loaded."""
        pages = [
            [ReviewComment(path="BAR.md", position=1, body="one")],
            [ReviewComment(path="BAR.md", position=2, body="two")],
            [ReviewComment(path="BAR.md", position=3, body="three")],
        ]
        code_host = FakeCodeHost(pages=pages)
        commenter = Commenter(code_host, sha=HEAD_SHA)

        commenter.hydrate()

        assert [c.body for c in commenter.comments] == ["one", "two", "three"]
        assert code_host.calls[-3:] == [
            "list_review_comments:0",
            "list_review_comments:1",
            "list_review_comments:2",
        ]

    def test_sha_mismatch(self):
        """A moved head aborts hydration without building a snapshot."""
        code_host = FakeCodeHost(head_sha="f" * 40)
        commenter = Commenter(code_host, sha=HEAD_SHA)

        with pytest.raises(ShaMismatchError) as exc_info:
            commenter.get_position("BAR.md", 1)

        assert exc_info.value.details == {"expected": HEAD_SHA, "actual": "f" * 40}
        assert commenter.state is CommenterState.UNINITIALIZED
        assert "list_review_comments:0" not in code_host.calls

    def test_sha_mismatch_is_remembered(self):
        """Later calls re-raise the mismatch without refetching."""
        code_host = FakeCodeHost(head_sha="f" * 40)
        commenter = Commenter(code_host, sha=HEAD_SHA)

        for _ in range(3):
            with pytest.raises(ShaMismatchError):
                commenter.ensure_comment_posted(PendingComment(file="BAR.md", line=1, body="x"))

        assert code_host.calls == ["fetch_raw_diff", "fetch_head_sha"]

    def test_collaborator_error_propagates(self, code_host):
        """Hard errors from GitHub are not swallowed."""

        def fail():
            raise ExternalServiceError("GitHub", "bad credentials", 401)

        code_host.fetch_raw_diff = fail
        commenter = Commenter(code_host, sha=HEAD_SHA)

        with pytest.raises(ExternalServiceError):
            commenter.get_position("BAR.md", 1)


class TestGetPosition:
    """Tests for Commenter.get_position."""

    def test_added_line(self, code_host):
        """Added lines resolve to their diff position."""
        commenter = Commenter(code_host, sha=HEAD_SHA)

        assert commenter.get_position("BAR.md", 3) == 3
        assert commenter.get_position("README.md", 1) == 3

    def test_file_not_in_diff(self, code_host):
        """Files the diff never mentions are not found."""
        commenter = Commenter(code_host, sha=HEAD_SHA)

        assert commenter.get_position("src/untouched.py", 1) is None

    def test_line_not_in_diff(self, code_host):
        """Lines outside the hunks are not found."""
        commenter = Commenter(code_host, sha=HEAD_SHA)

        assert commenter.get_position("BAR.md", 40) is None


class TestPost:
    """Tests for deduplicated posting."""

    def test_posts_new_comment(self, code_host):
        """A new finding is created with the session SHA."""
        commenter = Commenter(code_host, sha=HEAD_SHA)

        comment = commenter.post("BAR.md", 1, "trailing whitespace")

        assert comment.path == "BAR.md"
        assert comment.position == 1
        assert comment.commit_id == HEAD_SHA
        assert len(code_host.created) == 1

    def test_same_comment_twice_posts_once(self, code_host):
        """Posting an identical comment again is a no-op returning the same value."""
        commenter = Commenter(code_host, sha=HEAD_SHA)

        first = commenter.post("BAR.md", 1, "trailing whitespace")
        second = commenter.post("BAR.md", 1, "trailing whitespace")

        assert first == second
        assert len(code_host.created) == 1

    def test_existing_comment_not_reposted(self):
        """A comment from an earlier run suppresses the new post."""
        earlier = ReviewComment(id=7, path="BAR.md", position=1, body="trailing whitespace", user="someone")
        code_host = FakeCodeHost(pages=[[earlier]])
        commenter = Commenter(code_host, sha=HEAD_SHA)

        comment = commenter.post("BAR.md", 1, "trailing whitespace")

        assert comment == earlier
        assert code_host.created == []

    @pytest.mark.parametrize(
        "path,position,body",
        [
            ("README.md", 1, "trailing whitespace"),
            ("BAR.md", 2, "trailing whitespace"),
            ("BAR.md", 1, "Trailing whitespace"),
            ("BAR.md", 1, "trailing whitespace "),
        ],
    )
    def test_any_difference_posts(self, path, position, body):
        """Path, position and body must all match exactly."""
        earlier = ReviewComment(path="BAR.md", position=1, body="trailing whitespace")
        code_host = FakeCodeHost(pages=[[earlier]])
        commenter = Commenter(code_host, sha=HEAD_SHA)

        commenter.post(path, position, body)

        assert len(code_host.created) == 1

    def test_outdated_comment_never_matches(self):
        """Comments GitHub reports without a position are ignored."""
        outdated = ReviewComment(path="BAR.md", position=None, body="trailing whitespace")
        code_host = FakeCodeHost(pages=[[outdated]])
        commenter = Commenter(code_host, sha=HEAD_SHA)

        commenter.post("BAR.md", 1, "trailing whitespace")

        assert len(code_host.created) == 1

    def test_create_failure_propagates(self, code_host):
        """A failed create is a hard error and nothing is cached."""

        def fail(**kwargs):
            raise ExternalServiceError("GitHub", "validation failed", 422)

        code_host.create_review_comment = fail
        commenter = Commenter(code_host, sha=HEAD_SHA)

        with pytest.raises(ExternalServiceError):
            commenter.post("BAR.md", 1, "x")
        assert commenter.comments == []


class TestEnsureCommentPosted:
    """Tests for Commenter.ensure_comment_posted."""

    def test_resolves_line_to_position(self, code_host):
        """New-file line 3 of BAR.md is posted at position 3."""
        commenter = Commenter(code_host, sha=HEAD_SHA)

        comment = commenter.ensure_comment_posted(PendingComment(file="BAR.md", line=3, body="E501"))

        assert comment.position == 3
        assert code_host.created[0].body == "E501"

    def test_file_not_in_diff(self, code_host):
        """Untouched files raise FileNotInDiffError."""
        commenter = Commenter(code_host, sha=HEAD_SHA)

        with pytest.raises(FileNotInDiffError):
            commenter.ensure_comment_posted(PendingComment(file="FOO.md", line=1, body="E501"))

    def test_position_not_in_diff(self, code_host):
        """Lines that are not additions raise PositionNotInDiffError."""
        commenter = Commenter(code_host, sha=HEAD_SHA)

        with pytest.raises(PositionNotInDiffError):
            commenter.ensure_comment_posted(PendingComment(file="BAR.md", line=10, body="E501"))
        assert code_host.created == []

    def test_duplicate_in_same_run(self, code_host):
        """A finding repeated later in the run is caught by the local cache."""
        commenter = Commenter(code_host, sha=HEAD_SHA)
        pending = PendingComment(file="README.md", line=2, body="blank line")

        first = commenter.ensure_comment_posted(pending)
        second = commenter.ensure_comment_posted(pending)

        assert first == second
        assert code_host.calls.count("create_review_comment") == 1
