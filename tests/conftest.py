"""Shared fixtures: diff texts and an in-memory GitHub stand-in."""

import pytest

from lint2hub.services.github.schemas import CommentPage, ReviewComment

HEAD_SHA = "0123456789abcdef0123456789abcdef01234567"

MULTI_FILE_DIFF = """diff --git a/README.md b/README.md
index 639f958..81590fa 100644
--- a/README.md
+++ b/README.md
@@ -1 +1,3 @@
-# test-repo
\\ No newline at end of file
+# test-repo
+
+Hello World 1234
diff --git a/FOO.md b/BAR.md
index 639f958..81590fa 100644
--- a/FOO.md
+++ b/BAR.md
@@ -1 +1,3 @@
+# test-repo
+
+Hello World 1234
"""

THREE_HUNK_DIFF = """@@ -1,3 +1,2 @@
-Howdy
+Hello
-Cruel
 World
@@ -50,53 +50,50 @@
 Goodbye
-One
-Two
-Three
@@ -100,100 +100,103 @@
 Hello
+One
+Two
+Three
"""


class FakeCodeHost:
    """Records calls the way GitHubClient would receive them."""

    def __init__(self, diff=MULTI_FILE_DIFF, head_sha=HEAD_SHA, pages=None):
        self.diff = diff
        self.head_sha = head_sha
        self.pages = pages if pages is not None else [[]]
        self.calls = []
        self.created = []

    def fetch_raw_diff(self):
        self.calls.append("fetch_raw_diff")
        return self.diff

    def fetch_head_sha(self):
        self.calls.append("fetch_head_sha")
        return self.head_sha

    def list_review_comments(self, page=0):
        self.calls.append(f"list_review_comments:{page}")
        next_page = page + 1 if page + 1 < len(self.pages) else None
        return CommentPage(comments=self.pages[page], next_page=next_page)

    def create_review_comment(self, body, path, commit_id, position):
        self.calls.append("create_review_comment")
        comment = ReviewComment(
            id=1000 + len(self.created),
            path=path,
            position=position,
            body=body,
            commit_id=commit_id,
            user="lint-bot",
        )
        self.created.append(comment)
        return comment


@pytest.fixture
def code_host():
    return FakeCodeHost()
