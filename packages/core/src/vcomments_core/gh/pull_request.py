"""GitHub pull request backend built on PyGithub.

Single-file comments become review comments on the head commit; accumulated
comments become issue comments on the pull request conversation. Both kinds
are read back on every run, since either may carry our markers.
"""

from __future__ import annotations

import logging

from github import Github

from vcomments_core.backends.base import ReviewBackend
from vcomments_core.gh.diff import get_added_lines
from vcomments_core.models import ChangedFile, Comment

logger = logging.getLogger(__name__)

ISSUE_COMMENT = "issue"
REVIEW_COMMENT = "review"


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


def get_pull(repo, pr_number: int):
    return repo.get_pull(pr_number)


def get_diff(pr):
    return pr.get_files()


class GithubPullRequestBackend(ReviewBackend):
    """Review backend for one GitHub pull request.

    ``config`` is the loaded vcomments configuration; only the comment mode
    switches and ``comment_only_changed_content`` are read here.
    """

    def __init__(self, repo, pr, config: dict, template: str | None = None):
        self._repo = repo
        self._pr = pr
        self._config = config
        self._template = template
        self._raw_comments: dict[tuple[str, str], object] = {}
        self._head_commit = None

    def get_files(self) -> list[ChangedFile]:
        return [
            ChangedFile(filename=f.filename, specifics=(f.patch,) if f.patch else ())
            for f in get_diff(self._pr)
        ]

    def get_comments(self) -> list[Comment]:
        comments = []
        for kind, raw_comments in (
            (ISSUE_COMMENT, self._pr.get_issue_comments()),
            (REVIEW_COMMENT, self._pr.get_review_comments()),
        ):
            for raw in raw_comments:
                identifier = str(raw.id)
                self._raw_comments[(kind, identifier)] = raw
                comments.append(Comment(identifier=identifier, content=raw.body or "", type=kind))
        return comments

    def create_single_file_comment(self, file: ChangedFile, line: int, content: str) -> None:
        if self._head_commit is None:
            self._head_commit = self._repo.get_commit(self._pr.head.sha)
        self._pr.create_review_comment(body=content, commit=self._head_commit, path=file.filename, line=line)

    def create_comment_with_all_single_file_comments(self, content: str) -> None:
        self._pr.create_issue_comment(content)

    def remove_comments(self, comments: list[Comment]) -> None:
        for comment in comments:
            raw = self._raw_comments.get((comment.type, comment.identifier))
            if raw is None:
                logger.warning("Comment %s was not fetched from this pull request; not removing it.", comment.identifier)
                continue
            raw.delete()
            logger.debug("Removed %s comment %s", comment.type, comment.identifier)

    def should_comment(self, file: ChangedFile, line: int) -> bool:
        if not self._config.get("comment_only_changed_content", True):
            return True
        patch = file.specifics[0] if file.specifics else None
        return line in get_added_lines(patch)

    def should_create_single_file_comment(self) -> bool:
        return bool(self._config.get("create_single_file_comments", True))

    def should_create_comment_with_all_single_file_comments(self) -> bool:
        return bool(self._config.get("create_comment_with_all_single_file_comments", False))

    def should_keep_old_comments(self) -> bool:
        return bool(self._config.get("keep_old_comments", False))

    def find_comment_template(self) -> str | None:
        return self._template
