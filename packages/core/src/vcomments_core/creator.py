"""Reconcile violations against the comments already on a review.

Two independent modes, each switched on by the backend:

- accumulated: one or more general comments holding every in-scope violation
- single-file: one comment per violation, positioned on its line

Each run fetches the comment snapshot once, removes our own comments whose
violations are no longer reported (unless old comments are kept) and creates
only what is missing. Running twice against an unchanged review issues no
writes the second time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from vcomments_core.accumulator import get_accumulated_comments
from vcomments_core.fingerprint import classify, identity
from vcomments_core.models import CommentKind
from vcomments_core.renderer import render_single_file_comment, render_template
from vcomments_core.scope import ChangeFilter, ScopeReport
from vcomments_core.utils.files import find_changed_file

if TYPE_CHECKING:
    from vcomments_core.backends.base import ReviewBackend
    from vcomments_core.models import ClassifiedComment, Comment, Violation

logger = logging.getLogger(__name__)


@dataclass
class ReconciliationSummary:
    """What one run did to the review."""

    created_single_file: int = 0
    created_accumulated: int = 0
    removed: int = 0
    scope: ScopeReport = field(default_factory=ScopeReport)


class CommentsCreator:
    def __init__(
        self,
        backend: ReviewBackend,
        violations: list[Violation],
        max_comment_size: int | None = None,
        log: logging.Logger | None = None,
    ):
        if violations is None:
            raise ValueError("violations must not be None.")
        if backend is None:
            raise ValueError("backend must not be None.")
        self.backend = backend
        self.max_comment_size = max_comment_size
        self.log = log or logger
        self.summary = ReconciliationSummary()
        self.files = backend.get_files()
        self.violations, self.summary.scope = ChangeFilter(backend, self.files).filter(violations, self.log)

    def create_comments(self) -> ReconciliationSummary:
        accumulated = self.backend.should_create_comment_with_all_single_file_comments()
        single_file = self.backend.should_create_single_file_comment()
        if not accumulated and not single_file:
            self.log.info(
                "Will not comment because both 'create_comment_with_all_single_file_comments' "
                "and 'create_single_file_comments' are disabled."
            )
            return self.summary

        self._check_template()
        snapshot = [classify(c) for c in self.backend.get_comments()]
        if accumulated:
            self._create_comment_with_all_single_file_comments(snapshot)
        if single_file:
            self._create_single_file_comments(snapshot)
        return self.summary

    def _check_template(self) -> None:
        """Expand the template once so a broken one fails the run before any write."""
        if not self.violations:
            return
        violation = self.violations[0]
        changed = find_changed_file(self.files, violation.file)
        render_template(changed, violation, self.backend.find_comment_template())

    def _create_comment_with_all_single_file_comments(self, snapshot: list[ClassifiedComment]) -> None:
        if not self.violations:
            return

        bodies = get_accumulated_comments(
            self.violations, self.files, self.backend.find_comment_template(), self.max_comment_size
        )
        old_comments = [c.comment for c in snapshot if c.kind is CommentKind.ACCUMULATED]
        self.log.info(
            "Asking %s to create %d comment(s) with all single file comments.",
            self.backend.__class__.__name__,
            len(bodies),
        )

        still_reported = [c for c in old_comments if any(body in c.content for body in bodies)]
        self._remove_comments_not_still_reported(old_comments, still_reported)

        for body in bodies:
            if any(body in c.content for c in still_reported):
                continue
            self.backend.create_comment_with_all_single_file_comments(body)
            self.summary.created_accumulated += 1

    def _create_single_file_comments(self, snapshot: list[ClassifiedComment]) -> None:
        old_comments = [c for c in snapshot if c.kind is CommentKind.SINGLE_FILE]
        self.log.info("Asking %s to comment:", self.backend.__class__.__name__)

        wanted = {identity(v) for v in self.violations}
        still_reported = [c for c in old_comments if c.identities & wanted]
        already_commented = set().union(*(c.identities for c in still_reported)) & wanted

        template = self.backend.find_comment_template()
        pending = []
        for violation in self.violations:
            token = identity(violation)
            if token in already_commented:
                continue
            changed = find_changed_file(self.files, violation.file)
            if changed is None:
                continue
            pending.append((violation, changed, render_single_file_comment(changed, violation, template)))
            already_commented.add(token)

        self._remove_comments_not_still_reported(
            [c.comment for c in old_comments], [c.comment for c in still_reported]
        )

        for violation, changed, content in pending:
            self.log.info(
                "%s %s %s %s %d %s",
                violation.reporter,
                violation.severity.value,
                violation.rule,
                changed.filename,
                violation.start_line,
                violation.source,
            )
            self.backend.create_single_file_comment(changed, violation.start_line, content)
            self.summary.created_single_file += 1

    def _remove_comments_not_still_reported(self, old_comments: list[Comment], keep: list[Comment]) -> None:
        if self.backend.should_keep_old_comments():
            return
        kept_ids = {id(c) for c in keep}
        obsolete = [c for c in old_comments if id(c) not in kept_ids]
        if obsolete:
            self.backend.remove_comments(obsolete)
            self.summary.removed += len(obsolete)


def create_comments(
    backend: ReviewBackend,
    violations: list[Violation],
    max_comment_size: int | None = None,
    log: logging.Logger | None = None,
) -> ReconciliationSummary:
    """Reconcile ``violations`` against ``backend`` and return what was done."""
    return CommentsCreator(backend, violations, max_comment_size, log).create_comments()
