"""Decide which violations are on a changed, reviewable line."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from vcomments_core.utils.files import find_changed_file

if TYPE_CHECKING:
    from vcomments_core.backends.base import ReviewBackend
    from vcomments_core.models import ChangedFile, Violation

logger = logging.getLogger(__name__)


@dataclass
class ScopeReport:
    """Where each violation ended up, as sorted ``"<file> <line>"`` entries."""

    included: list[str] = field(default_factory=list)
    excluded_untouched: list[str] = field(default_factory=list)
    excluded_unmatched: list[str] = field(default_factory=list)


class ChangeFilter:
    def __init__(self, backend: ReviewBackend, files: list[ChangedFile]):
        self.backend = backend
        self.files = files

    def is_in_scope(self, violation: Violation) -> bool:
        changed = find_changed_file(self.files, violation.file)
        if changed is None:
            return False
        return self.backend.should_comment(changed, violation.start_line)

    def filter(
        self, violations: list[Violation], log: logging.Logger | None = None
    ) -> tuple[list[Violation], ScopeReport]:
        """Split violations into the in-scope list and a diagnostic report.

        Order of the in-scope list follows the input order.
        """
        log = log or logger
        log.info("Files changed:\n  %s", "\n  ".join(sorted(f.filename for f in self.files)))
        log.info("Files with violations:\n  %s", "\n  ".join(sorted({v.file for v in violations})))

        in_scope: list[Violation] = []
        included: set[str] = set()
        untouched: set[str] = set()
        unmatched: set[str] = set()
        for violation in violations:
            location = f"{violation.file} {violation.start_line}"
            changed = find_changed_file(self.files, violation.file)
            if changed is None:
                unmatched.add(location)
            elif self.backend.should_comment(changed, violation.start_line):
                in_scope.append(violation)
                included.add(location)
            else:
                untouched.add(location)

        report = ScopeReport(
            included=sorted(included),
            excluded_untouched=sorted(untouched),
            excluded_unmatched=sorted(unmatched),
        )
        if report.included:
            log.info("Will include violations on:\n  %s", "\n  ".join(report.included))
        if report.excluded_untouched:
            log.info(
                "Will not include violations on changed files because violation reported on untouched lines:\n  %s",
                "\n  ".join(report.excluded_untouched),
            )
        if report.excluded_unmatched:
            log.info("Will not include violations on unchanged files:\n  %s", "\n  ".join(report.excluded_unmatched))
        return in_scope, report
