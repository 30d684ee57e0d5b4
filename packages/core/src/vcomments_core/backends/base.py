"""Abstract review backend.

A backend is one review system (a GitHub pull request, a GitLab merge
request, ...) seen through the operations the comment engine needs. The
engine depends on ReviewBackend only, so backends are swappable without
touching the reconciliation logic.

All calls are blocking. Any exception a backend raises ends the run as-is;
the engine neither retries nor rolls back what it already created or removed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vcomments_core.models import ChangedFile, Comment


class ReviewBackend(ABC):
    @abstractmethod
    def get_files(self) -> list[ChangedFile]:
        """Return the files changed in the review, in a stable order."""

    @abstractmethod
    def get_comments(self) -> list[Comment]:
        """Return every comment currently on the review, ours and others'."""

    @abstractmethod
    def create_single_file_comment(self, file: ChangedFile, line: int, content: str) -> None:
        """Create a comment on the diff at ``line`` (new-file line number) of ``file``."""

    @abstractmethod
    def create_comment_with_all_single_file_comments(self, content: str) -> None:
        """Create one general comment holding many rendered violations."""

    @abstractmethod
    def remove_comments(self, comments: list[Comment]) -> None:
        """Delete the given comments."""

    @abstractmethod
    def should_comment(self, file: ChangedFile, line: int) -> bool:
        """Return True if ``line`` of ``file`` may carry a comment in this review."""

    @abstractmethod
    def should_create_single_file_comment(self) -> bool: ...

    @abstractmethod
    def should_create_comment_with_all_single_file_comments(self) -> bool: ...

    @abstractmethod
    def should_keep_old_comments(self) -> bool: ...

    @abstractmethod
    def find_comment_template(self) -> str | None:
        """Return a custom Mustache template, or None for the built-in default."""
