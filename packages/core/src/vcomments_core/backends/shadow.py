"""Dry-run backend: reads from a real backend, prints writes instead of posting them."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console

from vcomments_core.backends.base import ReviewBackend

if TYPE_CHECKING:
    from vcomments_core.models import ChangedFile, Comment

console = Console()


class ShadowBackend(ReviewBackend):
    """Wraps another backend. Every read is delegated; every write is recorded.

    ``created`` holds ``(filename or None, line or None, content)`` tuples and
    ``removed`` the comments that would have been deleted.
    """

    def __init__(self, delegate: ReviewBackend):
        self.delegate = delegate
        self.created: list[tuple[str | None, int | None, str]] = []
        self.removed: list[Comment] = []

    def get_files(self) -> list[ChangedFile]:
        return self.delegate.get_files()

    def get_comments(self) -> list[Comment]:
        return self.delegate.get_comments()

    def create_single_file_comment(self, file: ChangedFile, line: int, content: str) -> None:
        self.created.append((file.filename, line, content))
        console.print(f"[bold cyan]{file.filename}[/bold cyan]  line [bold]{line}[/bold]  [dim](not posted)[/dim]")
        console.print(f"  {content}\n", markup=False)

    def create_comment_with_all_single_file_comments(self, content: str) -> None:
        self.created.append((None, None, content))
        console.print("[bold cyan]Accumulated comment[/bold cyan]  [dim](not posted)[/dim]")
        console.print(f"  {content}\n", markup=False)

    def remove_comments(self, comments: list[Comment]) -> None:
        self.removed.extend(comments)
        for comment in comments:
            console.print(f"[yellow]Would remove comment {comment.identifier}[/yellow]")

    def should_comment(self, file: ChangedFile, line: int) -> bool:
        return self.delegate.should_comment(file, line)

    def should_create_single_file_comment(self) -> bool:
        return self.delegate.should_create_single_file_comment()

    def should_create_comment_with_all_single_file_comments(self) -> bool:
        return self.delegate.should_create_comment_with_all_single_file_comments()

    def should_keep_old_comments(self) -> bool:
        return self.delegate.should_keep_old_comments()

    def find_comment_template(self) -> str | None:
        return self.delegate.find_comment_template()
