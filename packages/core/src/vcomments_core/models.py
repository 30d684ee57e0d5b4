"""Violation, changed file and comment models.

Violations and changed files are read-only inputs to one reconciliation run.
Comments are owned by the review backend; the engine only reads ``content``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(str, Enum):
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


@dataclass(frozen=True)
class Violation:
    """One static-analysis finding, already parsed from the tool's output."""

    reporter: str
    severity: Severity
    file: str
    start_line: int
    message: str
    rule: str | None = None
    source: str | None = None

    def to_text(self) -> str:
        """Fixed-order textual form. Identity tokens are derived from this string."""
        return (
            f"reporter={self.reporter}, rule={self.rule or ''}, severity={self.severity.value}, "
            f"file={self.file}, startLine={self.start_line}, source={self.source or ''}, "
            f"message={self.message}"
        )

    @classmethod
    def from_dict(cls, data: dict) -> Violation:
        """Build a Violation from a plain mapping (e.g. one entry of a JSON file)."""
        severity = str(data.get("severity", "")).upper()
        if severity not in Severity.__members__:
            raise ValueError(f"Unknown severity: {data.get('severity')!r}. Choose INFO, WARN or ERROR.")
        start_line = data.get("startLine", data.get("start_line"))
        if start_line is None:
            raise ValueError(f"Violation in {data.get('file')!r} has no start line.")
        return cls(
            reporter=data["reporter"],
            severity=Severity[severity],
            file=data["file"],
            start_line=int(start_line),
            message=data["message"],
            rule=data.get("rule"),
            source=data.get("source"),
        )


@dataclass(frozen=True)
class ChangedFile:
    """A file in the current reviewable diff, named the way the backend names it.

    ``specifics`` is backend-private; the GitHub backend keeps the file's patch there.
    """

    filename: str
    specifics: tuple[str, ...] = ()


@dataclass
class Comment:
    identifier: str
    content: str
    type: str = ""


class CommentKind(Enum):
    SINGLE_FILE = "single_file"
    ACCUMULATED = "accumulated"
    FOREIGN = "foreign"


@dataclass(frozen=True)
class ClassifiedComment:
    """A fetched comment with its markers already parsed out of the text."""

    comment: Comment
    kind: CommentKind
    identities: frozenset[str] = frozenset()
