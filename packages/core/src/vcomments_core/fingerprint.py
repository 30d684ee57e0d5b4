"""Content-based identity of violations and the markers that classify comments.

Every comment this project posts carries literal markers in its text, since
review systems offer no custom-field storage:

- single-file comments embed ``VIOLATION_MARKER``
- accumulated comments embed ``ACCUMULATION_MARKER``
- both embed one identity token per violation they describe

The marker literals and the token format are shared with comments that are
already posted on live reviews, so they must never change.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from vcomments_core.models import ClassifiedComment, CommentKind

if TYPE_CHECKING:
    from vcomments_core.models import Comment, Violation

VIOLATION_MARKER = "<this is a auto generated comment from violation-comments-lib F7F8ASD8123FSDF>"
ACCUMULATION_MARKER = "<ACCUMULATED-VIOLATIONS>"

IDENTITY_PREFIX = "a"

_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")
_IDENTITY_RE = re.compile(r"\*(" + IDENTITY_PREFIX + r"-?\d+)\*")


def string_hash(text: str) -> int:
    """32-bit signed polynomial string hash (``s[0]*31^(n-1) + ... + s[n-1]``)."""
    h = 0
    for ch in text:
        h = (31 * h + ord(ch)) & 0xFFFFFFFF
    return h - 0x100000000 if h & 0x80000000 else h


def identity(violation: Violation) -> str:
    """Return the identity token of a violation.

    Textually identical violations share a token, so re-running analysis on
    unchanged code never produces a second comment for the same finding.
    """
    stripped = _NON_ALNUM_RE.sub("", violation.to_text())
    return f"{IDENTITY_PREFIX}{string_hash(stripped)}"


def emphasize(token: str) -> str:
    """Wrap a token in emphasis markup so it renders inert but stays searchable."""
    return f"*{token}*"


def classify(comment: Comment) -> ClassifiedComment:
    content = comment.content or ""
    identities = frozenset(_IDENTITY_RE.findall(content))
    if ACCUMULATION_MARKER in content:
        kind = CommentKind.ACCUMULATED
    elif VIOLATION_MARKER in content:
        kind = CommentKind.SINGLE_FILE
    else:
        kind = CommentKind.FOREIGN
    return ClassifiedComment(comment=comment, kind=kind, identities=identities)
