from __future__ import annotations

import re

_HUNK_RE = re.compile(r"^@@ -\d+(?:,\d+)? \+(\d+)(?:,\d+)? @@")


def get_added_lines(patch_text: str | None) -> set[int]:
    """New-file line numbers added by a unified-diff ``patch_text``.

    Lines before the first valid hunk header, and lines of hunks whose header
    cannot be parsed, are ignored.
    """
    added: set[int] = set()
    if not patch_text:
        return added

    new_line: int | None = None
    for line in patch_text.splitlines():
        if line.startswith("@@"):
            match = _HUNK_RE.match(line)
            new_line = int(match.group(1)) if match else None
        elif new_line is None or line.startswith("\\"):
            continue  # outside a hunk, or "\ No newline at end of file"
        elif line.startswith("+"):
            added.add(new_line)
            new_line += 1
        elif not line.startswith("-"):
            new_line += 1
    return added
