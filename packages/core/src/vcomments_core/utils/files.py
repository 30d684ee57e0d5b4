from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vcomments_core.models import ChangedFile


def _normalize(path: str) -> str:
    return path.replace("\\", "/")


def find_changed_file(files: list[ChangedFile], violation_file: str) -> ChangedFile | None:
    """Return the first changed file whose path is a suffix of the violation's path, or vice versa.

    Analysis tools and review systems rarely agree on path roots
    ("/build/ws/src/foo.py" vs "src/foo.py"), so either side may be the suffix.
    First match in list order wins; if two changed files both match, the
    result depends on the backend's ordering.
    """
    reported = _normalize(violation_file)
    for changed in files:
        candidate = _normalize(changed.filename)
        if reported.endswith(candidate) or candidate.endswith(reported):
            return changed
    return None
