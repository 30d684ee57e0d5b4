"""Pack rendered violations into size-bounded accumulated comment bodies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from vcomments_core.fingerprint import ACCUMULATION_MARKER
from vcomments_core.renderer import render_accumulated_block
from vcomments_core.utils.files import find_changed_file

if TYPE_CHECKING:
    from vcomments_core.models import ChangedFile, Violation


def accumulation_header(count: int) -> str:
    return f"Found {count} violations:\n\n"


def pack_blocks(blocks: list[str], header: str, max_size: int | None = None) -> list[str]:
    """Greedily pack blocks into bodies of ``header + blocks + ACCUMULATION_MARKER``.

    A body is closed before the next block would bring its final length
    (closing marker included) to ``max_size`` or beyond. A block that is too
    large on its own still gets a body of its own; it is never truncated.
    ``max_size=None`` means unbounded.
    """
    bodies: list[str] = []
    buffer = header
    packed = 0
    for block in blocks:
        entry = block + "\n"
        too_big = max_size is not None and len(buffer) + len(entry) + len(ACCUMULATION_MARKER) >= max_size
        if too_big and packed:
            bodies.append(buffer + ACCUMULATION_MARKER)
            buffer = header
            packed = 0
        buffer += entry
        packed += 1
    if packed:
        bodies.append(buffer + ACCUMULATION_MARKER)
    return bodies


def get_accumulated_comments(
    violations: list[Violation],
    files: list[ChangedFile],
    template: str | None = None,
    max_size: int | None = None,
) -> list[str]:
    """Render in-scope violations into one or more accumulated comment bodies.

    Violations whose file is not among ``files`` are skipped. Returns an
    empty list only when nothing is left to render.
    """
    blocks = []
    for violation in violations:
        changed = find_changed_file(files, violation.file)
        if changed is None:
            continue
        blocks.append(render_accumulated_block(changed, violation, template))
    return pack_blocks(blocks, accumulation_header(len(blocks)), max_size)
