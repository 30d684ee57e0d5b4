"""Comment body rendering.

Templates are Mustache, expanded by chevron against a context with two
objects: ``violation`` and ``changedFile``. Identity markers are appended
after expansion so a custom template can never drop them.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import chevron

from vcomments_core.errors import TemplateError
from vcomments_core.fingerprint import VIOLATION_MARKER, emphasize, identity

if TYPE_CHECKING:
    from vcomments_core.models import ChangedFile, Violation

BUILTIN_TEMPLATES_DIR = Path(__file__).parent / "templates"
_DEFAULT_TEMPLATE = BUILTIN_TEMPLATES_DIR / "default.mustache"


def default_template() -> str:
    return _DEFAULT_TEMPLATE.read_text(encoding="utf-8")


def build_context(file: ChangedFile, violation: Violation) -> dict:
    return {
        "violation": {
            "reporter": violation.reporter,
            "rule": violation.rule,
            "severity": violation.severity.value,
            "file": violation.file,
            "startLine": violation.start_line,
            "source": violation.source,
            "message": violation.message,
        },
        "changedFile": {"filename": file.filename},
    }


def render_template(file: ChangedFile, violation: Violation, template: str | None = None) -> str:
    """Expand ``template`` for one violation. ``None`` selects the built-in default.

    A custom template that is blank, or that expands to blank text, is rejected:
    chevron renders some malformed input (an unclosed ``{{``) as nothing.
    """
    if template is None:
        template = default_template()
    elif not template.strip():
        raise TemplateError("Invalid comment template: template is empty.")
    try:
        text = chevron.render(template, build_context(file, violation))
    except chevron.ChevronError as e:
        raise TemplateError(f"Invalid comment template: {e}") from e
    if not text.strip():
        raise TemplateError("Invalid comment template: it renders no text.")
    return text


def render_single_file_comment(file: ChangedFile, violation: Violation, template: str | None = None) -> str:
    """Full body of a comment positioned on the violation's line."""
    return (
        render_template(file, violation, template)
        + "\n\n"
        + emphasize(VIOLATION_MARKER)
        + "\n\n"
        + emphasize(identity(violation))
    )


def render_accumulated_block(file: ChangedFile, violation: Violation, template: str | None = None) -> str:
    """One violation's block inside an accumulated comment.

    Carries the identity token but not the violation marker, so accumulated
    comments never look like single-file comments.
    """
    return render_template(file, violation, template) + "\n\n" + emphasize(identity(violation))
