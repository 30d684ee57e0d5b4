"""Tests for comment body rendering."""

import pytest

from vcomments_core.errors import TemplateError
from vcomments_core.fingerprint import ACCUMULATION_MARKER, VIOLATION_MARKER, emphasize, identity
from vcomments_core.models import ChangedFile, Severity, Violation
from vcomments_core.renderer import (
    default_template,
    render_accumulated_block,
    render_single_file_comment,
    render_template,
)

FILE = ChangedFile("src/app/main.py")


def make_violation(rule="W0611", source="import os", message="Unused import os"):
    return Violation(
        reporter="pylint",
        severity=Severity.WARN,
        file="/ci/src/app/main.py",
        start_line=12,
        message=message,
        rule=rule,
        source=source,
    )


class TestRenderTemplate:
    def test_default_template_is_shipped(self):
        assert "{{violation.reporter}}" in default_template()

    def test_default_template_renders_all_fields(self):
        text = render_template(FILE, make_violation())
        assert "**Reporter**: pylint" in text
        assert "**Rule**: W0611" in text
        assert "**Severity**: WARN" in text
        assert "src/app/main.py L12" in text
        assert "import os" in text
        assert "Unused import os" in text

    def test_optional_fields_omitted_when_absent(self):
        text = render_template(FILE, make_violation(rule=None, source=None))
        assert "**Rule**" not in text
        assert "**Source**" not in text

    def test_message_is_not_html_escaped(self):
        text = render_template(FILE, make_violation(message="Use <b> & not <i>"))
        assert "Use <b> & not <i>" in text

    def test_custom_template(self):
        text = render_template(FILE, make_violation(), "{{violation.rule}} at {{changedFile.filename}}:{{violation.startLine}}")
        assert text == "W0611 at src/app/main.py:12"

    def test_none_selects_default_template(self):
        assert render_template(FILE, make_violation(), None) == render_template(FILE, make_violation())

    @pytest.mark.parametrize("template", ["", "   \n"])
    def test_blank_template_rejected(self, template):
        with pytest.raises(TemplateError, match="empty"):
            render_template(FILE, make_violation(), template)

    @pytest.mark.parametrize("template", ["{{", "{{=x=}}", "{{violation.nothing}}"])
    def test_template_rendering_no_text_rejected(self, template):
        with pytest.raises(TemplateError):
            render_template(FILE, make_violation(), template)

    def test_invalid_template_raises(self):
        with pytest.raises(TemplateError, match="Invalid comment template"):
            render_template(FILE, make_violation(), "{{violation.rule}}{{/violation.rule}}")


class TestSingleFileComment:
    def test_markers_appended(self):
        violation = make_violation()
        body = render_single_file_comment(FILE, violation, "text")
        assert body == f"text\n\n{emphasize(VIOLATION_MARKER)}\n\n{emphasize(identity(violation))}"

    def test_exactly_one_marker_and_token(self):
        violation = make_violation()
        body = render_single_file_comment(FILE, violation)
        assert body.count(VIOLATION_MARKER) == 1
        assert body.count(identity(violation)) == 1
        assert ACCUMULATION_MARKER not in body

    def test_invalid_template_propagates(self):
        with pytest.raises(TemplateError):
            render_single_file_comment(FILE, make_violation(), "{{#unclosed}}")


class TestAccumulatedBlock:
    def test_block_has_identity_but_no_violation_marker(self):
        violation = make_violation()
        block = render_accumulated_block(FILE, violation, "text")
        assert block == f"text\n\n{emphasize(identity(violation))}"
        assert VIOLATION_MARKER not in block
