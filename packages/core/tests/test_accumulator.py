"""Tests for packing rendered violations into accumulated comments."""

from vcomments_core.accumulator import accumulation_header, get_accumulated_comments, pack_blocks
from vcomments_core.fingerprint import ACCUMULATION_MARKER, VIOLATION_MARKER, identity
from vcomments_core.models import ChangedFile, Severity, Violation

HEADER = "h" * 19 + "\n"  # 20 chars


def test_header():
    assert accumulation_header(5) == "Found 5 violations:\n\n"


class TestPackBlocks:
    def test_no_blocks_no_bodies(self):
        assert pack_blocks([], HEADER, 100) == []

    def test_unbounded_gives_single_body(self):
        bodies = pack_blocks(["a" * 50] * 10, HEADER, None)
        assert len(bodies) == 1
        assert bodies[0].startswith(HEADER)
        assert bodies[0].endswith(ACCUMULATION_MARKER)

    def test_five_blocks_split_three_and_two(self):
        # 20-char header, 30-char entries (29 + newline), 24-char closing marker:
        # three entries make 134 chars, four would make 164.
        blocks = [str(i) * 29 for i in range(5)]
        bodies = pack_blocks(blocks, HEADER, 150)

        assert len(bodies) == 2
        assert [sum(b in body for b in blocks) for body in bodies] == [3, 2]
        for body in bodies:
            assert body.startswith(HEADER)
            assert body.count(ACCUMULATION_MARKER) == 1
            assert len(body) < 150

    def test_order_is_preserved(self):
        blocks = [str(i) * 29 for i in range(5)]
        joined = "".join(pack_blocks(blocks, HEADER, 150))
        positions = [joined.index(b) for b in blocks]
        assert positions == sorted(positions)

    def test_closes_when_length_would_reach_max(self):
        blocks = ["x" * 9, "y" * 9]
        # header(20) + 10 + 10 + marker(24) == 64
        assert len(pack_blocks(blocks, HEADER, 64)) == 2
        assert len(pack_blocks(blocks, HEADER, 65)) == 1

    def test_oversized_block_gets_its_own_body(self):
        big = "y" * 200
        bodies = pack_blocks(["z" * 10, big, "w" * 10], HEADER, 100)
        assert len(bodies) == 3
        assert big in bodies[1]
        assert "z" * 10 not in bodies[1] and "w" * 10 not in bodies[1]

    def test_oversized_first_block_does_not_emit_empty_body(self):
        bodies = pack_blocks(["y" * 200], HEADER, 100)
        assert len(bodies) == 1
        assert "y" * 200 in bodies[0]

    def test_size_bound_holds_for_many_limits(self):
        blocks = [chr(ord("a") + i) * (5 + 13 * i) for i in range(6)]
        header = "Found 6 violations:\n\n"
        for max_size in range(30, 250, 7):
            bodies = pack_blocks(blocks, header, max_size)
            assert sum(sum(b in body for b in blocks) for body in bodies) == len(blocks)
            for body in bodies:
                assert len(body) < max_size or sum(b in body for b in blocks) == 1


class TestGetAccumulatedComments:
    def _violations(self):
        return [
            Violation(reporter="pylint", severity=Severity.WARN, file="src/a.py", start_line=n, message=f"issue {n}")
            for n in (1, 2, 3)
        ]

    def test_renders_every_violation_once(self):
        violations = self._violations()
        bodies = get_accumulated_comments(violations, [ChangedFile("src/a.py")])

        assert len(bodies) == 1
        body = bodies[0]
        assert body.startswith("Found 3 violations:")
        assert body.count(ACCUMULATION_MARKER) == 1
        assert VIOLATION_MARKER not in body
        for v in violations:
            assert body.count(identity(v)) == 1

    def test_header_repeated_in_every_body(self):
        bodies = get_accumulated_comments(self._violations(), [ChangedFile("src/a.py")], "{{violation.message}}", 80)
        assert len(bodies) > 1
        assert all(b.startswith("Found 3 violations:\n\n") for b in bodies)

    def test_violations_without_changed_file_are_skipped(self):
        bodies = get_accumulated_comments(self._violations(), [ChangedFile("src/b.py")])
        assert bodies == []
