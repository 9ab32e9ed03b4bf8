"""Tests for the Myers line diff."""

from hypothesis import given, strategies as st

from core.diff import DiffOp, DiffTag, diff_documents, diff_lines, split_lines


def apply_script(ops):
    """Rebuild both sides from an edit script."""
    a = [op.text for op in ops if op.tag != DiffTag.INSERT]
    b = [op.text for op in ops if op.tag != DiffTag.DELETE]
    return a, b


def lcs_length(a, b):
    table = [[0] * (len(b) + 1) for _ in range(len(a) + 1)]
    for i in range(len(a) - 1, -1, -1):
        for j in range(len(b) - 1, -1, -1):
            if a[i] == b[j]:
                table[i][j] = table[i + 1][j + 1] + 1
            else:
                table[i][j] = max(table[i + 1][j], table[i][j + 1])
    return table[0][0]


def edit_count(ops):
    return sum(1 for op in ops if op.tag != DiffTag.EQUAL)


small_lines = st.lists(st.sampled_from(["a", "b", "c", "d", ""]), max_size=12)


class TestDiffLines:
    """Tests for diff_lines."""

    def test_both_empty(self):
        assert diff_lines([], []) == []

    def test_empty_before_is_all_inserts(self):
        ops = diff_lines([], ["x", "y"])
        assert [op.tag for op in ops] == [DiffTag.INSERT, DiffTag.INSERT]
        assert [op.index_b for op in ops] == [1, 2]

    def test_empty_after_is_all_deletes(self):
        ops = diff_lines(["x", "y"], [])
        assert [op.tag for op in ops] == [DiffTag.DELETE, DiffTag.DELETE]
        assert [op.index_a for op in ops] == [1, 2]

    def test_identical_is_all_equal(self):
        lines = ["one", "two", "three"]
        ops = diff_lines(lines, lines)

        assert all(op.tag == DiffTag.EQUAL for op in ops)
        assert [(op.index_a, op.index_b) for op in ops] == [(1, 1), (2, 2), (3, 3)]

    def test_single_substitution(self):
        assert diff_lines(["1"], ["2"]) == [
            DiffOp(DiffTag.DELETE, "1", index_a=1),
            DiffOp(DiffTag.INSERT, "2", index_b=1),
        ]

    def test_middle_line_changed(self):
        ops = diff_lines(["x", "y", "z"], ["x", "q", "z"])

        assert [op.tag for op in ops] == [
            DiffTag.EQUAL, DiffTag.DELETE, DiffTag.INSERT, DiffTag.EQUAL
        ]
        assert ops[1].text == "y"
        assert ops[2].text == "q"
        assert ops[3].index_a == 3 and ops[3].index_b == 3

    def test_changed_first_line(self):
        ops = diff_lines(["PermitRootLogin yes", "Port 22"], ["PermitRootLogin no", "Port 22"])

        assert [(op.tag, op.text) for op in ops] == [
            (DiffTag.DELETE, "PermitRootLogin yes"),
            (DiffTag.INSERT, "PermitRootLogin no"),
            (DiffTag.EQUAL, "Port 22"),
        ]

    def test_trailing_whitespace_is_significant(self):
        ops = diff_lines(["value"], ["value "])
        assert edit_count(ops) == 2

    def test_case_is_significant(self):
        assert edit_count(diff_lines(["Yes"], ["yes"])) == 2

    def test_appended_lines(self):
        ops = diff_lines(["a"], ["a", "b", "c"])
        assert [op.tag for op in ops] == [DiffTag.EQUAL, DiffTag.INSERT, DiffTag.INSERT]

    def test_to_dict_omits_missing_side(self):
        insert = DiffOp(DiffTag.INSERT, "x", index_b=4)
        assert insert.to_dict() == {"tag": "insert", "text": "x", "index_b": 4}

    @given(small_lines, small_lines)
    def test_script_rebuilds_both_sides(self, a, b):
        assert apply_script(diff_lines(a, b)) == (a, b)

    @given(small_lines, small_lines)
    def test_script_is_minimal(self, a, b):
        ops = diff_lines(a, b)
        assert edit_count(ops) == len(a) + len(b) - 2 * lcs_length(a, b)

    @given(small_lines)
    def test_self_diff_has_no_edits(self, a):
        assert edit_count(diff_lines(a, a)) == 0

    @given(small_lines, small_lines)
    def test_indexes_are_sequential(self, a, b):
        ops = diff_lines(a, b)
        assert [op.index_a for op in ops if op.index_a is not None] == list(range(1, len(a) + 1))
        assert [op.index_b for op in ops if op.index_b is not None] == list(range(1, len(b) + 1))

    @given(small_lines, small_lines)
    def test_deterministic(self, a, b):
        assert diff_lines(a, b) == diff_lines(a, b)


class TestSplitLines:
    def test_empty(self):
        assert split_lines("") == []

    def test_trailing_newline_does_not_add_line(self):
        assert split_lines("a\nb\n") == ["a", "b"]

    def test_crlf(self):
        assert split_lines("a\r\nb") == ["a", "b"]

    def test_blank_lines_kept(self):
        assert split_lines("a\n\nb") == ["a", "", "b"]


class TestDiffDocuments:
    def test_counts(self):
        diff = diff_documents("a\nb\nc\n", "a\nB\nc\nd\n")

        assert diff.insert_count == 2
        assert diff.delete_count == 1
        assert not diff.is_identical

    def test_identical(self):
        diff = diff_documents("same\ntext", "same\ntext")
        assert diff.is_identical
        assert diff.to_dict()["operations"][0] == {
            "tag": "equal", "text": "same", "index_a": 1, "index_b": 1
        }

    def test_both_empty_is_identical(self):
        diff = diff_documents("", "")
        assert diff.operations == ()
        assert diff.is_identical
