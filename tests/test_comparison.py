"""Tests for the section aligner."""

import logging

import pytest
from hypothesis import given, strategies as st

from core.comparison import (
    SectionStatus,
    align_sections,
    classify_section,
    compare_logs,
    compute_log_hash,
    find_duplicate_titles,
)
from core.diff import DiffTag
from core.sections import Section, parse_log


def make_sections(*pairs):
    return [Section(title=t, body=b, ordinal=i) for i, (t, b) in enumerate(pairs)]


class TestClassifySection:
    def test_added(self):
        assert classify_section(None, "x") == SectionStatus.ADDED

    def test_removed(self):
        assert classify_section("x", None) == SectionStatus.REMOVED

    def test_unchanged_after_trim(self):
        assert classify_section("  x\n", "x") == SectionStatus.UNCHANGED

    def test_modified(self):
        assert classify_section("x", "y") == SectionStatus.MODIFIED

    def test_empty_bodies_are_present(self):
        assert classify_section("", "") == SectionStatus.UNCHANGED
        assert classify_section(None, "") == SectionStatus.ADDED

    def test_absent_on_both_sides_is_an_error(self):
        with pytest.raises(ValueError):
            classify_section(None, None)


class TestAlignSections:
    """Tests for align_sections."""

    def test_added_removed_modified(self):
        a = make_sections(("Foo", "1"), ("Bar", "x"))
        b = make_sections(("Foo", "2"), ("Baz", "y"))

        entries = align_sections(a, b)

        assert [(e.title, e.status) for e in entries] == [
            ("Foo", SectionStatus.MODIFIED),
            ("Bar", SectionStatus.REMOVED),
            ("Baz", SectionStatus.ADDED),
        ]
        assert [(op.tag, op.text) for op in entries[0].edit_script] == [
            (DiffTag.DELETE, "1"),
            (DiffTag.INSERT, "2"),
        ]
        assert entries[1].body_b is None
        assert entries[2].body_a is None

    def test_reordered_sections_are_unchanged(self):
        a = make_sections(("One", "1"), ("Two", "2"))
        b = make_sections(("Two", "2"), ("One", "1"))

        entries = align_sections(a, b)

        assert [e.title for e in entries] == ["One", "Two"]
        assert all(e.status == SectionStatus.UNCHANGED for e in entries)

    def test_order_is_a_then_new_titles_from_b(self):
        a = make_sections(("A", ""), ("C", ""))
        b = make_sections(("B", ""), ("C", ""), ("D", ""))

        assert [e.title for e in align_sections(a, b)] == ["A", "C", "B", "D"]

    def test_edit_script_only_on_modified(self):
        a = make_sections(("Same", "v"), ("Gone", "g"), ("Diff", "1"))
        b = make_sections(("Same", "v"), ("Diff", "2"), ("New", "n"))

        for entry in align_sections(a, b):
            if entry.status == SectionStatus.MODIFIED:
                assert entry.edit_script
            else:
                assert entry.edit_script is None

    def test_repeated_title_keeps_last_body(self):
        a = make_sections(("Dup", "first"), ("Dup", "second"))
        b = make_sections(("Dup", "second"))

        entries = align_sections(a, b)

        assert len(entries) == 1
        assert entries[0].status == SectionStatus.UNCHANGED
        assert entries[0].body_a == "second"

    def test_both_empty(self):
        assert align_sections([], []) == []

    def test_line_counts(self):
        a = make_sections(("Mod", "a\nb"), ("Gone", "x\ny\nz"))
        b = make_sections(("Mod", "a\nc\nd"), ("New", "n"))

        entries = {e.title: e for e in align_sections(a, b)}

        assert (entries["Mod"].lines_added, entries["Mod"].lines_removed) == (2, 1)
        assert (entries["Gone"].lines_added, entries["Gone"].lines_removed) == (0, 3)
        assert (entries["New"].lines_added, entries["New"].lines_removed) == (1, 0)

    @given(
        st.lists(st.tuples(st.sampled_from("ABCDE"), st.sampled_from(["x", "y", " x "])), max_size=6),
        st.lists(st.tuples(st.sampled_from("ABCDE"), st.sampled_from(["x", "y", " x "])), max_size=6),
    )
    def test_every_title_appears_exactly_once(self, pairs_a, pairs_b):
        a = make_sections(*pairs_a)
        b = make_sections(*pairs_b)

        entries = align_sections(a, b)
        titles = [e.title for e in entries]

        assert len(titles) == len(set(titles))
        assert set(titles) == {t for t, _ in pairs_a} | {t for t, _ in pairs_b}

        for entry in entries:
            assert entry.status == classify_section(entry.body_a, entry.body_b)


class TestFindDuplicateTitles:
    def test_first_seen_order(self):
        sections = make_sections(("B", ""), ("A", ""), ("B", ""), ("A", ""), ("B", ""))
        assert find_duplicate_titles(sections) == ["B", "A"]

    def test_none(self):
        assert find_duplicate_titles(make_sections(("A", ""), ("B", ""))) == []


class TestCompareLogs:
    """Tests for compare_logs on parsed logs."""

    def test_before_after(self, bracketed_before, bracketed_after):
        result = compare_logs(parse_log(bracketed_before, "before.txt"), parse_log(bracketed_after, "after.txt"))

        assert [(e.title, e.status) for e in result.entries] == [
            ("File Header / Meta", SectionStatus.UNCHANGED),
            ("Firewall", SectionStatus.UNCHANGED),
            ("SSH", SectionStatus.MODIFIED),
            ("Banner", SectionStatus.REMOVED),
            ("Audit", SectionStatus.ADDED),
        ]
        assert result.change_count == 3
        assert not result.is_identical
        assert result.summary == {"added": 1, "removed": 1, "modified": 1, "unchanged": 2}
        assert result.name_a == "before.txt"
        assert result.name_b == "after.txt"

    def test_identical_logs(self, bracketed_before):
        log = parse_log(bracketed_before)
        result = compare_logs(log, log)

        assert result.is_identical
        assert result.old_hash == result.new_hash
        assert result.changes == []

    def test_hash_differs_on_change(self, bracketed_before, bracketed_after):
        result = compare_logs(parse_log(bracketed_before), parse_log(bracketed_after))
        assert result.old_hash != result.new_hash

    def test_duplicate_titles_are_reported(self, caplog):
        text = (
            "=" * 60 + "\n[ SECTION ] Dup\n" + "=" * 60 + "\none\n"
            + "=" * 60 + "\n[ SECTION ] Dup\n" + "=" * 60 + "\ntwo\n"
        )
        log = parse_log(text, "dup.txt")

        with caplog.at_level(logging.WARNING, logger="core.comparison"):
            result = compare_logs(log, log)

        assert result.duplicate_titles == ("Dup",)
        assert "Dup" in caplog.text

    def test_to_dict(self, bracketed_before, bracketed_after):
        data = compare_logs(parse_log(bracketed_before), parse_log(bracketed_after)).to_dict()

        assert data["change_count"] == 3
        assert data["entries"][2]["status"] == "modified"
        assert data["entries"][2]["edit_script"][0] == {
            "tag": "delete", "text": "PermitRootLogin yes", "index_a": 1
        }
        assert "edit_script" not in data["entries"][0]


def test_compute_log_hash_ignores_surrounding_whitespace():
    assert compute_log_hash(make_sections(("A", "x"))) == compute_log_hash(make_sections(("A", " x\n")))
