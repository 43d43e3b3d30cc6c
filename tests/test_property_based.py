from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from list_renumber.buffer import TextBuffer
from list_renumber.classifier import classify
from list_renumber.engine import scan
from list_renumber.models import ListItem, ScanMode
from list_renumber.operations import collect_range_edits, renumber_at_cursor, renumber_range

indents = st.sampled_from(["", "", "\t", "\t\t", "  ", "   ", "    ", "      ", "        "])
item_lines = st.builds(
    lambda indent, ordinal, text: f"{indent}{ordinal}. {text}",
    indents,
    st.integers(min_value=0, max_value=120),
    st.text(alphabet="abc xyz", max_size=8),
)
plain_lines = st.sampled_from(["", "text", "- bullet", "  indented prose", "1.no space"])
documents = st.lists(st.one_of(item_lines, item_lines, plain_lines), min_size=1, max_size=25)
nested_items = st.lists(
    st.builds(
        lambda indent, ordinal: f"{indent}{ordinal}. child",
        st.sampled_from(["\t", "  ", "   ", "    ", "      "]),
        st.integers(min_value=0, max_value=120),
    ),
    max_size=4,
)


@given(documents)
def test_range_renumbering_is_idempotent(lines: list[str]):
    buffer = TextBuffer(lines)
    renumber_range(buffer, 0, buffer.last_line())

    assert collect_range_edits(buffer, 0, buffer.last_line()) == []


@given(documents)
def test_plain_lines_are_never_modified(lines: list[str]):
    buffer = TextBuffer(lines)
    renumber_range(buffer, 0, buffer.last_line())

    for before, after in zip(lines, buffer.lines):
        if not isinstance(classify(before), ListItem):
            assert after == before


@given(documents)
def test_edits_only_change_ordinals(lines: list[str]):
    buffer = TextBuffer(lines)

    for edit in collect_range_edits(buffer, 0, buffer.last_line()):
        old, new = classify(edit.old_text), classify(edit.new_text)
        assert isinstance(old, ListItem) and isinstance(new, ListItem)
        assert old.indent_width == new.indent_width
        assert edit.old_text[old.content_offset :] == edit.new_text[new.content_offset :]
        assert old.ordinal != new.ordinal


@given(
    st.integers(min_value=0, max_value=50),
    st.lists(st.integers(min_value=0, max_value=99), min_size=1, max_size=15),
)
def test_flat_list_counts_up_from_first_item(first: int, rest: list[int]):
    buffer = TextBuffer([f"{first}. a"] + [f"{ordinal}. a" for ordinal in rest])

    renumber_range(buffer, 0, buffer.last_line())

    assert [classify(line).ordinal for line in buffer.lines] == list(
        range(first, first + len(rest) + 1)
    )


@given(documents, st.data())
def test_cursor_renumbering_is_idempotent(lines: list[str], data):
    buffer = TextBuffer(lines)
    cursor = data.draw(st.integers(min_value=0, max_value=buffer.last_line()))

    renumber_at_cursor(buffer, cursor)

    assert renumber_at_cursor(buffer, cursor) is False


@given(documents, st.data())
def test_local_edits_are_a_subset_of_full_edits(lines: list[str], data):
    buffer = TextBuffer(lines)
    start = data.draw(st.integers(min_value=0, max_value=buffer.last_line()))

    local = scan(buffer, start, ScanMode.LOCAL)
    full = scan(buffer, start, ScanMode.FULL)

    assert full.edits[: len(local.edits)] == local.edits
    assert local.end_line <= full.end_line


@given(st.integers(min_value=0, max_value=50), st.lists(nested_items, min_size=1, max_size=8))
def test_nested_children_never_change_parent_ordinals(first: int, children: list[list[str]]):
    lines: list[str] = []
    parents: dict[int, str] = {}
    for offset, nested in enumerate(children):
        parents[len(lines)] = f"{first + offset}. parent"
        lines.append(parents[len(lines)])
        lines.extend(nested)
    buffer = TextBuffer(lines)

    renumber_range(buffer, 0, buffer.last_line())

    for index, text in parents.items():
        assert buffer.lines[index] == text
