import pytest

from list_renumber.buffer import TextBuffer
from list_renumber.exceptions import EditConflictError, LineIndexError
from list_renumber.models import Edit


def test_from_text_round_trips_line_endings():
    text = "1. a\r\n3. b\nlast"

    buffer = TextBuffer.from_text(text)

    assert buffer.lines == ("1. a", "3. b", "last")
    assert buffer.to_text() == text


def test_from_text_keeps_trailing_newline():
    buffer = TextBuffer.from_text("1. a\n2. b\n")

    assert buffer.line_count == 2
    assert buffer.last_line() == 1
    assert buffer.to_text() == "1. a\n2. b\n"


def test_empty_text_has_one_empty_line():
    buffer = TextBuffer.from_text("")

    assert buffer.lines == ("",)
    assert buffer.last_line() == 0
    assert buffer.to_text() == ""


def test_constructor_joins_lines_with_newlines():
    buffer = TextBuffer(["1. a", "2. b"])

    assert buffer.to_text() == "1. a\n2. b"


def test_constructor_rejects_mismatched_endings():
    with pytest.raises(ValueError):
        TextBuffer(["a", "b"], endings=["\n"])


@pytest.mark.parametrize("index", [-1, 2, 10])
def test_get_line_out_of_bounds(index: int):
    buffer = TextBuffer(["a", "b"])

    with pytest.raises(LineIndexError) as excinfo:
        buffer.get_line(index)

    assert isinstance(excinfo.value, IndexError)
    assert excinfo.value.index == index
    assert excinfo.value.line_count == 2


def test_apply_edit_batch_replaces_lines():
    buffer = TextBuffer(["1. a", "3. b", "5. c"])

    buffer.apply_edit_batch([Edit(1, "3. b", "2. b"), Edit(2, "5. c", "3. c")])

    assert buffer.lines == ("1. a", "2. b", "3. c")
    assert buffer.version == 1


def test_apply_edit_batch_is_all_or_nothing():
    buffer = TextBuffer(["1. a", "3. b", "5. c"])

    with pytest.raises(EditConflictError) as excinfo:
        buffer.apply_edit_batch([Edit(1, "3. b", "2. b"), Edit(2, "4. c", "3. c")])

    assert excinfo.value.line == 2
    assert buffer.lines == ("1. a", "3. b", "5. c")
    assert buffer.version == 0


@pytest.mark.parametrize(
    "edit",
    [
        Edit(5, "x", "y"),
        Edit(-1, "x", "y"),
        Edit(0, "1. a", "1. a\n2. b"),
    ],
)
def test_apply_edit_batch_rejects_invalid_edits(edit: Edit):
    buffer = TextBuffer(["1. a"])

    with pytest.raises(EditConflictError):
        buffer.apply_edit_batch([edit])

    assert buffer.lines == ("1. a",)


def test_apply_edit_batch_rejects_conflicting_edits_for_one_line():
    buffer = TextBuffer(["1. a", "3. b"])

    with pytest.raises(EditConflictError):
        buffer.apply_edit_batch([Edit(1, "3. b", "2. b"), Edit(1, "3. b", "4. b")])

    assert buffer.lines == ("1. a", "3. b")


def test_empty_batch_leaves_version_unchanged():
    buffer = TextBuffer(["1. a"])

    buffer.apply_edit_batch([])

    assert buffer.version == 0
