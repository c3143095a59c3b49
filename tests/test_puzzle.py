import numpy as np
import pytest

from Skyscraper.puzzle import (
    EdgeClues, PuzzleLoadError, SkyscraperState, load_puzzle, parse_puzzle,
)
from conftest import CLUES_4X4, SOLVED_4X4


# -----------------------------------------------------------------------------
# Loading
# -----------------------------------------------------------------------------
def test_load_board(boards_dir):
    state = load_puzzle(boards_dir / "board5x5-given.txt")
    assert state.dim == 5
    assert state.focus is None
    assert state.clues.north == (2, 4, 1, 3, 2)
    assert state.clues.west == (2, 1, 3, 2, 2)
    assert state.board[0, 2] == 5
    assert state.find_empty() == (0, 0)


def test_blank_lines_are_ignored():
    state = parse_puzzle("\n1\n\n1\n1\n1\n1\n\n0\n")
    assert state.dim == 1
    assert state.find_empty() == (0, 0)


@pytest.mark.parametrize("text, message", [
    ("", "empty"),
    ("3\n1 2\n1 2 3\n1 2 3\n1 2 3\n0 0 0\n0 0 0\n0 0 0\n", "Expected 22 values for a 3x3 board"),
    ("3\n1 2 3\n1 2 3\n1 2 3\n1 2 3\n0 0 0\n0 0\n0 0 0\n", "got 21"),
    ("2\n1 2\n1 2\n1 2\n1 2\n0 0\n", "Expected 13 values"),
    ("2\n1 x\n1 2\n1 2\n1 2\n0 0\n0 0\n", "expected an integer, got 'x'"),
    ("2\n1 3\n1 2\n1 2\n1 2\n0 0\n0 0\n", "North clue 3 outside 1..2"),
    ("2\n1 2\n1 2\n1 2\n0 2\n0 0\n0 0\n", "West clue 0"),
    ("2\n1 2\n1 2\n1 2\n1 2\n0 3\n0 0\n", "cell value 3"),
    ("2\n1 2\n1 2\n1 2\n1 2\n1 1\n0 0\n", "row 0 repeats"),
    ("2\n1 2\n1 2\n1 2\n1 2\n2 0\n2 0\n", "column 0 repeats"),
    ("0\n", "at least 1"),
    ("-1\n", "at least 1"),
])
def test_malformed_descriptions_are_rejected(text, message):
    with pytest.raises(PuzzleLoadError, match=message):
        parse_puzzle(text)


def test_rows_may_share_a_line():
    # Only whitespace separates values, line breaks carry no meaning
    state = parse_puzzle("2\n2 1 1 2\n1 2 2 1\n0 0 0 0\n")
    assert state.clues.north == (2, 1)
    assert state.clues.east == (1, 2)
    assert state.clues.south == (1, 2)
    assert state.clues.west == (2, 1)
    assert state.to_lists() == [[0, 0], [0, 0]]


def test_binary_file_is_load_error(tmp_path):
    board = tmp_path / "board.txt"
    board.write_bytes(b"\xff\xfe\x00garbage\n")
    with pytest.raises(PuzzleLoadError, match="not a text file"):
        load_puzzle(board)


def test_missing_file(tmp_path):
    with pytest.raises(PuzzleLoadError, match="not found"):
        load_puzzle(tmp_path / "nope.txt")


def test_load_error_is_value_error():
    assert issubclass(PuzzleLoadError, ValueError)


# -----------------------------------------------------------------------------
# Goal test
# -----------------------------------------------------------------------------
def test_single_cell_board_is_goal():
    clues = EdgeClues(north=(1,), east=(1,), south=(1,), west=(1,))
    assert SkyscraperState([[1]], clues).is_goal()
    assert not SkyscraperState([[0]], clues).is_goal()


def test_solved_board_is_goal(solved_4x4):
    assert solved_4x4.is_goal()
    assert solved_4x4.is_complete()
    assert solved_4x4.get_successors() == []


def test_full_board_with_wrong_clues_is_not_goal():
    clues = EdgeClues(north=(1, 2, 2, 4), east=(4, 2, 2, 1),
                      south=(4, 2, 2, 1), west=(1, 2, 3, 4))
    assert not SkyscraperState(SOLVED_4X4, clues).is_goal()


def test_partial_board_is_not_goal(empty_4x4):
    assert not empty_4x4.is_goal()


def test_visibility_helpers(solved_4x4):
    assert solved_4x4.row_visibility(0) == (1, 4)
    assert solved_4x4.column_visibility(3) == (4, 1)


# -----------------------------------------------------------------------------
# Successors
# -----------------------------------------------------------------------------
def test_successors_fill_first_empty_cell(empty_4x4):
    children = empty_4x4.get_successors()
    assert [c.board[0, 0] for c in children] == [1, 2, 3, 4]
    assert all(c.focus == (0, 0) for c in children)


def test_successors_skip_values_in_row_and_column(boards_dir):
    parent = load_puzzle(boards_dir / "board5x5-given.txt")
    parent = parent.get_successors()[0]   # (0,0) = 1
    children = parent.get_successors()

    row, col = children[0].focus
    assert (row, col) == (0, 1)
    values = [int(c.board[row, col]) for c in children]
    assert len(values) == len(set(values))
    used = set(parent.board[row].tolist()) | set(parent.board[:, col].tolist())
    assert not used & set(values)
    assert values == [2, 4]


def test_successors_leave_parent_untouched(empty_4x4):
    before = empty_4x4.board.copy()
    empty_4x4.get_successors()
    assert np.array_equal(empty_4x4.board, before)


def test_board_snapshot_is_read_only(empty_4x4):
    with pytest.raises(ValueError):
        empty_4x4.board[0, 0] = 1


def test_clues_are_shared_not_copied(empty_4x4):
    child = empty_4x4.get_successors()[0]
    assert child.clues is empty_4x4.clues


# -----------------------------------------------------------------------------
# Validity
# -----------------------------------------------------------------------------
def test_is_valid_requires_focus(empty_4x4):
    with pytest.raises(RuntimeError):
        empty_4x4.is_valid()


def test_is_valid_prunes_clue_one_edge(empty_4x4):
    # North[0] == 1 and West[0] == 1: only a 4 fits at (0,0)
    valid = [int(c.board[0, 0]) for c in empty_4x4.get_successors() if c.is_valid()]
    assert valid == [4]


def test_is_valid_checks_completed_row():
    board = [
        [4, 3, 2, 1],
        [1, 4, 3, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ]
    state = SkyscraperState(board, CLUES_4X4)
    children = state.get_successors()
    assert [int(c.board[1, 3]) for c in children] == [2]
    # 1 4 3 2 shows two buildings from the West but three from the East
    assert not children[0].is_valid()


def test_queries_are_idempotent(empty_4x4):
    child = empty_4x4.get_successors()[3]
    assert child.is_valid() == child.is_valid()
    assert empty_4x4.is_goal() == empty_4x4.is_goal()
    assert child.is_valid()


# -----------------------------------------------------------------------------
# Rendering
# -----------------------------------------------------------------------------
def test_display_format(boards_dir):
    state = load_puzzle(boards_dir / "board2x2.txt")
    assert str(state) == (
        "  2 1\n"
        "  ----\n"
        "2|. .|1\n"
        "1|. .|2\n"
        "  ----\n"
        "  1 2"
    )


def test_display_shows_filled_cells(solved_4x4):
    lines = str(solved_4x4).splitlines()
    assert lines[2] == "1|4 3 2 1|4"
    assert lines[-1] == "  4 2 2 1"


def test_to_lists(solved_4x4):
    assert solved_4x4.to_lists() == SOLVED_4X4
