"""
Core data structures for Skyscraper puzzle representation and loading
"""
from pathlib import Path
from typing import List, Optional, Tuple, Union
from dataclasses import dataclass

import numpy as np

from .constraints import ConstraintChecker, EMPTY

# Glyph used for empty cells in the text display
EMPTY_CELL = '.'

Coord = Tuple[int, int]


class PuzzleLoadError(ValueError):
    """Raised when a board description is missing, malformed or inconsistent"""


@dataclass(frozen=True)
class EdgeClues:
    """The four clue sequences around the board, fixed for the life of a puzzle"""
    north: Tuple[int, ...]  # columns, viewed from the top
    east: Tuple[int, ...]   # rows, viewed from the right
    south: Tuple[int, ...]  # columns, viewed from the bottom
    west: Tuple[int, ...]   # rows, viewed from the left

    @property
    def dim(self) -> int:
        return len(self.north)


class SkyscraperState:
    """
    One candidate board in the search tree.

    The board snapshot is owned by the state and read-only; the clues are
    shared by every state derived from the same puzzle. `focus` is the cell
    filled to produce this state (None for the loaded puzzle).
    """

    def __init__(self, board, clues: EdgeClues, focus: Optional[Coord] = None):
        self.clues = clues
        self.dim = clues.dim
        self.focus = focus
        self.board = np.array(board, dtype=int)
        self.board.setflags(write=False)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------
    def find_empty(self) -> Optional[Coord]:
        """First empty cell in row-major order, or None if the board is full"""
        empties = np.argwhere(self.board == EMPTY)
        if len(empties) == 0:
            return None
        row, col = empties[0]
        return int(row), int(col)

    def is_complete(self) -> bool:
        """Check if every cell is filled"""
        return self.find_empty() is None

    def row_visibility(self, row: int) -> Tuple[int, int]:
        """(West, East) visibility counts for a row"""
        line = self.board[row]
        return (ConstraintChecker.visibility_count(line),
                ConstraintChecker.visibility_count(line[::-1]))

    def column_visibility(self, col: int) -> Tuple[int, int]:
        """(North, South) visibility counts for a column"""
        line = self.board[:, col]
        return (ConstraintChecker.visibility_count(line),
                ConstraintChecker.visibility_count(line[::-1]))

    def is_goal(self) -> bool:
        """
        Full board whose every row and column matches its clues.
        """
        if not self.is_complete():
            return False

        for i in range(self.dim):
            if self.row_visibility(i) != (self.clues.west[i], self.clues.east[i]):
                return False
            if self.column_visibility(i) != (self.clues.north[i], self.clues.south[i]):
                return False

        return True

    def is_valid(self) -> bool:
        """
        Partial-validity test scoped to the focus cell's row and column.

        Cells elsewhere were checked when they were filled, so only the lines
        touched by the last placement can have become invalid.
        """
        if self.focus is None:
            raise RuntimeError("[puzzle] is_valid() called on a state with no focus cell")

        row, col = self.focus
        return (
            ConstraintChecker.check_both_ends(
                self.board[row], self.clues.west[row], self.clues.east[row], self.dim)
            and ConstraintChecker.check_both_ends(
                self.board[:, col], self.clues.north[col], self.clues.south[col], self.dim)
        )

    def is_consistent(self) -> bool:
        """
        Run the line checks on every row and column. Used on the loaded
        board, whose given cells never pass through is_valid().
        """
        for i in range(self.dim):
            if not ConstraintChecker.check_both_ends(
                    self.board[i], self.clues.west[i], self.clues.east[i], self.dim):
                return False
            if not ConstraintChecker.check_both_ends(
                    self.board[:, i], self.clues.north[i], self.clues.south[i], self.dim):
                return False
        return True

    # -------------------------------------------------------------------------
    # Branching
    # -------------------------------------------------------------------------
    def get_successors(self) -> List['SkyscraperState']:
        """
        Fill the first empty cell with every height not already used in its
        row or column, in ascending order.
        """
        empty = self.find_empty()
        if empty is None:
            return []

        row, col = empty
        used = set(self.board[row].tolist()) | set(self.board[:, col].tolist())

        successors = []
        for value in range(1, self.dim + 1):
            if value in used:
                continue
            successors.append(self._child(row, col, value))
        return successors

    def _child(self, row: int, col: int, value: int) -> 'SkyscraperState':
        board = self.board.copy()
        board[row, col] = value
        return SkyscraperState(board, self.clues, focus=(row, col))

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------
    def to_lists(self) -> List[List[int]]:
        return self.board.tolist()

    def __str__(self):
        """
        Board flanked by its clues:

              1 2 4 2
              --------
            1|. . . .|3
              --------
              4 2 1 2
        """
        rule = "  " + "-" * (self.dim * 2)
        lines = ["  " + " ".join(str(c) for c in self.clues.north), rule]

        for row in range(self.dim):
            cells = " ".join(EMPTY_CELL if v == EMPTY else str(v) for v in self.board[row])
            lines.append(f"{self.clues.west[row]}|{cells}|{self.clues.east[row]}")

        lines.append(rule)
        lines.append("  " + " ".join(str(c) for c in self.clues.south))
        return "\n".join(lines)

    def __repr__(self):
        filled = int(np.count_nonzero(self.board != EMPTY))
        return f"SkyscraperState(dim={self.dim}, filled={filled}/{self.dim * self.dim}, focus={self.focus})"


# -----------------------------------------------------------------------------
# Loading
# -----------------------------------------------------------------------------
CLUE_NAMES = ("North", "East", "South", "West")


def parse_puzzle(text: str) -> SkyscraperState:
    """
    Parse a board description into the initial state.

    The description is a stream of whitespace-separated integers, so line
    breaks are free; by convention:
        DIM
        North clues, left to right
        East clues, top to bottom
        South clues, left to right
        West clues, top to bottom
        DIM board rows, 0 for empty
    """
    tokens = text.split()
    if not tokens:
        raise PuzzleLoadError("Board description is empty")

    values = []
    for pos, tok in enumerate(tokens, 1):
        try:
            values.append(int(tok))
        except ValueError:
            raise PuzzleLoadError(f"Value {pos}: expected an integer, got {tok!r}") from None

    dim = values[0]
    if dim < 1:
        raise PuzzleLoadError(f"Dimension must be at least 1, got {dim}")

    expected = 1 + len(CLUE_NAMES) * dim + dim * dim
    if len(values) != expected:
        raise PuzzleLoadError(
            f"Expected {expected} values for a {dim}x{dim} board "
            f"(dimension, 4x{dim} clues, {dim * dim} cells), got {len(values)}")

    # Edge clues
    clue_rows = []
    for i, name in enumerate(CLUE_NAMES):
        clues = values[1 + i * dim:1 + (i + 1) * dim]
        bad = [v for v in clues if not 1 <= v <= dim]
        if bad:
            raise PuzzleLoadError(f"{name} clue {bad[0]} outside 1..{dim}")
        clue_rows.append(tuple(clues))

    # Initial board
    grid = np.array(values[1 + len(CLUE_NAMES) * dim:], dtype=int).reshape(dim, dim)
    for row in range(dim):
        bad = [int(v) for v in grid[row] if not 0 <= v <= dim]
        if bad:
            raise PuzzleLoadError(f"Board row {row}: cell value {bad[0]} outside 0..{dim}")

    for i in range(dim):
        if not ConstraintChecker.is_latin(grid[i]):
            raise PuzzleLoadError(f"Board row {i} repeats a height")
        if not ConstraintChecker.is_latin(grid[:, i]):
            raise PuzzleLoadError(f"Board column {i} repeats a height")

    north, east, south, west = clue_rows
    return SkyscraperState(grid, EdgeClues(north=north, east=east, south=south, west=west))


def load_puzzle(path: Union[str, Path]) -> SkyscraperState:
    """Load a board description file"""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except FileNotFoundError:
        raise PuzzleLoadError(f"Board file not found: {path}") from None
    except UnicodeDecodeError as e:
        raise PuzzleLoadError(f"Board file {path} is not a text file: {e}") from e
    except OSError as e:
        raise PuzzleLoadError(f"Cannot read board file {path}: {e}") from e

    return parse_puzzle(text)
