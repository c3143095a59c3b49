"""
Constraint checking for the Skyscraper solver

Every check works on a single *line* of heights (a row or a column) given
in viewing order, i.e. index 0 is the cell nearest the clue's edge.
A row seen from the East is just the row reversed, a column seen from the
South is the column reversed, so one set of rules serves all four edges.

Key points:
 - Visibility count = number of running-maximum increases
 - Clue 1 / clue N / clue N-1 edge rules fire as soon as cells are filled
 - Full visibility check only once the line is complete
"""

from typing import Sequence

import numpy as np

EMPTY = 0


# -----------------------------------------------------------------------------
# Constraint Checking
# -----------------------------------------------------------------------------
class ConstraintChecker:
    """Validates rows and columns against their edge clues."""

    # ---------- small helpers ----------

    @staticmethod
    def visibility_count(heights: Sequence[int]) -> int:
        """
        Count the buildings visible from the start of `heights`.

        Scan with a running max starting at 0; every value above the running
        max is visible and becomes the new max. [1, 2, 4, 2] -> 3.
        """
        running = np.maximum.accumulate(np.asarray(heights, dtype=int))
        return int(np.count_nonzero(np.diff(running, prepend=0) > 0))

    @staticmethod
    def is_complete(line: Sequence[int]) -> bool:
        """True if no cell in the line is empty"""
        return not np.any(np.asarray(line) == EMPTY)

    @staticmethod
    def is_latin(line: Sequence[int]) -> bool:
        """True if no non-empty height repeats within the line"""
        filled = [int(v) for v in line if v != EMPTY]
        return len(filled) == len(set(filled))

    # ---------- clue rules ----------

    @staticmethod
    def check_line(line: Sequence[int], clue: int, dim: int) -> bool:
        """
        Partial-validity test of one line against the clue at its edge.

        Each rule is a necessary condition, so a False here means no
        completion of this line can satisfy the clue.
        """
        edge = line[0]

        # Only the tallest building can hide every other one
        if clue == 1 and edge != EMPTY and edge != dim:
            return False

        # Everything visible: heights must be exactly 1..N away from the edge
        if clue == dim:
            for distance, height in enumerate(line):
                if height != EMPTY and height != distance + 1:
                    return False

        # N-1 visible: the edge cannot hold N (N >= 3) or N-1 (N >= 4)
        elif clue == dim - 1 and dim >= 3 and edge != EMPTY:
            if edge == dim:
                return False
            if dim >= 4 and edge == dim - 1:
                return False

        if ConstraintChecker.is_complete(line):
            return ConstraintChecker.visibility_count(line) == clue

        return True

    @staticmethod
    def check_both_ends(line: Sequence[int], near_clue: int, far_clue: int, dim: int) -> bool:
        """Check a row (West/East) or a column (North/South) from both of its edges"""
        return (ConstraintChecker.check_line(line, near_clue, dim)
                and ConstraintChecker.check_line(line[::-1], far_clue, dim))
