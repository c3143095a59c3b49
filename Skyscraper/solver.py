"""
Backtracking solver for Skyscraper puzzles

Plain depth-first search over SkyscraperState:
1. Givens on the loaded board are checked once, line by line
2. Goal test first - a full, clue-consistent board is returned as-is
3. A full board that fails the goal test is a dead end (no successors)
4. Successors are tried in ascending value order, pruned by is_valid()
5. First solution wins and propagates straight up the call stack

Correctness relies only on exhaustiveness of the validity-filtered tree;
every edge of the tree fills one cell, so depth is bounded by N*N.
"""

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .puzzle import SkyscraperState


class SolverTimeout(RuntimeError):
    """Raised when a search exceeds the caller's time budget"""


@dataclass(frozen=True)
class TraceEvent:
    """One candidate examined by the search"""
    depth: int
    row: int
    col: int
    value: int
    accepted: bool


TraceHook = Callable[[TraceEvent], None]


class Backtracker:
    def __init__(self, verbose: bool = False, trace: Optional[TraceHook] = None):
        self.verbose = verbose
        self.trace = trace
        self.stats: Dict[str, int] = {}
        self.timeout: Optional[float] = None
        self.start_time = 0.0
        self._reset_stats()

    def _reset_stats(self) -> None:
        self.stats = {
            'nodes_expanded': 0,
            'candidates_tried': 0,
            'pruned': 0,
            'backtracks': 0,
            'max_depth': 0,
        }

    # -------------------------------------------------------------------------
    # Main solving driver
    # -------------------------------------------------------------------------
    def solve(self, initial: SkyscraperState,
              timeout_seconds: Optional[float] = None) -> Optional[SkyscraperState]:
        """
        Search for the first goal state reachable from `initial`.

        Returns the solution, or None when the search tree is exhausted.
        Raises SolverTimeout if `timeout_seconds` is given and runs out.
        """
        self._reset_stats()
        self.timeout = timeout_seconds
        self.start_time = time.time()

        if self.verbose:
            print(f"Starting backtracking search: {initial!r}")

        # Givens that already break a clue make the whole tree a dead end
        if not initial.is_consistent():
            if self.verbose:
                print("Given cells contradict the clues")
            solution = None
        else:
            solution = self._backtrack(initial, 0)

        if self.verbose:
            print("\n✓ Puzzle solved!" if solution is not None else "\n✗ No solution found")
            self._print_stats()

        return solution

    def _backtrack(self, state: SkyscraperState, depth: int) -> Optional[SkyscraperState]:
        # Timeout check
        if self.timeout is not None and time.time() - self.start_time > self.timeout:
            raise SolverTimeout(f"Search exceeded {self.timeout}s")

        self.stats['max_depth'] = max(self.stats['max_depth'], depth)

        # Success check
        if state.is_goal():
            return state

        # Full but wrong - nothing left to branch on
        if state.is_complete():
            return None

        self.stats['nodes_expanded'] += 1

        for child in state.get_successors():
            self.stats['candidates_tried'] += 1
            valid = child.is_valid()
            self._emit(child, depth, valid)

            if not valid:
                self.stats['pruned'] += 1
                continue

            solution = self._backtrack(child, depth + 1)
            if solution is not None:
                return solution

            self.stats['backtracks'] += 1

        return None

    # -------------------------------------------------------------------------
    # Tracing
    # -------------------------------------------------------------------------
    def _emit(self, child: SkyscraperState, depth: int, accepted: bool) -> None:
        if self.trace is None and not self.verbose:
            return

        row, col = child.focus
        event = TraceEvent(depth=depth, row=row, col=col,
                           value=int(child.board[row, col]), accepted=accepted)

        if self.trace is not None:
            self.trace(event)

        if self.verbose:
            mark = "ok" if accepted else "pruned"
            print(f"{'  ' * depth}({row},{col}) <- {event.value} {mark}")

    def _print_stats(self) -> None:
        """Print solving statistics"""
        print("\nSolving Statistics:")
        print(f"  Nodes expanded: {self.stats['nodes_expanded']}")
        print(f"  Candidates tried: {self.stats['candidates_tried']}")
        print(f"  Pruned: {self.stats['pruned']}")
        print(f"  Backtracks: {self.stats['backtracks']}")
        print(f"  Max depth: {self.stats['max_depth']}")
