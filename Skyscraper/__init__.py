"""
Skyscraper Puzzle Solver Package

A backtracking solver for Skyscraper (Latin square + edge visibility clue) puzzles.
"""

from .constraints import ConstraintChecker, EMPTY
from .puzzle import EdgeClues, SkyscraperState, PuzzleLoadError, parse_puzzle, load_puzzle
from .solver import Backtracker, SolverTimeout, TraceEvent
from .output import SolutionFormatter
from .diagnostics import SolverDiagnostics

__version__ = "1.0.0"
__all__ = [
    'ConstraintChecker',
    'EMPTY',
    'EdgeClues',
    'SkyscraperState',
    'PuzzleLoadError',
    'parse_puzzle',
    'load_puzzle',
    'Backtracker',
    'SolverTimeout',
    'TraceEvent',
    'SolutionFormatter',
    'SolverDiagnostics',
]
