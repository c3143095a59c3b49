#!/usr/bin/env python3
"""
Skyscraper Solver - Main Entry Point

Usage:
    python -m Skyscraper.main data/boards/board4x4.txt [true|false]
    python -m Skyscraper.main --all [data/boards]
    python -m Skyscraper.main  # Solves the configured default board

The optional true/false argument turns on the search trace.
"""

import sys
import time
from pathlib import Path
from typing import Optional

from .puzzle import PuzzleLoadError, load_puzzle
from .solver import Backtracker, SolverTimeout
from .output import SolutionFormatter
from .diagnostics import SolverDiagnostics

# ============================================================================
# CONFIGURATION
# ============================================================================
PROJECT_ROOT = Path(__file__).parent.parent
BOARD_PATH = "data/boards/board4x4.txt"   # Puzzle to solve by default
DATA_DIR = "data/boards"                  # Boards picked up by --all
OUTPUT_DIR = "data/debug"                 # Base output directory
SOLVE_ALL = False                         # Set True to solve all boards when run without arguments

SAVE_OUTPUT = False
# Write solution.json / solution.txt under OUTPUT_DIR/<board name>/

TIMEOUT_SECONDS = None
# Maximum time to spend solving a single puzzle (None = no limit)
# ============================================================================


def solve_puzzle(input_path: str, output_dir: Optional[str] = None, debug: bool = False,
                 timeout_seconds: Optional[float] = TIMEOUT_SECONDS):
    """
    Solve a single puzzle, print it, and optionally save results.

    Args:
        input_path: Path to the board description file
        output_dir: Directory for output files (nothing is saved when None)
        debug: Print the search trace and statistics
        timeout_seconds: Maximum solving time in seconds

    Returns:
        (initial, solution, solver, elapsed); solution is None when the
        board has no solution.

    Raises:
        PuzzleLoadError: if the board file is missing or malformed
    """
    initial = load_puzzle(input_path)

    print(f"File: {input_path}")
    print(f"Debug: {str(debug).lower()}")
    print("Initial config:")
    print(initial)

    solver = Backtracker(verbose=debug)

    start = time.time()
    solution = solver.solve(initial, timeout_seconds=timeout_seconds)
    elapsed = time.time() - start

    if solution is not None:
        print(f"Solution:\n{solution}")
    else:
        print("No solution")

    print(f"Elapsed time: {elapsed} seconds.")

    if debug:
        SolverDiagnostics.print_summary(solver, solution, elapsed)

    if output_dir is not None:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        SolutionFormatter.save_solution(initial, solution, solver.stats, elapsed,
                                        str(output_dir / "solution.json"))
        SolutionFormatter.save_human_readable(initial, solution, solver.stats, elapsed,
                                              str(output_dir / "solution.txt"))

    return initial, solution, solver, elapsed


def solve_all_puzzles(data_dir: Optional[str] = None,
                      timeout_seconds: Optional[float] = TIMEOUT_SECONDS):
    """
    Solve every *.txt board in a directory and print a summary table.

    Returns the per-board results, or None if the directory does not exist.
    """
    data_path = Path(data_dir) if data_dir is not None else PROJECT_ROOT / DATA_DIR
    if not data_path.exists():
        print(f"Error: Directory not found: {data_path}")
        return None

    board_files = sorted(data_path.glob("*.txt"))
    if not board_files:
        print(f"No boards found in {data_path}")
        return []

    print(f"\nFound {len(board_files)} board(s) to solve")

    results = []
    for i, board_file in enumerate(board_files, 1):
        print(f"\n[{i}/{len(board_files)}] Solving {board_file.name}...")

        try:
            result = SolverDiagnostics.analyze_board(str(board_file), timeout_seconds=timeout_seconds)
            status = "✓ SOLVED" if result['solved'] else "✗ NO SOLUTION"
        except PuzzleLoadError as e:
            result = {'filename': board_file.name, 'solved': False, 'error': str(e)}
            status = f"✗ LOAD ERROR: {e}"
        except SolverTimeout:
            result = {'filename': board_file.name, 'solved': False, 'error': 'timeout'}
            status = "✗ TIMEOUT"

        results.append(result)
        print(f"  {status}")

    # ---------------------------
    # Print summary
    # ---------------------------
    print(f"\n{'='*60}")
    print("SUMMARY")
    print(f"{'='*60}")
    solved_count = sum(1 for r in results if r['solved'])
    print(f"Solved: {solved_count}/{len(results)} boards")
    print(f"{'='*60}\n")

    for r in results:
        status = "✓" if r['solved'] else "✗"
        print(f"{status} {r['filename']:30s}", end="")
        if 'error' in r:
            print(f" - {r['error']}")
        else:
            print(f" - {r['elapsed']:.3f}s, {r['stats']['candidates_tried']} candidates, "
                  f"{r['stats']['backtracks']} backtracks")

    return results


def _resolve(path: str) -> Path:
    p = Path(path)
    return p if p.is_absolute() or p.exists() else PROJECT_ROOT / p


def main(argv=None):
    """Main entry point"""
    argv = sys.argv[1:] if argv is None else argv

    if argv and argv[0] in ("--all", "-a"):
        data_dir = str(_resolve(argv[1])) if len(argv) > 1 else None
        results = solve_all_puzzles(data_dir)
        return 1 if results is None else 0

    if not argv and SOLVE_ALL:
        results = solve_all_puzzles()
        return 1 if results is None else 0

    if len(argv) > 2 or (len(argv) == 2 and argv[1] not in ("true", "false")):
        print("Usage: python -m Skyscraper.main <board file> [true|false]")
        return 2

    input_file = _resolve(argv[0] if argv else BOARD_PATH)
    debug = len(argv) == 2 and argv[1] == "true"
    output_dir = PROJECT_ROOT / OUTPUT_DIR / input_file.stem if SAVE_OUTPUT else None

    try:
        solve_puzzle(str(input_file), output_dir=output_dir, debug=debug)
    except PuzzleLoadError as e:
        print(f"Error: {e}")
        return 1
    except SolverTimeout as e:
        print(f"\n⚠ {e}")
        return 1
    except KeyboardInterrupt:
        print(f"\n\n{'='*60}")
        print("⚠ Solving interrupted by user (Ctrl+C)")
        print(f"{'='*60}")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
