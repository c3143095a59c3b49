"""
Diagnostics: summarise a finished search so slow or failed boards can be
understood from the numbers (how much pruning helped, how deep it went).
"""

import time
from pathlib import Path
from typing import Dict, Optional

from .puzzle import SkyscraperState, load_puzzle
from .solver import Backtracker


class SolverDiagnostics:

    @staticmethod
    def summarize(solver: Backtracker, solution: Optional[SkyscraperState], elapsed: float) -> Dict:
        """Collect the outcome and counters of the last solve() call"""
        stats = solver.stats.copy()
        tried = stats['candidates_tried']
        return {
            'solved': solution is not None,
            'elapsed': elapsed,
            'prune_ratio': stats['pruned'] / tried if tried else 0.0,
            'stats': stats,
        }

    @staticmethod
    def print_summary(solver: Backtracker, solution: Optional[SkyscraperState], elapsed: float):
        summary = SolverDiagnostics.summarize(solver, solution, elapsed)
        stats = summary['stats']

        print(f"\n{'='*60}")
        print("SEARCH DIAGNOSTICS")
        print(f"{'='*60}")
        print(f"Outcome: {'✓ SOLVED' if summary['solved'] else '✗ NO SOLUTION'} in {elapsed:.3f}s")
        print(f"  Nodes expanded: {stats['nodes_expanded']}")
        print(f"  Candidates tried: {stats['candidates_tried']}")
        print(f"  Pruned by validity check: {stats['pruned']} ({summary['prune_ratio']:.1%})")
        print(f"  Backtracks: {stats['backtracks']}")
        print(f"  Max depth: {stats['max_depth']}")

        # Lots of dead branches that survived pruning
        if stats['backtracks'] > 10000:
            print("\n⚠️  HIGH BACKTRACK COUNT - pruning catches conflicts late on this board")

        print(f"{'='*60}\n")
        return summary

    @staticmethod
    def analyze_board(path: str, timeout_seconds: Optional[float] = None) -> Dict:
        """Load and solve one board quietly, returning its diagnostic summary"""
        initial = load_puzzle(path)
        solver = Backtracker(verbose=False)

        start = time.time()
        solution = solver.solve(initial, timeout_seconds=timeout_seconds)
        elapsed = time.time() - start

        summary = SolverDiagnostics.summarize(solver, solution, elapsed)
        summary['filename'] = Path(path).name
        return summary
