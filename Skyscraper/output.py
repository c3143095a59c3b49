import json
from datetime import datetime
from typing import Dict, List, Optional

from .puzzle import SkyscraperState


class SolutionFormatter:
    """Formats puzzle solutions for output"""

    @staticmethod
    def validate_clues(state: SkyscraperState) -> Dict[str, List[Dict]]:
        """
        Expected vs. actual visibility count for every clue on the board
        """
        clues = state.clues
        report = {'north': [], 'east': [], 'south': [], 'west': []}

        for i in range(state.dim):
            west, east = state.row_visibility(i)
            north, south = state.column_visibility(i)
            for edge, expected, actual in (
                ('north', clues.north[i], north),
                ('east', clues.east[i], east),
                ('south', clues.south[i], south),
                ('west', clues.west[i], west),
            ):
                report[edge].append({
                    'index': i,
                    'clue': expected,
                    'visible': actual,
                    'satisfied': expected == actual,
                })

        return report

    @staticmethod
    def format_solution_json(initial: SkyscraperState, solution: Optional[SkyscraperState],
                             stats: Dict, elapsed: float) -> Dict:
        """
        Format solution as JSON
        """
        clues = initial.clues
        return {
            'puzzle_info': {
                'dim': initial.dim,
                'clues': {
                    'north': list(clues.north),
                    'east': list(clues.east),
                    'south': list(clues.south),
                    'west': list(clues.west),
                },
                'solved': solution is not None,
                'timestamp': datetime.now().isoformat()
            },
            'initial_board': initial.to_lists(),
            'solution_board': solution.to_lists() if solution is not None else None,
            'solving_stats': dict(stats),
            'elapsed_seconds': round(elapsed, 6),
            'clue_validation': SolutionFormatter.validate_clues(solution) if solution is not None else None,
        }

    @staticmethod
    def format_solution_human_readable(initial: SkyscraperState, solution: Optional[SkyscraperState],
                                       stats: Dict, elapsed: float) -> str:
        """
        Format solution as human-readable text
        """
        lines = []
        lines.append("=" * 60)
        lines.append("SKYSCRAPER PUZZLE SOLUTION")
        lines.append("=" * 60)
        lines.append(f"\n{initial.dim}x{initial.dim} board\n")

        lines.append("INITIAL CONFIG:")
        lines.append("-" * 60)
        lines.append(str(initial))

        lines.append("\n" + "-" * 60)
        if solution is None:
            lines.append("No solution")
        else:
            lines.append("SOLUTION:")
            lines.append("-" * 60)
            lines.append(str(solution))

            lines.append("\n" + "=" * 60)
            lines.append("CLUE VALIDATION:")
            lines.append("-" * 60)
            for edge, checks in SolutionFormatter.validate_clues(solution).items():
                marks = " ".join(
                    f"{c['visible']}{'✓' if c['satisfied'] else '✗'}" for c in checks
                )
                lines.append(f"{edge.capitalize():6s}: {marks}")

        lines.append("\n" + "=" * 60)
        lines.append("STATISTICS:")
        lines.append("-" * 60)
        for key, value in stats.items():
            lines.append(f"{key.replace('_', ' ').capitalize():20s} {value}")
        lines.append(f"{'Elapsed time':20s} {elapsed:.3f}s")
        lines.append("=" * 60)

        return "\n".join(lines)

    @staticmethod
    def save_solution(initial: SkyscraperState, solution: Optional[SkyscraperState],
                      stats: Dict, elapsed: float, output_path: str):
        """
        Save solution to JSON file
        """
        report = SolutionFormatter.format_solution_json(initial, solution, stats, elapsed)

        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(report, f, indent=2)

        print(f"\n✓ Solution saved to: {output_path}")

    @staticmethod
    def save_human_readable(initial: SkyscraperState, solution: Optional[SkyscraperState],
                            stats: Dict, elapsed: float, output_path: str):
        """
        Save human-readable solution to text file
        """
        text = SolutionFormatter.format_solution_human_readable(initial, solution, stats, elapsed)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(text)

        print(f"✓ Human-readable solution saved to: {output_path}")
