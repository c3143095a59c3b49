from pathlib import Path

import pytest

from Skyscraper.puzzle import EdgeClues, SkyscraperState

BOARDS_DIR = Path(__file__).parent.parent / "data" / "boards"

# Solved 4x4 grid and the clues it produces
SOLVED_4X4 = [
    [4, 3, 2, 1],
    [3, 4, 1, 2],
    [2, 1, 4, 3],
    [1, 2, 3, 4],
]
CLUES_4X4 = EdgeClues(
    north=(1, 2, 2, 4),
    east=(4, 2, 2, 1),
    south=(4, 2, 2, 1),
    west=(1, 2, 2, 4),
)


@pytest.fixture
def boards_dir():
    return BOARDS_DIR


@pytest.fixture
def empty_4x4():
    return SkyscraperState([[0] * 4 for _ in range(4)], CLUES_4X4)


@pytest.fixture
def solved_4x4():
    return SkyscraperState(SOLVED_4X4, CLUES_4X4)


def clues_satisfied(state):
    """Recompute every visibility count and compare with the clues"""
    for i in range(state.dim):
        if state.row_visibility(i) != (state.clues.west[i], state.clues.east[i]):
            return False
        if state.column_visibility(i) != (state.clues.north[i], state.clues.south[i]):
            return False
    return True
