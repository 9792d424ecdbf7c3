import pytest
from typing import List

from minesweeper_agent import BoardState


def board_from_rows(rows: List[str], total_mines: int) -> BoardState:
    """Build a BoardState from text rows: '.' covered, 'F' flagged, digits revealed."""
    board = BoardState(len(rows), len(rows[0]), total_mines)
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            if ch == "F":
                board.flag(x, y)
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            if ch.isdigit():
                board.reveal(x, y, int(ch))
    return board


def assert_board_invariants(board: BoardState) -> None:
    """covered_count matches all_covered; frontier is exactly the covered cells next to a number."""
    assert board.covered_count == len(board.all_covered)
    expected_frontier = {
        (x, y)
        for (x, y) in board.all_covered
        if any(board.status(nx, ny) >= 0 for nx, ny in board.neighbors(x, y))
    }
    assert board.frontier_covered == expected_frontier


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def ambiguous_board():
    """
    Flag at (0,0); the frontier (0,1), (1,1), (2,1) admits exactly two
    consistent labelings: (0,1) safe, and one mine at (1,1) or (2,1).
    """
    return board_from_rows(["F21", "..."], total_mines=2)
