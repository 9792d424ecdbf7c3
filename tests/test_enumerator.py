import itertools
import random
from typing import FrozenSet, List, Set

import pytest

from minesweeper_agent import BOMB, SAFE, BoardState, FrontierEnumerator, MinesweeperWorld
from minesweeper_agent.utils import Coord

from conftest import board_from_rows


def mine_sets(assignments) -> Set[FrozenSet[Coord]]:
    return {frozenset(cell for cell, tag in a if tag == BOMB) for a in assignments}


def brute_force(board: BoardState, cells: List[Coord]) -> Set[FrozenSet[Coord]]:
    """Every labeling of `cells` matching all revealed numbers and the mine budget."""
    remaining = board.mines_remaining()
    exact = len(cells) == len(board.all_covered)
    found: Set[FrozenSet[Coord]] = set()
    for bits in itertools.product((0, 1), repeat=len(cells)):
        mines = frozenset(c for c, b in zip(cells, bits) if b)
        if len(mines) > remaining or (exact and len(mines) != remaining):
            continue
        ok = True
        for y in range(board.rows):
            for x in range(board.cols):
                n = board.status(x, y)
                if n < 0:
                    continue
                count = sum(
                    1
                    for nbr in board.neighbors(x, y)
                    if nbr in mines or board.status(*nbr) == -2
                )
                if count != n:
                    ok = False
        if ok:
            found.add(mines)
    return found


def random_partial_board(seed: int, width: int = 5, height: int = 4, mines_count: int = 5) -> BoardState:
    rng = random.Random(seed)
    world = MinesweeperWorld(width, height, mines_count, seed=seed, first_cell=(0, 0))
    board = BoardState(height, width, mines_count)
    safe = [(x, y) for y in range(height) for x in range(width) if (x, y) not in world.mines]
    for x, y in rng.sample(safe, len(safe) // 2):
        board.reveal(x, y, world.board[y][x])
    return board


def test_two_labelings_agree_on_first_cell(ambiguous_board):
    enumerator = FrontierEnumerator(ambiguous_board)
    assignments = enumerator.enumerate()

    assert assignments == [
        [((0, 1), SAFE), ((1, 1), BOMB), ((2, 1), SAFE)],
        [((0, 1), SAFE), ((1, 1), SAFE), ((2, 1), BOMB)],
    ]


def test_enumeration_leaves_board_untouched(ambiguous_board):
    grid_before = [row[:] for row in ambiguous_board.grid]
    frontier_before = set(ambiguous_board.frontier_covered)

    FrontierEnumerator(ambiguous_board).enumerate()

    assert ambiguous_board.grid == grid_before
    assert ambiguous_board.frontier_covered == frontier_before


def test_frontier_order_follows_shared_constraints():
    board = board_from_rows(["...", ".1.", "...", "...", ".1."], total_mines=2)
    order = FrontierEnumerator(board).order_frontier()
    # the ring around the top "1" is enumerated before the separate bottom group
    top = {(x, y) for y in range(3) for x in range(3)} - {(1, 1)}
    bottom = {(0, 3), (1, 3), (2, 3), (0, 4), (2, 4)}
    assert order[0] == (0, 0)
    assert set(order[:8]) == top
    assert set(order[8:]) == bottom


@pytest.mark.parametrize("seed", range(8))
def test_matches_brute_force(seed):
    board = random_partial_board(seed)
    enumerator = FrontierEnumerator(board)
    cells = enumerator.order_frontier()
    if len(cells) > 14:
        pytest.skip("frontier too large for brute force")

    assignments = enumerator.enumerate()

    assert mine_sets(assignments) == brute_force(board, cells)
    assert len(assignments) == len(mine_sets(assignments))


@pytest.mark.parametrize("seed", range(4))
def test_true_layout_is_always_consistent(seed):
    world = MinesweeperWorld(6, 5, 6, seed=seed, first_cell=(0, 0))
    board = random_partial_board(seed, width=6, height=5, mines_count=6)
    assignments = FrontierEnumerator(board).enumerate()
    truth = frozenset(c for c in board.frontier_covered if c in world.mines)
    assert truth in mine_sets(assignments)


def test_bounded_mode_keeps_every_true_prefix():
    board = board_from_rows(["......", "121222", "......"], total_mines=4)
    enumerator = FrontierEnumerator(board)
    ordered = enumerator.order_frontier()
    cap = 4

    full = enumerator.enumerate()
    bounded = enumerator.enumerate(cap=cap)

    assert all(len(a) == cap for a in bounded)
    assert [cell for cell, _ in bounded[0]] == ordered[:cap]
    prefixes = {tuple(a[:cap]) for a in full}
    assert prefixes <= {tuple(a) for a in bounded}


def test_exact_mine_count_when_every_covered_cell_is_on_the_frontier():
    board = board_from_rows([".1."], total_mines=1)
    assignments = FrontierEnumerator(board).enumerate()
    assert mine_sets(assignments) == {frozenset({(0, 0)}), frozenset({(2, 0)})}


def test_inconsistent_board_yields_no_assignments():
    board = board_from_rows([".1."], total_mines=2)
    assert FrontierEnumerator(board).enumerate() == []


def test_mine_budget_prunes_bombs_beyond_remaining():
    # each "1" on its own would allow a mine on either side, but only one mine exists
    board = board_from_rows(["..1..1.."], total_mines=1)
    assignments = FrontierEnumerator(board).enumerate()
    assert assignments == []


def test_empty_frontier():
    board = BoardState(2, 2, 1)
    assert FrontierEnumerator(board).enumerate() == []
