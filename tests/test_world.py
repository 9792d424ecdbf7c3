import pytest

from minesweeper_agent import COVERED, FLAGGED, MinesweeperWorld

SMALL = dict(full_enumeration_cap=14, bounded_cap=14)


def test_random_layout_respects_safe_neighborhood():
    world = MinesweeperWorld(9, 9, 10, seed=1)
    assert len(world.mines) == 10
    fx, fy = world.first_cell
    assert (fx, fy) == (4, 4)
    assert all(n not in world.mines for n in world.neighbors(fx, fy))
    assert world.board[fy][fx] == 0


def test_seed_makes_layout_reproducible():
    assert MinesweeperWorld(9, 9, 10, seed=5).mines == MinesweeperWorld(9, 9, 10, seed=5).mines


def test_safe_first_action_rule_only_protects_first_cell():
    world = MinesweeperWorld(3, 3, 8, mines_generation_algorithm="safe_first_action_rule", first_cell=(0, 0))
    assert (0, 0) not in world.mines
    assert world.board[0][0] == 3


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(width=0, height=3, mines_count=1),
        dict(width=3, height=3, mines_count=-1),
        dict(width=3, height=3, mines_count=1, mines_generation_algorithm="anywhere"),
        dict(width=3, height=3, mines_count=1, first_cell=(3, 0)),
        dict(width=3, height=3, mines_count=1, mines=[(0, 0)], first_cell=(0, 0)),
        dict(width=3, height=3, mines_count=2, mines=[(0, 0)]),
        dict(width=3, height=3, mines_count=1),  # whole board is the safe zone
    ],
)
def test_invalid_worlds_rejected(kwargs):
    with pytest.raises(ValueError):
        MinesweeperWorld(**kwargs)


def test_fixed_board_without_mines_is_won_without_guessing():
    world = MinesweeperWorld(3, 1, 0, mines=[], first_cell=(0, 0))
    status, payload = world.run()
    assert status == 1
    assert payload["revealed_cells_count"] == 3
    assert payload["guesses_count"] == 0
    assert payload["mine_hit"] is None


def test_fixed_board_solved_by_deduction():
    world = MinesweeperWorld(3, 1, 1, mines=[(2, 0)], first_cell=(0, 0))
    agent = world.new_agent()
    status, payload = world.run(agent, record_steps=True)
    assert status == 1
    assert payload["guesses_count"] == 0
    # Only the mine stays covered, so the agent leaves before flagging it.
    assert agent.board.status(2, 0) == COVERED
    assert agent.board.is_done()
    assert [s["cell"] for s in payload["steps_history"]] == [(1, 0)]


@pytest.mark.parametrize("seed", range(15))
def test_only_guesses_can_hit_mines(seed):
    world = MinesweeperWorld(7, 6, 7, seed=seed)
    agent = world.new_agent(**SMALL)
    status, payload = world.run(agent, record_steps=True)

    flagged = {(x, y) for y in range(6) for x in range(7) if agent.board.grid[y][x] == FLAGGED}
    assert flagged <= world.mines
    for step in payload["steps_history"]:
        if step["cell"] in world.mines:
            assert step["method"] == "guess"
    if status == -1:
        assert payload["mine_hit"] in world.mines


@pytest.mark.parametrize("seed", range(10))
def test_games_terminate_within_safe_cell_count(seed):
    world = MinesweeperWorld(8, 8, 10, seed=seed)
    agent = world.new_agent(**SMALL)
    status, payload = world.run(agent)

    assert status in (1, -1)
    assert payload["reveal_moves_count"] <= 8 * 8 - 10 - 1
    if status == 1:
        assert agent.board.is_done()
        assert payload["revealed_cells_count"] == 8 * 8 - 10


def test_steps_history_snapshots_agent_knowledge():
    world = MinesweeperWorld(5, 5, 3, seed=2)
    status, payload = world.run(world.new_agent(**SMALL), record_steps=True)
    history = payload["steps_history"]
    assert [s["step_number"] for s in history] == list(range(len(history)))
    assert all(len(s["knowledge_snapshot"]) == 5 for s in history)


def test_format_board_hides_unrevealed_cells():
    world = MinesweeperWorld(2, 1, 1, mines=[(1, 0)], first_cell=(0, 0))
    hidden = world.format_board()
    shown = world.format_board(reveal_all=True)
    assert "M" not in hidden
    assert "M" in shown
