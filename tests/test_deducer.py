from minesweeper_agent import FLAGGED, SinglePointDeducer, WorkQueues
from minesweeper_agent.deducer import mark_mine

from conftest import assert_board_invariants, board_from_rows


def make_deducer(board):
    queues = WorkQueues()
    return SinglePointDeducer(board, queues), queues


def test_rule_b_flags_the_single_covered_neighbor():
    # 2x2 board, one mine: "1" with exactly one covered neighbor and no flags
    board = board_from_rows(["11", "1."], total_mines=1)
    deducer, queues = make_deducer(board)

    assert deducer.deduce(0, 0) == 1
    assert board.status(1, 1) == FLAGGED
    assert queues.to_uncover == []
    assert set(queues.to_process) == {(0, 0), (1, 0), (0, 1)}
    assert_board_invariants(board)


def test_rule_a_queues_remaining_covered_neighbor():
    # "1" with one flagged and one covered neighbor
    board = board_from_rows(["1F", ".1"], total_mines=1)
    deducer, queues = make_deducer(board)

    assert deducer.deduce(0, 0) == 1
    assert queues.to_uncover == [(0, 1)]
    assert board.status(0, 1) != FLAGGED


def test_zero_marks_every_covered_neighbor_safe():
    board = board_from_rows(["0..", "..."], total_mines=1)
    deducer, queues = make_deducer(board)

    assert deducer.deduce(0, 0) == 3
    assert sorted(queues.to_uncover) == [(0, 1), (1, 0), (1, 1)]
    assert deducer.inferred_count == 3


def test_no_rule_fires_on_ambiguous_cell():
    board = board_from_rows(["1..", "..."], total_mines=1)
    deducer, queues = make_deducer(board)

    assert deducer.deduce(0, 0) == 0
    assert queues.to_uncover == []
    assert not queues.to_process
    assert board.flagged_count == 0


def test_cell_without_covered_neighbors_is_left_alone():
    board = board_from_rows(["1F"], total_mines=1)
    deducer, queues = make_deducer(board)
    assert deducer.deduce(0, 0) == 0
    assert deducer.deduce(1, 0) == 0  # flagged, not a constraint


def test_process_queue_is_deduplicated():
    queues = WorkQueues()
    queues.push_process((0, 0))
    queues.push_process((0, 0))
    assert len(queues.to_process) == 1
    assert queues.pop_process() == (0, 0)
    queues.push_process((0, 0))
    assert len(queues.to_process) == 1


def test_mark_mine_requeues_numbered_neighbors_only():
    board = board_from_rows(["2..", "1.."], total_mines=2)
    queues = WorkQueues()
    mark_mine(board, queues, (1, 1))
    assert board.status(1, 1) == FLAGGED
    assert set(queues.to_process) == {(0, 0), (0, 1)}
