"""Single-point deduction: the two elementary counting rules applied to one revealed cell."""

import logging
from collections import deque
from typing import Deque, List, Set

from .board import BoardState, is_covered, is_flagged, is_revealed
from .utils import Coord

logger = logging.getLogger(__name__)


class WorkQueues:
    """
    The two game-lifetime work queues.

    to_uncover is consumed last-in-first-out; to_process is first-in-first-out
    and deduplicated, so a cell waits in it at most once.
    """

    def __init__(self) -> None:
        self.to_uncover: List[Coord] = []
        self.to_process: Deque[Coord] = deque()
        self._process_set: Set[Coord] = set()

    def push_uncover(self, cell: Coord) -> None:
        self.to_uncover.append(cell)

    def push_process(self, cell: Coord) -> None:
        if cell in self._process_set:
            return
        self.to_process.append(cell)
        self._process_set.add(cell)

    def pop_process(self) -> Coord:
        cell = self.to_process.popleft()
        self._process_set.discard(cell)
        return cell


def mark_mine(board: BoardState, queues: WorkQueues, cell: Coord) -> None:
    """Flag a proven mine and re-queue its numbered neighbors for processing."""
    x, y = cell
    board.flag(x, y)
    for nbr in board.collect_neighbors_of(x, y, is_revealed):
        queues.push_process(nbr)


class SinglePointDeducer:
    """Applies rules A and B to revealed cells drained from the to_process queue."""

    def __init__(self, board: BoardState, queues: WorkQueues) -> None:
        self.board = board
        self.queues = queues
        self.inferred_count: int = 0

    def deduce(self, x: int, y: int) -> int:
        """
        Check the constraint of revealed cell (x, y) against its current neighbors.

        Rule A: flagged == n and covered > 0 -> every covered neighbor is safe.
        Rule B: covered + flagged == n -> every covered neighbor is a mine.

        Returns:
            Number of neighbor cells classified by this call (0 if no rule fired).
        """
        n = self.board.status(x, y)
        if not is_revealed(n):
            return 0

        covered = self.board.collect_neighbors_of(x, y, is_covered)
        if not covered:
            return 0
        flagged = self.board.count_neighbors_of(x, y, is_flagged)

        if flagged == n:
            for cell in covered:
                self.queues.push_uncover(cell)
            logger.debug("Rule A at (%d, %d): %d safe neighbors", x, y, len(covered))
        elif len(covered) + flagged == n:
            for cell in covered:
                mark_mine(self.board, self.queues, cell)
            logger.debug("Rule B at (%d, %d): flagged %d neighbors", x, y, len(covered))
        else:
            return 0

        self.inferred_count += len(covered)
        return len(covered)
