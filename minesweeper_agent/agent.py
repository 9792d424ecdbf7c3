"""Turn-by-turn decision loop: one revealed number in, exactly one action out."""

import logging
import time
from enum import Enum
from typing import Callable, NamedTuple, Optional

from .aggregator import Aggregate, ConsistencyAggregator
from .board import COVERED, BoardState
from .deducer import SinglePointDeducer, WorkQueues, mark_mine
from .enumerator import FrontierEnumerator
from .utils import Coord, row_major

logger = logging.getLogger(__name__)

DEFAULT_TIME_BUDGET = 180.0
DEFAULT_TIME_FLOOR = 10.0
# Largest frontier prefix whose 2^K search space stays affordable under time pressure.
BOUNDED_FRONTIER_CAP = 39


class ActionType(str, Enum):
    """Actions the agent can hand back to the host."""

    REVEAL = "reveal"
    LEAVE = "leave"


class Action(NamedTuple):
    kind: ActionType
    x: int
    y: int


LEAVE_ACTION = Action(ActionType.LEAVE, -1, -1)


class EnumerationMode(str, Enum):
    FULL = "full"
    BOUNDED = "bounded"
    SKIP = "skip"


class MinesweeperAgent:
    """
    Minesweeper decision engine driven by a turn-based host.

    Each call to get_action() ingests the number revealed by the previous
    action and walks the priority tiers:
    1. Pending proven-safe cells (to_uncover)
    2. Single-point deduction over queued revealed cells (to_process)
    3. One frontier enumeration + consistency aggregation pass per turn
    4. Lowest-risk or arbitrary guess
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        total_mines: int,
        first_x: int,
        first_y: int,
        *,
        time_budget: float = DEFAULT_TIME_BUDGET,
        time_floor: float = DEFAULT_TIME_FLOOR,
        bounded_cap: int = BOUNDED_FRONTIER_CAP,
        full_enumeration_cap: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize an agent for one game.

        Args:
            rows: Board height.
            cols: Board width.
            total_mines: Number of mines on the board.
            first_x: Column of the cell the host has already revealed.
            first_y: Row of the cell the host has already revealed.
            time_budget: Total wall-clock seconds available for the game.
            time_floor: Remaining-time floor below which large frontiers are
                not enumerated at all.
            bounded_cap: Number of frontier cells enumerated in bounded mode.
            full_enumeration_cap: Frontiers longer than this are always
                enumerated in bounded mode. None disables the cap.
            clock: Monotonic time source in seconds.

        Raises:
            ValueError: If the board parameters or caps are invalid.
        """
        self.board = BoardState(rows, cols, total_mines)
        if not self.board.in_bounds(first_x, first_y):
            raise ValueError("First revealed cell is outside the board.")
        if bounded_cap <= 0:
            raise ValueError("bounded_cap must be positive.")
        if full_enumeration_cap is not None and full_enumeration_cap <= 0:
            raise ValueError("full_enumeration_cap must be positive or None.")
        if time_budget <= 0 or time_floor < 0:
            raise ValueError("time_budget must be positive and time_floor non-negative.")

        self.queues = WorkQueues()
        self.deducer = SinglePointDeducer(self.board, self.queues)
        self.enumerator = FrontierEnumerator(self.board)
        self.aggregator = ConsistencyAggregator()

        self.time_budget: float = time_budget
        self.time_floor: float = time_floor
        self.bounded_cap: int = bounded_cap
        self.full_enumeration_cap: Optional[int] = full_enumeration_cap
        self._clock = clock
        self._start_time: float = clock()
        self.max_enumeration_cost: float = 0.0

        # Standing fallback guess, kept across turns until superseded or consumed.
        self.lowest_risk_cell: Optional[Coord] = None
        self.lowest_risk: Optional[float] = None

        self._last_cell: Coord = (first_x, first_y)
        self.last_method: str = "first_move"

        # Metrics / counters (for analysis)
        self.reveal_moves_count: int = 0
        self.guesses_count: int = 0
        self.full_enumerations_count: int = 0
        self.bounded_enumerations_count: int = 0
        self.skipped_enumerations_count: int = 0
        self.inferred_enumeration_count: int = 0
        self.max_frontier: int = 0

    @property
    def inferred_single_count(self) -> int:
        return self.deducer.inferred_count

    # -------------------------------------------------------------------------
    # Host contract
    # -------------------------------------------------------------------------

    def get_action(self, number: int) -> Action:
        """
        Ingest the number revealed by the previous action and choose the next action.

        Args:
            number: Mine count (0..8) of the cell revealed last turn. Anything
                else means the host contract is broken and the agent leaves.

        Returns:
            A REVEAL action, or LEAVE once every covered cell must be a mine.
        """
        if isinstance(number, bool) or not isinstance(number, int) or not 0 <= number <= 8:
            logger.warning("Invalid revealed value %r at %s; leaving.", number, self._last_cell)
            return LEAVE_ACTION

        x, y = self._last_cell
        self.board.reveal(x, y, number)
        self.queues.push_process((x, y))

        enumerated = False
        while True:
            if self.board.is_done():
                return LEAVE_ACTION

            while self.queues.to_uncover:
                cx, cy = self.queues.to_uncover.pop()
                if self.board.status(cx, cy) == COVERED:
                    return self._reveal((cx, cy), self.last_method)

            if self.queues.to_process:
                px, py = self.queues.pop_process()
                if self.deducer.deduce(px, py):
                    self.last_method = "single_point"
                continue

            if not enumerated and self.board.frontier_covered:
                enumerated = True
                self._run_enumeration()
                continue

            break

        return self._guess()

    # -------------------------------------------------------------------------
    # Enumeration tier
    # -------------------------------------------------------------------------

    def enumeration_mode(self) -> EnumerationMode:
        """Choose full, bounded or no enumeration from the remaining time budget."""
        frontier_len = len(self.board.frontier_covered)
        remaining = self.time_budget - (self._clock() - self._start_time)

        if remaining < self.time_floor and frontier_len > self.bounded_cap:
            return EnumerationMode.SKIP
        if remaining < self.time_floor + 1.5 * self.max_enumeration_cost:
            return EnumerationMode.BOUNDED
        if self.full_enumeration_cap is not None and frontier_len > self.full_enumeration_cap:
            return EnumerationMode.BOUNDED
        return EnumerationMode.FULL

    def _run_enumeration(self) -> None:
        """Run one enumeration + aggregation pass and apply what it proves."""
        self.max_frontier = max(self.max_frontier, len(self.board.frontier_covered))
        mode = self.enumeration_mode()

        if mode == EnumerationMode.SKIP:
            self.skipped_enumerations_count += 1
            logger.warning(
                "Skipping enumeration of %d frontier cells: time budget nearly spent.",
                len(self.board.frontier_covered),
            )
            return

        started = self._clock()
        if mode == EnumerationMode.BOUNDED:
            self.bounded_enumerations_count += 1
            assignments = self.enumerator.enumerate(cap=self.bounded_cap)
            aggregate = self.aggregator.reduce(assignments, first_only=True)
        else:
            self.full_enumerations_count += 1
            assignments = self.enumerator.enumerate()
            aggregate = self.aggregator.reduce(assignments)
            self.max_enumeration_cost = max(self.max_enumeration_cost, self._clock() - started)

        logger.debug(
            "%s enumeration: %d assignments, %d safe, %d mines",
            mode.value,
            aggregate.assignments_count,
            len(aggregate.safe_cells),
            len(aggregate.mine_cells),
        )
        self._apply(aggregate)

    def _apply(self, aggregate: Aggregate) -> None:
        """Commit guaranteed facts and update the standing fallback candidate."""
        for cell in aggregate.mine_cells:
            mark_mine(self.board, self.queues, cell)
        for cell in aggregate.safe_cells:
            self.queues.push_uncover(cell)

        if aggregate.has_facts:
            self.inferred_enumeration_count += len(aggregate.mine_cells) + len(aggregate.safe_cells)
            self.last_method = "enumeration"

        if self.queues.to_uncover or aggregate.lowest_risk_cell is None:
            return

        risk = aggregate.lowest_risk_fraction
        if (
            self.lowest_risk_cell is None
            or self.board.status(*self.lowest_risk_cell) != COVERED
            or (self.lowest_risk is not None and risk is not None and risk < self.lowest_risk)
        ):
            self.lowest_risk_cell = aggregate.lowest_risk_cell
            self.lowest_risk = risk

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def _guess(self) -> Action:
        """Reveal the standing lowest-risk cell, else any frontier cell, else any covered cell."""
        candidate = self.lowest_risk_cell
        self.lowest_risk_cell = None
        self.lowest_risk = None

        if candidate is None or self.board.status(*candidate) != COVERED:
            if self.board.frontier_covered:
                candidate = self.board.sorted_frontier()[0]
            elif self.board.all_covered:
                candidate = min(self.board.all_covered, key=row_major)
            else:
                return LEAVE_ACTION

        self.guesses_count += 1
        logger.debug("No guaranteed move; guessing %s", candidate)
        return self._reveal(candidate, "guess")

    def _reveal(self, cell: Coord, method: str) -> Action:
        self._last_cell = cell
        self.last_method = method
        self.reveal_moves_count += 1
        return Action(ActionType.REVEAL, cell[0], cell[1])
