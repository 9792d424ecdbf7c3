"""Reference turn-based host: owns the hidden board and drives an agent one action at a time."""

import copy
import logging
import random
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from .agent import ActionType, MinesweeperAgent
from .utils import Coord, get_neighborhoods, in_bounds

logger = logging.getLogger(__name__)

MINE = -1


class MinesweeperWorld:
    """Hidden Minesweeper board revealing exactly one cell per agent action."""

    def __init__(
        self,
        width: int,
        height: int,
        mines_count: int,
        *,
        mines_generation_algorithm: str = "safe_neighborhood_rule",
        mines: Optional[Iterable[Coord]] = None,
        first_cell: Optional[Coord] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize a host with a fixed or randomly generated board.

        Args:
            width: Board width (number of columns), must be > 0.
            height: Board height (number of rows), must be > 0.
            mines_count: Total number of mines, must be >= 0.
            mines_generation_algorithm: Random placement rule; one of
                {"safe_first_action_rule", "safe_neighborhood_rule"}.
                Ignored when `mines` is given.
            mines: Explicit mine coordinates for a fixed board.
            first_cell: Cell revealed before the agent starts; defaults to the
                board center.
            seed: Seed for random mine placement.

        Raises:
            ValueError: If dimensions, the mine layout or the algorithm are invalid.
        """
        if width <= 0 or height <= 0:
            raise ValueError("Width and height must be positive.")
        if mines_count < 0:
            raise ValueError("mines_count must be non-negative.")
        if mines_generation_algorithm not in ("safe_first_action_rule", "safe_neighborhood_rule"):
            raise ValueError(
                'mines_generation_algorithm must be "safe_first_action_rule" '
                'or "safe_neighborhood_rule".'
            )

        self.width: int = width
        self.height: int = height
        self.mines_count: int = mines_count
        self.mines_generation_algorithm: str = mines_generation_algorithm
        self._neighborhoods = get_neighborhoods(width, height)

        if first_cell is None:
            first_cell = (width // 2, height // 2)
        fx, fy = first_cell
        if not in_bounds(fx, fy, width, height):
            raise ValueError("first_cell is outside the board.")
        self.first_cell: Coord = first_cell

        if mines is not None:
            mine_set = set(mines)
            if len(mine_set) != mines_count:
                raise ValueError("Number of given mines does not match mines_count.")
            if first_cell in mine_set:
                raise ValueError("first_cell must not hold a mine.")
        else:
            mine_set = self._place_mines(random.Random(seed))
        self.mines: FrozenSet[Coord] = frozenset(mine_set)

        self.board: List[List[int]] = self._adjacent_mine_counts()
        self.revealed: Set[Coord] = set()
        self.steps_history: List[Dict[str, Any]] = []

    def neighbors(self, x: int, y: int) -> Tuple[Coord, ...]:
        return self._neighborhoods[(x, y)]

    def _place_mines(self, rng: random.Random) -> Set[Coord]:
        """Sample mines uniformly outside the safe zone of the first cell."""
        safe: Set[Coord] = {self.first_cell}
        if self.mines_generation_algorithm == "safe_neighborhood_rule":
            safe |= set(self.neighbors(*self.first_cell))

        eligible: List[Coord] = [
            (x, y) for y in range(self.height) for x in range(self.width) if (x, y) not in safe
        ]
        if self.mines_count > len(eligible):
            raise ValueError(
                f"Cannot place enough safe cells to satisfy {self.mines_generation_algorithm}."
            )
        return set(rng.sample(eligible, self.mines_count))

    def _adjacent_mine_counts(self) -> List[List[int]]:
        board = [[0 for _ in range(self.width)] for _ in range(self.height)]
        for y in range(self.height):
            for x in range(self.width):
                if (x, y) in self.mines:
                    board[y][x] = MINE
                else:
                    board[y][x] = sum(1 for n in self.neighbors(x, y) if n in self.mines)
        return board

    def new_agent(self, **agent_kwargs: Any) -> MinesweeperAgent:
        """Construct an agent for this board, already past the first reveal."""
        fx, fy = self.first_cell
        return MinesweeperAgent(self.height, self.width, self.mines_count, fx, fy, **agent_kwargs)

    def _record_step(self, agent: MinesweeperAgent, action: str, cell: Coord) -> None:
        self.steps_history.append({
            "action": action,
            "cell": cell,
            "method": agent.last_method,
            "step_number": len(self.steps_history),
            "knowledge_snapshot": copy.deepcopy(agent.board.grid),
        })

    def run(
        self,
        agent: Optional[MinesweeperAgent] = None,
        *,
        record_steps: bool = False,
    ) -> Tuple[int, Dict[str, Any]]:
        """
        Play one game: reveal the first cell, then feed each revealed number back to the agent.

        Returns:
            Tuple of (status, payload) where status is:
                - 1: Every safe cell revealed
                - -1: The agent revealed a mine
                - 0: The agent left before revealing every safe cell

            Payload holds the agent's metrics plus "revealed_cells_count",
            "mine_hit" (the losing cell or None) and, when recorded,
            "steps_history".

        Raises:
            RuntimeError: If the agent keeps acting after every cell could
                have been revealed.
        """
        if agent is None:
            agent = self.new_agent()

        self.revealed = {self.first_cell}
        self.steps_history = []
        safe_total = self.width * self.height - self.mines_count
        number = self.board[self.first_cell[1]][self.first_cell[0]]
        mine_hit: Optional[Coord] = None
        status = 0

        for _ in range(self.width * self.height + 1):
            action = agent.get_action(number)
            if action.kind == ActionType.LEAVE:
                status = 1 if len(self.revealed) == safe_total else 0
                break

            cell = (action.x, action.y)
            if record_steps:
                self._record_step(agent, "reveal", cell)
            if cell in self.mines:
                logger.debug("Agent revealed mine at %s (%s)", cell, agent.last_method)
                mine_hit = cell
                status = -1
                break
            self.revealed.add(cell)
            number = self.board[action.y][action.x]
        else:
            raise RuntimeError("Agent exceeded the number of turns the board allows.")

        payload: Dict[str, Any] = {
            "revealed_cells_count": len(self.revealed),
            "mine_hit": mine_hit,
            "reveal_moves_count": agent.reveal_moves_count,
            "guesses_count": agent.guesses_count,
            "inferred_single_count": agent.inferred_single_count,
            "inferred_enumeration_count": agent.inferred_enumeration_count,
            "full_enumerations_count": agent.full_enumerations_count,
            "bounded_enumerations_count": agent.bounded_enumerations_count,
            "skipped_enumerations_count": agent.skipped_enumerations_count,
            "max_frontier": agent.max_frontier,
        }
        if record_steps:
            payload["steps_history"] = self.steps_history
        return status, payload

    # -------------------------------------------------------------------------
    # Display methods
    # -------------------------------------------------------------------------

    _ANSI_RESET = "\033[0m"
    _ANSI_COORD = "\033[96m"
    _ANSI_MINE = "\033[91m"

    def _c(self, s: str) -> str:
        """Wrap string in coordinate color."""
        return f"{self._ANSI_COORD}{s}{self._ANSI_RESET}"

    def _m(self, s: str) -> str:
        """Wrap string in mine color (red)."""
        return f"{self._ANSI_MINE}{s}{self._ANSI_RESET}"

    def format_board(self, reveal_all: bool = False) -> str:
        """
        Render the hidden board for terminal display.

        Args:
            reveal_all: If True, show mines and every number, not just revealed cells.
        """

        def cell_str(x: int, y: int) -> str:
            if reveal_all or (x, y) in self.revealed:
                v = self.board[y][x]
                return self._m("M") if v == MINE else str(v)
            return "."

        header_cells = " ".join(f"{x:2d}" for x in range(self.width))
        out = [self._c("   ") + self._c(header_cells)]
        out.append(self._c("   " + "-" * (3 * self.width - 1)))
        for y in range(self.height):
            row_cells = " ".join(f" {cell_str(x, y)}" for x in range(self.width))
            out.append(self._c(f"{y:2d} ") + self._c("|") + row_cells)
        return "\n".join(out)
