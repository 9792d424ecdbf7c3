"""Exhaustive backtracking enumeration of frontier mine/safe assignments."""

import logging
from collections import deque
from typing import Deque, Dict, List, Optional, Set, Tuple

from .board import COVERED, FLAGGED, UNDEFINED, BoardState, is_revealed
from .utils import Coord, row_major

logger = logging.getLogger(__name__)

BOMB = "B"
SAFE = "S"

# One (cell, tag) pair per enumerated frontier cell, in enumeration order.
Assignment = List[Tuple[Coord, str]]


class FrontierEnumerator:
    """
    Depth-first search over Bomb/Safe labelings of the covered frontier.

    The search never writes to the board. Tentative labels live in a
    hypothesis map; a frontier cell without a label reads as UNDEFINED.
    """

    def __init__(self, board: BoardState) -> None:
        self.board = board

    # -------------------------------------------------------------------------
    # Frontier ordering
    # -------------------------------------------------------------------------

    def _linked_cells(self, cell: Coord, frontier: Set[Coord]) -> List[Coord]:
        """Frontier cells sharing at least one revealed neighbor with `cell`."""
        linked: Set[Coord] = set()
        for rx, ry in self.board.collect_neighbors_of(cell[0], cell[1], is_revealed):
            for nbr in self.board.neighbors(rx, ry):
                if nbr != cell and nbr in frontier:
                    linked.add(nbr)
        return sorted(linked, key=row_major)

    def order_frontier(self, frontier: Optional[Set[Coord]] = None) -> List[Coord]:
        """
        Order frontier cells so that cells constrained together are adjacent in the list.

        Breadth-first traversal over "shares a revealed neighbor" links, each
        component started from its row-major smallest cell.
        """
        if frontier is None:
            frontier = self.board.frontier_covered

        ordered: List[Coord] = []
        seen: Set[Coord] = set()
        for start in sorted(frontier, key=row_major):
            if start in seen:
                continue
            seen.add(start)
            queue: Deque[Coord] = deque([start])
            while queue:
                cell = queue.popleft()
                ordered.append(cell)
                for nbr in self._linked_cells(cell, frontier):
                    if nbr not in seen:
                        seen.add(nbr)
                        queue.append(nbr)
        return ordered

    # -------------------------------------------------------------------------
    # Constraint check
    # -------------------------------------------------------------------------

    def _status_under(self, cell: Coord, hypothesis: Dict[Coord, str], open_cells: Set[Coord]) -> int:
        """Status of `cell` with the hypothesis laid over the board."""
        tag = hypothesis.get(cell)
        if tag == BOMB:
            return FLAGGED
        if tag == SAFE:
            return COVERED
        if cell in open_cells:
            return UNDEFINED
        return self.board.grid[cell[1]][cell[0]]

    def _consistent(self, cell: Coord, hypothesis: Dict[Coord, str], open_cells: Set[Coord]) -> bool:
        """Check every revealed neighbor of the just-labeled `cell`."""
        for rx, ry in self.board.collect_neighbors_of(cell[0], cell[1], is_revealed):
            n = self.board.grid[ry][rx]
            flagged = 0
            undefined = 0
            for nbr in self.board.neighbors(rx, ry):
                status = self._status_under(nbr, hypothesis, open_cells)
                if status == FLAGGED:
                    flagged += 1
                elif status == UNDEFINED:
                    undefined += 1

            if flagged > n or n > flagged + undefined:
                return False
            if undefined == 0 and flagged != n:
                return False
        return True

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def enumerate(self, cap: Optional[int] = None) -> List[Assignment]:
        """
        Find every labeling of the (possibly truncated) frontier consistent with all revealed numbers.

        Args:
            cap: If given, only the first `cap` cells of the ordered frontier are
                labeled (bounded mode). The remaining frontier cells stay
                undetermined for every check, so pruning never rejects a
                labeling that some completion of theirs would satisfy.

        Returns:
            The consistent assignments, in Bomb-first depth-first order.
        """
        ordered = self.order_frontier()
        open_cells: Set[Coord] = set(ordered)
        cells = ordered if cap is None else ordered[:cap]
        if not cells:
            return []

        mines_left = self.board.mines_remaining()
        # Only an exhaustive pass over a frontier that holds every covered cell
        # may demand that the assignment place exactly the remaining mines.
        exact_mines = len(cells) == len(self.board.all_covered)

        results: List[Assignment] = []
        hypothesis: Dict[Coord, str] = {}
        next_branch: List[int] = [0] * len(cells)  # 0 -> try Bomb, 1 -> try Safe, 2 -> exhausted
        bombs = 0
        last = len(cells) - 1
        i = 0

        while i >= 0:
            cell = cells[i]
            if hypothesis.pop(cell, None) == BOMB:
                bombs -= 1

            branch = next_branch[i]
            if branch == 2:
                next_branch[i] = 0
                i -= 1
                continue
            next_branch[i] = branch + 1

            tag = BOMB if branch == 0 else SAFE
            hypothesis[cell] = tag
            if tag == BOMB:
                bombs += 1
                if bombs > mines_left:
                    continue

            if not self._consistent(cell, hypothesis, open_cells):
                continue

            if i < last:
                i += 1
                continue

            if exact_mines and bombs != mines_left:
                continue
            results.append([(c, hypothesis[c]) for c in cells])

        logger.debug(
            "Enumerated %d/%d frontier cells: %d consistent assignments",
            len(cells),
            len(ordered),
            len(results),
        )
        return results
