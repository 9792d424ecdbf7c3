"""Authoritative board state: per-cell status plus covered/frontier bookkeeping."""

from typing import Callable, List, Set, Tuple

from .utils import Coord, Neighborhoods, get_neighborhoods, in_bounds, row_major

# Cell statuses. Revealed cells hold their mine count 0..8 directly.
COVERED = -1
FLAGGED = -2
UNDEFINED = -3  # only ever produced by hypothesis views during enumeration
INVALID = -4

StatusPredicate = Callable[[int], bool]


def is_covered(status: int) -> bool:
    return status == COVERED


def is_flagged(status: int) -> bool:
    return status == FLAGGED


def is_revealed(status: int) -> bool:
    return status >= 0


class BoardState:
    """
    Grid of cell statuses with incrementally maintained covered and frontier sets.

    Invariants kept by every mutation:
    - covered_count == len(all_covered)
    - frontier_covered is exactly the set of covered cells with at least
      one revealed 8-neighbor
    """

    def __init__(self, rows: int, cols: int, total_mines: int) -> None:
        """
        Initialize an all-covered board.

        Args:
            rows: Number of rows (board height), must be > 0.
            cols: Number of columns (board width), must be > 0.
            total_mines: Total mines hidden on the board, 0 <= total_mines <= rows * cols.

        Raises:
            ValueError: If dimensions or the mine count are invalid.
        """
        if rows <= 0 or cols <= 0:
            raise ValueError("rows and cols must be positive.")
        if total_mines < 0 or total_mines > rows * cols:
            raise ValueError("total_mines must be between 0 and rows * cols.")

        self.rows: int = rows
        self.cols: int = cols
        self.total_mines: int = total_mines

        self.grid: List[List[int]] = [[COVERED for _ in range(cols)] for _ in range(rows)]
        self.covered_count: int = rows * cols
        self.flagged_count: int = 0

        self.all_covered: Set[Coord] = {(x, y) for y in range(rows) for x in range(cols)}
        self.frontier_covered: Set[Coord] = set()

        self._neighborhoods: Neighborhoods = get_neighborhoods(cols, rows)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def in_bounds(self, x: int, y: int) -> bool:
        return in_bounds(x, y, self.cols, self.rows)

    def status(self, x: int, y: int) -> int:
        """Return the cell status, or INVALID for out-of-bounds coordinates."""
        if not self.in_bounds(x, y):
            return INVALID
        return self.grid[y][x]

    def neighbors(self, x: int, y: int) -> Tuple[Coord, ...]:
        """Return the in-bounds 8-neighbors of (x, y)."""
        return self._neighborhoods[(x, y)]

    def count_neighbors_of(self, x: int, y: int, predicate: StatusPredicate) -> int:
        """Count 8-neighbors of (x, y) whose status satisfies the predicate."""
        return sum(1 for nx, ny in self.neighbors(x, y) if predicate(self.grid[ny][nx]))

    def collect_neighbors_of(self, x: int, y: int, predicate: StatusPredicate) -> List[Coord]:
        """Collect 8-neighbors of (x, y) whose status satisfies the predicate."""
        return [(nx, ny) for nx, ny in self.neighbors(x, y) if predicate(self.grid[ny][nx])]

    def mines_remaining(self) -> int:
        """Mines not yet accounted for by flags."""
        return self.total_mines - self.flagged_count

    def is_done(self) -> bool:
        """True once every covered cell must be a mine."""
        return self.covered_count <= self.mines_remaining()

    def sorted_frontier(self) -> List[Coord]:
        return sorted(self.frontier_covered, key=row_major)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def reveal(self, x: int, y: int, number: int) -> bool:
        """
        Record a revealed number at (x, y).

        Returns:
            False if (x, y) is out of bounds, True otherwise. Re-revealing an
            already revealed cell keeps its original number.

        Raises:
            ValueError: If the cell is flagged.
        """
        if not self.in_bounds(x, y):
            return False

        prev = self.grid[y][x]
        if is_revealed(prev):
            return True
        if prev == FLAGGED:
            raise ValueError(f"Cannot reveal flagged cell ({x}, {y}).")

        self.grid[y][x] = number
        self.covered_count -= 1
        self.all_covered.discard((x, y))
        self.frontier_covered.discard((x, y))

        for nx, ny in self.neighbors(x, y):
            if self.grid[ny][nx] == COVERED:
                self.frontier_covered.add((nx, ny))
        return True

    def flag(self, x: int, y: int) -> bool:
        """
        Mark (x, y) as a mine. Flagging an already flagged cell is a no-op.

        Returns:
            False if (x, y) is out of bounds, True otherwise.

        Raises:
            ValueError: If the cell is already revealed.
        """
        if not self.in_bounds(x, y):
            return False

        prev = self.grid[y][x]
        if prev == FLAGGED:
            return True
        if is_revealed(prev):
            raise ValueError(f"Cannot flag revealed cell ({x}, {y}).")

        self.grid[y][x] = FLAGGED
        self.covered_count -= 1
        self.flagged_count += 1
        self.all_covered.discard((x, y))
        self.frontier_covered.discard((x, y))
        return True

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------

    def format_board(self) -> str:
        """
        Render the board as a multi-line string.

        Covered cells are shown as '.', flags as 'F', revealed cells as their number.
        """

        def cell_str(x: int, y: int) -> str:
            v = self.grid[y][x]
            if v == COVERED:
                return "."
            if v == FLAGGED:
                return "F"
            return str(v)

        header_cells = " ".join(f"{x:2d}" for x in range(self.cols))
        out = ["   " + header_cells, "   " + "-" * (3 * self.cols - 1)]
        for y in range(self.rows):
            row_cells = " ".join(f" {cell_str(x, y)}" for x in range(self.cols))
            out.append(f"{y:2d} |" + row_cells)
        return "\n".join(out)
