"""Reduce enumerated assignments to guaranteed facts and a lowest-risk fallback cell."""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .enumerator import BOMB, SAFE, Assignment
from .utils import Coord


@dataclass
class Aggregate:
    """Outcome of one aggregation pass."""

    safe_cells: List[Coord] = field(default_factory=list)
    mine_cells: List[Coord] = field(default_factory=list)
    assignments_count: int = 0
    # Raw number of assignments in which the lowest-risk cell is a bomb.
    lowest_risk: Optional[int] = None
    lowest_risk_cell: Optional[Coord] = None

    @property
    def has_facts(self) -> bool:
        return bool(self.safe_cells or self.mine_cells)

    @property
    def lowest_risk_fraction(self) -> Optional[float]:
        if self.lowest_risk is None or self.assignments_count == 0:
            return None
        return self.lowest_risk / self.assignments_count


class ConsistencyAggregator:
    """Classifies each enumerated frontier position across all consistent assignments."""

    def reduce(self, assignments: Sequence[Assignment], first_only: bool = False) -> Aggregate:
        """
        Extract guaranteed facts and the minimum-risk position from a set of assignments.

        Args:
            assignments: Consistent assignments of one enumeration pass. All of
                them label the same cells in the same order.
            first_only: Bounded mode. Stop at the first guaranteed-safe cell;
                if there is none, report only the first guaranteed mine.

        Returns:
            An Aggregate. Positions that agree across every assignment become
            facts; among the others, the one labeled Bomb least often is
            reported as the lowest-risk cell (earliest position wins ties).
        """
        result = Aggregate(assignments_count=len(assignments))
        if not assignments:
            return result

        first = assignments[0]
        if len(assignments) == 1:
            for cell, tag in first:
                if tag == SAFE:
                    result.safe_cells.append(cell)
                    if first_only:
                        result.mine_cells.clear()
                        return result
                elif not (first_only and result.mine_cells):
                    result.mine_cells.append(cell)
            return result

        for i, (cell, first_tag) in enumerate(first):
            risk = 0
            scanned = 0  # a scan cut short leaves risk as a partial count
            uniform = True
            for assignment in assignments:
                scanned += 1
                tag = assignment[i][1]
                if tag == BOMB:
                    risk += 1
                if tag != first_tag:
                    uniform = False
                # Once the position is known to vary, its exact risk only matters
                # while it can still become the minimum.
                if not uniform and (
                    result.safe_cells
                    or (result.lowest_risk is not None and risk > result.lowest_risk)
                ):
                    break

            if uniform:
                if first_tag == SAFE:
                    result.safe_cells.append(cell)
                    if first_only:
                        result.mine_cells.clear()
                        return result
                elif not (first_only and result.mine_cells):
                    result.mine_cells.append(cell)
            elif scanned == len(assignments) and (
                result.lowest_risk is None or risk < result.lowest_risk
            ):
                result.lowest_risk = risk
                result.lowest_risk_cell = cell

        return result
