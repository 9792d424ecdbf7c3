"""
Minesweeper Agent

A turn-based Minesweeper decision engine using only sound inferences:
- Single-point deduction: the two counting rules applied to one revealed cell
- Frontier enumeration: exhaustive backtracking over covered frontier cells
- Consistency aggregation: facts shared by every consistent assignment
- Lowest-risk fallback: the frontier cell mined in the fewest assignments
"""

from .agent import (
    BOUNDED_FRONTIER_CAP,
    DEFAULT_TIME_BUDGET,
    DEFAULT_TIME_FLOOR,
    Action,
    ActionType,
    EnumerationMode,
    MinesweeperAgent,
)
from .aggregator import Aggregate, ConsistencyAggregator
from .analysis import (
    format_agent_knowledge,
    run_agent_level_analysis,
    run_agent_many_tests,
    run_agent_single_test,
)
from .board import COVERED, FLAGGED, INVALID, UNDEFINED, BoardState
from .deducer import SinglePointDeducer, WorkQueues
from .enumerator import BOMB, SAFE, FrontierEnumerator
from .world import MinesweeperWorld

__version__ = "1.0.0"

__all__ = [
    # Core classes
    "MinesweeperAgent",
    "Action",
    "ActionType",
    "EnumerationMode",
    "BoardState",
    "SinglePointDeducer",
    "WorkQueues",
    "FrontierEnumerator",
    "ConsistencyAggregator",
    "Aggregate",
    # Host
    "MinesweeperWorld",
    # Constants
    "COVERED",
    "FLAGGED",
    "UNDEFINED",
    "INVALID",
    "BOMB",
    "SAFE",
    "BOUNDED_FRONTIER_CAP",
    "DEFAULT_TIME_BUDGET",
    "DEFAULT_TIME_FLOOR",
    # Analysis functions
    "format_agent_knowledge",
    "run_agent_single_test",
    "run_agent_many_tests",
    "run_agent_level_analysis",
]
