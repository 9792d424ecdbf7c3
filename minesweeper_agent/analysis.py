"""Analysis and benchmarking tools for the Minesweeper agent."""

from typing import Dict, List, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .agent import MinesweeperAgent
from .board import COVERED, FLAGGED
from .world import MinesweeperWorld

LEVELS: Dict[str, Tuple[int, int, int]] = {
    "beginner": (9, 9, 10),
    "intermediate": (16, 16, 40),
    "expert": (30, 16, 99),
}

METRIC_KEYS = (
    "reveal_moves_count",
    "revealed_cells_count",
    "guesses_count",
    "inferred_single_count",
    "inferred_enumeration_count",
    "full_enumerations_count",
    "bounded_enumerations_count",
    "skipped_enumerations_count",
    "max_frontier",
)


def format_agent_knowledge(agent: MinesweeperAgent, *, show_coords: bool = True) -> str:
    """
    Format the agent's current board knowledge as a human-readable string.

    Args:
        agent: Agent whose board will be displayed.
        show_coords: If True, include coordinate labels and a header.

    Returns:
        A text grid where covered cells are '.', flags are 'F' and revealed
        cells show their number.
    """
    if show_coords:
        return agent.board.format_board()

    def cell_char(v: int) -> str:
        if v == COVERED:
            return "."
        if v == FLAGGED:
            return "F"
        return str(v)

    return "\n".join(" ".join(f" {cell_char(v)}" for v in row) for row in agent.board.grid)


def run_agent_single_test(
    width: int,
    height: int,
    mines_count: int,
    mines_generation_algorithm: str = "safe_neighborhood_rule",
    *,
    seed: Optional[int] = None,
    show_boards: bool = False,
    enumeration_cap: Optional[int] = 24,
) -> Dict[str, object]:
    """
    Run one end-to-end game with a fresh MinesweeperAgent on a fresh board.

    Args:
        width: Board width.
        height: Board height.
        mines_count: Total number of mines on the board.
        mines_generation_algorithm: Mine placement rule
            ("safe_first_action_rule" or "safe_neighborhood_rule").
        seed: Seed for mine placement.
        show_boards: If True, print the hidden board and the agent's final knowledge.
        enumeration_cap: Frontier length above which enumeration runs bounded,
            and the number of cells a bounded pass labels. None removes the cap.

    Returns:
        The host payload augmented with "status" (-1 loss, 0 left early, 1 win).
    """
    world = MinesweeperWorld(
        width,
        height,
        mines_count,
        mines_generation_algorithm=mines_generation_algorithm,
        seed=seed,
    )
    if enumeration_cap is None:
        agent = world.new_agent()
    else:
        agent = world.new_agent(full_enumeration_cap=enumeration_cap, bounded_cap=enumeration_cap)
    status, payload = world.run(agent)

    if show_boards:
        print(f"Generation mode: {mines_generation_algorithm}")
        print("Hidden board (mines visible):")
        print(world.format_board(reveal_all=True))
        print()
        print("Agent knowledge (covered shown as '.'):")
        print(format_agent_knowledge(agent, show_coords=True))
        print()
        print(f"Finished with status {status}.")

    out: Dict[str, object] = dict(payload)
    out["status"] = status
    return out


def run_agent_many_tests(
    width: int,
    height: int,
    mines_count: int,
    runs: int,
    mines_generation_algorithm: str = "safe_neighborhood_rule",
    *,
    seed: Optional[int] = None,
    enumeration_cap: Optional[int] = 24,
) -> Dict[str, float]:
    """
    Run many independent games and return averaged metrics plus win rate.

    Args:
        width: Board width.
        height: Board height.
        mines_count: Total number of mines on the board.
        runs: Number of independent games to run, must be > 0.
        mines_generation_algorithm: Mine placement rule.
        seed: Base seed; game i uses seed + i. None gives unseeded boards.
        enumeration_cap: Frontier length above which enumeration runs bounded,
            and the number of cells a bounded pass labels. None removes the cap.

    Returns:
        "avg_<metric>" for every agent metric, plus win_rate, loss_rate and
        guess_failure_rate (losses per guess).

    Raises:
        ValueError: If runs is not positive.
    """
    if runs <= 0:
        raise ValueError("runs must be positive.")

    metrics = np.zeros((runs, len(METRIC_KEYS)), dtype=float)
    statuses = np.zeros(runs, dtype=int)

    for i in range(runs):
        result = run_agent_single_test(
            width,
            height,
            mines_count,
            mines_generation_algorithm,
            seed=None if seed is None else seed + i,
            enumeration_cap=enumeration_cap,
        )
        statuses[i] = int(result["status"])  # type: ignore[arg-type]
        metrics[i] = [float(result[k]) for k in METRIC_KEYS]  # type: ignore[arg-type]

    means = metrics.mean(axis=0)
    out: Dict[str, float] = {f"avg_{k}": float(v) for k, v in zip(METRIC_KEYS, means)}
    out["win_rate"] = float(np.mean(statuses == 1))
    out["loss_rate"] = float(np.mean(statuses == -1))

    total_guesses = metrics[:, METRIC_KEYS.index("guesses_count")].sum()
    losses = float(np.sum(statuses == -1))
    out["guess_failure_rate"] = losses / total_guesses if total_guesses > 0 else 0.0
    return out


def run_agent_level_analysis(
    runs: int,
    mines_generation_algorithm: str = "safe_neighborhood_rule",
    *,
    levels: Optional[List[str]] = None,
    seed: Optional[int] = None,
    enumeration_cap: Optional[int] = 24,
    show_plots: bool = True,
) -> Dict[str, Dict[str, float]]:
    """
    Run aggregated games on standard difficulty levels and plot summaries.

    Standard difficulty levels:
        - Beginner: 9x9, 10 mines
        - Intermediate: 16x16, 40 mines
        - Expert: 30x16, 99 mines

    Returns:
        Mapping from level name to the statistics of run_agent_many_tests().
    """
    level_names = levels if levels is not None else list(LEVELS)
    unknown = [n for n in level_names if n not in LEVELS]
    if unknown:
        raise KeyError(f"Unknown levels: {unknown}")

    results: Dict[str, Dict[str, float]] = {}
    for level in level_names:
        w, h, m = LEVELS[level]
        results[level] = run_agent_many_tests(
            w,
            h,
            m,
            runs,
            mines_generation_algorithm,
            seed=seed,
            enumeration_cap=enumeration_cap,
        )

    if not show_plots:
        return results

    x = np.arange(len(level_names))
    bar_w = 0.35

    # 1) Inferences made (by method)
    single = [results[n]["avg_inferred_single_count"] for n in level_names]
    enumeration = [results[n]["avg_inferred_enumeration_count"] for n in level_names]
    guesses = [results[n]["avg_guesses_count"] for n in level_names]

    plt.figure()  # type: ignore[misc]
    plt.bar(x - bar_w / 2, single, width=bar_w, label="single point")  # type: ignore[misc]
    plt.bar(x + bar_w / 2, enumeration, width=bar_w, label="enumeration")  # type: ignore[misc]
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Average classified cells")  # type: ignore[misc]
    plt.title("Average inferences by method (per game)")  # type: ignore[misc]
    plt.legend()  # type: ignore[misc]
    plt.tight_layout()
    plt.show()  # type: ignore[misc]

    # 2) Guesses
    plt.figure()  # type: ignore[misc]
    plt.bar(x, guesses)  # type: ignore[misc]
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Average guesses")  # type: ignore[misc]
    plt.title("Average guesses (per game)")  # type: ignore[misc]
    plt.tight_layout()
    plt.show()  # type: ignore[misc]

    # 3) Win rate by level
    win_rates = [results[n]["win_rate"] for n in level_names]

    plt.figure()  # type: ignore[misc]
    plt.bar(x, win_rates)  # type: ignore[misc]
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Win rate")  # type: ignore[misc]
    plt.ylim(0.0, 1.0)  # type: ignore[misc]
    plt.title("Win rate by difficulty level")  # type: ignore[misc]
    plt.tight_layout()
    plt.show()  # type: ignore[misc]

    return results
