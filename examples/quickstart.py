"""
Quickstart example for the Minesweeper Agent.

This script demonstrates driving the agent with the reference host.
"""

import logging

from minesweeper_agent import (
    ActionType,
    MinesweeperAgent,
    MinesweeperWorld,
    format_agent_knowledge,
    run_agent_many_tests,
)


def main():
    logging.basicConfig(level=logging.INFO)

    print("=" * 60)
    print("Minesweeper Agent - Quickstart Example")
    print("=" * 60)

    # Example 1: Drive the agent by hand on a tiny board with no mines
    print("\n1. Manual turns on a 1x3 board without mines...")
    print("-" * 60)

    agent = MinesweeperAgent(rows=1, cols=3, total_mines=0, first_x=0, first_y=0)
    number = 0
    while True:
        action = agent.get_action(number)
        print(f"Action: {action.kind.value} ({action.x}, {action.y})")
        if action.kind == ActionType.LEAVE:
            break
        number = 0

    # Example 2: Play a seeded Intermediate game
    print("\n2. Playing a seeded Intermediate game (16x16, 40 mines)...")
    print("-" * 60)

    world = MinesweeperWorld(16, 16, 40, seed=7)
    agent = world.new_agent(full_enumeration_cap=24, bounded_cap=24)
    status, payload = world.run(agent)

    result = {1: "WON", -1: "LOST"}.get(status, "STOPPED")
    print(f"Result: {result}")
    print(f"Reveal moves: {payload['reveal_moves_count']}")
    print(f"Single-point inferences: {payload['inferred_single_count']}")
    print(f"Enumeration inferences: {payload['inferred_enumeration_count']}")
    print(f"Guesses: {payload['guesses_count']}")
    print()
    print(format_agent_knowledge(agent))

    # Example 3: Run multiple games for statistics
    print("\n3. Running 20 Beginner games for win rate statistics...")
    print("-" * 60)

    results = run_agent_many_tests(9, 9, 10, runs=20, seed=0)
    print(f"Win rate: {results['win_rate']*100:.1f}%")
    print(f"Average moves per game: {results['avg_reveal_moves_count']:.1f}")
    print(f"Average guesses per game: {results['avg_guesses_count']:.1f}")

    print("\n" + "=" * 60)
    print("Done!")
    print("=" * 60)


if __name__ == "__main__":
    main()
