# =============================================================================
# Maze Chase - Command Line Interface
# =============================================================================
"""
Simple CLI for playing and watching the game.

    python -m mazechase.cli
"""

import time
from typing import List

from .core import (
    GameEngine, GameState, create_game, play_random_game,
    Action, Actor, Difficulty, Direction, MazeAlgorithm, Position
)
from .ai import GreedyEvaderAgent, MinimaxAgent, MAX_SEARCH_DEPTH


def print_header():
    """Print game header"""
    print("\n" + "=" * 60)
    print("   MAZE CHASE")
    print("   Reach the goal before the pursuer catches you")
    print("=" * 60 + "\n")


def render_maze(state: GameState) -> str:
    """
    Draw the maze as ASCII art, row 0 at the top.

    P is the pursuer, E the evader, G the goal and X a capture.
    """
    grid = state.grid
    goal = state.goal

    def marker(column: int, row: int) -> str:
        here = Position(column, row)
        if here == state.pursuer_position and here == state.evader_position:
            return " X "
        if here == state.pursuer_position:
            return " P "
        if here == state.evader_position:
            return " E "
        if here == goal:
            return " G "
        return "   "

    def horizontal(row: int, direction: Direction) -> str:
        segments = [
            "---" if grid.has_wall(Position(column, row), direction) else "   "
            for column in range(grid.columns)
        ]
        return "+" + "+".join(segments) + "+"

    lines = [horizontal(0, Direction.BACK)]
    for row in range(grid.rows):
        line = "|" if grid.has_wall(Position(0, row), Direction.LEFT) else " "
        for column in range(grid.columns):
            line += marker(column, row)
            line += "|" if grid.has_wall(Position(column, row), Direction.RIGHT) else " "
        lines.append(line)
        lines.append(horizontal(row, Direction.FRONT))
    return "\n".join(lines)


def print_state(engine: GameEngine):
    """Print current game state"""
    state = engine.state
    if not state:
        print("No game in progress")
        return

    actor = engine.get_current_actor()
    print(f"\n{'='*50}")
    print(f"Turn {state.turn_number} | {actor.name if actor else 'NOBODY'}'s Turn")
    print(f"{'='*50}")
    print(render_maze(state))

    for side in Actor:
        items = ", ".join(p.name for p in state.get_powerups(side)) or "none"
        frozen = state.get_frozen_turns(side)
        status = f" (frozen {frozen})" if frozen else ""
        print(f"  {side.name:<8} at {state.get_position(side)}{status}  items: {items}")


def print_actions(actions: List[Action]):
    """Print available actions"""
    print(f"\n{'='*50}")
    print("Available Actions:")
    print(f"{'='*50}")
    for idx, action in enumerate(actions):
        print(f"  [{idx}] {action}")


def print_result(engine: GameEngine):
    """Print the final outcome"""
    print(f"\n{'='*60}")
    print("GAME OVER!")
    print(f"{'='*60}")
    winner = engine.get_winner()
    condition = engine.state.victory_condition
    print(f"Winner: {winner.name if winner else 'NOBODY'}")
    print(f"Victory: {condition if condition else 'N/A'}")

    print("\nGame Statistics:")
    for key, value in engine.get_stats().items():
        print(f"  {key}: {value}")


def choose_difficulty() -> Difficulty:
    print("Select Difficulty:")
    print("  1. Easy")
    print("  2. Medium")
    print("  3. Hard")
    print("  4. Expert")

    choice = input("\nChoice [1-4]: ").strip()
    difficulty_map = {"1": Difficulty.EASY, "2": Difficulty.MEDIUM,
                      "3": Difficulty.HARD, "4": Difficulty.EXPERT}
    return difficulty_map.get(choice, Difficulty.MEDIUM)


def run_pursuer_turns(engine: GameEngine):
    """Let the pursuer act until the evader is up again"""
    while not engine.is_game_over() and engine.get_current_actor() == Actor.PURSUER:
        result = engine.take_pursuer_turn()
        if result.action is not None:
            print(f"\nPursuer: {result.action} -> {result.message}")
        else:
            print(f"\nPursuer: {result.message}")


def interactive_game():
    """Run an interactive game session as the evader"""
    print_header()
    difficulty = choose_difficulty()

    engine = create_game(difficulty=difficulty)
    print(f"\nGame created: {engine.config.rows}x{engine.config.columns} {engine.config.algorithm} maze")

    while not engine.is_game_over():
        print_state(engine)

        actions = engine.get_valid_actions()
        if not actions:
            print("\nNo valid actions available!")
            break

        print_actions(actions)

        choice = input("\nEnter action number (or 'q' to quit): ").strip()

        if choice.lower() == 'q':
            print("Game ended by player.")
            break

        try:
            action_idx = int(choice)
        except ValueError:
            print("Please enter a valid number")
            continue
        if not 0 <= action_idx < len(actions):
            print("Invalid action number")
            continue

        result = engine.perform_evader_action(actions[action_idx])
        print(f"\n-> {result.message}")
        run_pursuer_turns(engine)

    if engine.is_game_over():
        print_state(engine)
        print_result(engine)


def demo_game(difficulty: Difficulty = Difficulty.EASY, seed: int = None, max_turns: int = 200):
    """Watch a greedy evader run from the minimax pursuer"""
    print_header()
    print("Running demo game: greedy evader vs minimax pursuer...")

    engine = create_game(difficulty=difficulty, algorithm=MazeAlgorithm.RANDOM_TREE, seed=seed)
    evader = GreedyEvaderAgent()

    while not engine.is_game_over() and engine.state.turn_number <= max_turns:
        if engine.get_current_actor() == Actor.EVADER:
            action = evader.get_action(engine)
            if action is None:
                break
            engine.perform_evader_action(action)
        else:
            engine.take_pursuer_turn()

    print_state(engine)
    if engine.is_game_over():
        print_result(engine)
    else:
        print(f"\nNo winner after {max_turns} turns")


def random_demo():
    """Run a quick demo with a random evader"""
    print_header()
    print("Running random game demo...")

    result = play_random_game(difficulty=Difficulty.EASY)

    print(f"\n{'='*50}")
    print("Demo Game Results:")
    print(f"{'='*50}")
    print(f"Winner: {result['winner']}")
    print(f"Victory: {result['victory_condition']}")
    print(f"Turns: {result['turns']}")
    print("\nStatistics:")
    for key, value in result['stats'].items():
        print(f"  {key}: {value}")


def benchmark_decision(difficulty: Difficulty = Difficulty.HARD, seed: int = 1):
    """Time one pursuer decision at every depth on the same position"""
    print_header()
    engine = create_game(difficulty=difficulty, seed=seed)
    state = engine.get_state_copy()
    print(f"Benchmark position: {state.rows}x{state.columns} maze, "
          f"pursuer at {state.pursuer_position}, evader at {state.evader_position}")

    agent = MinimaxAgent()
    print(f"\n{'Depth':>5} {'Action':<32} {'Score':>10} {'Nodes':>8} {'Time (ms)':>10}")
    for depth in range(MAX_SEARCH_DEPTH + 1):
        start_time = time.time()
        action = agent.get_best_action(state, depth=depth)
        elapsed = (time.time() - start_time) * 1000
        label = str(action) if action else "-"
        score = action.score if action else 0.0
        print(f"{depth:>5} {label:<32} {score:>10.2f} {agent.nodes_searched:>8} {elapsed:>10.1f}")


def main():
    """Main entry point"""
    print_header()

    print("Options:")
    print("  1. Play Interactive Game")
    print("  2. Run Demo (Greedy Evader)")
    print("  3. Run Demo (Random Evader)")
    print("  4. Benchmark Pursuer Decision")
    print("  5. Exit")

    choice = input("\nChoice [1-5]: ").strip()

    if choice == "1":
        interactive_game()
    elif choice == "2":
        demo_game()
    elif choice == "3":
        random_demo()
    elif choice == "4":
        benchmark_decision()
    elif choice == "5":
        print("Goodbye!")
    else:
        print("Invalid choice")


if __name__ == "__main__":
    main()
