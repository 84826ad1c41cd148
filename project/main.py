import argparse
import importlib
import os
import sys
import time

from analytics.json_serializer import MetricsJSONSerializer
from assessment.scoring import score_maze
from assessment.session import AssessmentSession, GameResult
from environment.agent import PathFollowingAgent, RandomWalkAgent, run_episode
from environment.episode import MazeConfig, MazeEpisode

import config as cfg


def load_config() -> dict:
    """Завантажує конфігурацію з config.py у словник."""
    importlib.reload(cfg)
    config_dict = {key: getattr(cfg, key) for key in dir(cfg) if not key.startswith('_')}

    config_dict.setdefault('MAZE_SIZE', 21)
    config_dict.setdefault('MAZE_SEED', None)
    config_dict.setdefault('TIME_LIMIT_SECONDS', 60)
    config_dict.setdefault('HALFWAY_MOVE_THRESHOLD', None)
    config_dict.setdefault('MAX_AGENT_ATTEMPTS', 2000)
    return config_dict


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Simulate a maze navigation episode and report its metrics.")
    parser.add_argument("--size", type=int, default=None, help="Maze side length (odd, >= 5).")
    parser.add_argument("--seed", type=int, default=None, help="Maze seed for a reproducible layout.")
    parser.add_argument("--agent", choices=["random", "optimal"], default="random", help="Scripted agent to drive the episode.")
    parser.add_argument("--agent-seed", type=int, default=None, help="Seed for the random agent.")
    parser.add_argument("--max-moves", type=int, default=None, help="Maximum number of move attempts; the run then ends like a timeout.")
    parser.add_argument("--output", type=str, default=None, help="Path of the JSON file to save results to.")
    parser.add_argument("--show-maze", action="store_true", help="Print the generated maze.")
    return parser


def run_simulation(config: dict, agent_name: str = "random", agent_seed=None, clock=None):
    """Генерує епізод, проганяє його агентом і повертає (episode, metrics, score)."""
    maze_config = MazeConfig.from_dict(config)
    episode = MazeEpisode.create(
        maze_config,
        clock=clock if clock is not None else time.monotonic,
        time_limit_seconds=config['TIME_LIMIT_SECONDS'],
        halfway_threshold=config.get('HALFWAY_MOVE_THRESHOLD'),
    )
    if agent_name == "optimal":
        agent = PathFollowingAgent(episode.optimal_path)
    else:
        agent = RandomWalkAgent(agent_seed)

    metrics = run_episode(episode, agent, max_attempts=config['MAX_AGENT_ATTEMPTS'])
    score = score_maze(metrics, config['TIME_LIMIT_SECONDS'], config)
    return episode, metrics, score


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config()
    if args.size is not None:
        config['MAZE_SIZE'] = args.size
    if args.seed is not None:
        config['MAZE_SEED'] = args.seed
    if args.max_moves is not None:
        config['MAX_AGENT_ATTEMPTS'] = args.max_moves

    try:
        episode, metrics, score = run_simulation(config, args.agent, args.agent_seed)
    except ValueError as e:
        print(f"Error: invalid configuration: {e}")
        return 2

    print(f"Maze {episode.grid.side_length}x{episode.grid.side_length}, seed: {episode.seed}")
    if args.show_maze:
        episode.grid.display()
    if metrics.reached_exit:
        outcome = "reached exit"
    elif episode.is_timed_out():
        outcome = "timeout"
    else:
        outcome = "move limit reached (reported as timeout)"
    print(f"Outcome: {outcome}")
    print(f"Moves: {metrics.total_moves}, collisions: {metrics.wall_collisions}, backtracks: {metrics.backtrack_count}")
    print(f"Path: {metrics.path_length} (optimal {metrics.optimal_path_length}), "
          f"efficiency: {metrics.path_efficiency:.3f}, deviation: {metrics.path_deviation}")
    print(f"Score: {score}")

    if args.output:
        session = AssessmentSession(game_order=list(config.get('GAME_ORDER', ["maze"])))
        session.record(GameResult("maze", score, metrics))
        output_dir = os.path.dirname(args.output)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        MetricsJSONSerializer.save_episodes(
            args.output, [metrics], episode.grid.side_length,
            maze_seed=episode.seed, session_report=session.report(),
        )
        print(f"Results saved to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
