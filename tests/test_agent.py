import pytest

from environment.agent import PathFollowingAgent, RandomWalkAgent, run_episode
from environment.episode import MazeConfig, MazeEpisode
from environment.grid import Point


def test_path_following_agent_directions():
    agent = PathFollowingAgent([Point(1, 1), Point(1, 2), Point(2, 2)])
    assert agent.directions == ["down", "right"]


def test_path_following_agent_rejects_gaps():
    with pytest.raises(ValueError):
        PathFollowingAgent([Point(1, 1), Point(3, 1)])


def test_optimal_agent_reaches_exit(clock):
    episode = MazeEpisode.create(MazeConfig(21, seed=4), clock=clock)
    metrics = run_episode(episode, PathFollowingAgent(episode.optimal_path))
    assert metrics.reached_exit
    assert metrics.wall_collisions == 0
    assert metrics.backtrack_count == 0
    assert metrics.actual_path == list(episode.optimal_path)


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_random_walk_conserves_heatmap(clock, seed):
    episode = MazeEpisode.create(MazeConfig(11, seed=seed), clock=clock)
    metrics = run_episode(episode, RandomWalkAgent(seed), max_attempts=300)
    assert sum(map(sum, metrics.heatmap)) == metrics.total_moves
    assert metrics.total_moves + metrics.wall_collisions == sum(metrics.movement_patterns.values())
    assert len(metrics.actual_path) == metrics.total_moves + 1
    assert metrics.reached_exit != metrics.timed_out
    if metrics.reached_exit:
        assert 0 < metrics.path_efficiency <= 1.0


def test_run_stops_on_time_budget(clock):
    episode = MazeEpisode.create(MazeConfig(21, seed=1), clock=clock, time_limit_seconds=0)
    metrics = run_episode(episode, RandomWalkAgent(0))
    assert metrics.total_moves == 0
    assert metrics.timed_out
