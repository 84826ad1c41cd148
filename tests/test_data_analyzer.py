import json

import pytest

from analytics.data_analyzer import MetricsDataAnalyzer
from analytics.json_serializer import MetricsJSONSerializer
from assessment.session import AssessmentSession, GameResult
from environment.agent import RandomWalkAgent, run_episode
from environment.episode import MazeConfig, MazeEpisode


@pytest.fixture
def saved_session(tmp_path, clock):
    episodes = []
    for seed in (1, 2):
        episode = MazeEpisode.create(MazeConfig(9, seed=seed), clock=clock)
        episodes.append(run_episode(episode, RandomWalkAgent(seed), max_attempts=200))
    session = AssessmentSession()
    session.record(GameResult("maze", 150, episodes[0]))
    filepath = tmp_path / "session.json"
    MetricsJSONSerializer.save_episodes(str(filepath), episodes, 9, session_report=session.report())
    return filepath, episodes


def test_basic_info(saved_session):
    filepath, _ = saved_session
    info = MetricsDataAnalyzer(str(filepath)).get_basic_info()
    assert info["side_length"] == 9
    assert info["total_episodes"] == 2
    assert info["total_score"] == 150


def test_episode_summary(saved_session):
    filepath, episodes = saved_session
    df = MetricsDataAnalyzer(str(filepath)).get_episode_summary()
    assert list(df["episode"]) == [0, 1]
    assert list(df["total_moves"]) == [m.total_moves for m in episodes]
    assert list(df["wall_collisions"]) == [m.wall_collisions for m in episodes]


def test_movement_patterns_and_phases(saved_session):
    filepath, episodes = saved_session
    analyzer = MetricsDataAnalyzer(str(filepath))
    patterns = analyzer.get_movement_patterns()
    assert patterns.loc[0, ["up", "down", "left", "right"]].sum() == sum(episodes[0].movement_patterns.values())
    phases = analyzer.get_phase_comparison()
    assert len(phases) == 4
    assert set(phases["phase"]) == {"first_half", "second_half"}


def test_heatmap_and_hot_cells(saved_session):
    filepath, episodes = saved_session
    analyzer = MetricsDataAnalyzer(str(filepath))
    heatmap = analyzer.get_heatmap(0)
    assert heatmap.shape == (9, 9)
    assert int(heatmap.values.sum()) == episodes[0].total_moves
    hot = analyzer.get_hot_cells(0, top=3)
    assert len(hot) <= 3
    visits = [cell["visits"] for cell in hot]
    assert visits == sorted(visits, reverse=True)
    for cell in hot:
        assert episodes[0].heatmap[cell["y"]][cell["x"]] == cell["visits"]


def test_export_to_csv(saved_session, tmp_path):
    filepath, _ = saved_session
    output_dir = tmp_path / "csv"
    MetricsDataAnalyzer(str(filepath)).export_to_csv(str(output_dir))
    for name in ("episode_summary.csv", "movement_patterns.csv", "phase_comparison.csv"):
        assert (output_dir / name).exists()


def test_hot_cells_order_for_known_heatmap(tmp_path):
    filepath = tmp_path / "heatmap.json"
    filepath.write_text(json.dumps({"episodes": [{"heatmap": [
        [0, 2, 0],
        [3, 0, 2],
        [0, 1, 0],
    ]}]}), encoding="utf-8")
    hot = MetricsDataAnalyzer(str(filepath)).get_hot_cells(top=3)
    assert hot == [
        {"x": 0, "y": 1, "visits": 3},
        {"x": 1, "y": 0, "visits": 2},
        {"x": 2, "y": 1, "visits": 2},
    ]


def test_hot_cells_empty_heatmap(tmp_path):
    filepath = tmp_path / "empty.json"
    filepath.write_text(json.dumps({"episodes": [{"heatmap": []}]}), encoding="utf-8")
    assert MetricsDataAnalyzer(str(filepath)).get_hot_cells() == []
