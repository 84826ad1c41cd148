import pytest

from analytics.metrics import PhasePerformance
from assessment.scoring import score_maze
from assessment.session import GAME_ORDER, AssessmentSession, GameResult
from environment.agent import PathFollowingAgent
from environment.episode import MazeConfig, MazeEpisode


def _finished(clock, seconds_per_move=0.1):
    episode = MazeEpisode.create(MazeConfig(11, seed=6), clock=clock)
    agent = PathFollowingAgent(episode.optimal_path)
    while episode.is_active:
        clock.advance(seconds_per_move)
        episode.move(agent.choose_direction(episode))
    return episode.finish()


def test_score_fast_optimal_run(clock):
    metrics = _finished(clock, seconds_per_move=0.1)
    seconds = metrics.completion_time_ms / 1000
    expected = int((60 - seconds) * 10) + 500 + 300
    assert score_maze(metrics, 60) == expected


def test_score_has_minimum(clock):
    metrics = _finished(clock, seconds_per_move=5.0)
    assert metrics.reached_exit
    # Повільний прохід: бонус за час 0, але оптимальний шлях без зіткнень
    assert score_maze(metrics, 60) == 800
    assert score_maze(metrics, 60, {"EFFICIENCY_BONUS": 0, "ACCURACY_BONUS": 0}) == 100


def test_timeout_scores_zero(clock):
    episode = MazeEpisode.create(MazeConfig(11, seed=6), clock=clock)
    metrics = episode.finish(timed_out=True)
    assert score_maze(metrics) == 0


def test_session_order_and_totals(clock):
    session = AssessmentSession()
    assert session.current_game == "stroop"
    session.record(GameResult("stroop", 420, {"accuracy": 0.9}))
    session.record(GameResult("hanoi", 300))
    assert session.current_game == "pattern"
    assert session.total_score == 720
    assert session.completed["hanoi"] and not session.completed["maze"]
    assert session.get_result("stroop").metrics == {"accuracy": 0.9}
    assert session.get_result("maze") is None


def test_session_replacing_result_warns(capsys):
    session = AssessmentSession()
    session.record(GameResult("maze", 100))
    session.record(GameResult("maze", 250))
    assert session.total_score == 250
    assert "Warning" in capsys.readouterr().out


def test_session_rejects_unknown_game():
    with pytest.raises(ValueError):
        AssessmentSession().record(GameResult("chess", 10))


def test_full_session_report(clock):
    session = AssessmentSession()
    metrics = _finished(clock)
    for game_id in GAME_ORDER:
        payload = metrics if game_id == "maze" else {}
        session.record(GameResult(game_id, 100, payload))
    assert session.is_complete
    report = session.report()
    assert report["current_game"] == "complete"
    assert report["total_score"] == 600
    maze_entry = next(r for r in report["results"] if r["game_id"] == "maze")
    assert maze_entry["metrics"]["totalMoves"] == metrics.total_moves
    assert isinstance(metrics.first_half, PhasePerformance)
