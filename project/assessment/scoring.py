import math
from typing import Optional

from analytics.metrics import MazeMetrics

DEFAULT_WEIGHTS = {
    "TIME_BONUS_PER_SECOND": 10,
    "EFFICIENCY_BONUS": 500,
    "ACCURACY_BONUS": 300,
    "MIN_MAZE_SCORE": 100,
}


def score_maze(metrics: MazeMetrics, time_limit_seconds: float = 60, config: Optional[dict] = None) -> int:
    """
    Рахує бали за лабіринт лише з MazeMetrics.

    Бонус за залишок часу + бонус за ефективність шляху + бонус за
    точність (мало зіткнень), але не менше мінімуму. Епізод без виходу
    (тайм-аут) дає 0 балів.
    """
    weights = dict(DEFAULT_WEIGHTS)
    if config:
        weights.update({key: config[key] for key in DEFAULT_WEIGHTS if key in config})

    if not metrics.reached_exit:
        return 0

    seconds = metrics.completion_time_ms / 1000.0
    time_bonus = max(0, math.floor((time_limit_seconds - seconds) * weights["TIME_BONUS_PER_SECOND"]))
    efficiency_bonus = math.floor(metrics.path_efficiency * weights["EFFICIENCY_BONUS"])
    accuracy = 1 - metrics.wall_collisions / metrics.total_moves if metrics.total_moves > 0 else 0.0
    accuracy_bonus = math.floor(accuracy * weights["ACCURACY_BONUS"])
    return max(weights["MIN_MAZE_SCORE"], time_bonus + efficiency_bonus + accuracy_bonus)
