from dataclasses import dataclass, field
from typing import Any, Optional

from analytics.json_serializer import MetricsJSONSerializer
from analytics.metrics import MazeMetrics

GAME_ORDER = ["stroop", "hanoi", "pattern", "maze", "memory", "word"]
SESSION_COMPLETE = "complete"


@dataclass
class GameResult:
    """Результат однієї міні-гри: спільний контракт для всіх ігор серії."""
    game_id: str
    score: int
    metrics: Any = None

    def to_dict(self) -> dict:
        metrics = self.metrics
        if isinstance(metrics, MazeMetrics):
            metrics = MetricsJSONSerializer.serialize_metrics(metrics)
        return {"game_id": self.game_id, "score": self.score, "metrics": metrics}


@dataclass
class AssessmentSession:
    """
    Серія когнітивних міні-ігор у фіксованому порядку.

    Зберігає результат кожної гри, позначки завершення та загальний бал.
    """
    game_order: list = field(default_factory=lambda: list(GAME_ORDER))
    results: dict = field(default_factory=dict)

    def record(self, result: GameResult):
        if result.game_id not in self.game_order:
            raise ValueError(f"Unknown game {result.game_id!r}. Expected one of {self.game_order}.")
        if result.game_id in self.results:
            print(f"Warning: game {result.game_id!r} already recorded, replacing previous result.")
        self.results[result.game_id] = result

    @property
    def total_score(self) -> int:
        return sum(result.score for result in self.results.values())

    @property
    def completed(self) -> dict:
        return {game_id: game_id in self.results for game_id in self.game_order}

    @property
    def current_game(self) -> str:
        """Перша ще не зіграна гра, або 'complete'."""
        for game_id in self.game_order:
            if game_id not in self.results:
                return game_id
        return SESSION_COMPLETE

    @property
    def is_complete(self) -> bool:
        return self.current_game == SESSION_COMPLETE

    def get_result(self, game_id: str) -> Optional[GameResult]:
        return self.results.get(game_id)

    def report(self) -> dict:
        return {
            "total_score": self.total_score,
            "current_game": self.current_game,
            "scores": {game_id: (self.results[game_id].score if game_id in self.results else 0)
                       for game_id in self.game_order},
            "completed": self.completed,
            "results": [self.results[game_id].to_dict() for game_id in self.game_order if game_id in self.results],
        }
