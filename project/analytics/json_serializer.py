import json
from datetime import datetime
from typing import List, Optional

from environment.grid import Point

from .metrics import MazeMetrics, PhasePerformance


class MetricsJSONEncoder(json.JSONEncoder):
    """JSON encoder для об'єктів з методом to_dict."""
    def default(self, obj):
        if hasattr(obj, 'to_dict'):
            return obj.to_dict()
        return super().default(obj)


class MetricsJSONSerializer:
    """Серіалізація метрик лабіринту у формат, який отримують скоринг та звіт."""

    VERSION = "1.0"

    @staticmethod
    def serialize_point(point) -> dict:
        return {"x": int(point[0]), "y": int(point[1])}

    @staticmethod
    def deserialize_point(data: dict) -> Point:
        return Point(int(data["x"]), int(data["y"]))

    @staticmethod
    def serialize_phase(phase: PhasePerformance) -> dict:
        return {
            "speed": phase.speed,
            "accuracy": phase.accuracy,
            "moves": phase.moves,
            "collisions": phase.collisions,
            "durationMs": phase.duration_ms,
        }

    @staticmethod
    def deserialize_phase(data: dict) -> PhasePerformance:
        return PhasePerformance(
            speed=data.get("speed", 0.0),
            accuracy=data.get("accuracy", 0.0),
            moves=data.get("moves", 0),
            collisions=data.get("collisions", 0),
            duration_ms=data.get("durationMs", 0.0),
        )

    @staticmethod
    def serialize_metrics(metrics: MazeMetrics) -> dict:
        """Серіалізує MazeMetrics у словник з ключами camelCase."""
        halfway = None
        if metrics.halfway_mark:
            halfway = {
                "moves": metrics.halfway_mark["moves"],
                "collisions": metrics.halfway_mark["collisions"],
                "elapsedMs": metrics.halfway_mark["elapsed_ms"],
            }
        return {
            "completionTimeMs": metrics.completion_time_ms,
            "totalMoves": metrics.total_moves,
            "wallCollisions": metrics.wall_collisions,
            "backtrackCount": metrics.backtrack_count,
            "pathLength": metrics.path_length,
            "optimalPathLength": metrics.optimal_path_length,
            "pathEfficiency": metrics.path_efficiency,
            "pathDeviation": metrics.path_deviation,
            "averageTimePerMove": metrics.average_time_per_move,
            "planningTimeMs": metrics.planning_time_ms,
            "movementPatterns": dict(metrics.movement_patterns),
            "movementHistory": list(metrics.movement_history),
            "heatmap": [list(row) for row in metrics.heatmap],
            "performanceOverTime": {
                "firstHalf": MetricsJSONSerializer.serialize_phase(metrics.first_half),
                "secondHalf": MetricsJSONSerializer.serialize_phase(metrics.second_half),
            },
            "optimalPath": [MetricsJSONSerializer.serialize_point(p) for p in metrics.optimal_path],
            "actualPath": [MetricsJSONSerializer.serialize_point(p) for p in metrics.actual_path],
            "reachedExit": metrics.reached_exit,
            "timedOut": metrics.timed_out,
            "halfwayMark": halfway,
        }

    @staticmethod
    def deserialize_metrics(data: dict) -> MazeMetrics:
        """Відновлює MazeMetrics зі словника."""
        performance = data.get("performanceOverTime", {})
        halfway = data.get("halfwayMark")
        if halfway:
            halfway = {
                "moves": halfway["moves"],
                "collisions": halfway["collisions"],
                "elapsed_ms": halfway["elapsedMs"],
            }
        return MazeMetrics(
            completion_time_ms=data["completionTimeMs"],
            total_moves=data["totalMoves"],
            wall_collisions=data["wallCollisions"],
            backtrack_count=data["backtrackCount"],
            path_length=data["pathLength"],
            optimal_path_length=data["optimalPathLength"],
            path_efficiency=data["pathEfficiency"],
            path_deviation=data["pathDeviation"],
            average_time_per_move=data.get("averageTimePerMove", 0.0),
            planning_time_ms=data.get("planningTimeMs", 0.0),
            movement_patterns=dict(data.get("movementPatterns", {})),
            movement_history=list(data.get("movementHistory", [])),
            heatmap=[list(row) for row in data.get("heatmap", [])],
            first_half=MetricsJSONSerializer.deserialize_phase(performance.get("firstHalf", {})),
            second_half=MetricsJSONSerializer.deserialize_phase(performance.get("secondHalf", {})),
            optimal_path=[MetricsJSONSerializer.deserialize_point(p) for p in data.get("optimalPath", [])],
            actual_path=[MetricsJSONSerializer.deserialize_point(p) for p in data.get("actualPath", [])],
            reached_exit=data.get("reachedExit", False),
            timed_out=data.get("timedOut", False),
            halfway_mark=halfway,
        )

    @staticmethod
    def save_episodes(filepath: str, episodes: List[MazeMetrics], side_length: int,
                      maze_seed: Optional[int] = None, session_report: Optional[dict] = None):
        """Зберігає метрики епізодів (і, за наявності, звіт сесії) в JSON файл."""
        data = {
            "version": MetricsJSONSerializer.VERSION,
            "metadata": {
                "save_date": datetime.now().isoformat(),
                "side_length": side_length,
                "maze_seed": maze_seed,
                "total_episodes": len(episodes),
            },
            "episodes": [MetricsJSONSerializer.serialize_metrics(m) for m in episodes],
        }
        if session_report is not None:
            data["session"] = session_report

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False, cls=MetricsJSONEncoder)

    @staticmethod
    def load_episodes(filepath: str) -> List[MazeMetrics]:
        """Завантажує метрики епізодів з JSON файлу."""
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if data.get("version") != MetricsJSONSerializer.VERSION:
            print(f"Warning: JSON version mismatch. File: {data.get('version')}, Expected: {MetricsJSONSerializer.VERSION}")

        return [MetricsJSONSerializer.deserialize_metrics(entry) for entry in data.get("episodes", [])]
