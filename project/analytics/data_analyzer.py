import json
import os
from typing import Dict, List

import pandas as pd


class MetricsDataAnalyzer:
    """Клас для аналізу збережених метрик лабіринту з JSON файлів."""

    def __init__(self, json_filepath: str):
        """Завантажує дані з JSON файлу."""
        with open(json_filepath, 'r', encoding='utf-8') as f:
            self.data = json.load(f)

        self.metadata = self.data.get("metadata", {})
        self.episodes = self.data.get("episodes", [])
        self.session = self.data.get("session", {})

    def get_basic_info(self) -> Dict:
        """Повертає базову інформацію про збережені дані."""
        return {
            "save_date": self.metadata.get("save_date"),
            "side_length": self.metadata.get("side_length"),
            "maze_seed": self.metadata.get("maze_seed"),
            "total_episodes": len(self.episodes),
            "total_score": self.session.get("total_score"),
        }

    def get_episode_summary(self) -> pd.DataFrame:
        """Повертає основні показники кожного епізоду як DataFrame."""
        rows = []
        for index, episode in enumerate(self.episodes):
            rows.append({
                "episode": index,
                "completion_time_ms": episode.get("completionTimeMs"),
                "total_moves": episode.get("totalMoves"),
                "wall_collisions": episode.get("wallCollisions"),
                "backtrack_count": episode.get("backtrackCount"),
                "path_length": episode.get("pathLength"),
                "optimal_path_length": episode.get("optimalPathLength"),
                "path_efficiency": episode.get("pathEfficiency"),
                "path_deviation": episode.get("pathDeviation"),
                "reached_exit": episode.get("reachedExit", False),
                "timed_out": episode.get("timedOut", False),
            })
        return pd.DataFrame(rows)

    def get_movement_patterns(self) -> pd.DataFrame:
        """Кількість спроб руху в кожному напрямку по епізодах."""
        rows = []
        for index, episode in enumerate(self.episodes):
            patterns = episode.get("movementPatterns", {})
            rows.append({"episode": index, **{d: patterns.get(d, 0) for d in ("up", "down", "left", "right")}})
        return pd.DataFrame(rows)

    def get_phase_comparison(self) -> pd.DataFrame:
        """Порівняння першої та другої половини кожного епізоду."""
        rows = []
        for index, episode in enumerate(self.episodes):
            performance = episode.get("performanceOverTime", {})
            for phase_key, phase_name in (("firstHalf", "first_half"), ("secondHalf", "second_half")):
                phase = performance.get(phase_key, {})
                rows.append({
                    "episode": index,
                    "phase": phase_name,
                    "speed": phase.get("speed", 0.0),
                    "accuracy": phase.get("accuracy", 0.0),
                    "moves": phase.get("moves", 0),
                    "collisions": phase.get("collisions", 0),
                })
        return pd.DataFrame(rows)

    def get_heatmap(self, episode_index: int = 0) -> pd.DataFrame:
        """Теплова карта епізоду: рядки - y, стовпці - x."""
        heatmap = self.episodes[episode_index].get("heatmap", [])
        return pd.DataFrame(heatmap)

    def get_hot_cells(self, episode_index: int = 0, top: int = 5) -> List[Dict]:
        """Найчастіше відвідані клітинки епізоду."""
        df = self.get_heatmap(episode_index)
        cells = [
            {"x": x, "y": y, "visits": int(visits)}
            for y, row in enumerate(df.to_numpy().tolist())
            for x, visits in enumerate(row)
            if visits > 0
        ]
        # sorted стабільний: при рівних відвідуваннях порядок рядок за рядком
        cells.sort(key=lambda cell: cell["visits"], reverse=True)
        return cells[:top]

    def export_to_csv(self, output_dir: str):
        """Експортує дані у CSV файли для подальшого аналізу."""
        os.makedirs(output_dir, exist_ok=True)

        self.get_episode_summary().to_csv(os.path.join(output_dir, "episode_summary.csv"), index=False)
        self.get_movement_patterns().to_csv(os.path.join(output_dir, "movement_patterns.csv"), index=False)
        self.get_phase_comparison().to_csv(os.path.join(output_dir, "phase_comparison.csv"), index=False)

        print(f"Data exported to {output_dir}")
