import random
from typing import Optional, Sequence

from analytics.metrics import MazeMetrics

from .episode import MazeEpisode
from .grid import DIRECTIONS, Point, direction_between


class RandomWalkAgent:
    """Агент, що на кожному кроці обирає випадковий напрямок (стіни не бачить)."""

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)
        self._directions = list(DIRECTIONS)

    def choose_direction(self, episode: MazeEpisode) -> Optional[str]:
        return self.rng.choice(self._directions)


class PathFollowingAgent:
    """
    Агент, що відтворює заданий шлях як послідовність напрямків.

    Коли шлях вичерпано, повертає None.
    """

    def __init__(self, path: Sequence[Point]):
        self.directions = []
        for a, b in zip(path, path[1:]):
            direction = direction_between(a, b)
            if direction is None:
                raise ValueError(f"Path points {a} and {b} are not adjacent.")
            self.directions.append(direction)
        self._index = 0

    def choose_direction(self, episode: MazeEpisode) -> Optional[str]:
        if self._index >= len(self.directions):
            return None
        direction = self.directions[self._index]
        self._index += 1
        return direction


def run_episode(episode: MazeEpisode, agent, max_attempts: int = 500) -> MazeMetrics:
    """
    Проганяє епізод агентом до виходу, вичерпання спроб або тайм-ауту.

    Якщо вихід не досягнуто, епізод завершується як тайм-аут.
    """
    for _ in range(max_attempts):
        if not episode.is_active or episode.is_timed_out():
            break
        direction = agent.choose_direction(episode)
        if direction is None:
            break
        episode.move(direction)
    return episode.finish(timed_out=not episode.reached_exit)
