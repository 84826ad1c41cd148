from dataclasses import dataclass
from typing import Optional

from .grid import DIRECTIONS, Grid, Point, step


@dataclass
class TraversalEvent:
    """Одна спроба ходу: напрямок, результат і момент часу (мс)."""
    direction: str
    collided: bool
    backtracked: bool
    timestamp_ms: float
    position: Point  # позиція після спроби

    @property
    def accepted(self) -> bool:
        return not self.collided


@dataclass
class MoveOutcome:
    accepted: bool
    collided: bool
    backtracked: bool
    new_position: Point

    def to_dict(self) -> dict:
        return {
            "accepted": self.accepted,
            "collided": self.collided,
            "backtracked": self.backtracked,
            "newPosition": {"x": self.new_position.x, "y": self.new_position.y},
        }


class TraversalRecorder:
    """
    Журнал руху гравця по лабіринту.

    Кожна спроба ходу класифікується як зіткнення зі стіною, повернення
    у вже відвідану клітинку або рух у нову клітинку. Лічильник напрямку
    збільшується за будь-якого результату.
    """

    def __init__(self, grid: Grid, start_time_ms: float, halfway_threshold: Optional[int] = None):
        n = grid.side_length
        self.grid = grid
        self.position = grid.start_pos
        self.actual_path: list[Point] = [grid.start_pos]
        self.visited: set[Point] = {grid.start_pos}
        self.heatmap: list[list[int]] = [[0] * n for _ in range(n)]
        self.events: list[TraversalEvent] = []
        self.movement_patterns = {direction: 0 for direction in DIRECTIONS}
        self.movement_history: list[str] = []
        self.wall_collisions = 0
        self.backtrack_count = 0
        self.start_time_ms = start_time_ms
        self.first_move_time_ms: Optional[float] = None
        self.halfway_threshold = halfway_threshold if halfway_threshold is not None else n * n // 2
        self.halfway_mark: Optional[dict] = None

    @property
    def total_moves(self) -> int:
        """Кількість прийнятих ходів (без зіткнень)."""
        return len(self.actual_path) - 1

    @property
    def planning_time_ms(self) -> float:
        if self.first_move_time_ms is None:
            return 0.0
        return self.first_move_time_ms - self.start_time_ms

    def record_move(self, direction: str, timestamp_ms: float) -> MoveOutcome:
        target = step(self.position, direction)  # ValueError для невідомого напрямку
        if self.first_move_time_ms is None:
            self.first_move_time_ms = timestamp_ms
        self.movement_patterns[direction] += 1

        if not self.grid.is_walkable(target):
            self.wall_collisions += 1
            self.events.append(TraversalEvent(direction, True, False, timestamp_ms, self.position))
            return MoveOutcome(accepted=False, collided=True, backtracked=False, new_position=self.position)

        backtracked = target in self.visited
        if backtracked:
            self.backtrack_count += 1
        else:
            self.visited.add(target)

        self.heatmap[target.y][target.x] += 1
        self.actual_path.append(target)
        self.movement_history.append(direction)
        self.position = target
        self.events.append(TraversalEvent(direction, False, backtracked, timestamp_ms, target))

        if self.halfway_mark is None and self.total_moves >= self.halfway_threshold:
            self.halfway_mark = {
                "moves": self.total_moves,
                "collisions": self.wall_collisions,
                "elapsed_ms": timestamp_ms - self.start_time_ms,
            }

        return MoveOutcome(accepted=True, collided=False, backtracked=backtracked, new_position=target)
