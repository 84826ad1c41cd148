from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from environment.grid import Point
from environment.recorder import TraversalEvent, TraversalRecorder


@dataclass(frozen=True)
class PhasePerformance:
    """Показники однієї половини епізоду."""
    speed: float  # середній час на хід, мс
    accuracy: float  # 1 - зіткнення / ходи
    moves: int = 0
    collisions: int = 0
    duration_ms: float = 0.0


@dataclass(frozen=True)
class MazeMetrics:
    """Підсумковий запис епізоду. Створюється один раз, при завершенні."""
    completion_time_ms: float
    total_moves: int
    wall_collisions: int
    backtrack_count: int
    path_length: int
    optimal_path_length: int
    path_efficiency: float
    path_deviation: int
    average_time_per_move: float
    planning_time_ms: float
    movement_patterns: dict
    movement_history: list
    heatmap: list
    first_half: PhasePerformance
    second_half: PhasePerformance
    optimal_path: list
    actual_path: list
    reached_exit: bool = False
    timed_out: bool = False
    halfway_mark: Optional[dict] = None

    @property
    def performance_over_time(self) -> dict:
        return {"first_half": self.first_half, "second_half": self.second_half}


def path_efficiency(optimal_path: Sequence[Point], actual_path: Sequence[Point]) -> float:
    """optimal / actual. Порожній фактичний шлях дає 0.0. Значення не обрізається."""
    if not actual_path:
        return 0.0
    return len(optimal_path) / len(actual_path)


def path_deviation(path_a: Iterable[Point], path_b: Iterable[Point]) -> int:
    """Розмір симетричної різниці множин клітинок двох шляхів."""
    cells_a = {tuple(p) for p in path_a}
    cells_b = {tuple(p) for p in path_b}
    return len(cells_a ^ cells_b)


def phase_performance(moves: int, collisions: int, duration_ms: float) -> PhasePerformance:
    """Швидкість і точність для однієї фази. Без ходів обидва показники дорівнюють 0."""
    if moves <= 0:
        return PhasePerformance(0.0, 0.0, 0, collisions, duration_ms)
    return PhasePerformance(
        speed=duration_ms / moves,
        accuracy=1 - collisions / moves,
        moves=moves,
        collisions=collisions,
        duration_ms=duration_ms,
    )


def split_phases(
    events: Sequence[TraversalEvent], start_time_ms: float, end_time_ms: float
) -> tuple[PhasePerformance, PhasePerformance]:
    """
    Ділить епізод навпіл за кількістю прийнятих ходів (не за часом).

    Перша половина закінчується на ходу номер total // 2; зіткнення, що
    сталися до нього, належать першій половині, решта - другій.
    Час першої половини рахується від старту до цього ходу.
    """
    total_moves = sum(1 for event in events if event.accepted)
    midpoint = total_moves // 2

    boundary = 0
    boundary_time = start_time_ms
    if midpoint > 0:
        accepted_seen = 0
        for index, event in enumerate(events):
            if event.accepted:
                accepted_seen += 1
                if accepted_seen == midpoint:
                    boundary = index + 1
                    boundary_time = event.timestamp_ms
                    break

    first_collisions = sum(1 for event in events[:boundary] if event.collided)
    second_collisions = sum(1 for event in events[boundary:] if event.collided)

    first = phase_performance(midpoint, first_collisions, boundary_time - start_time_ms)
    second = phase_performance(total_moves - midpoint, second_collisions, max(0.0, end_time_ms - boundary_time))
    return first, second


def aggregate_metrics(
    optimal_path: Sequence[Point],
    recorder: TraversalRecorder,
    end_time_ms: float,
    reached_exit: bool = False,
    timed_out: bool = False,
) -> MazeMetrics:
    """Збирає MazeMetrics з оптимального шляху та журналу руху."""
    actual_path = list(recorder.actual_path)
    completion_time = max(0.0, end_time_ms - recorder.start_time_ms)
    total_moves = recorder.total_moves
    first_half, second_half = split_phases(recorder.events, recorder.start_time_ms, end_time_ms)

    return MazeMetrics(
        completion_time_ms=completion_time,
        total_moves=total_moves,
        wall_collisions=recorder.wall_collisions,
        backtrack_count=recorder.backtrack_count,
        path_length=len(actual_path),
        optimal_path_length=len(optimal_path),
        path_efficiency=path_efficiency(optimal_path, actual_path),
        path_deviation=path_deviation(optimal_path, actual_path),
        average_time_per_move=completion_time / total_moves if total_moves > 0 else 0.0,
        planning_time_ms=recorder.planning_time_ms,
        movement_patterns=dict(recorder.movement_patterns),
        movement_history=list(recorder.movement_history),
        heatmap=[list(row) for row in recorder.heatmap],
        first_half=first_half,
        second_half=second_half,
        optimal_path=list(optimal_path),
        actual_path=actual_path,
        reached_exit=reached_exit,
        timed_out=timed_out,
        halfway_mark=dict(recorder.halfway_mark) if recorder.halfway_mark else None,
    )
