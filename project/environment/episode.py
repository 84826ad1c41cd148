import time
from dataclasses import dataclass
from typing import Callable, Optional

from analytics.metrics import MazeMetrics, aggregate_metrics

from .grid import Grid, Point, validate_side_length
from .maze import MazeGenerator
from .pathfinding import find_shortest_path
from .recorder import MoveOutcome, TraversalRecorder

STATUS_PLAYING = "playing"
STATUS_REACHED_EXIT = "reached_exit"
STATUS_FINISHED = "finished"

DEFAULT_TIME_LIMIT_SECONDS = 60


@dataclass
class MazeConfig:
    """Параметри одного епізоду: розмір сторони та (необов'язковий) seed."""
    side_length: int = 21
    seed: Optional[int] = None

    def __post_init__(self):
        validate_side_length(self.side_length)

    @classmethod
    def from_dict(cls, config: dict) -> "MazeConfig":
        return cls(side_length=config.get("MAZE_SIZE", 21), seed=config.get("MAZE_SEED"))


class MazeEpisode:
    """
    Один прохід одного лабіринту: від генерації до виходу або тайм-ауту.

    Епізод сам володіє сіткою, оптимальним шляхом і журналом руху.
    Ходи подаються по одному; після finish() епізод більше не приймає ходів.
    Годинник передається ззовні (секунди, монотонні), за замовчуванням
    time.monotonic.
    """

    def __init__(
        self,
        grid: Grid,
        clock: Optional[Callable[[], float]] = None,
        time_limit_seconds: float = DEFAULT_TIME_LIMIT_SECONDS,
        halfway_threshold: Optional[int] = None,
        seed: Optional[int] = None,
    ):
        self.grid = grid
        self.seed = seed
        self.clock = clock if clock is not None else time.monotonic
        self.time_limit_seconds = time_limit_seconds
        self.optimal_path: tuple[Point, ...] = tuple(find_shortest_path(grid, grid.start_pos, grid.exit_pos))
        if not self.optimal_path:
            print(f"Warning: exit {grid.exit_pos} is unreachable from start {grid.start_pos}.")
        self.start_time_ms = self._now_ms()
        self.recorder = TraversalRecorder(grid, self.start_time_ms, halfway_threshold)
        self.status = STATUS_PLAYING
        self._metrics: Optional[MazeMetrics] = None

    @classmethod
    def create(
        cls,
        config: MazeConfig,
        rng=None,
        clock: Optional[Callable[[], float]] = None,
        time_limit_seconds: float = DEFAULT_TIME_LIMIT_SECONDS,
        halfway_threshold: Optional[int] = None,
    ) -> "MazeEpisode":
        """Генерує новий лабіринт за конфігурацією і відкриває на ньому епізод."""
        generator = MazeGenerator(config.side_length, seed=config.seed, rng=rng)
        grid = generator.generate()
        return cls(
            grid,
            clock=clock,
            time_limit_seconds=time_limit_seconds,
            halfway_threshold=halfway_threshold,
            seed=generator.seed,
        )

    def _now_ms(self) -> float:
        return self.clock() * 1000.0

    @property
    def position(self) -> Point:
        return self.recorder.position

    @property
    def reached_exit(self) -> bool:
        return self.recorder.position == self.grid.exit_pos

    @property
    def is_active(self) -> bool:
        return self.status == STATUS_PLAYING

    def elapsed_ms(self) -> float:
        return self._now_ms() - self.start_time_ms

    def time_remaining(self) -> float:
        """Залишок часу в секундах (не менше нуля)."""
        return max(0.0, self.time_limit_seconds - self.elapsed_ms() / 1000.0)

    def is_timed_out(self) -> bool:
        return self.elapsed_ms() >= self.time_limit_seconds * 1000.0

    def move(self, direction: str) -> MoveOutcome:
        """Обробляє одну спробу ходу. Досягнення виходу зупиняє прийом ходів."""
        if not self.is_active:
            raise RuntimeError(f"Episode is not accepting moves (status: {self.status}).")
        outcome = self.recorder.record_move(direction, self._now_ms())
        if outcome.accepted and self.reached_exit:
            self.status = STATUS_REACHED_EXIT
        return outcome

    def finish(self, timed_out: bool = False) -> MazeMetrics:
        """
        Завершує епізод і повертає MazeMetrics.

        Тайм-аут - не помилка: метрики будуються з тим фактичним шляхом,
        який є на цей момент. Повторний виклик повертає той самий запис.
        """
        if self._metrics is not None:
            return self._metrics

        reached_exit = self.reached_exit
        if reached_exit and self.recorder.events:
            end_time_ms = self.recorder.events[-1].timestamp_ms
        else:
            end_time_ms = self._now_ms()

        self._metrics = aggregate_metrics(
            self.optimal_path,
            self.recorder,
            end_time_ms,
            reached_exit=reached_exit,
            timed_out=timed_out and not reached_exit,
        )
        self.status = STATUS_FINISHED
        return self._metrics
