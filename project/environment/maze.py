import random
from typing import Optional

from .grid import CELL_OPEN, CELL_WALL, Grid, Point, start_point, validate_side_length

# Сусіди через одну клітинку (стіна між ними пробивається)
CARVE_STEPS = [(0, -2), (0, 2), (-2, 0), (2, 0)]


class MazeGenerator:
    """
    Генератор ідеального лабіринту методом Recursive Backtracking.

    Джерело випадковості передається ззовні: або seed, або готовий об'єкт
    з методом shuffle (наприклад random.Random). Однаковий seed дає
    однаковий лабіринт.
    """

    def __init__(self, side_length: int, seed: Optional[int] = None, rng=None):
        self.side_length = validate_side_length(side_length)
        if rng is None and seed is None:
            seed = random.randint(0, 2**32 - 1)
        self.seed = seed
        self._injected_rng = rng
        self.rng = rng

    def _shuffled_steps(self):
        steps = list(CARVE_STEPS)
        self.rng.shuffle(steps)
        return iter(steps)

    def _carve(self, cells: list[list[int]], start: Point):
        """
        Обхід у глибину з випадковим порядком напрямків.

        Стек замість рекурсії: кожен елемент тримає ітератор ще не
        перевірених напрямків, тож порядок обходу той самий, що й у
        рекурсивній версії, але без обмеження глибини стеку викликів.
        """
        n = self.side_length
        cells[start.y][start.x] = CELL_OPEN
        stack = [(start, self._shuffled_steps())]

        while stack:
            (x, y), steps = stack[-1]
            for dx, dy in steps:
                nx, ny = x + dx, y + dy
                if 0 < nx < n - 1 and 0 < ny < n - 1 and cells[ny][nx] == CELL_WALL:
                    # Пробиваємо стіну між поточною клітинкою та сусідом
                    cells[y + dy // 2][x + dx // 2] = CELL_OPEN
                    cells[ny][nx] = CELL_OPEN
                    stack.append((Point(nx, ny), self._shuffled_steps()))
                    break
            else:
                stack.pop()

    def generate(self) -> Grid:
        """Генерує нову сітку. Старт і вихід Grid робить прохідними сам."""
        if self._injected_rng is None:
            # Кожна генерація починається з того самого seed
            self.rng = random.Random(self.seed)
        n = self.side_length
        cells = [[CELL_WALL for _ in range(n)] for _ in range(n)]
        self._carve(cells, start_point(n))
        return Grid(cells)


def generate_maze(side_length: int, seed: Optional[int] = None) -> Grid:
    return MazeGenerator(side_length, seed=seed).generate()
