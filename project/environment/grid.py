from typing import NamedTuple, Optional

CELL_OPEN = 0
CELL_WALL = 1
CELL_START = 2
CELL_EXIT = 3

MIN_SIDE_LENGTH = 5

# Порядок напрямків фіксований: вгору, вниз, вліво, вправо
DIRECTIONS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}

_CELL_SYMBOLS = {CELL_OPEN: " ", CELL_WALL: "#", CELL_START: "S", CELL_EXIT: "E"}
_SYMBOL_CELLS = {symbol: cell for cell, symbol in _CELL_SYMBOLS.items()}


class Point(NamedTuple):
    """Цілочисельна координата клітинки (x - стовпець, y - рядок)."""
    x: int
    y: int


def validate_side_length(side_length: int) -> int:
    """Перевіряє розмір сторони лабіринту. Нічого не виправляє мовчки."""
    if isinstance(side_length, bool) or not isinstance(side_length, int):
        raise ValueError(f"Side length must be an integer, got {side_length!r}.")
    if side_length < MIN_SIDE_LENGTH or side_length % 2 == 0:
        raise ValueError(
            f"Side length must be an odd integer >= {MIN_SIDE_LENGTH}, got {side_length}."
        )
    return side_length


def start_point(side_length: int) -> Point:
    return Point(1, 1)


def exit_point(side_length: int) -> Point:
    return Point(side_length - 2, side_length - 2)


def step(point: Point, direction: str) -> Point:
    """Повертає сусідню клітинку в заданому напрямку (без перевірки меж)."""
    if direction not in DIRECTIONS:
        raise ValueError(f"Unknown direction {direction!r}. Expected one of {list(DIRECTIONS)}.")
    dx, dy = DIRECTIONS[direction]
    return Point(point[0] + dx, point[1] + dy)


def direction_between(a: Point, b: Point) -> Optional[str]:
    """Назва напрямку з a в сусідню клітинку b, або None якщо вони не сусіди."""
    delta = (b[0] - a[0], b[1] - a[1])
    for name, offset in DIRECTIONS.items():
        if offset == delta:
            return name
    return None


class Grid:
    """
    Квадратна матриця клітинок лабіринту.

    Клітинки зберігаються по рядках: cells[y][x]. Старт завжди (1, 1),
    вихід завжди (N-2, N-2); конструктор примусово робить їх прохідними.
    Після створення сітка не змінюється.
    """

    def __init__(self, cells):
        rows = [list(row) for row in cells]
        side_length = validate_side_length(len(rows))
        for row in rows:
            if len(row) != side_length:
                raise ValueError("Grid must be square.")
            for cell in row:
                if cell not in _CELL_SYMBOLS:
                    raise ValueError(f"Unknown cell kind {cell!r}.")

        self.side_length = side_length
        self.start_pos = start_point(side_length)
        self.exit_pos = exit_point(side_length)
        rows[self.start_pos.y][self.start_pos.x] = CELL_START
        rows[self.exit_pos.y][self.exit_pos.x] = CELL_EXIT
        self._cells = tuple(tuple(row) for row in rows)

    @classmethod
    def from_strings(cls, lines: list[str]) -> "Grid":
        """Будує сітку з текстового вигляду ('#' - стіна, ' ' або '.' - прохід)."""
        cells = []
        for line in lines:
            row = []
            for symbol in line:
                if symbol == ".":
                    symbol = " "
                if symbol not in _SYMBOL_CELLS:
                    raise ValueError(f"Unknown grid symbol {symbol!r}.")
                row.append(_SYMBOL_CELLS[symbol])
            cells.append(row)
        return cls(cells)

    def in_bounds(self, point: Point) -> bool:
        x, y = point
        return 0 <= x < self.side_length and 0 <= y < self.side_length

    def cell_type(self, point: Point) -> int:
        """Тип клітинки; за межами сітки все вважається стіною."""
        if self.in_bounds(point):
            return self._cells[point[1]][point[0]]
        return CELL_WALL

    def is_walkable(self, point: Point) -> bool:
        return self.cell_type(point) != CELL_WALL

    def open_cells(self) -> list[Point]:
        return [
            Point(x, y)
            for y in range(self.side_length)
            for x in range(self.side_length)
            if self._cells[y][x] != CELL_WALL
        ]

    @property
    def rows(self) -> list[list[int]]:
        return [list(row) for row in self._cells]

    def to_strings(self) -> list[str]:
        return ["".join(_CELL_SYMBOLS[cell] for cell in row) for row in self._cells]

    def display(self):
        """Виводить лабіринт у консоль."""
        for line in self.to_strings():
            print(line.replace("#", "##").replace(" ", "  ").replace("S", " S").replace("E", " E"))

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return self._cells == other._cells

    def __hash__(self):
        return hash(self._cells)

    def __repr__(self):
        return f"Grid(side_length={self.side_length})"
