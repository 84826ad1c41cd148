import pytest

from environment.grid import Grid


class FakeClock:
    """Керований монотонний годинник (секунди)."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def open_grid():
    # 5x5: весь внутрішній квадрат 3x3 прохідний
    return Grid.from_strings([
        "#####",
        "#...#",
        "#...#",
        "#...#",
        "#####",
    ])


@pytest.fixture
def corridor_grid():
    # Один коридор: (1,1) -> (2,1) -> (3,1) -> (3,2) -> (3,3)
    return Grid.from_strings([
        "#####",
        "#...#",
        "###.#",
        "###.#",
        "#####",
    ])
