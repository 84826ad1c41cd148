from collections import deque

from .grid import DIRECTIONS, Grid, Point


def _neighbors(grid: Grid, point: Point):
    # Порядок DIRECTIONS (вгору, вниз, вліво, вправо) визначає вибір серед рівних шляхів
    for dx, dy in DIRECTIONS.values():
        neighbor = Point(point.x + dx, point.y + dy)
        if grid.is_walkable(neighbor):
            yield neighbor


def find_shortest_path(grid: Grid, start: Point, end: Point) -> list[Point]:
    """
    Пошук у ширину найкоротшого шляху між двома клітинками.

    Args:
        grid (Grid): Сітка лабіринту.
        start (Point): Початкова клітинка.
        end (Point): Кінцева клітинка.

    Returns:
        list[Point]: Шлях від start до end включно, або порожній список,
                     якщо end недосяжна (чи одна з точок є стіною).
    """
    start, end = Point(*start), Point(*end)
    if not grid.is_walkable(start) or not grid.is_walkable(end):
        return []

    came_from: dict[Point, Point | None] = {start: None}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        if current == end:
            path = []
            node = end
            while node is not None:
                path.append(node)
                node = came_from[node]
            path.reverse()
            return path
        for neighbor in _neighbors(grid, current):
            if neighbor not in came_from:
                came_from[neighbor] = current
                queue.append(neighbor)
    return []


def reachable_cells(grid: Grid, start: Point) -> set[Point]:
    """Всі прохідні клітинки, досяжні зі start."""
    start = Point(*start)
    if not grid.is_walkable(start):
        return set()
    seen = {start}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor in _neighbors(grid, current):
            if neighbor not in seen:
                seen.add(neighbor)
                queue.append(neighbor)
    return seen
