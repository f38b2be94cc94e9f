from collections import deque
from typing import Dict

from gridmaze.core.grid import Grid


def popcount_walls(val: int) -> int:
    c = 0
    if val & Grid.TOP: c += 1
    if val & Grid.RIGHT: c += 1
    if val & Grid.BOTTOM: c += 1
    if val & Grid.LEFT: c += 1
    return c


def count_passages(grid: Grid) -> int:
    """
    Number of opened passages. Only the right and bottom side of each cell
    are inspected so that every passage is counted once.
    """
    passages = 0
    for row in range(grid.rows):
        for column in range(grid.columns):
            val = grid.walls[grid.get_index(row, column)]
            if column < grid.columns - 1 and not (val & Grid.RIGHT):
                passages += 1
            if row < grid.rows - 1 and not (val & Grid.BOTTOM):
                passages += 1
    return passages


def reachable_cells(grid: Grid, origin=(0, 0)) -> int:
    seen = {origin}
    queue = deque([origin])
    while queue:
        pos = queue.popleft()
        for n in grid.open_neighbors(pos):
            if n not in seen:
                seen.add(n)
                queue.append(n)
    return len(seen)


def is_spanning_tree(grid: Grid) -> bool:
    # Connected with exactly V - 1 edges <=> tree
    total = grid.total_cells
    return count_passages(grid) == total - 1 and reachable_cells(grid) == total


def calculate_stats(grid: Grid) -> Dict[str, float]:
    dead_ends = 0
    corridors = 0
    intersections = 0

    # Border walls count too, so a corner cell with one exit is a dead end
    for val in grid.walls:
        walls = popcount_walls(val)
        if walls == 3: dead_ends += 1
        elif walls == 2: corridors += 1
        elif walls <= 1: intersections += 1

    total = grid.total_cells
    return {
        "passages": count_passages(grid),
        "dead_ends": dead_ends,
        "corridors": corridors,
        "intersections": intersections,
        "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0,
    }
