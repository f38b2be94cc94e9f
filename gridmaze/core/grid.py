import logging
from array import array
from enum import IntEnum
from typing import Iterator, List, NamedTuple, Tuple

from gridmaze.config import DEFAULT_CONFIG
from gridmaze.core.errors import InvalidDimensionError, NotAdjacentError, OutOfBoundsError

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class Status(IntEnum):
    UNVISITED = 0
    START = 1
    END = 2
    VISITED = 3
    BACKTRACKED = 4


class Cell(NamedTuple):
    """Read-only snapshot of one cell, handed to renderers."""
    row: int
    column: int
    walls: Tuple[bool, bool, bool, bool]  # top, right, bottom, left
    status: Status

    @property
    def position(self) -> Position:
        return (self.row, self.column)


class Grid:
    # Wall bitmask constants
    TOP    = 0b0001
    RIGHT  = 0b0010
    BOTTOM = 0b0100
    LEFT   = 0b1000

    # All walls present by default (T|R|B|L) = 15
    ALL_WALLS = TOP | RIGHT | BOTTOM | LEFT

    # Fixed side order: top, right, bottom, left
    SIDES = (TOP, RIGHT, BOTTOM, LEFT)

    # Direction helpers
    DR = {TOP: -1, BOTTOM: 1, RIGHT: 0, LEFT: 0}
    DC = {TOP: 0, BOTTOM: 0, RIGHT: 1, LEFT: -1}
    OPPOSITE = {TOP: BOTTOM, BOTTOM: TOP, RIGHT: LEFT, LEFT: RIGHT}

    __slots__ = ('rows', 'columns', 'max_rows', 'max_columns', 'walls', 'statuses')

    def __init__(self, rows: int, columns: int,
                 max_rows: int = DEFAULT_CONFIG.max_rows,
                 max_columns: int = DEFAULT_CONFIG.max_columns):
        self.max_rows = max_rows
        self.max_columns = max_columns
        self.rows = 0
        self.columns = 0
        self.walls = array('B')
        self.statuses = array('B')
        self.resize(rows, columns)

    # ------------------------------------------------------------------
    # Sizing / resetting
    # ------------------------------------------------------------------
    def resize(self, rows: int, columns: int):
        """
        Re-creates the cell matrix. Every cell starts fully walled and
        UNVISITED, except (0, 0) = START and the bottom-right cell = END.
        """
        self.check_dimensions(rows, columns)

        self.rows = rows
        self.columns = columns
        # 1 byte per cell for walls, 1 byte per cell for status
        self.walls = array('B', [self.ALL_WALLS] * (rows * columns))
        self.statuses = array('B', [Status.UNVISITED] * (rows * columns))
        self._mark_endpoints()
        logger.debug("Grid resized to %dx%d", rows, columns)

    def check_dimensions(self, rows: int, columns: int):
        if not isinstance(rows, int) or not isinstance(columns, int):
            raise InvalidDimensionError(f"Dimensions must be integers, got {rows!r}x{columns!r}")
        if not (0 < rows <= self.max_rows):
            raise InvalidDimensionError(f"Rows must be in 1..{self.max_rows}, got {rows}")
        if not (0 < columns <= self.max_columns):
            raise InvalidDimensionError(f"Columns must be in 1..{self.max_columns}, got {columns}")

    def reset_walls(self):
        for i in range(len(self.walls)):
            self.walls[i] = self.ALL_WALLS

    def reset_statuses(self):
        for i in range(len(self.statuses)):
            self.statuses[i] = Status.UNVISITED
        self._mark_endpoints()

    def _mark_endpoints(self):
        # END is written last so a 1x1 grid's only cell is the END
        self.statuses[0] = Status.START
        self.statuses[len(self.statuses) - 1] = Status.END

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    @property
    def start(self) -> Position:
        return (0, 0)

    @property
    def end(self) -> Position:
        return (self.rows - 1, self.columns - 1)

    @property
    def total_cells(self) -> int:
        return self.rows * self.columns

    def in_bounds(self, row: int, column: int) -> bool:
        return 0 <= row < self.rows and 0 <= column < self.columns

    def get_index(self, row: int, column: int) -> int:
        if self.in_bounds(row, column):
            return row * self.columns + column
        raise OutOfBoundsError(row, column, self.rows, self.columns)

    def cell(self, row: int, column: int) -> Cell:
        idx = self.get_index(row, column)
        val = self.walls[idx]
        walls = tuple((val & side) != 0 for side in self.SIDES)
        return Cell(row, column, walls, Status(self.statuses[idx]))

    def cells(self) -> Iterator[Cell]:
        for row in range(self.rows):
            for column in range(self.columns):
                yield self.cell(row, column)

    def status(self, pos: Position) -> Status:
        return Status(self.statuses[self.get_index(*pos)])

    def set_status(self, pos: Position, status: Status):
        self.statuses[self.get_index(*pos)] = status

    def has_wall(self, pos: Position, side: int) -> bool:
        return (self.walls[self.get_index(*pos)] & side) != 0

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def side_towards(self, a: Position, b: Position) -> int:
        """Returns the side of `a` that faces `b`. Raises if not adjacent."""
        dr = b[0] - a[0]
        dc = b[1] - a[1]
        for side in self.SIDES:
            if self.DR[side] == dr and self.DC[side] == dc:
                return side
        raise NotAdjacentError(a, b)

    def open_passage(self, a: Position, b: Position):
        """
        Removes the wall on `a` facing `b` and the OPPOSITE wall on `b`.
        """
        idx_a = self.get_index(*a)
        idx_b = self.get_index(*b)
        side = self.side_towards(a, b)

        self.walls[idx_a] &= ~side
        self.walls[idx_b] &= ~self.OPPOSITE[side]

    # ------------------------------------------------------------------
    # Neighborhood
    # ------------------------------------------------------------------
    def neighbors(self, pos: Position) -> Iterator[Tuple[Position, int]]:
        """
        Yields (neighbor, side) for in-bounds neighbors in top, right,
        bottom, left order. Does NOT check walls.
        """
        row, column = pos
        for side in self.SIDES:
            nr = row + self.DR[side]
            nc = column + self.DC[side]
            if self.in_bounds(nr, nc):
                yield (nr, nc), side

    def open_neighbors(self, pos: Position) -> List[Position]:
        """Neighbors in top, right, bottom, left order not blocked by a wall."""
        val = self.walls[self.get_index(*pos)]
        return [n for n, side in self.neighbors(pos) if not (val & side)]

