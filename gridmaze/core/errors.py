class MazeError(Exception):
    """Base class for every error raised by the maze engine."""


class OutOfBoundsError(MazeError, IndexError):
    def __init__(self, row: int, column: int, rows: int, columns: int):
        super().__init__(f"Coordinate ({row}, {column}) out of bounds for {rows}x{columns} grid")
        self.row = row
        self.column = column


class NotAdjacentError(MazeError, ValueError):
    def __init__(self, a, b):
        super().__init__(f"Cells {a} and {b} are not adjacent")
        self.a = a
        self.b = b


class InvalidDimensionError(MazeError, ValueError):
    pass


class PreconditionNotMetError(MazeError, RuntimeError):
    pass
