from typing import List

from gridmaze.core.grid import Grid, Status

GLYPHS = {
    Status.UNVISITED: " ",
    Status.START: "S",
    Status.END: "E",
    Status.VISITED: ".",
    Status.BACKTRACKED: "x",
}


def render_ascii(grid: Grid) -> List[str]:
    """
    Renders the grid as lines of text, 4 characters per cell column:

        +---+---+
        | S |   |
        +   +   +
        | .   E |
        +---+---+
    """
    lines = []
    for row in range(grid.rows):
        top = "+"
        middle = ""
        for column in range(grid.columns):
            cell = grid.cell(row, column)
            wall_top, _, _, wall_left = cell.walls
            top += ("---" if wall_top else "   ") + "+"
            middle += ("|" if wall_left else " ") + f" {GLYPHS[cell.status]} "
        # Right border of the last column
        middle += "|" if grid.has_wall((row, grid.columns - 1), Grid.RIGHT) else " "
        lines.append(top)
        lines.append(middle)

    bottom = "+"
    for column in range(grid.columns):
        bottom += ("---" if grid.has_wall((grid.rows - 1, column), Grid.BOTTOM) else "   ") + "+"
    lines.append(bottom)
    return lines
