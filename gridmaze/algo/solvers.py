import logging
from typing import List, Optional

from gridmaze.algo.base import State, Traversal
from gridmaze.core.errors import PreconditionNotMetError
from gridmaze.core.grid import Grid, Position, Status

logger = logging.getLogger(__name__)


class DFSSolver(Traversal):
    """
    Deterministic depth-first search from START to END through open
    passages. Neighbors are tried in fixed top, right, bottom, left order,
    so the same maze always produces the same visit order.

    Cell statuses are rewritten as the search goes: VISITED when a cell is
    entered, BACKTRACKED when it is popped off the backtrack stack. The
    START and END cells keep their status.
    """

    def __init__(self, grid: Grid, generator: Traversal):
        super().__init__(grid)
        self.generator = generator
        self.visited_order: List[Position] = []
        self.solved = False
        self.failed = False
        self.run_id = 0

    def reset(self):
        super().reset()
        self.visited_order = []
        self.solved = False
        self.failed = False

    def start(self):
        if not self.generator.is_done:
            raise PreconditionNotMetError("Maze not fully generated")

        self.grid.reset_statuses()
        self.visited_order = []
        self.solved = False
        self.failed = False
        self.run_id += 1
        self._begin(self.grid.start)
        logger.debug("Solver run %d started at %s", self.run_id, self.grid.start)

    def open_unvisited_neighbors(self, pos: Position) -> List[Position]:
        return [n for n in self.grid.open_neighbors(pos) if not self.is_visited(n)]

    def _reached_end(self) -> bool:
        return self.current is not None and self.grid.status(self.current) is Status.END

    def _succeed(self):
        # current stays on the END cell
        self.solved = True
        self.state = State.DONE
        logger.debug("Solver reached END after visiting %d cells", self.visited_count)

    def step(self):
        self._require_started()
        if self.current is None or self.is_done:
            return
        if self._reached_end():
            self._succeed()
            return

        cur = self.current
        start = self.grid.start

        self.visited_order.append(cur)
        self.backtrack_stack.append(cur)
        self._mark_visited(cur)
        self.visited_count += 1

        if cur != start:
            self.grid.set_status(cur, Status.VISITED)

        neighbors = self.open_unvisited_neighbors(cur)

        while not neighbors:
            if not self.backtrack_stack:
                # A generated maze is connected, so this means the grid is inconsistent
                self.failed = True
                self._finish()
                logger.warning("Solver exhausted the backtrack stack without reaching END")
                return
            cur = self.backtrack_stack.pop()
            if cur != start:
                self.grid.set_status(cur, Status.BACKTRACKED)
            neighbors = self.open_unvisited_neighbors(cur)

        self.current = neighbors[0]
        if self._reached_end():
            self._succeed()

    def path(self) -> List[Position]:
        """Cells currently labelled as part of the route, START first and END last."""
        route = [pos for pos in self.visited_order
                 if self.grid.status(pos) in (Status.START, Status.VISITED)]
        if self.solved:
            route.append(self.grid.end)
        return route

    @property
    def outcome(self) -> Optional[str]:
        if not self.is_done:
            return None
        return "solved" if self.solved else "no_solution"
