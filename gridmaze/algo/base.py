import logging
from abc import ABC, abstractmethod
from array import array
from enum import Enum
from typing import List, Optional

from gridmaze.core.errors import PreconditionNotMetError
from gridmaze.core.grid import Grid, Position

logger = logging.getLogger(__name__)


class State(Enum):
    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"


class Traversal(ABC):
    """
    Resumable depth-first traversal over a Grid.

    Subclasses implement `start()` and `step()`; each `step()` runs to a
    well-defined stopping point and returns, so a caller can animate the
    traversal one cell at a time.
    """

    def __init__(self, grid: Grid):
        self.grid = grid
        self.state = State.IDLE
        self.current: Optional[Position] = None
        self.backtrack_stack: List[Position] = []
        self.visited = array('B')
        self.visited_count = 0
        self.total_cells = 0

    def reset(self):
        """Discards any in-flight run (used when the grid is resized)."""
        self.state = State.IDLE
        self.current = None
        self.backtrack_stack = []
        self.visited = array('B')
        self.visited_count = 0
        self.total_cells = 0

    def _begin(self, origin: Position):
        self.backtrack_stack = []
        # 1 byte per cell: visited marks
        self.visited = array('B', [0] * self.grid.total_cells)
        self.visited_count = 0
        self.total_cells = self.grid.total_cells
        self.current = origin
        self.state = State.RUNNING

    def _finish(self):
        self.current = None
        self.state = State.DONE

    def _mark_visited(self, pos: Position):
        self.visited[pos[0] * self.grid.columns + pos[1]] = 1

    def is_visited(self, pos: Position) -> bool:
        return self.visited[pos[0] * self.grid.columns + pos[1]] != 0

    @property
    def is_done(self) -> bool:
        return self.state is State.DONE

    def _require_started(self):
        if self.state is State.IDLE:
            raise PreconditionNotMetError(f"{type(self).__name__} has not been started")

    @abstractmethod
    def start(self, *args, **kwargs):
        pass

    @abstractmethod
    def step(self):
        pass

    def run_to_completion(self) -> int:
        """Helper to step until done. Returns the number of steps taken."""
        self._require_started()
        steps = 0
        while not self.is_done:
            self.step()
            steps += 1
        return steps

    def progress(self) -> float:
        if self.total_cells == 0:
            return 0.0
        return (self.visited_count / self.total_cells) * 100
