import logging
import random
from typing import List, Optional

from gridmaze.algo.base import Traversal
from gridmaze.core.grid import Grid, Position

logger = logging.getLogger(__name__)


class RandomizedDFSGenerator(Traversal):
    """
    Iterative randomized depth-first search that carves a perfect maze
    (a spanning tree over the grid) one cell per step.
    """

    def __init__(self, grid: Grid, seed: int = None):
        super().__init__(grid)
        self.seed = seed
        self.rng = random.Random(seed)
        self.passages_opened = 0

    def reset(self):
        super().reset()
        self.passages_opened = 0

    def start(self, origin: Optional[Position] = None):
        if origin is not None:
            self.grid.get_index(*origin)  # bounds check before touching state
        else:
            origin = (self.rng.randrange(self.grid.rows), self.rng.randrange(self.grid.columns))

        self.grid.reset_walls()
        self.grid.reset_statuses()
        self.passages_opened = 0
        self._begin(origin)
        logger.debug("Generation started at %s on %dx%d grid", origin, self.grid.rows, self.grid.columns)

    def unvisited_neighbors(self, pos: Position) -> List[Position]:
        return [n for n, _ in self.grid.neighbors(pos) if not self.is_visited(n)]

    def step(self):
        self._require_started()
        if self.current is None:
            return

        cur = self.current
        self.backtrack_stack.append(cur)
        self._mark_visited(cur)
        self.visited_count += 1

        neighbors = self.unvisited_neighbors(cur)

        # Dead end: pop until a cell with an unvisited neighbor turns up.
        # Cells only re-examined here are not re-pushed or re-counted.
        while not neighbors:
            if not self.backtrack_stack:
                self._finish()
                logger.debug("Generation done: %d passages opened", self.passages_opened)
                return
            cur = self.backtrack_stack.pop()
            neighbors = self.unvisited_neighbors(cur)

        nxt = self.rng.choice(neighbors)
        self.grid.open_passage(cur, nxt)
        self.passages_opened += 1
        self.current = nxt
