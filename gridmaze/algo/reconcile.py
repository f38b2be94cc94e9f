import logging

from gridmaze.algo.solvers import DFSSolver
from gridmaze.core.errors import PreconditionNotMetError
from gridmaze.core.grid import Grid, Status

logger = logging.getLogger(__name__)

# Neighbor statuses that count as "on the path" for the degree check.
# UNVISITED cells were never touched by the solver; END is deliberately absent.
ON_PATH = (Status.VISITED, Status.START, Status.UNVISITED)


class PathReconciler:
    """
    Relabels BACKTRACKED cells that actually lie on the solution path.

    The solver marks a branch point BACKTRACKED when it pops it to leave a
    dead end, even if the path later continues from it. Every interior path
    cell has exactly two path neighbors, so a VISITED cell with fewer than
    two is missing one, and its BACKTRACKED open neighbors are promoted.

    This is a single local pass, not a path reconstruction: it walks the
    solver's visit record most-recent-first, exactly once, and does not
    iterate to a fixed point. Chains of consecutive mislabelled cells can
    therefore stay BACKTRACKED.
    """

    def __init__(self, grid: Grid, solver: DFSSolver):
        self.grid = grid
        self.solver = solver
        self.applied_run = None
        self.promoted = 0

    def run(self) -> int:
        """Returns the number of cells promoted to VISITED."""
        if not self.solver.is_done:
            raise PreconditionNotMetError("Solver has not finished")
        if self.applied_run == self.solver.run_id:
            logger.debug("Reconciliation already applied to solver run %d", self.applied_run)
            return 0

        grid = self.grid
        start = grid.start
        promoted = 0

        for pos in reversed(self.solver.visited_order):
            if pos == start or grid.status(pos) is not Status.VISITED:
                continue

            neighbors = grid.open_neighbors(pos)
            on_path_degree = sum(1 for n in neighbors if grid.status(n) in ON_PATH)

            if on_path_degree < 2:
                for n in neighbors:
                    if n != start and grid.status(n) is Status.BACKTRACKED:
                        grid.set_status(n, Status.VISITED)
                        promoted += 1

        self.applied_run = self.solver.run_id
        self.promoted = promoted
        logger.debug("Reconciliation promoted %d cells", promoted)
        return promoted
