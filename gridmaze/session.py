import logging
from typing import Optional

from gridmaze.algo.base import State
from gridmaze.algo.dfs import RandomizedDFSGenerator
from gridmaze.algo.reconcile import PathReconciler
from gridmaze.algo.solvers import DFSSolver
from gridmaze.config import DEFAULT_CONFIG, EngineConfig
from gridmaze.core.errors import PreconditionNotMetError
from gridmaze.core.grid import Grid

logger = logging.getLogger(__name__)


class MazeSession:
    """
    Owns a single grid and the generator, solver and reconciler that work
    on it. This is the narrow surface an input layer (CLI, window) drives.
    """

    def __init__(self, config: EngineConfig = None, seed: int = None,
                 rows: Optional[int] = None, columns: Optional[int] = None):
        self.config = config or DEFAULT_CONFIG
        self.grid = Grid(
            rows if rows is not None else self.config.default_rows,
            columns if columns is not None else self.config.default_columns,
            max_rows=self.config.max_rows,
            max_columns=self.config.max_columns,
        )
        self.generator = RandomizedDFSGenerator(self.grid, seed=seed)
        self.solver = DFSSolver(self.grid, self.generator)
        self.reconciler = PathReconciler(self.grid, self.solver)
        self.last_error: Optional[str] = None

    def resize(self, rows: int, columns: int):
        # Validate first so a bad request leaves the current maze intact
        self.grid.check_dimensions(rows, columns)
        self.generator.reset()
        self.solver.reset()
        self.grid.resize(rows, columns)
        self.last_error = None
        logger.info(f"Maze resized to {rows}x{columns}")

    def generate(self, animate: bool = False, origin=None):
        self.solver.reset()
        self.last_error = None
        self.generator.start(origin=origin)
        if not animate:
            self.generator.run_to_completion()
            logger.info(f"Generated {self.grid.rows}x{self.grid.columns} maze "
                        f"({self.generator.passages_opened} passages)")

    @property
    def solved(self) -> bool:
        return self.solver.is_done and self.reconciler.applied_run == self.solver.run_id

    def solve(self, animate: bool = False) -> bool:
        """
        Starts the solver. Returns False when the current maze has already
        been solved. Raises PreconditionNotMetError while generation is not
        complete.
        """
        if self.solved:
            logger.info("Maze already solved; ignoring solve request")
            return False
        try:
            self.solver.start()
        except PreconditionNotMetError as e:
            self.last_error = str(e)
            raise

        self.last_error = None
        if not animate:
            self.solver.run_to_completion()
            self.finish_solve()
        return True

    def finish_solve(self) -> int:
        promoted = self.reconciler.run()
        if self.solver.failed:
            logger.warning("No path from START to END; maze is inconsistent")
        else:
            logger.info(f"Maze solved. Visited {self.solver.visited_count} cells, "
                        f"path length {len(self.solver.path())}, {promoted} cells relabelled")
        return promoted

    def status_line(self) -> str:
        if self.last_error:
            return f"Error: {self.last_error}."
        if self.solver.state is not State.IDLE:
            if self.solved:
                return f"Maze solved. Percent visited: {self.solver.progress():.1f}%"
            return f"Solving maze... Percent visited: {self.solver.progress():.1f}%"
        if self.generator.state is not State.IDLE:
            return f"Generating maze... Percent complete: {self.generator.progress():.1f}%"
        return f"Ready: {self.grid.rows}x{self.grid.columns}"
