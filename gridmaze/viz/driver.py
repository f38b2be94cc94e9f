import logging
from typing import Optional

from gridmaze.core.errors import PreconditionNotMetError
from gridmaze.session import MazeSession

logger = logging.getLogger(__name__)

PHASE_GENERATE = "generate"
PHASE_SOLVE = "solve"


class AnimationDriver:
    """
    Advances a MazeSession `speed` steps per external tick. Owns no clock:
    whoever calls `tick()` (a render loop, a test) decides the cadence.
    """

    def __init__(self, session: MazeSession, speed: Optional[int] = None,
                 show_generation: bool = True, show_solver: bool = True):
        self.session = session
        self.speed = session.config.clamp_speed(
            speed if speed is not None else session.config.default_speed)
        self.phase: Optional[str] = None
        self.paused = False
        self.message: Optional[str] = None
        # False = run the phase instantly instead of animating it
        self.show_generation = show_generation
        self.show_solver = show_solver

    @property
    def active(self) -> bool:
        return self.phase is not None and not self.paused

    def set_speed(self, speed: int):
        self.speed = self.session.config.clamp_speed(speed)

    def toggle_show_generation(self):
        self.show_generation = not self.show_generation

    def toggle_show_solver(self):
        self.show_solver = not self.show_solver

    def start_generation(self, origin=None):
        self.session.generate(animate=self.show_generation, origin=origin)
        self.phase = PHASE_GENERATE if self.show_generation else None
        self.paused = False
        self.message = None

    def start_solving(self) -> bool:
        try:
            started = self.session.solve(animate=self.show_solver)
        except PreconditionNotMetError:
            # Generation still in progress: leave it paused, the caller may resume
            self.paused = True
            self.message = None
            return False
        if not started:
            return False
        self.phase = PHASE_SOLVE if self.show_solver else None
        self.paused = False
        self.message = None
        return True

    def stop(self):
        self.paused = True

    def resume(self):
        self.paused = False
        # A refused solve no longer applies once generation carries on
        self.session.last_error = None

    def resize(self, rows: int, columns: int):
        if self.phase is not None:
            self.message = "Maze dimension adjusted. Animation stopped."
        self.session.resize(rows, columns)
        self.phase = None
        self.paused = False

    def adjust_rows(self, delta: int):
        config = self.session.config
        rows = max(config.min_rows, min(config.max_rows, self.session.grid.rows + delta))
        if rows != self.session.grid.rows:
            self.resize(rows, self.session.grid.columns)

    def adjust_columns(self, delta: int):
        config = self.session.config
        columns = max(config.min_columns, min(config.max_columns, self.session.grid.columns + delta))
        if columns != self.session.grid.columns:
            self.resize(self.session.grid.rows, columns)

    def tick(self) -> bool:
        """Runs one batch of steps. Returns True while work remains."""
        if not self.active:
            return self.phase is not None

        if self.phase == PHASE_GENERATE:
            self.session.last_error = None
            gen = self.session.generator
            for _ in range(self.speed):
                gen.step()
                if gen.is_done:
                    logger.info("Generation finished")
                    self.phase = None
                    break

        elif self.phase == PHASE_SOLVE:
            solver = self.session.solver
            for _ in range(self.speed):
                solver.step()
                if solver.is_done:
                    self.session.finish_solve()
                    self.phase = None
                    break

        return self.phase is not None

    def status_line(self) -> str:
        return self.message or self.session.status_line()
