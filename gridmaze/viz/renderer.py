import pygame

from gridmaze.core.grid import Grid, Status
from gridmaze.viz.driver import AnimationDriver


class Renderer:
    COLOR_BG = (192, 192, 192)
    COLOR_WALL = (255, 255, 255)
    COLOR_TEXT = (20, 20, 20)

    # Status -> fill colour
    STATUS_COLORS = {
        Status.UNVISITED: (0, 0, 0),
        Status.START: (0, 255, 0),
        Status.END: (255, 0, 0),
        Status.VISITED: (0, 0, 255),
        Status.BACKTRACKED: (192, 192, 192),
    }

    HUD_HEIGHT = 90

    def __init__(self, driver: AnimationDriver, record=False, record_prefix="gridmaze"):
        self.driver = driver
        self.session = driver.session
        self.config = self.session.config
        self.cell_size = self.config.cell_size

        # Window sized for the largest allowed maze so resizing never reflows it
        self.screen_width = self.config.max_columns * self.cell_size + 20
        self.screen_height = self.config.max_rows * self.cell_size + 20 + self.HUD_HEIGHT

        from gridmaze.viz.recorder import VideoRecorder
        self.recorder = VideoRecorder(active=record, fps=self.config.fps, prefix=record_prefix)

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None

    @property
    def grid(self) -> Grid:
        return self.session.grid

    def init_window(self):
        pygame.init()
        pygame.display.set_caption("Grid Maze")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_g:
                    self.driver.start_generation()
                elif event.key == pygame.K_s:
                    self.driver.start_solving()
                elif event.key == pygame.K_SPACE:
                    if self.driver.paused:
                        self.driver.resume()
                    else:
                        self.driver.stop()
                elif event.key == pygame.K_UP:
                    self.driver.set_speed(self.driver.speed + 1)
                elif event.key == pygame.K_DOWN:
                    self.driver.set_speed(self.driver.speed - 1)
                elif event.key == pygame.K_PAGEUP:
                    self.driver.adjust_rows(self.config.dimension_step)
                elif event.key == pygame.K_PAGEDOWN:
                    self.driver.adjust_rows(-self.config.dimension_step)
                elif event.key == pygame.K_RIGHT:
                    self.driver.adjust_columns(self.config.dimension_step)
                elif event.key == pygame.K_LEFT:
                    self.driver.adjust_columns(-self.config.dimension_step)
                elif event.key == pygame.K_1:
                    self.driver.toggle_show_generation()
                elif event.key == pygame.K_2:
                    self.driver.toggle_show_solver()

    def draw_grid(self):
        self.surface.fill(self.COLOR_BG)
        size = self.cell_size
        stroke = 3
        ox, oy = 10, 10

        # 1. Cell fills (Pass 1 - Backgrounds)
        for cell in self.grid.cells():
            px = ox + cell.column * size
            py = oy + cell.row * size
            color = self.STATUS_COLORS[cell.status]
            pygame.draw.rect(self.surface, color, (px, py, size, size))

        # 2. Walls (Pass 2 - Foreground)
        for cell in self.grid.cells():
            px = ox + cell.column * size
            py = oy + cell.row * size
            top, right, bottom, left = cell.walls
            if top:
                pygame.draw.line(self.surface, self.COLOR_WALL, (px, py), (px + size, py), stroke)
            if right:
                pygame.draw.line(self.surface, self.COLOR_WALL, (px + size, py), (px + size, py + size), stroke)
            if bottom:
                pygame.draw.line(self.surface, self.COLOR_WALL, (px, py + size), (px + size, py + size), stroke)
            if left:
                pygame.draw.line(self.surface, self.COLOR_WALL, (px, py), (px, py + size), stroke)

    def draw_hud(self):
        rec_status = "REC" if self.recorder.active else ""
        paused = " (stopped)" if self.driver.paused else ""
        info = [
            self.driver.status_line(),
            f"Size: {self.grid.rows}x{self.grid.columns}  Speed: {self.driver.speed}{paused}  {rec_status}",
            f"Show generation [1]: {'on' if self.driver.show_generation else 'off'}  "
            f"Show solver [2]: {'on' if self.driver.show_solver else 'off'}",
            "G gen | S solve | Space stop | Up/Dn speed | PgUp/PgDn rows | Lt/Rt cols | Esc",
        ]

        base_y = self.screen_height - self.HUD_HEIGHT + 5
        for i, text in enumerate(info):
            lbl = self.font.render(text, True, self.COLOR_TEXT)
            self.surface.blit(lbl, (10, base_y + i * 20))

    def run_loop(self):
        try:
            while self.running:
                self.handle_input()
                self.driver.tick()

                self.draw_grid()
                self.draw_hud()
                pygame.display.flip()

                if self.recorder.active:
                    self.recorder.capture_frame(self.surface)

                self.clock.tick(self.config.fps)
        finally:
            self.recorder.stop()
            pygame.quit()
