from __future__ import annotations

from typing import List, Optional, Tuple
import math

import numpy as np
import pygame

from .grid import Grid
from .rover import RoverState


Color = Tuple[int, int, int]

# Dark theme palette
THEME = {
    "bg": (18, 22, 32),
    "grid": (28, 34, 48),
    "obstacle_fill": (45, 52, 70),
    "obstacle_edge": (65, 75, 98),
    "rover_fill": (100, 220, 255),
    "rover_outline": (40, 140, 200),
    "rover_arrow": (140, 240, 255),
    "trail_start": (60, 160, 200),
    "trail_end": (100, 220, 255),
    "hud_bg": (28, 34, 48),
    "hud_border": (55, 65, 88),
    "hud_text": (200, 220, 255),
}


class PygameRenderer:
    """Top-down view of the grid, obstacles, rover and its trail.

    Coordinates:
    - Cell (0, 0) is drawn at the bottom-left of the screen.
    - Y axis is flipped so that grid +y is up while screen y increases downward.

    A rover that leaves the grid is clipped by the window and reported in the HUD.
    """

    def __init__(
        self,
        grid: Grid,
        cell_size: int = 64,
        show_trail: bool = True,
        trail_max_length: int = 500,
        title: str = "Mars Rover",
    ) -> None:
        pygame.init()
        pygame.display.set_caption(title)
        self.grid = grid
        self.cell_size = cell_size
        self.window_width = grid.width * cell_size
        self.window_height = grid.height * cell_size
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        self.clock = pygame.time.Clock()

        self.show_trail = show_trail
        self.trail_max_length = trail_max_length
        self.trail: List[Tuple[int, int]] = []
        self._occupancy = grid.occupancy()

    # ------------------------------------------------------------------
    # Coordinate transforms
    # ------------------------------------------------------------------
    def cell_to_screen(self, x: float, y: float) -> Tuple[int, int]:
        """Screen coordinates of the centre of cell (x, y)."""
        sx = int((x + 0.5) * self.cell_size)
        sy = int(self.window_height - (y + 0.5) * self.cell_size)
        return sx, sy

    def _cell_rect(self, x: int, y: int) -> pygame.Rect:
        left = x * self.cell_size
        top = self.window_height - (y + 1) * self.cell_size
        return pygame.Rect(left, top, self.cell_size, self.cell_size)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _draw_grid(self) -> None:
        color = THEME["grid"]
        for col in range(self.grid.width + 1):
            x = col * self.cell_size
            pygame.draw.line(self.screen, color, (x, 0), (x, self.window_height), 1)
        for row in range(self.grid.height + 1):
            y = row * self.cell_size
            pygame.draw.line(self.screen, color, (0, y), (self.window_width, y), 1)

    def _draw_obstacles(self) -> None:
        ys, xs = np.nonzero(self._occupancy)
        for x, y in zip(xs.tolist(), ys.tolist()):
            rect = self._cell_rect(x, y).inflate(-4, -4)
            pygame.draw.rect(self.screen, THEME["obstacle_fill"], rect)
            pygame.draw.rect(self.screen, THEME["obstacle_edge"], rect, 2)

    def draw(self, rover_state: RoverState, step: Optional[int] = None) -> None:
        """Render one frame."""
        self.screen.fill(THEME["bg"])
        self._draw_grid()
        self._draw_obstacles()

        if self.show_trail:
            pos = rover_state.position
            if not self.trail or self.trail[-1] != pos:
                self.trail.append(pos)
            if len(self.trail) > self.trail_max_length:
                self.trail = self.trail[-self.trail_max_length :]
            if len(self.trail) >= 2:
                pts = [self.cell_to_screen(p[0], p[1]) for p in self.trail]
                n = len(pts) - 1
                start, end = THEME["trail_start"], THEME["trail_end"]
                for i in range(n):
                    t = (i + 1) / max(n, 1)
                    color = tuple(int(start[k] + t * (end[k] - start[k])) for k in range(3))
                    pygame.draw.line(self.screen, color, pts[i], pts[i + 1], 2)

        self._draw_rover(rover_state)
        self._draw_hud(rover_state, step)
        pygame.display.flip()

    def _draw_rover(self, state: RoverState) -> None:
        center = self.cell_to_screen(state.x, state.y)
        radius_px = max(2, int(self.cell_size * 0.3))
        pygame.draw.circle(self.screen, THEME["rover_fill"], center, radius_px, 0)
        pygame.draw.circle(self.screen, THEME["rover_outline"], center, radius_px, 2)

        # Heading arrowhead
        yaw = state.orientation.yaw
        tip_len = self.cell_size * 0.45
        wing_len = self.cell_size * 0.2
        tip = (center[0] + math.cos(yaw) * tip_len, center[1] - math.sin(yaw) * tip_len)
        wings = []
        for offset in (math.pi * 0.85, -math.pi * 0.85):
            angle = yaw + offset
            wings.append((tip[0] + math.cos(angle) * wing_len, tip[1] - math.sin(angle) * wing_len))
        tri = [tip, wings[0], wings[1]]
        pygame.draw.polygon(self.screen, THEME["rover_arrow"], tri)
        pygame.draw.polygon(self.screen, THEME["rover_outline"], tri, 1)

    def _draw_hud(self, state: RoverState, step: Optional[int]) -> None:
        pad = 6
        font = pygame.font.SysFont("monospace", 13)
        text = f" ({state.x}, {state.y}) {state.orientation.display_name} "
        if step is not None:
            text += f" step={step} "
        if not self.grid.is_within_bounds(state.x, state.y):
            text += " [off grid] "
        surf = font.render(text, True, THEME["hud_text"])
        r = surf.get_rect(topleft=(pad, pad))
        panel = r.inflate(pad, pad)
        pygame.draw.rect(self.screen, THEME["hud_bg"], panel)
        pygame.draw.rect(self.screen, THEME["hud_border"], panel, 1)
        self.screen.blit(surf, (panel.x + 3, panel.y + 3))

    def tick(self, target_fps: int) -> float:
        """Cap frame rate and return achieved FPS."""
        fps = self.clock.get_fps()
        self.clock.tick(target_fps)
        return fps

    def close(self) -> None:
        pygame.quit()
