# surface.py
from typing import Optional, Tuple

import pygame # type: ignore

Color = Tuple[int, int, int]


class PygameContext:
    """Drawing context backed by a pygame Surface."""

    def __init__(self, surface: pygame.Surface):
        self.surface = surface

    def fill_rect(self, x, y, w, h, color: Color) -> None:
        pygame.draw.rect(self.surface, color, pygame.Rect(int(x), int(y), int(w), int(h)))

    def stroke_line(self, x1, y1, x2, y2, color: Color, width: int = 1) -> None:
        pygame.draw.line(self.surface, color, (int(x1), int(y1)), (int(x2), int(y2)), width)

    def fill_circle(self, cx, cy, radius, color: Color) -> None:
        pygame.draw.circle(self.surface, color, (int(cx), int(cy)), max(int(radius), 1))


class PygameCanvas:
    """Canvas over a pygame Surface (usually the display surface)."""

    def __init__(self, surface: Optional[pygame.Surface]):
        self.surface = surface
        if surface is not None:
            self.width, self.height = surface.get_size()
        else:
            self.width = self.height = 0

    def get_context(self) -> Optional[PygameContext]:
        if self.surface is None:
            return None
        return PygameContext(self.surface)


class HeadlessContext:
    """Counts draw calls and draws nothing."""

    def __init__(self):
        self.calls = 0

    def fill_rect(self, x, y, w, h, color: Color) -> None:
        self.calls += 1

    def stroke_line(self, x1, y1, x2, y2, color: Color, width: int = 1) -> None:
        self.calls += 1

    def fill_circle(self, cx, cy, radius, color: Color) -> None:
        self.calls += 1


class HeadlessCanvas:
    """Canvas for running the engine without a window (bots, batch runs)."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.context = HeadlessContext()

    def get_context(self) -> HeadlessContext:
        return self.context
