"""Convert frame buffer cells into an RGB image."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .framebuffer import SCREEN_HEIGHT, SCREEN_WIDTH
from .palette import MONOCHROME, RGBColor, validate_palette


@dataclass
class RenderResult:
    """Packed RGB pixels of a rendered frame."""

    width: int
    height: int
    data: bytearray

    def get_pixel(self, x: int, y: int) -> RGBColor:
        offset = (y * self.width + x) * 3
        return (self.data[offset], self.data[offset + 1], self.data[offset + 2])

    def to_surface(self):
        try:
            import pygame  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to build surfaces") from exc
        return pygame.image.frombuffer(bytes(self.data), (self.width, self.height), "RGB")


class Renderer:
    """Scale the binary cell grid up and colour it with a two-entry palette."""

    def __init__(
        self,
        palette: Sequence[RGBColor] = MONOCHROME,
        *,
        width: int = SCREEN_WIDTH,
        height: int = SCREEN_HEIGHT,
    ) -> None:
        self._background, self._foreground = validate_palette(palette)
        self._width = width
        self._height = height

    def render(self, pixels: Sequence[int], scale: int = 1) -> RenderResult:
        if scale <= 0:
            raise ValueError("scale must be positive")
        if len(pixels) != self._width * self._height:
            raise ValueError(f"expected {self._width * self._height} cells, got {len(pixels)}")

        background = bytes(self._background)
        foreground = bytes(self._foreground)
        out_width = self._width * scale
        data = bytearray()
        for y in range(self._height):
            row = bytearray()
            for x in range(self._width):
                color = foreground if pixels[x + y * self._width] else background
                row += color * scale
            data += bytes(row) * scale
        return RenderResult(out_width, self._height * scale, data)
