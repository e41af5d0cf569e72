"""
Render sink contract and a numpy rasterizer implementing it

Coordinates are canvas space: origin top-left, y grows downward. Shapes are
addressed by their centre.
"""

from __future__ import annotations

from typing import Protocol, Sequence, Tuple

import numpy as np

Color = Tuple[int, int, int]
Point = Tuple[float, float]


def hex_to_rgb(color: str) -> Color:
    """'#00d4ff' -> (0, 212, 255)"""
    color = color.lstrip("#")
    assert len(color) == 6, f"expected #rrggbb, got {color!r}"
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


class Canvas(Protocol):
    width: int
    height: int

    def clear(self) -> None: ...

    def fill_rect(self, cx: float, cy: float, w: float, h: float,
                  color: str, alpha: float = 1.0) -> None: ...

    def fill_circle(self, cx: float, cy: float, r: float,
                    color: str, alpha: float = 1.0) -> None: ...

    def fill_polygon(self, points: Sequence[Point], color: str,
                     alpha: float = 1.0) -> None: ...


class ArrayCanvas:
    """Software canvas backed by an (H, W, 3) uint8 array, used for rgb_array frames"""

    def __init__(self, width: int, height: int, background: str = "#121216"):
        self.width = width
        self.height = height
        self.background = np.array(hex_to_rgb(background), dtype=np.float32)
        self._buf = np.empty((height, width, 3), dtype=np.float32)
        self.clear()

    def clear(self) -> None:
        self._buf[:] = self.background

    def frame(self) -> np.ndarray:
        return np.clip(self._buf, 0, 255).astype(np.uint8)

    def _blend(self, region, mask, color: str, alpha: float):
        rgb = np.array(hex_to_rgb(color), dtype=np.float32)
        alpha = float(np.clip(alpha, 0.0, 1.0))
        region[mask] = region[mask] * (1.0 - alpha) + rgb * alpha

    def _bounds(self, x0: float, y0: float, x1: float, y1: float):
        ix0 = max(0, int(np.floor(x0)))
        iy0 = max(0, int(np.floor(y0)))
        ix1 = min(self.width, int(np.ceil(x1)))
        iy1 = min(self.height, int(np.ceil(y1)))
        return ix0, iy0, ix1, iy1

    def fill_rect(self, cx, cy, w, h, color, alpha=1.0):
        ix0, iy0, ix1, iy1 = self._bounds(cx - w / 2, cy - h / 2, cx + w / 2, cy + h / 2)
        if ix0 >= ix1 or iy0 >= iy1:
            return
        region = self._buf[iy0:iy1, ix0:ix1]
        mask = np.ones(region.shape[:2], dtype=bool)
        self._blend(region, mask, color, alpha)

    def fill_circle(self, cx, cy, r, color, alpha=1.0):
        ix0, iy0, ix1, iy1 = self._bounds(cx - r, cy - r, cx + r, cy + r)
        if ix0 >= ix1 or iy0 >= iy1:
            return
        ys, xs = np.mgrid[iy0:iy1, ix0:ix1]
        mask = (xs + 0.5 - cx) ** 2 + (ys + 0.5 - cy) ** 2 <= r * r
        self._blend(self._buf[iy0:iy1, ix0:ix1], mask, color, alpha)

    def fill_polygon(self, points, color, alpha=1.0):
        """Fill a convex polygon"""
        pts = np.asarray(points, dtype=np.float32)
        ix0, iy0, ix1, iy1 = self._bounds(pts[:, 0].min(), pts[:, 1].min(),
                                          pts[:, 0].max(), pts[:, 1].max())
        if ix0 >= ix1 or iy0 >= iy1:
            return
        ys, xs = np.mgrid[iy0:iy1, ix0:ix1]
        px = xs + 0.5
        py = ys + 0.5
        inside_pos = np.ones(px.shape, dtype=bool)
        inside_neg = np.ones(px.shape, dtype=bool)
        for (ax, ay), (bx, by) in zip(pts, np.roll(pts, -1, axis=0)):
            cross = (bx - ax) * (py - ay) - (by - ay) * (px - ax)
            inside_pos &= cross >= 0
            inside_neg &= cross <= 0
        self._blend(self._buf[iy0:iy1, ix0:ix1], inside_pos | inside_neg, color, alpha)
