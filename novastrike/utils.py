"""
Utility functions for game mechanics and collision detection
"""

from __future__ import annotations

from typing import Optional
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def circle_collide(x1, y1, r1, x2, y2, r2) -> bool:
    """Check if two circles overlap (strictly: touching circles do not collide)"""
    dx = x1 - x2
    dy = y1 - y2
    rr = r1 + r2
    return (dx * dx + dy * dy) < (rr * rr)


def rect_collide(x1, y1, w1, h1, x2, y2, w2, h2) -> bool:
    """Check if two axis-aligned rectangles overlap (x, y is the top-left corner)"""
    return (x1 < x2 + w2 and
            x1 + w1 > x2 and
            y1 < y2 + h2 and
            y1 + h1 > y2)


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create the generator every random roll in a session goes through"""
    return np.random.default_rng(seed)

