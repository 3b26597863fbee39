"""
RGBA colour helper shared by the composer and the host.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Color:
    """RGBA color with 0-1 range components."""
    r: float = 1.0
    g: float = 1.0
    b: float = 1.0
    a: float = 1.0

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)

    def scaled(self, factor: float) -> Color:
        """Brighten/darken RGB (emissive boost), alpha untouched, clamped to 1."""
        return Color(
            min(1.0, self.r * factor),
            min(1.0, self.g * factor),
            min(1.0, self.b * factor),
            self.a,
        )

    @staticmethod
    def from_hex(hex_str: str) -> Color:
        """Parse hex color like '#7E3ACE' or '7e3acecc'."""
        hex_str = hex_str.lstrip('#')
        if len(hex_str) not in (6, 8):
            raise ValueError(f"Invalid hex color: {hex_str}")
        r = int(hex_str[0:2], 16) / 255.0
        g = int(hex_str[2:4], 16) / 255.0
        b = int(hex_str[4:6], 16) / 255.0
        a = int(hex_str[6:8], 16) / 255.0 if len(hex_str) == 8 else 1.0
        return Color(r, g, b, a)
