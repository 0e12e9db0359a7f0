"""
RGBA color value with saturating 8-bit channels.
"""
from typing import NamedTuple

OPAQUE = 255


def clamp(value, low, high):
    """Saturate value into [low, high]."""
    if value < low:
        return low
    if value > high:
        return high
    return value


def clamp_channel(value):
    """Clamp to the 8-bit channel range. Floats are truncated toward zero first."""
    return clamp(int(value), 0, 255)


class Color(NamedTuple):
    r: int
    g: int
    b: int
    a: int = OPAQUE

    @classmethod
    def clamped(cls, r, g, b, a=OPAQUE):
        """Build a color, saturating every channel to [0, 255]."""
        return cls(clamp_channel(r), clamp_channel(g), clamp_channel(b), clamp_channel(a))

    @property
    def rgb(self):
        return self.r, self.g, self.b


BLACK = Color(0, 0, 0, OPAQUE)
