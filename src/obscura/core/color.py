"""Linear RGB colors.

Colors are kept as unclamped floats while light is accumulated and are only
quantized to 8 bits per channel when a pixel is written. Packed pixels use
the 24-bit layout R << 16 | G << 8 | B.

Example:
    >>> from obscura.core.color import Color
    >>> sky = Color.from_hex("#80B3FF")
    >>> Color(1.0, 0.5, 0.0).mix(Color(0.5, 0.5, 0.5))
    Color(r=0.5, g=0.25, b=0.0)
    >>> hex(Color(1.0, 0.0, 0.0).to_packed())
    '0xff0000'
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from dataclasses import dataclass

HEX_COLOR = re.compile(r"^#([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")


def quantize_channel(value: float) -> int:
    """Truncate a linear channel value to an 8-bit integer in [0, 255]."""
    if math.isnan(value):
        return 0
    return min(max(int(value * 255.0), 0), 255)


@dataclass(frozen=True, slots=True)
class Color:
    """A linear RGB color. Channels may exceed 1.0 before quantization.

    Attributes:
        r: Red channel.
        g: Green channel.
        b: Blue channel.
    """

    r: float
    g: float
    b: float

    @classmethod
    def from_hex(cls, text: str) -> Color:
        """Parse a ``#RRGGBB`` string into a color with channels in [0, 1].

        Raises:
            ValueError: If the text is not a six-digit hex color.
        """
        match = HEX_COLOR.match(text.strip())
        if match is None:
            raise ValueError(f"Unknown color format: {text!r}. Expected #RRGGBB.")
        r, g, b = (int(group, 16) / 255.0 for group in match.groups())
        return cls(r, g, b)

    def __add__(self, other: Color) -> Color:
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __mul__(self, scalar: float) -> Color:
        return self.scale(scalar)

    def __rmul__(self, scalar: float) -> Color:
        return self.scale(scalar)

    def __iter__(self):
        yield self.r
        yield self.g
        yield self.b

    def scale(self, scalar: float) -> Color:
        return Color(self.r * scalar, self.g * scalar, self.b * scalar)

    def reduce(self, divisor: float) -> Color:
        """Divide every channel, e.g. to average accumulated samples."""
        return Color(self.r / divisor, self.g / divisor, self.b / divisor)

    def mix(self, other: Color) -> Color:
        """Multiply channel by channel (attenuation of light by a surface)."""
        return Color(self.r * other.r, self.g * other.g, self.b * other.b)

    def linear_blend(self, other: Color, t: float) -> Color:
        """Interpolate from this color (t = 0) to other (t = 1)."""
        return Color(
            self.r + (other.r - self.r) * t,
            self.g + (other.g - self.g) * t,
            self.b + (other.b - self.b) * t,
        )

    def apply_transform(self, transform: Callable[[float], float]) -> Color:
        """Apply a function to each channel independently."""
        return Color(transform(self.r), transform(self.g), transform(self.b))

    def quantize(self) -> tuple[int, int, int]:
        """Quantize to an 8-bit (r, g, b) triple."""
        return (
            quantize_channel(self.r),
            quantize_channel(self.g),
            quantize_channel(self.b),
        )

    def to_packed(self) -> int:
        """Quantize and pack into a 24-bit R << 16 | G << 8 | B integer."""
        r, g, b = self.quantize()
        return (r << 16) | (g << 8) | b

    def to_hex(self) -> str:
        r, g, b = self.quantize()
        return f"#{r:02X}{g:02X}{b:02X}"


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
DEFAULT_SKY = Color(0.5, 0.7, 1.0)


__all__ = ["BLACK", "Color", "DEFAULT_SKY", "WHITE", "quantize_channel"]
