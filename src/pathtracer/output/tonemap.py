"""Tone mapping from accumulated radiance to 8-bit pixel values.

The mapping averages the per-sample sum, applies a square-root gamma curve
(gamma 2) and quantizes each channel to [0, 255], rounding toward zero.
"""

from __future__ import annotations

import math
from typing import NamedTuple

import numpy as np
import numpy.typing as npt

# Upper clamp before scaling by 256 so that 1.0 maps to 255, not 256
MAX_INTENSITY = 0.999


class PixelColor(NamedTuple):
    """A quantized, gamma-corrected pixel."""

    r: int
    g: int
    b: int

    def __str__(self) -> str:
        return f"{self.r} {self.g} {self.b}"


def _quantize_channel(value: float, scale: float) -> int:
    # NaN from degenerate paths maps to black
    if math.isnan(value):
        return 0
    corrected = math.sqrt(max(0.0, scale * value))
    return int(256 * min(max(corrected, 0.0), MAX_INTENSITY))


def quantize(raw_sum: npt.NDArray[np.float64], samples: int) -> PixelColor:
    """Convert a raw sample sum into a displayable pixel.

    Args:
        raw_sum: Summed RGB radiance of all samples.
        samples: Number of samples in the sum.

    Returns:
        The gamma-corrected PixelColor with channels in [0, 255].
    """
    scale = 1.0 / samples
    return PixelColor(*(_quantize_channel(float(c), scale) for c in raw_sum))
