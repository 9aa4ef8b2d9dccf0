"""PNG export of a streamed render.

ImageCollector plugs into the Streamer as a row sink and assembles the
flushed rows into an (H, W, 3) uint8 array, which save_png writes through
Pillow.

Example:
    >>> from pathtracer.output.export import ImageCollector, save_png
    >>> collector = ImageCollector(width=400, height=225)
    >>> # render(..., row_sink=collector)
    >>> # save_png(collector.image, "spheres.png")
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from pathtracer.output.tonemap import PixelColor


class ImageCollector:
    """Row sink that fills an image array top-to-bottom.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        image: The uint8 array of shape (height, width, 3).
        rows_received: Number of rows stored so far.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.image = np.zeros((height, width, 3), dtype=np.uint8)
        self.rows_received = 0

    def __call__(self, row: Sequence[PixelColor]) -> None:
        if self.rows_received >= self.height:
            raise ValueError(f"Received more than {self.height} rows")
        if len(row) != self.width:
            raise ValueError(f"Row has {len(row)} pixels, expected {self.width}")
        self.image[self.rows_received] = np.asarray(row, dtype=np.uint8)
        self.rows_received += 1

    @property
    def complete(self) -> bool:
        return self.rows_received == self.height


def save_png(image: npt.NDArray[np.uint8], filepath: str) -> None:
    """Save an 8-bit RGB array as a PNG file.

    Args:
        image: Array of shape (H, W, 3) with dtype uint8.
        filepath: Output file path (should end in .png).

    Raises:
        ValueError: If the array is not an (H, W, 3) image.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")
    pil_image = PILImage.fromarray(image)
    pil_image.save(filepath)
