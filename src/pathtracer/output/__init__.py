"""Output module: tone mapping, pixel-map streaming and PNG export.

Components:
    tonemap: Average, gamma-correct and quantize accumulated radiance
    streamer: P3 header and ordered flushing of sealed buffer slots
    export: Row collector and Pillow-based PNG export
"""

from .export import ImageCollector, save_png
from .streamer import MAX_COLOR_VALUE, Streamer, write_header
from .tonemap import PixelColor, quantize

__all__ = [
    "PixelColor",
    "quantize",
    "Streamer",
    "write_header",
    "MAX_COLOR_VALUE",
    "ImageCollector",
    "save_png",
]
