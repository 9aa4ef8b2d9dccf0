"""Tests for tone mapping, pixel-map streaming and PNG export."""

import io

import numpy as np
import pytest
from PIL import Image

from pathtracer.core.pingpong import DoubleBuffer
from pathtracer.output import (
    ImageCollector,
    PixelColor,
    Streamer,
    quantize,
    save_png,
    write_header,
)


class TestQuantize:
    """Test averaging, gamma and clamping."""

    def test_full_intensity_maps_to_255(self):
        assert quantize(np.array([4.0, 4.0, 4.0]), 4) == PixelColor(255, 255, 255)

    def test_overexposure_is_clamped(self):
        assert quantize(np.array([50.0, 2.0, 1.0]), 1) == PixelColor(255, 255, 255)

    def test_gamma_two(self):
        # Average 0.25 -> sqrt 0.5 -> int(128.0)
        assert quantize(np.array([1.0, 0.0, 0.04]), 4) == PixelColor(128, 0, 25)

    def test_rounds_toward_zero(self):
        # sqrt(0.5) * 256 = 181.02
        assert quantize(np.array([0.5, 0.5, 0.5]), 1).r == 181

    def test_nan_and_negative_map_to_black(self):
        assert quantize(np.array([np.nan, -1.0, 0.0]), 1) == PixelColor(0, 0, 0)

    def test_str_is_pixel_map_line(self):
        assert str(PixelColor(12, 0, 255)) == "12 0 255"


class TestStreamer:
    """Test header and row serialization."""

    def test_header(self):
        channel = io.StringIO()
        write_header(channel, 4, 3)
        assert channel.getvalue() == "P3\n4 3\n255\n"

    def test_flush_writes_columns_in_order(self):
        buf = DoubleBuffer(3)
        channel = io.StringIO()
        streamer = Streamer(buf, channel)
        for column in (2, 0, 1):
            buf.set(1, column, PixelColor(column, column, 10 * column))

        streamer.flush(1)

        assert channel.getvalue() == "0 0 0\n1 1 10\n2 2 20\n"
        assert streamer.rows_written == 1

    def test_row_sink_receives_flushed_rows(self):
        buf = DoubleBuffer(2)
        rows = []
        streamer = Streamer(buf, io.StringIO(), row_sink=rows.append)
        buf.set(0, 0, PixelColor(1, 2, 3))
        buf.set(0, 1, PixelColor(4, 5, 6))

        streamer.flush(0)

        assert rows == [[PixelColor(1, 2, 3), PixelColor(4, 5, 6)]]


class TestImageCollector:
    """Test assembling flushed rows into an image."""

    def test_rows_fill_top_to_bottom(self):
        collector = ImageCollector(width=2, height=2)
        collector([PixelColor(255, 0, 0), PixelColor(0, 255, 0)])
        assert not collector.complete
        collector([PixelColor(0, 0, 255), PixelColor(9, 9, 9)])

        assert collector.complete
        assert collector.image.dtype == np.uint8
        assert collector.image[0, 1].tolist() == [0, 255, 0]
        assert collector.image[1, 0].tolist() == [0, 0, 255]

    def test_rejects_extra_rows(self):
        collector = ImageCollector(width=1, height=1)
        collector([PixelColor(0, 0, 0)])
        with pytest.raises(ValueError, match="more than 1 rows"):
            collector([PixelColor(0, 0, 0)])

    def test_rejects_wrong_row_length(self):
        with pytest.raises(ValueError, match="expected 3"):
            ImageCollector(width=3, height=1)([PixelColor(0, 0, 0)])


class TestSavePng:
    """Test PNG export through Pillow."""

    def test_round_trip(self, tmp_path):
        image = np.zeros((2, 3, 3), dtype=np.uint8)
        image[0, 0] = (255, 128, 0)
        path = tmp_path / "out.png"

        save_png(image, str(path))

        with Image.open(path) as loaded:
            assert loaded.size == (3, 2)
            assert loaded.mode == "RGB"
            assert np.array_equal(np.asarray(loaded), image)

    def test_rejects_non_rgb_shape(self, tmp_path):
        with pytest.raises(ValueError, match="H, W, 3"):
            save_png(np.zeros((2, 2), dtype=np.uint8), str(tmp_path / "bad.png"))
