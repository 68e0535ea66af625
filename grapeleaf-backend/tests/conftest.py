import io
import struct
import zlib

import numpy as np
import pytest
from PIL import Image

from grapeleaf import create_app
from grapeleaf.utils.image_io import render_to_grid

GRID = 512


def solid_rgb(rgb, size=GRID):
    arr = np.empty((size, size, 3), dtype=np.uint8)
    arr[:, :] = rgb
    return arr


def striped_leaf_rgb(size=GRID, stripe=32, greens=(140, 115), red=63, blue=63):
    """Garis vertikal dua tingkat hijau: variasi alami cukup untuk lolos verifikasi daun."""
    arr = np.empty((size, size, 3), dtype=np.uint8)
    arr[:, :, 0] = red
    arr[:, :, 2] = blue
    cols = (np.arange(size) // stripe) % 2
    arr[:, :, 1] = np.where(cols == 0, greens[0], greens[1])[None, :]
    return arr


def checkerboard_rgb(a, b, block=16, size=GRID):
    yy, xx = np.mgrid[0:size, 0:size]
    mask = ((yy // block) + (xx // block)) % 2 == 0
    arr = np.empty((size, size, 3), dtype=np.uint8)
    arr[mask] = a
    arr[~mask] = b
    return arr


def png_bytes(arr):
    buf = io.BytesIO()
    Image.fromarray(arr).save(buf, format="PNG")
    return buf.getvalue()


def png_declaring_size(width, height):
    """PNG kecil (1 piksel data) yang header IHDR-nya mengklaim width x height."""
    def chunk(kind, data):
        crc = zlib.crc32(kind + data) & 0xFFFFFFFF
        return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", crc)

    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    idat = zlib.compress(b"\x00\x00\x00\x00")
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", ihdr)
        + chunk(b"IDAT", idat)
        + chunk(b"IEND", b"")
    )


@pytest.fixture
def make_buffer():
    def _make(arr, size=None):
        return render_to_grid(Image.fromarray(arr), size=size)
    return _make


@pytest.fixture
def make_png():
    return png_bytes


@pytest.fixture
def striped_leaf():
    return striped_leaf_rgb()


@pytest.fixture
def brown_checkerboard():
    return checkerboard_rgb((150, 60, 40), (90, 40, 20))


@pytest.fixture
def app():
    app = create_app()
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
