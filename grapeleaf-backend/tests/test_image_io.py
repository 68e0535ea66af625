import io

import numpy as np
import pytest
from PIL import Image

from grapeleaf.core.errors import ImageDecodeError
from grapeleaf.models.features import PixelBuffer
from grapeleaf.utils.image_io import load_image_from_bytes, pixel_buffer_from_bytes, render_to_grid

from conftest import png_declaring_size, solid_rgb, striped_leaf_rgb


def test_grid_sized_source_is_kept_pixel_exact(make_png):
    arr = striped_leaf_rgb()
    buf = pixel_buffer_from_bytes(make_png(arr))

    assert buf.size == 512
    assert buf.pixels.shape == (512, 512, 4)
    assert np.array_equal(buf.pixels[:, :, :3], arr)
    assert (buf.pixels[:, :, 3] == 255).all()


def test_non_square_source_is_resampled_to_grid():
    img = Image.fromarray(solid_rgb((60, 140, 60), size=100)[:, :60])
    buf = render_to_grid(img)

    assert buf.pixels.shape == (512, 512, 4)
    # warna solid tetap solid setelah bicubic
    assert np.all(np.abs(buf.pixels[:, :, 1].astype(int) - 140) <= 1)


def test_custom_grid_size():
    buf = render_to_grid(Image.fromarray(solid_rgb((10, 20, 30), size=40)), size=64)
    assert buf.size == 64


@pytest.mark.parametrize("payload", [b"", b"not an image at all"])
def test_undecodable_bytes_raise_decode_error(payload):
    with pytest.raises(ImageDecodeError):
        load_image_from_bytes(payload)


def test_zero_dimension_image_raises_decode_error():
    with pytest.raises(ImageDecodeError):
        render_to_grid(Image.new("RGB", (0, 0)))


def test_pixel_buffer_is_read_only(make_buffer):
    buf = make_buffer(solid_rgb((1, 2, 3), size=8))
    with pytest.raises(ValueError):
        buf.pixels[0, 0, 0] = 9


@pytest.mark.parametrize("shape,dtype", [
    ((4, 5, 4), np.uint8),
    ((4, 4, 3), np.uint8),
    ((4, 4, 4), np.float32),
])
def test_pixel_buffer_rejects_bad_shapes(shape, dtype):
    with pytest.raises(ValueError):
        PixelBuffer(np.zeros(shape, dtype=dtype))


def test_oversized_header_raises_decode_error():
    # 20000 x 20000 = 400 juta piksel, di atas batas decompression bomb Pillow
    with pytest.raises(ImageDecodeError):
        load_image_from_bytes(png_declaring_size(20000, 20000))


def test_exif_orientation_is_applied_before_resize():
    arr = np.empty((20, 40, 3), dtype=np.uint8)
    arr[:, :20] = (220, 20, 20)
    arr[:, 20:] = (20, 20, 220)

    exif = Image.Exif()
    exif[0x0112] = 6  # rotate 90 CW saat ditampilkan
    buf = io.BytesIO()
    Image.fromarray(arr).save(buf, format="JPEG", quality=95, exif=exif.tobytes())

    px = pixel_buffer_from_bytes(buf.getvalue(), size=64).pixels
    # setelah diputar, separuh kiri (merah) jadi separuh atas
    top_right, bottom_left = px[8, 56], px[56, 8]
    assert top_right[0] > 150 and top_right[2] < 100
    assert bottom_left[2] > 150 and bottom_left[0] < 100
