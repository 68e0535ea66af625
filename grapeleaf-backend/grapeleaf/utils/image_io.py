# grapeleaf/utils/image_io.py
import io

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from grapeleaf.core.config import Config
from grapeleaf.core.errors import ImageDecodeError
from grapeleaf.models.features import PixelBuffer

# Image.DecompressionBombError bukan turunan OSError/ValueError
_DECODE_ERRORS = (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError)


def render_to_grid(img: Image.Image, size: int = None) -> PixelBuffer:
    """
    Render citra PIL ke grid analisis persegi (RGBA, size x size).
    Orientasi EXIF diterapkan dulu (foto HP sering disimpan miring).
    Resample pakai bicubic; kalau ukuran sudah pas, piksel dipakai apa adanya.
    """
    size = int(size or Config.ANALYSIS_SIZE)

    w, h = img.size
    if w <= 0 or h <= 0:
        raise ImageDecodeError(f"Dimensi citra tidak valid: {w}x{h}")

    try:
        rgba = ImageOps.exif_transpose(img).convert("RGBA")
        if rgba.size != (size, size):
            rgba = rgba.resize((size, size), resample=Image.Resampling.BICUBIC)
        arr = np.array(rgba, dtype=np.uint8)
    except _DECODE_ERRORS as e:
        raise ImageDecodeError(f"Gagal render citra ke grid analisis: {e}") from e

    return PixelBuffer(arr)


def load_image_from_bytes(image_bytes: bytes) -> Image.Image:
    """Decode bytes mentah -> PIL Image (sudah di-load penuh)."""
    if not image_bytes:
        raise ImageDecodeError("Data citra kosong.")

    try:
        img = Image.open(io.BytesIO(image_bytes))
        img.load()
    except _DECODE_ERRORS as e:
        raise ImageDecodeError(f"Format citra tidak dikenali: {e}") from e

    return img


def pixel_buffer_from_bytes(image_bytes: bytes, size: int = None) -> PixelBuffer:
    return render_to_grid(load_image_from_bytes(image_bytes), size=size)
