# grapeleaf/ml/features/morphology.py
import math

import numpy as np

from grapeleaf.models.features import MorphologyFeatures, PixelBuffer

# Bobot luma standar
LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def grayscale(buffer: PixelBuffer) -> np.ndarray:
    """Intensitas luma [0, 1], dipakai sebagai distribusi massa."""
    rgb = buffer.pixels[:, :, :3].astype(np.float64)
    wr, wg, wb = LUMA_WEIGHTS
    gray = wr * rgb[:, :, 0] + wg * rgb[:, :, 1] + wb * rgb[:, :, 2]
    return gray / 255.0


def morphology_features(intensity: np.ndarray) -> MorphologyFeatures:
    """
    Momen citra (orde 0, 1, 2) -> centroid, eccentricity, compactness.
    eccentricity: 0 = bulat, mendekati 1 = memanjang.
    """
    h, w = intensity.shape
    ys, xs = np.mgrid[0:h, 0:w].astype(np.float64)

    m00 = float(intensity.sum())
    if m00 <= 0:
        # tidak ada massa (citra hitam): centroid di tengah, bentuk tidak terdefinisi
        return MorphologyFeatures(
            eccentricity=0.0,
            compactness=0.0,
            aspect_ratio=w / h,
            center_x=0.5,
            center_y=0.5,
        )

    cx = float((xs * intensity).sum()) / m00
    cy = float((ys * intensity).sum()) / m00

    dx = xs - cx
    dy = ys - cy
    mu20 = float((dx * dx * intensity).sum())
    mu02 = float((dy * dy * intensity).sum())
    mu11 = float((dx * dy * intensity).sum())

    a = mu20 / m00
    b = 2.0 * mu11 / m00
    c = mu02 / m00
    root = math.sqrt((a - c) ** 2 + b * b)
    lambda1 = (a + c + root) / 2.0
    lambda2 = (a + c - root) / 2.0

    if lambda1 > 0:
        eccentricity = math.sqrt(max(0.0, 1.0 - lambda2 / lambda1))
    else:
        eccentricity = 0.0

    return MorphologyFeatures(
        eccentricity=eccentricity,
        compactness=(4.0 * math.pi * m00) / (w * h),
        aspect_ratio=w / h,
        center_x=cx / w,
        center_y=cy / h,
    )
