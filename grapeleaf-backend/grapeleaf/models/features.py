# grapeleaf/models/features.py
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class PixelBuffer:
    """
    Raster RGBA persegi (N x N x 4, uint8) hasil render ke grid analisis.
    Array disimpan read-only supaya tidak bisa diubah setelah dibuat.
    """
    pixels: np.ndarray

    def __post_init__(self):
        arr = self.pixels
        if arr.dtype != np.uint8:
            raise ValueError(f"PixelBuffer butuh dtype uint8, dapat {arr.dtype}")
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise ValueError(f"PixelBuffer butuh shape (N, N, 4), dapat {arr.shape}")
        if arr.shape[0] != arr.shape[1] or arr.shape[0] < 3:
            raise ValueError(f"PixelBuffer harus persegi dan minimal 3x3, dapat {arr.shape[:2]}")
        arr.setflags(write=False)

    @property
    def size(self) -> int:
        return int(self.pixels.shape[0])


@dataclass(frozen=True)
class ChannelSamples:
    values: np.ndarray   # (N*N,) float64 di [0, 1]
    spatial: np.ndarray  # (N, N) view dari data yang sama


@dataclass(frozen=True)
class ChannelStatistics:
    mean: float
    variance: float
    std: float
    min: float
    max: float
    range: float
    p25: float
    p50: float
    p75: float
    p90: float
    skewness: float
    kurtosis: float  # excess kurtosis (sudah dikurangi 3)
    iqr: float


@dataclass(frozen=True)
class ColorStatistics:
    red: ChannelStatistics
    green: ChannelStatistics
    blue: ChannelStatistics
    green_red_ratio: float
    green_blue_ratio: float
    red_blue_ratio: float
    green_dominance: float
    red_dominance: float
    blue_dominance: float
    color_balance: float


@dataclass(frozen=True)
class TextureFeatures:
    edge_density: float
    average_gradient: float
    uniformity: float
    gradient_variance: float

    @property
    def texture_complexity(self) -> float:
        return 1.0 - self.uniformity


@dataclass(frozen=True)
class MorphologyFeatures:
    eccentricity: float
    compactness: float
    aspect_ratio: float
    center_x: float
    center_y: float


@dataclass(frozen=True)
class FeatureSet:
    color: ColorStatistics
    texture: TextureFeatures
    morphology: MorphologyFeatures
