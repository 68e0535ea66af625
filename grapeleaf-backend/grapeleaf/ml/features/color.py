# grapeleaf/ml/features/color.py
import math

import numpy as np

from grapeleaf.models.features import ChannelSamples, ChannelStatistics, ColorStatistics, PixelBuffer

# Penjaga penyebut rasio antar-kanal
RATIO_EPSILON = 0.001

# Target dominansi untuk color balance (hijau 0.4, merah/biru 0.3)
GREEN_DOMINANCE_TARGET = 0.4
RED_DOMINANCE_TARGET = 0.3
BLUE_DOMINANCE_TARGET = 0.3

# std di bawah ini dianggap distribusi datar (skewness/kurtosis = 0)
FLAT_STD_EPSILON = 1e-12


def channel_samples(buffer: PixelBuffer):
    """
    Pecah PixelBuffer jadi (red, green, blue) ChannelSamples, nilai [0, 1].
    """
    out = []
    for c in range(3):
        spatial = buffer.pixels[:, :, c].astype(np.float64) / 255.0
        spatial.setflags(write=False)
        out.append(ChannelSamples(values=spatial.reshape(-1), spatial=spatial))
    return tuple(out)


def floor_percentile(sorted_values: np.ndarray, p: float) -> float:
    """sorted[floor(len * p)] tanpa interpolasi; threshold heuristik di-tune pakai definisi ini."""
    n = len(sorted_values)
    idx = min(int(math.floor(n * p)), n - 1)
    return float(sorted_values[idx])


def channel_statistics(values: np.ndarray) -> ChannelStatistics:
    values = np.asarray(values, dtype=np.float64).reshape(-1)
    if values.size == 0:
        raise ValueError("channel_statistics butuh minimal satu sampel")

    ordered = np.sort(values)
    mean = float(values.mean())
    dev = values - mean
    variance = float(np.mean(dev * dev))
    std = math.sqrt(variance)
    vmin = float(ordered[0])
    vmax = float(ordered[-1])

    if std > FLAT_STD_EPSILON:
        z = dev / std
        skewness = float(np.mean(z ** 3))
        kurtosis = float(np.mean(z ** 4)) - 3.0
    else:
        skewness = 0.0
        kurtosis = 0.0

    p25 = floor_percentile(ordered, 0.25)
    p75 = floor_percentile(ordered, 0.75)

    return ChannelStatistics(
        mean=mean,
        variance=variance,
        std=std,
        min=vmin,
        max=vmax,
        range=vmax - vmin,
        p25=p25,
        p50=floor_percentile(ordered, 0.50),
        p75=p75,
        p90=floor_percentile(ordered, 0.90),
        skewness=skewness,
        kurtosis=kurtosis,
        iqr=p75 - p25,
    )


def color_statistics(red: np.ndarray, green: np.ndarray, blue: np.ndarray) -> ColorStatistics:
    r = channel_statistics(red)
    g = channel_statistics(green)
    b = channel_statistics(blue)

    total = r.mean + g.mean + b.mean
    if total > 0:
        g_dom, r_dom, b_dom = g.mean / total, r.mean / total, b.mean / total
    else:
        # citra hitam total: bagi rata supaya tetap berjumlah 1
        g_dom = r_dom = b_dom = 1.0 / 3.0

    return ColorStatistics(
        red=r,
        green=g,
        blue=b,
        green_red_ratio=g.mean / (r.mean + RATIO_EPSILON),
        green_blue_ratio=g.mean / (b.mean + RATIO_EPSILON),
        red_blue_ratio=r.mean / (b.mean + RATIO_EPSILON),
        green_dominance=g_dom,
        red_dominance=r_dom,
        blue_dominance=b_dom,
        color_balance=(
            abs(g_dom - GREEN_DOMINANCE_TARGET)
            + abs(r_dom - RED_DOMINANCE_TARGET)
            + abs(b_dom - BLUE_DOMINANCE_TARGET)
        ),
    )
