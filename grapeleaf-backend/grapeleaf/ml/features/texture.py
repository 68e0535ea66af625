# grapeleaf/ml/features/texture.py
import numpy as np

from grapeleaf.models.features import TextureFeatures

# Magnitudo Sobel (skala kanal [0, 1]) di atas ini dihitung piksel tepi
EDGE_THRESHOLD = 0.1

# Pola LBP dengan transisi <= ini dihitung "uniform"
UNIFORM_MAX_TRANSITIONS = 2


def _build_transition_table() -> np.ndarray:
    table = np.zeros(256, dtype=np.uint8)
    for pattern in range(256):
        rotated = ((pattern << 1) | (pattern >> 7)) & 0xFF
        table[pattern] = bin(pattern ^ rotated).count("1")
    table.setflags(write=False)
    return table


# Jumlah transisi bit melingkar untuk tiap pola 8-bit
TRANSITIONS = _build_transition_table()


def count_transitions(pattern: int) -> int:
    return int(TRANSITIONS[pattern & 0xFF])


def sobel_magnitude(channel: np.ndarray) -> np.ndarray:
    """
    Sobel 3x3 untuk piksel interior saja -> array (H-2, W-2).
    """
    c = channel
    gx = (
        (c[:-2, 2:] - c[:-2, :-2])
        + 2.0 * (c[1:-1, 2:] - c[1:-1, :-2])
        + (c[2:, 2:] - c[2:, :-2])
    )
    gy = (
        (c[2:, :-2] - c[:-2, :-2])
        + 2.0 * (c[2:, 1:-1] - c[:-2, 1:-1])
        + (c[2:, 2:] - c[:-2, 2:])
    )
    return np.sqrt(gx * gx + gy * gy)


def lbp_patterns(channel: np.ndarray) -> np.ndarray:
    """
    Pola biner 8-tetangga untuk piksel interior.
    Urutan bit 0..7: kiri-atas, atas, kanan-atas, kiri, kanan, kiri-bawah, bawah, kanan-bawah.
    Bit = 1 kalau tetangga >= pusat.
    """
    center = channel[1:-1, 1:-1]
    neighbors = (
        channel[:-2, :-2], channel[:-2, 1:-1], channel[:-2, 2:],
        channel[1:-1, :-2], channel[1:-1, 2:],
        channel[2:, :-2], channel[2:, 1:-1], channel[2:, 2:],
    )
    pattern = np.zeros(center.shape, dtype=np.uint8)
    for bit, nb in enumerate(neighbors):
        pattern |= (nb >= center).astype(np.uint8) << bit
    return pattern


def texture_features(green: np.ndarray) -> TextureFeatures:
    """
    Fitur tekstur dari kanal hijau (spatial, [0, 1]).
    Hijau dipakai sendirian karena paling informatif untuk citra daun.
    """
    green = np.asarray(green, dtype=np.float64)
    h, w = green.shape
    interior = (h - 2) * (w - 2)

    magnitude = sobel_magnitude(green)
    avg_gradient = float(magnitude.mean())
    edge_density = float(np.count_nonzero(magnitude > EDGE_THRESHOLD)) / interior
    gradient_variance = float(np.mean((magnitude - avg_gradient) ** 2))

    transitions = TRANSITIONS[lbp_patterns(green)]
    uniformity = float(np.count_nonzero(transitions <= UNIFORM_MAX_TRANSITIONS)) / interior

    return TextureFeatures(
        edge_density=edge_density,
        average_gradient=avg_gradient,
        uniformity=uniformity,
        gradient_variance=gradient_variance,
    )
