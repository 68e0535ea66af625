# grapeleaf/ml/verification/leaf_check.py
from typing import Optional

from grapeleaf.models.features import ColorStatistics, FeatureSet, MorphologyFeatures, TextureFeatures
from grapeleaf.models.prediction import Contribution, LeafVerification

# ==========================
# Bobot & threshold (hasil tuning manual, jangan diubah sembarangan)
# ==========================
GREEN_DOMINANCE_WEIGHT = 0.25
GREEN_MIN_MEAN = 0.15
GREEN_DOMINANCE_TARGET = 0.4

GREEN_RED_RATIO_WEIGHT = 0.20
GREEN_RED_RATIO_RANGE = (1.2, 6.0)
GREEN_RED_RATIO_PIVOT = 2.0

VARIATION_WEIGHT = 0.15
VARIATION_FACTOR = 0.8
GREEN_VARIANCE_RANGE = (0.002, 0.15)
COLOR_BALANCE_MAX = 0.3

TEXTURE_WEIGHT = 0.15
TEXTURE_FACTOR = 0.75
UNIFORMITY_RANGE = (0.3, 0.8)
EDGE_DENSITY_RANGE = (0.05, 0.4)

SHAPE_WEIGHT = 0.10
SHAPE_FACTOR = 0.7
COMPACTNESS_RANGE = (0.2, 0.9)
ECCENTRICITY_MAX = 0.8

SPREAD_WEIGHT = 0.10
SPREAD_FACTOR = 0.8
GREEN_IQR_MIN = 0.05
GREEN_SKEWNESS_RANGE = (-1.0, 1.0)

GRADIENT_WEIGHT = 0.05
GRADIENT_FACTOR = 0.6
AVERAGE_GRADIENT_RANGE = (0.02, 0.2)

# Kalibrasi confidence akhir
CONFIDENCE_OFFSET = 0.15
CONFIDENCE_FLOOR = 0.6
CONFIDENCE_CEILING = 0.98
DEFAULT_FACTOR = 0.5
VALID_SCORE_THRESHOLD = 0.6


def _between(value: float, bounds) -> bool:
    lo, hi = bounds
    return lo < value < hi


def check_green_dominance(color: ColorStatistics) -> Optional[Contribution]:
    g = color.green.mean
    if g > color.red.mean and g > color.blue.mean and g > GREEN_MIN_MEAN:
        strength = min(color.green_dominance / GREEN_DOMINANCE_TARGET, 1.0)
        return Contribution("green_dominance", GREEN_DOMINANCE_WEIGHT * strength, strength)
    return None


def check_green_red_ratio(color: ColorStatistics) -> Optional[Contribution]:
    ratio = color.green_red_ratio
    if _between(ratio, GREEN_RED_RATIO_RANGE):
        ratio_score = min(1.0, GREEN_RED_RATIO_PIVOT / ratio)
        return Contribution("green_red_ratio", GREEN_RED_RATIO_WEIGHT * ratio_score, ratio_score)
    return None


def check_natural_variation(color: ColorStatistics) -> Optional[Contribution]:
    if _between(color.green.variance, GREEN_VARIANCE_RANGE) and color.color_balance < COLOR_BALANCE_MAX:
        return Contribution("natural_variation", VARIATION_WEIGHT, VARIATION_FACTOR)
    return None


def check_texture(texture: TextureFeatures) -> Optional[Contribution]:
    if _between(texture.uniformity, UNIFORMITY_RANGE) and _between(texture.edge_density, EDGE_DENSITY_RANGE):
        return Contribution("texture", TEXTURE_WEIGHT, TEXTURE_FACTOR)
    return None


def check_shape(morphology: MorphologyFeatures) -> Optional[Contribution]:
    if _between(morphology.compactness, COMPACTNESS_RANGE) and morphology.eccentricity < ECCENTRICITY_MAX:
        return Contribution("shape", SHAPE_WEIGHT, SHAPE_FACTOR)
    return None


def check_distribution_spread(color: ColorStatistics) -> Optional[Contribution]:
    green = color.green
    if (green.p75 - green.p25) > GREEN_IQR_MIN and _between(green.skewness, GREEN_SKEWNESS_RANGE):
        return Contribution("distribution_spread", SPREAD_WEIGHT, SPREAD_FACTOR)
    return None


def check_gradient_band(texture: TextureFeatures) -> Optional[Contribution]:
    if _between(texture.average_gradient, AVERAGE_GRADIENT_RANGE):
        return Contribution("gradient_band", GRADIENT_WEIGHT, GRADIENT_FACTOR)
    return None


def leaf_confidence(score: float, factors) -> float:
    factors = list(factors)
    avg_factor = sum(factors) / len(factors) if factors else DEFAULT_FACTOR
    base = max(CONFIDENCE_FLOOR, min(score + CONFIDENCE_OFFSET, CONFIDENCE_CEILING))
    return base * (0.8 + 0.2 * avg_factor)


def verify_leaf(features: FeatureSet) -> LeafVerification:
    """
    Gerbang sebelum klasifikasi penyakit: apakah citra masuk akal sebagai daun anggur?
    Tujuh cek independen, masing-masing menyumbang skor terbatas kalau kondisinya terpenuhi.
    """
    color, texture, morphology = features.color, features.texture, features.morphology

    candidates = (
        check_green_dominance(color),
        check_green_red_ratio(color),
        check_natural_variation(color),
        check_texture(texture),
        check_shape(morphology),
        check_distribution_spread(color),
        check_gradient_band(texture),
    )
    triggered = tuple(c for c in candidates if c is not None)

    score = sum(c.score for c in triggered)
    confidence = leaf_confidence(score, (c.factor for c in triggered))

    return LeafVerification(
        is_valid=score > VALID_SCORE_THRESHOLD,
        confidence=confidence,
        score=score,
        contributions=triggered,
    )
