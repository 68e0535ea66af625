# grapeleaf/ml/classification/scorers.py
"""
Tiga sub-scorer heuristik (Black Rot, Black Measle, baseline Healthy) dan
penggabungannya jadi ConditionScores.

Setiap term adalah fungsi terpisah yang mengembalikan kontribusinya
(0.0 kalau syaratnya tidak terpenuhi), supaya bisa dites satu per satu.
"""
from grapeleaf.models.features import ColorStatistics, FeatureSet, MorphologyFeatures, TextureFeatures
from grapeleaf.models.prediction import ConditionScores

SEVERITY_CAP = 1.0

# ==========================
# BLACK ROT
# ==========================
ROT_RED_MIN_MEAN = 0.25
ROT_GREEN_MAX_MEAN = 0.3
ROT_BROWNNESS_SCALE = 1.5
ROT_BROWNNESS_CAP = 0.6

ROT_RED_VARIANCE_MIN = 0.025
ROT_GREEN_VARIANCE_MIN = 0.02
ROT_VARIANCE_SCALE = 8.0
ROT_VARIANCE_CAP = 0.4

ROT_EDGE_DENSITY_MIN = 0.1
ROT_COMPLEXITY_MIN = 0.3
ROT_EDGE_SCALE = 2.0
ROT_EDGE_CAP = 0.3

ROT_RED_SPREAD_MIN = 0.2
ROT_RED_SPREAD_BONUS = 0.2

# ==========================
# BLACK MEASLE
# ==========================
MEASLE_VARIANCE_MIN = (0.02, 0.018, 0.015)  # red, green, blue
MEASLE_SPOTTINESS_SCALE = 12.0
MEASLE_SPOTTINESS_CAP = 0.5

MEASLE_COMPLEXITY_MIN = 0.4
MEASLE_UNIFORMITY_MAX = 0.6
MEASLE_COMPLEXITY_SCALE = 0.8
MEASLE_COMPLEXITY_CAP = 0.4

MEASLE_GRADIENT_VARIANCE_MIN = 0.01
MEASLE_GRADIENT_VARIANCE_SCALE = 15.0
MEASLE_GRADIENT_VARIANCE_CAP = 0.3

MEASLE_SKEWNESS_MIN = 0.3
MEASLE_SKEWNESS_SCALE = 0.5
MEASLE_SKEWNESS_CAP = 0.2

# ==========================
# HEALTHY
# ==========================
HEALTHY_GREEN_MIN_MEAN = 0.35
HEALTHY_GREEN_MAX_VARIANCE = 0.008
HEALTHY_GREEN_MIN_DOMINANCE = 0.4
HEALTHY_GREEN_BONUS = 0.4

HEALTHY_RED_MAX_MEAN = 0.25
HEALTHY_RED_MAX_DOMINANCE = 0.35
HEALTHY_RED_BONUS = 0.2

HEALTHY_UNIFORMITY_MIN = 0.5
HEALTHY_EDGE_DENSITY_MAX = 0.15
HEALTHY_TEXTURE_BONUS = 0.2

HEALTHY_COMPACTNESS_MIN = 0.3
HEALTHY_ECCENTRICITY_MAX = 0.6
HEALTHY_SHAPE_BONUS = 0.1

HEALTHY_SKEWNESS_RANGE = (-0.5, 0.5)
HEALTHY_KURTOSIS_MAX = 2.0
HEALTHY_DISTRIBUTION_BONUS = 0.1

# ==========================
# PENGGABUNGAN SKOR
# ==========================
BASELINE_HEALTHY = 0.7

ROT_BASE = 0.75
ROT_SEVERITY_WEIGHT = 0.2
ROT_HEALTHY_BASE = 0.6
ROT_HEALTHY_PENALTY = 0.8
ROT_HEALTHY_FLOOR = 0.1

MEASLE_BASE = 0.8
MEASLE_SEVERITY_WEIGHT = 0.15
MEASLE_HEALTHY_BASE = 0.65
MEASLE_HEALTHY_PENALTY = 0.7
MEASLE_HEALTHY_FLOOR = 0.15

HEALTH_OVERRIDE_THRESHOLD = 0.7
HEALTH_OVERRIDE_BASE = 0.85
HEALTH_OVERRIDE_WEIGHT = 0.1
HEALTH_DISEASE_DAMPING = 0.5


# --------------------------
# Black Rot terms
# --------------------------
def rot_brownness_term(color: ColorStatistics) -> float:
    r, g = color.red.mean, color.green.mean
    if r > ROT_RED_MIN_MEAN and g < ROT_GREEN_MAX_MEAN:
        brownness = (r - g) / r
        return min(brownness * ROT_BROWNNESS_SCALE, ROT_BROWNNESS_CAP)
    return 0.0


def rot_variance_term(color: ColorStatistics) -> float:
    if color.red.variance > ROT_RED_VARIANCE_MIN and color.green.variance > ROT_GREEN_VARIANCE_MIN:
        return min((color.red.variance + color.green.variance) * ROT_VARIANCE_SCALE, ROT_VARIANCE_CAP)
    return 0.0


def rot_edge_term(texture: TextureFeatures) -> float:
    if texture.edge_density > ROT_EDGE_DENSITY_MIN and texture.texture_complexity > ROT_COMPLEXITY_MIN:
        return min(texture.edge_density * ROT_EDGE_SCALE, ROT_EDGE_CAP)
    return 0.0


def rot_red_spread_term(color: ColorStatistics) -> float:
    if color.red.p90 - color.red.p25 > ROT_RED_SPREAD_MIN:
        return ROT_RED_SPREAD_BONUS
    return 0.0


def black_rot_severity(color: ColorStatistics, texture: TextureFeatures) -> float:
    severity = (
        rot_brownness_term(color)
        + rot_variance_term(color)
        + rot_edge_term(texture)
        + rot_red_spread_term(color)
    )
    return min(severity, SEVERITY_CAP)


# --------------------------
# Black Measle terms
# --------------------------
def measle_spottiness_term(color: ColorStatistics) -> float:
    r_min, g_min, b_min = MEASLE_VARIANCE_MIN
    if color.red.variance > r_min and color.green.variance > g_min and color.blue.variance > b_min:
        spottiness = (color.red.variance + color.green.variance + color.blue.variance) / 3
        return min(spottiness * MEASLE_SPOTTINESS_SCALE, MEASLE_SPOTTINESS_CAP)
    return 0.0


def measle_texture_term(texture: TextureFeatures) -> float:
    complexity = texture.texture_complexity
    if complexity > MEASLE_COMPLEXITY_MIN and texture.uniformity < MEASLE_UNIFORMITY_MAX:
        return min(complexity * MEASLE_COMPLEXITY_SCALE, MEASLE_COMPLEXITY_CAP)
    return 0.0


def measle_gradient_variance_term(texture: TextureFeatures) -> float:
    if texture.gradient_variance > MEASLE_GRADIENT_VARIANCE_MIN:
        return min(texture.gradient_variance * MEASLE_GRADIENT_VARIANCE_SCALE, MEASLE_GRADIENT_VARIANCE_CAP)
    return 0.0


def measle_skewness_term(color: ColorStatistics) -> float:
    skew = abs(color.green.skewness)
    if skew > MEASLE_SKEWNESS_MIN:
        return min(skew * MEASLE_SKEWNESS_SCALE, MEASLE_SKEWNESS_CAP)
    return 0.0


def black_measle_severity(color: ColorStatistics, texture: TextureFeatures) -> float:
    severity = (
        measle_spottiness_term(color)
        + measle_texture_term(texture)
        + measle_gradient_variance_term(texture)
        + measle_skewness_term(color)
    )
    return min(severity, SEVERITY_CAP)


# --------------------------
# Healthy terms
# --------------------------
def healthy_green_term(color: ColorStatistics) -> float:
    g = color.green
    if (g.mean > HEALTHY_GREEN_MIN_MEAN
            and g.variance < HEALTHY_GREEN_MAX_VARIANCE
            and color.green_dominance > HEALTHY_GREEN_MIN_DOMINANCE):
        return HEALTHY_GREEN_BONUS
    return 0.0


def healthy_low_red_term(color: ColorStatistics) -> float:
    if color.red.mean < HEALTHY_RED_MAX_MEAN and color.red_dominance < HEALTHY_RED_MAX_DOMINANCE:
        return HEALTHY_RED_BONUS
    return 0.0


def healthy_texture_term(texture: TextureFeatures) -> float:
    if texture.uniformity > HEALTHY_UNIFORMITY_MIN and texture.edge_density < HEALTHY_EDGE_DENSITY_MAX:
        return HEALTHY_TEXTURE_BONUS
    return 0.0


def healthy_shape_term(morphology: MorphologyFeatures) -> float:
    if morphology.compactness > HEALTHY_COMPACTNESS_MIN and morphology.eccentricity < HEALTHY_ECCENTRICITY_MAX:
        return HEALTHY_SHAPE_BONUS
    return 0.0


def healthy_distribution_term(color: ColorStatistics) -> float:
    lo, hi = HEALTHY_SKEWNESS_RANGE
    g = color.green
    if lo < g.skewness < hi and g.kurtosis < HEALTHY_KURTOSIS_MAX:
        return HEALTHY_DISTRIBUTION_BONUS
    return 0.0


def health_score(color: ColorStatistics, texture: TextureFeatures, morphology: MorphologyFeatures) -> float:
    score = (
        healthy_green_term(color)
        + healthy_low_red_term(color)
        + healthy_texture_term(texture)
        + healthy_shape_term(morphology)
        + healthy_distribution_term(color)
    )
    return min(score, SEVERITY_CAP)


def combine_scores(rot_severity: float, measle_severity: float, health: float) -> ConditionScores:
    healthy = BASELINE_HEALTHY
    black_rot = 0.0
    black_measle = 0.0

    if rot_severity > 0:
        black_rot = ROT_BASE + ROT_SEVERITY_WEIGHT * rot_severity
        healthy = max(ROT_HEALTHY_FLOOR, ROT_HEALTHY_BASE - ROT_HEALTHY_PENALTY * rot_severity)

    # healthy di sini menimpa hasil blok Black Rot
    if measle_severity > 0:
        black_measle = MEASLE_BASE + MEASLE_SEVERITY_WEIGHT * measle_severity
        healthy = max(MEASLE_HEALTHY_FLOOR, MEASLE_HEALTHY_BASE - MEASLE_HEALTHY_PENALTY * measle_severity)

    if health > HEALTH_OVERRIDE_THRESHOLD:
        healthy = max(healthy, HEALTH_OVERRIDE_BASE + HEALTH_OVERRIDE_WEIGHT * health)
        damping = 1 - health * HEALTH_DISEASE_DAMPING
        black_rot *= damping
        black_measle *= damping

    return ConditionScores(healthy=healthy, black_rot=black_rot, black_measle=black_measle)


def score_conditions(features: FeatureSet) -> ConditionScores:
    color, texture, morphology = features.color, features.texture, features.morphology
    return combine_scores(
        black_rot_severity(color, texture),
        black_measle_severity(color, texture),
        health_score(color, texture, morphology),
    )
