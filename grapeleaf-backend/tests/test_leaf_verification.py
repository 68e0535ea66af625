import pytest

from grapeleaf.ml.features.extractor import extract_features
from grapeleaf.ml.verification.leaf_check import (
    check_distribution_spread,
    check_gradient_band,
    check_green_dominance,
    check_green_red_ratio,
    check_natural_variation,
    check_shape,
    check_texture,
    leaf_confidence,
    verify_leaf,
)

import factories as fx
from conftest import solid_rgb, striped_leaf_rgb


def test_green_dominance_strength_is_capped():
    c = check_green_dominance(fx.color())
    assert c.score == pytest.approx(0.25)
    assert c.factor == 1.0


def test_green_dominance_requires_green_above_other_channels():
    stats = fx.color(red=fx.channel(0.35), green=fx.channel(0.3), blue=fx.channel(0.0))
    assert check_green_dominance(stats) is None

    stats = fx.color(red=fx.channel(0.3), green=fx.channel(0.36), blue=fx.channel(0.54))
    assert check_green_dominance(stats) is None

    stats = fx.color(red=fx.channel(0.34), green=fx.channel(0.36), blue=fx.channel(0.5))
    assert check_green_dominance(stats) is None


def test_green_dominance_partial_strength():
    stats = fx.color(red=fx.channel(0.33), green=fx.channel(0.36), blue=fx.channel(0.31))
    c = check_green_dominance(stats)
    assert c.factor == pytest.approx(0.9)
    assert c.score == pytest.approx(0.25 * 0.9)


def test_dim_green_is_not_dominant():
    stats = fx.color(red=fx.channel(0.05), green=fx.channel(0.14), blue=fx.channel(0.05))
    assert check_green_dominance(stats) is None


@pytest.mark.parametrize("green,triggered", [
    (0.24, False),  # rasio < 1.2
    (0.5, True),
    (1.3, False),   # rasio > 6
])
def test_green_red_ratio(green, triggered):
    stats = fx.color(red=fx.channel(0.2), green=fx.channel(green))
    c = check_green_red_ratio(stats)
    if not triggered:
        assert c is None
    else:
        ratio = green / 0.201
        assert c.factor == pytest.approx(min(1.0, 2.0 / ratio))
        assert c.score == pytest.approx(0.2 * min(1.0, 2.0 / ratio))


def test_natural_variation_needs_variance_and_balance():
    balanced = fx.color(red=fx.channel(0.3), green=fx.channel(0.4, variance=0.01), blue=fx.channel(0.3))
    assert check_natural_variation(balanced).score == pytest.approx(0.15)

    flat = fx.color(red=fx.channel(0.3), green=fx.channel(0.4, variance=0.001), blue=fx.channel(0.3))
    assert check_natural_variation(flat) is None

    skewed = fx.color(red=fx.channel(0.05), green=fx.channel(0.9, variance=0.01), blue=fx.channel(0.05))
    assert check_natural_variation(skewed) is None


def test_texture_shape_spread_and_gradient_checks():
    assert check_texture(fx.texture(edge_density=0.2, uniformity=0.5)).score == pytest.approx(0.15)
    assert check_texture(fx.texture(edge_density=0.2, uniformity=0.9)) is None

    assert check_shape(fx.morphology(eccentricity=0.5, compactness=0.5)).score == pytest.approx(0.1)
    assert check_shape(fx.morphology(eccentricity=0.85, compactness=0.5)) is None
    assert check_shape(fx.morphology(eccentricity=0.1, compactness=1.2)) is None

    spread = fx.color(green=fx.channel(0.5, p25=0.4, p75=0.5, skewness=0.2))
    assert check_distribution_spread(spread).factor == pytest.approx(0.8)
    lopsided = fx.color(green=fx.channel(0.5, p25=0.4, p75=0.5, skewness=1.5))
    assert check_distribution_spread(lopsided) is None

    assert check_gradient_band(fx.texture(average_gradient=0.05)).score == pytest.approx(0.05)
    assert check_gradient_band(fx.texture(average_gradient=0.25)) is None


def test_leaf_confidence_calibration():
    # tidak ada cek terpicu: floor 0.6, faktor default 0.5
    assert leaf_confidence(0.0, []) == pytest.approx(0.6 * 0.9)
    assert leaf_confidence(0.95, [1.0]) == pytest.approx(0.98)
    assert leaf_confidence(0.7, [0.5, 1.0]) == pytest.approx(0.85 * 0.95)


def test_verify_leaf_sums_all_triggered_checks():
    feats = fx.features(
        color_stats=fx.color(
            red=fx.channel(0.3),
            green=fx.channel(0.4, variance=0.01, p25=0.3, p75=0.5),
            blue=fx.channel(0.3),
        ),
        texture_feats=fx.texture(edge_density=0.2, uniformity=0.5, average_gradient=0.05),
        morphology_feats=fx.morphology(eccentricity=0.3, compactness=0.5),
    )
    v = verify_leaf(feats)
    names = [c.name for c in v.contributions]
    assert names == [
        "green_dominance", "green_red_ratio", "natural_variation",
        "texture", "shape", "distribution_spread", "gradient_band",
    ]
    assert v.score == pytest.approx(sum(c.score for c in v.contributions))
    assert v.is_valid
    assert 0.0 <= v.confidence <= 1.0


def test_striped_leaf_passes_verification(make_buffer):
    v = verify_leaf(extract_features(make_buffer(striped_leaf_rgb())))
    assert v.is_valid
    assert v.score == pytest.approx(0.748, abs=0.01)
    assert v.confidence > 0.85


@pytest.mark.parametrize("rgb", [(10, 10, 200), (0, 0, 0), (0, 0, 255)])
def test_blue_and_black_images_fail_verification(make_buffer, rgb):
    v = verify_leaf(extract_features(make_buffer(solid_rgb(rgb))))
    assert not v.is_valid
    assert 0.0 <= v.confidence <= 1.0


def test_flat_green_card_lacks_leaf_texture(make_buffer):
    # hijau kuat tapi tanpa variasi/tekstur: hanya cek dominansi & rasio yang terpicu
    v = verify_leaf(extract_features(make_buffer(solid_rgb((34, 139, 34)))))
    assert [c.name for c in v.contributions] == ["green_dominance", "green_red_ratio"]
    assert not v.is_valid
