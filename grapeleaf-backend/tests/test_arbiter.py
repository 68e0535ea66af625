import pytest

from grapeleaf.ml.classification.arbiter import boost_confidence, classify
from grapeleaf.models.prediction import Condition, ConditionScores


@pytest.mark.parametrize("scores,expected", [
    (ConditionScores(0.8, 0.8, 0.8), Condition.HEALTHY),
    (ConditionScores(0.5, 0.9, 0.9), Condition.BLACK_ROT),
    (ConditionScores(0.5, 0.8, 0.9), Condition.BLACK_MEASLE),
    (ConditionScores(0.0, 0.0, 0.0), Condition.HEALTHY),
])
def test_highest_score_wins_first_enumerated_on_ties(scores, expected):
    assert classify(scores, leaf_confidence=0.5).condition is expected


@pytest.mark.parametrize("score,leaf,expected", [
    (0.90, 0.90, 0.90 * 1.08),
    (0.95, 0.90, 0.98),          # cap band tinggi
    (0.90, 0.85, 0.90 * 1.03),   # 0.85 masuk band menengah
    (0.95, 0.80, 0.95),          # cap band menengah
    (0.90, 0.75, 0.90),          # 0.75 tidak di-boost
    (0.50, 0.95, 0.72),          # floor
])
def test_leaf_confidence_boost_and_floor(score, leaf, expected):
    assert boost_confidence(score, leaf) == pytest.approx(expected)


def test_confidence_stays_in_unit_interval():
    for leaf in (0.0, 0.76, 0.86, 1.0):
        result = classify(ConditionScores(0.95, 0.2, 0.1), leaf)
        assert 0.72 <= result.confidence <= 0.98
