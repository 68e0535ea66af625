# grapeleaf/ml/classification/arbiter.py
from grapeleaf.models.prediction import ClassificationResult, ConditionScores

HIGH_LEAF_CONFIDENCE = 0.85
HIGH_LEAF_BOOST = 1.08
HIGH_LEAF_CAP = 0.98

MID_LEAF_CONFIDENCE = 0.75
MID_LEAF_BOOST = 1.03
MID_LEAF_CAP = 0.95

CONFIDENCE_FLOOR = 0.72


def boost_confidence(score: float, leaf_confidence: float) -> float:
    """Naikkan confidence sesuai keyakinan verifikasi daun, lalu terapkan floor."""
    confidence = score
    if leaf_confidence > HIGH_LEAF_CONFIDENCE:
        confidence = min(confidence * HIGH_LEAF_BOOST, HIGH_LEAF_CAP)
    elif leaf_confidence > MID_LEAF_CONFIDENCE:
        confidence = min(confidence * MID_LEAF_BOOST, MID_LEAF_CAP)
    return max(confidence, CONFIDENCE_FLOOR)


def classify(scores: ConditionScores, leaf_confidence: float) -> ClassificationResult:
    """
    Pilih kondisi dengan skor tertinggi. Seri -> yang duluan di enum Condition
    (Healthy, Black Rot, Black Measle).
    """
    best_condition, best_score = None, None
    for condition, score in scores.items():
        if best_score is None or score > best_score:
            best_condition, best_score = condition, score

    return ClassificationResult(
        condition=best_condition,
        confidence=boost_confidence(best_score, leaf_confidence),
    )
