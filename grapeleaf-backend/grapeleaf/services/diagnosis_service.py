# grapeleaf/services/diagnosis_service.py
"""
Pipeline inti: citra -> fitur -> verifikasi daun -> skor kondisi -> arbiter -> rekomendasi.

Semua jalur gagal berakhir sebagai PredictionResult yang valid
("Analysis Failed"), jadi pemanggil tidak perlu menangani exception.
"""
import logging

from PIL import Image

from grapeleaf.core.config import Config
from grapeleaf.core.errors import ComputationError, ImageDecodeError
from grapeleaf.ml.classification.arbiter import classify
from grapeleaf.ml.classification.scorers import score_conditions
from grapeleaf.ml.features.extractor import extract_features
from grapeleaf.ml.recommendation.composer import (
    analysis_failed_recommendations,
    compose_recommendations,
    not_a_leaf_recommendations,
)
from grapeleaf.ml.verification.leaf_check import verify_leaf
from grapeleaf.models.features import PixelBuffer
from grapeleaf.models.prediction import ANALYSIS_FAILED, NOT_A_GRAPE_LEAF, PredictionResult
from grapeleaf.utils.image_io import load_image_from_bytes, render_to_grid

logger = logging.getLogger(__name__)


def analysis_failed_result() -> PredictionResult:
    return PredictionResult(
        disease=ANALYSIS_FAILED,
        confidence=0.0,
        recommendations=analysis_failed_recommendations(),
    )


def diagnose_pixels(buffer: PixelBuffer) -> PredictionResult:
    """
    Jalankan pipeline pada PixelBuffer yang sudah dirender.
    ComputationError tetap dilempar di sini; ditangani oleh diagnose_image*.
    """
    features = extract_features(buffer)
    verification = verify_leaf(features)

    if not verification.is_valid:
        logger.info(
            "Bukan daun anggur (leaf_score=%.3f, confidence=%.3f)",
            verification.score, verification.confidence,
        )
        return PredictionResult(
            disease=NOT_A_GRAPE_LEAF,
            confidence=verification.confidence,
            recommendations=not_a_leaf_recommendations(verification.confidence),
        )

    scores = score_conditions(features)
    result = classify(scores, verification.confidence)

    if Config.LOG_CONDITION_SCORES:
        logger.debug("Skor kondisi: %s", scores.as_dict())
    logger.info("Diagnosis: %s (%.3f)", result.condition.label, result.confidence)

    return PredictionResult(
        disease=result.condition.label,
        confidence=result.confidence,
        recommendations=compose_recommendations(result.condition, result.confidence),
        scores=scores.as_dict(),
    )


def diagnose_image(img: Image.Image) -> PredictionResult:
    try:
        return diagnose_pixels(render_to_grid(img))
    except (ImageDecodeError, ComputationError) as e:
        logger.warning("Analisis gagal: %s", e)
        return analysis_failed_result()


def diagnose_image_bytes(image_bytes: bytes) -> PredictionResult:
    """Entry point utama: bytes mentah (jpg/png/...) -> PredictionResult."""
    try:
        img = load_image_from_bytes(image_bytes)
    except ImageDecodeError as e:
        logger.warning("Analisis gagal: %s", e)
        return analysis_failed_result()
    return diagnose_image(img)
