# grapeleaf/ml/features/extractor.py
import math
from dataclasses import fields, is_dataclass

import numpy as np

from grapeleaf.core.errors import ComputationError
from grapeleaf.models.features import FeatureSet, PixelBuffer
from .color import channel_samples, color_statistics
from .morphology import grayscale, morphology_features
from .texture import texture_features


def _check_finite(record, path: str):
    for f in fields(record):
        value = getattr(record, f.name)
        name = f"{path}.{f.name}"
        if is_dataclass(value):
            _check_finite(value, name)
        elif not math.isfinite(value):
            raise ComputationError(f"Fitur {name} tidak finite: {value!r}")


def extract_features(buffer: PixelBuffer) -> FeatureSet:
    """
    PixelBuffer -> FeatureSet (warna, tekstur, morfologi).
    Murni komputasi: tidak ada I/O dan tidak ada state yang dibagi antar panggilan.
    """
    try:
        with np.errstate(divide="raise", invalid="raise", over="raise"):
            red, green, blue = channel_samples(buffer)
            color = color_statistics(red.values, green.values, blue.values)
            texture = texture_features(green.spatial)
            morphology = morphology_features(grayscale(buffer))
    except (FloatingPointError, ZeroDivisionError) as e:
        raise ComputationError(f"Ekstraksi fitur gagal: {e}") from e

    features = FeatureSet(color=color, texture=texture, morphology=morphology)
    _check_finite(features, "features")
    return features
