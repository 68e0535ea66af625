# grapeleaf/models/prediction.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple

NOT_A_GRAPE_LEAF = "Not a Grape Leaf"
ANALYSIS_FAILED = "Analysis Failed"


class Condition(Enum):
    # Urutan enum = urutan tie-break di arbiter (yang pertama menang)
    HEALTHY = "Healthy"
    BLACK_ROT = "Black Rot"
    BLACK_MEASLE = "Black Measle"

    @property
    def label(self) -> str:
        return self.value

    @property
    def is_disease(self) -> bool:
        return self is not Condition.HEALTHY


# Semua label yang boleh keluar di PredictionResult.disease
VALID_LABELS = tuple(c.label for c in Condition) + (NOT_A_GRAPE_LEAF, ANALYSIS_FAILED)


@dataclass(frozen=True)
class Contribution:
    """Satu cek heuristik yang terpicu: bobot skor dan faktor kekuatannya."""
    name: str
    score: float
    factor: float


@dataclass(frozen=True)
class LeafVerification:
    is_valid: bool
    confidence: float
    score: float = 0.0
    contributions: Tuple[Contribution, ...] = ()


@dataclass(frozen=True)
class ConditionScores:
    healthy: float
    black_rot: float
    black_measle: float

    def get(self, condition: Condition) -> float:
        return {
            Condition.HEALTHY: self.healthy,
            Condition.BLACK_ROT: self.black_rot,
            Condition.BLACK_MEASLE: self.black_measle,
        }[condition]

    def items(self) -> Iterator[Tuple[Condition, float]]:
        for condition in Condition:
            yield condition, self.get(condition)

    def as_dict(self) -> Dict[str, float]:
        return {c.label: float(s) for c, s in self.items()}


@dataclass(frozen=True)
class ClassificationResult:
    condition: Condition
    confidence: float


@dataclass(frozen=True)
class GeoLocation:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class PredictionResult:
    disease: str
    confidence: float
    recommendations: str
    scores: Optional[Dict[str, float]] = field(default=None, compare=False)

    @property
    def is_leaf(self) -> bool:
        return self.disease not in (NOT_A_GRAPE_LEAF, ANALYSIS_FAILED)

    def to_dict(self) -> dict:
        return {
            "disease": self.disease,
            "confidence": float(self.confidence),
            "recommendations": self.recommendations,
        }

    def to_scan_payload(self, location: Optional[GeoLocation] = None) -> dict:
        """
        Bentuk payload untuk layer persistence eksternal (tabel scans).
        Lokasi hanya diteruskan, tidak dipakai oleh engine.
        """
        return {
            "disease_detected": self.disease,
            "confidence_score": float(self.confidence),
            "recommendations": self.recommendations,
            "location_lat": location.latitude if location else None,
            "location_lng": location.longitude if location else None,
        }
