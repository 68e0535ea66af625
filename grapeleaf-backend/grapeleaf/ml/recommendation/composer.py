# grapeleaf/ml/recommendation/composer.py
from grapeleaf.models.prediction import Condition
from .disease_info import DISEASE_INFO

# (batas bawah eksklusif, nama band, header)
CONFIDENCE_BANDS = (
    (0.92, "high", "🔴 HIGH CONFIDENCE DETECTION"),
    (0.85, "confident", "🟡 CONFIDENT DETECTION"),
    (0.75, "probable", "🟠 PROBABLE DETECTION"),
)
FALLBACK_BAND = ("possible", "⚪ POSSIBLE DETECTION")

# confidence di atas ini -> langsung mulai treatment dalam 24 jam
TREAT_NOW_CONFIDENCE = 0.85

DISEASE_ACTIONS = (
    "Isolate affected plants immediately",
    "Document the affected area with photos",
    "Monitor surrounding vines daily",
    "Consult with agricultural extension services",
    "Consider professional laboratory confirmation",
)
HEALTHY_ACTIONS = (
    "Continue weekly monitoring",
    "Maintain current care practices",
    "Document healthy growth patterns",
    "Check for early signs of stress",
)

NOT_A_LEAF_TIPS = (
    "The leaf fills most of the frame",
    "Good lighting conditions",
    "Focus is sharp and clear",
    "Minimal background interference",
)
ANALYSIS_FAILED_TIPS = (
    "A clearer, high-resolution photo",
    "Better lighting conditions",
    "The grape leaf clearly visible",
    "Minimal camera shake",
)


def format_percent(confidence: float) -> str:
    return f"{confidence * 100:.1f}%"


def _bullets(lines) -> str:
    return "\n".join(f"• {line}" for line in lines)


def confidence_band(confidence: float) -> str:
    for lower, name, _ in CONFIDENCE_BANDS:
        if confidence > lower:
            return name
    return FALLBACK_BAND[0]


def confidence_header(confidence: float) -> str:
    header = FALLBACK_BAND[1]
    for lower, _, text in CONFIDENCE_BANDS:
        if confidence > lower:
            header = text
            break
    return f"{header} ({format_percent(confidence)})"


def action_list(condition: Condition, confidence: float):
    if not condition.is_disease:
        return HEALTHY_ACTIONS
    if confidence > TREAT_NOW_CONFIDENCE:
        return DISEASE_ACTIONS + ("Begin treatment protocol within 24 hours",)
    return DISEASE_ACTIONS + ("Verify diagnosis before starting treatment",)


def compose_recommendations(condition: Condition, confidence: float) -> str:
    """
    (kondisi, confidence) -> teks rekomendasi multi-seksi.
    Kondisi di luar katalog = bug pemanggil, dibiarkan KeyError.
    """
    info = DISEASE_INFO[condition]

    sections = [
        confidence_header(confidence),
        f"CONDITION: {condition.label}\nURGENCY: {info['urgency']}",
        f"DESCRIPTION:\n{info['description']}",
        f"TREATMENT:\n{info['treatment']}",
        f"PREVENTION:\n{info['prevention']}",
    ]

    if condition.is_disease:
        title = "🚨 IMMEDIATE ACTIONS:"
    else:
        title = "✅ MAINTENANCE RECOMMENDATIONS:"
    sections.append(f"{title}\n{_bullets(action_list(condition, confidence))}")

    return "\n\n".join(sections)


def not_a_leaf_recommendations(confidence: float) -> str:
    return (
        f"Confidence: {format_percent(confidence)}\n\n"
        "Please capture an image of a grape leaf for accurate disease detection. Ensure:\n"
        f"{_bullets(NOT_A_LEAF_TIPS)}"
    )


def analysis_failed_recommendations() -> str:
    return f"Unable to analyze image. Please try again with:\n{_bullets(ANALYSIS_FAILED_TIPS)}"
