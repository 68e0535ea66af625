# grapeleaf/ml/recommendation/disease_info.py
from types import MappingProxyType

from grapeleaf.models.prediction import Condition

DISEASE_INFO = MappingProxyType({
    Condition.BLACK_ROT: MappingProxyType({
        "description": "A serious fungal disease causing brown to black circular lesions on grape leaves",
        "treatment": (
            "Apply copper-based fungicides (copper sulfate or copper oxychloride) every 10-14 days "
            "during wet periods. Remove and destroy infected plant material immediately. "
            "Increase air circulation around vines."
        ),
        "prevention": (
            "Ensure good air circulation, avoid overhead watering, prune properly for sunlight "
            "penetration, plant resistant varieties, and maintain proper spacing between vines."
        ),
        "severity": "High",
        "urgency": "Immediate action required",
    }),
    Condition.BLACK_MEASLE: MappingProxyType({
        "description": (
            "A fungal disease causing small black spots that eventually form larger lesions on grape leaves"
        ),
        "treatment": (
            "Apply preventive fungicide sprays containing captan, myclobutanil, or propiconazole. "
            "Remove infected leaves and improve air circulation. Monitor closely for spread."
        ),
        "prevention": (
            "Maintain proper vine spacing, avoid overhead irrigation, apply preventive fungicide "
            "treatments during bud break, and ensure good drainage."
        ),
        "severity": "Medium",
        "urgency": "Treatment recommended within 48 hours",
    }),
    Condition.HEALTHY: MappingProxyType({
        "description": "No disease detected - grape leaf appears healthy and vigorous",
        "treatment": (
            "Continue current care routine and monitor regularly for early disease detection. "
            "Maintain optimal growing conditions."
        ),
        "prevention": (
            "Maintain good vineyard practices including proper watering, balanced fertilization, "
            "regular pruning, and weekly monitoring for early disease signs."
        ),
        "severity": "None",
        "urgency": "Routine monitoring",
    }),
})


def disease_catalog():
    """List katalog kondisi (urutan enum), siap di-JSON-kan."""
    return [
        {"name": condition.label, **DISEASE_INFO[condition]}
        for condition in Condition
    ]
