# grapeleaf/api/analyze_routes.py
import logging

from flask import Blueprint, request, jsonify

from grapeleaf.ml.recommendation.disease_info import disease_catalog
from grapeleaf.models.prediction import GeoLocation
from grapeleaf.services.classification_service import classify_uploaded_image

logger = logging.getLogger(__name__)

analyze_bp = Blueprint("analyze", __name__)


def _parse_location(form):
    """
    lat/lng opsional (diteruskan apa adanya ke payload scan).
    Return (GeoLocation | None, error | None).
    """
    lat_raw = (form.get("lat") or "").strip()
    lng_raw = (form.get("lng") or "").strip()
    if not lat_raw and not lng_raw:
        return None, None
    if not lat_raw or not lng_raw:
        return None, "lat dan lng harus diisi berpasangan"

    try:
        lat, lng = float(lat_raw), float(lng_raw)
    except ValueError:
        return None, "lat/lng harus berupa angka"

    if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
        return None, "lat/lng di luar rentang"
    return GeoLocation(latitude=lat, longitude=lng), None


@analyze_bp.route("/analyze", methods=["POST"])
def analyze():
    """
    Endpoint utama untuk diagnosis:
    - menerima file "image" (multipart/form-data), opsional field "lat" & "lng"
    - mengembalikan JSON berisi prediction (disease, confidence, recommendations)
      dan payload scan untuk disimpan oleh layanan lain
    """
    if "image" not in request.files:
        return jsonify({"error": "No image file provided"}), 400

    file = request.files["image"]

    if file.filename == "":
        return jsonify({"error": "Empty filename"}), 400

    location, err = _parse_location(request.form)
    if err:
        return jsonify({"error": err}), 400

    try:
        result = classify_uploaded_image(file, location)
        return jsonify(result), 200
    except Exception as e:
        logger.exception("Analyze gagal")
        return jsonify({"error": "Failed to analyze image", "detail": str(e)}), 500


@analyze_bp.route("/diseases", methods=["GET"])
def list_diseases():
    return jsonify({"diseases": disease_catalog()}), 200


@analyze_bp.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok"}), 200
