# grapeleaf/core/config.py
import os
from dotenv import load_dotenv

# Load .env sekali di awal aplikasi
load_dotenv()


def _env_bool(name: str, default: str = "0") -> bool:
    v = str(os.environ.get(name, default)).strip().lower()
    return v in ("1", "true", "yes", "y", "on")


class Config:
    # =========================
    # APP / SECURITY
    # =========================
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key")

    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")

    # Upload limit, dipakai Flask sebagai MAX_CONTENT_LENGTH
    MAX_UPLOAD_MB = int(os.environ.get("MAX_UPLOAD_MB", 16))
    MAX_CONTENT_LENGTH = MAX_UPLOAD_MB * 1024 * 1024

    # =========================
    # LOGGING
    # =========================
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT = os.environ.get(
        "LOG_FORMAT",
        "%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    # =========================
    # ANALYSIS
    # =========================
    # Semua citra dirender ke grid persegi ini sebelum ekstraksi fitur
    ANALYSIS_SIZE = int(os.environ.get("ANALYSIS_SIZE", 512))

    # Delay buatan di endpoint upload (0 = mati). Tidak dipakai di pipeline inti.
    SIMULATED_LATENCY_SECONDS = float(os.environ.get("SIMULATED_LATENCY_SECONDS", 0.0))

    # Sertakan skor tiap kondisi di log (debug tuning heuristik)
    LOG_CONDITION_SCORES = _env_bool("LOG_CONDITION_SCORES", "0")
