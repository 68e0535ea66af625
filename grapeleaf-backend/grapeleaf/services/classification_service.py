# grapeleaf/services/classification_service.py
import time
import uuid

from grapeleaf.core.config import Config
from grapeleaf.services.diagnosis_service import diagnose_image_bytes


def classify_uploaded_image(file_storage, location=None):
    """
    Dipanggil oleh endpoint:
    - baca bytes upload
    - jalankan pipeline diagnosis
    - kembalikan dict siap di-JSON-kan (prediction + payload scan untuk disimpan pemanggil)
    """
    image_bytes = file_storage.read()

    # Delay buatan (simulasi latensi inference), default mati
    if Config.SIMULATED_LATENCY_SECONDS > 0:
        time.sleep(Config.SIMULATED_LATENCY_SECONDS)

    prediction = diagnose_image_bytes(image_bytes)

    # Engine tidak menyimpan apa-apa, ID random saja (UUID)
    analysis_id = str(uuid.uuid4())

    return {
        "id": analysis_id,
        "prediction": prediction.to_dict(),
        "scan": prediction.to_scan_payload(location),
    }
