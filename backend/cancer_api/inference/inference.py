import io
import uuid
from datetime import datetime, timezone

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from cancer_api.errors import ImageDecodeError
from cancer_api.inference.loader import ModelHandle
from cancer_api.schemas import PredictionRecord

# =========================
# Constants
# =========================

INPUT_SIZE = (224, 224)
THRESHOLD = 0.5

CANCER = "Cancer"
NON_CANCER = "Non-cancer"

SUGGESTIONS = {
    CANCER: "Segera periksa ke dokter!",
    NON_CANCER: "Penyakit kanker tidak terdeteksi.",
}

# =========================
# Preprocessing
# =========================

def read_image(data: bytes) -> np.ndarray:
    try:
        image = Image.open(io.BytesIO(data)).convert("RGB")
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageDecodeError(str(e)) from e
    return np.array(image)


def preprocess_image(data: bytes) -> np.ndarray:
    """Decode image bytes into a float32 tensor shaped (1, 224, 224, 3)."""
    img = read_image(data)
    resized = cv2.resize(img, INPUT_SIZE, interpolation=cv2.INTER_NEAREST)
    return np.expand_dims(resized, axis=0).astype(np.float32)

# =========================
# Prediction
# =========================

def predict_probability(handle: ModelHandle, tensor: np.ndarray) -> float:
    outputs = handle.session.run(None, {handle.input_name: tensor})
    return float(np.ravel(outputs[0])[0])


def format_result(probability: float) -> PredictionRecord:
    result = CANCER if probability > THRESHOLD else NON_CANCER
    created_at = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return PredictionRecord(
        id=str(uuid.uuid4()),
        result=result,
        suggestion=SUGGESTIONS[result],
        createdAt=created_at.replace("+00:00", "Z"),
    )
