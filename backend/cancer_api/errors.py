# backend/cancer_api/errors.py
"""
Error taxonomy for the prediction API.

Every error a client can observe subclasses ServiceError and carries the
HTTP status and the fixed message sent back in the ``{"status": "fail"}``
envelope. ``kind`` only goes to the server log.
"""

GENERIC_PREDICTION_MESSAGE = "Terjadi kesalahan dalam melakukan prediksi"


class ServiceError(Exception):
    status_code = 400
    message = GENERIC_PREDICTION_MESSAGE
    kind = "service failure"


class MissingInputError(ServiceError):
    message = "Image is required"
    kind = "missing input"


class PayloadTooLargeError(ServiceError):
    status_code = 413
    message = "Payload content length greater than maximum allowed: 1000000"
    kind = "payload too large"


class PredictionError(ServiceError):
    kind = "prediction failure"


class ImageDecodeError(PredictionError):
    kind = "image decode failure"


class UnexpectedFieldError(PredictionError):
    kind = "unexpected field"


class PersistenceError(PredictionError):
    # Same response as any other prediction failure; only the log differs.
    kind = "persistence failure"


class RetrievalError(ServiceError):
    status_code = 500
    message = "Failed to fetch prediction history"
    kind = "retrieval failure"


class ModelNotReadyError(ServiceError):
    status_code = 503
    message = "Model is not ready"
    kind = "model not ready"


class ModelNotFoundError(Exception):
    """Raised at startup when the bucket holds nothing under the model prefix."""
