# backend/cancer_api/inference/loader.py
import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Optional

import onnxruntime as ort

from cancer_api.config import Settings
from cancer_api.errors import ModelNotFoundError
from cancer_api.utils.s3 import download_object, get_s3_client, list_keys

logger = logging.getLogger(__name__)

PREFERRED_PROVIDERS = ["CUDAExecutionProvider", "CPUExecutionProvider"]


@dataclass(frozen=True)
class ModelHandle:
    """Loaded model shared read-only by every request."""

    session: Any
    input_name: str
    source: str


def open_onnx_session(model_path: str):
    available = ort.get_available_providers()
    providers = [p for p in PREFERRED_PROVIDERS if p in available] or available
    return ort.InferenceSession(model_path, providers=providers)


def select_model_key(keys: list) -> str:
    return next((k for k in keys if k.endswith(".onnx")), keys[0])


def load_model(
    settings: Settings,
    s3=None,
    session_factory: Optional[Callable[[str], Any]] = None,
) -> ModelHandle:
    bucket, prefix = settings.model_bucket, settings.model_prefix
    s3 = s3 or get_s3_client(settings.aws_region)
    session_factory = session_factory or open_onnx_session

    logger.info("[MODEL] Looking for model under s3://%s/%s", bucket, prefix)
    keys = list_keys(s3, bucket, prefix)
    if not keys:
        raise ModelNotFoundError(f"Model not found in s3://{bucket}/{prefix}")

    key = select_model_key(keys)
    local_path = settings.model_local_path
    if settings.model_cache_reuse and os.path.exists(local_path):
        logger.info("[MODEL] Reusing cached model at %s", local_path)
    else:
        os.makedirs(os.path.dirname(local_path) or ".", exist_ok=True)
        download_object(s3, bucket, key, local_path)

    session = session_factory(local_path)
    input_name = session.get_inputs()[0].name
    source = f"s3://{bucket}/{key}"
    logger.info("[MODEL] Loaded %s (input=%s)", source, input_name)
    return ModelHandle(session=session, input_name=input_name, source=source)
