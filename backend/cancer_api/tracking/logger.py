import logging
import threading

import mlflow
import wandb

from cancer_api.config import get_settings

logger = logging.getLogger(__name__)

EXPERIMENT_NAME = "CancerPredict-Inference"

_tracking_ready = False
_tracking_lock = threading.Lock()


def _init_tracking(settings):
    global _tracking_ready
    with _tracking_lock:
        if _tracking_ready:
            return
        mlflow.set_tracking_uri(settings.mlflow_tracking_uri)
        mlflow.set_experiment(EXPERIMENT_NAME)
        wandb.init(project=settings.wandb_project, name="inference-logs")
        _tracking_ready = True


def log_inference_metrics(result: str, probability: float, latency: float, model_source: str) -> bool:
    """Send one prediction to MLflow and W&B. Returns False when tracking is off or failed."""
    settings = get_settings()
    if not settings.tracking_enabled:
        return False

    try:
        _init_tracking(settings)
        with mlflow.start_run(run_name=f"predict-{result}"):
            mlflow.log_param("model_source", model_source)
            mlflow.log_param("result", result)
            mlflow.log_metric("probability", probability)
            mlflow.log_metric("latency", latency)

        wandb.log({
            "result": result,
            "probability": probability,
            "latency": latency,
        })
    except Exception:
        # Tracking never fails the request.
        logger.exception("[TRACKING] Failed to log inference metrics")
        return False
    return True
