import logging
import time
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import APIRouter, Depends, FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from cancer_api.config import get_settings
from cancer_api.db.init_db import init_db
from cancer_api.db.store import HistoryStore, get_store
from cancer_api.errors import (
    MissingInputError,
    ModelNotReadyError,
    PayloadTooLargeError,
    PredictionError,
    RetrievalError,
    ServiceError,
    UnexpectedFieldError,
)
from cancer_api.inference.inference import format_result, predict_probability, preprocess_image
from cancer_api.inference.loader import ModelHandle, load_model
from cancer_api.monitoring.metrics import (
    router as metrics_router,
    PREDICTION_COUNT,
    REQUEST_COUNT,
    REQUEST_LATENCY,
)
from cancer_api.schemas import HistoryResponse, PredictResponse
from cancer_api.tracking.logger import log_inference_metrics

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 1 * 1024 * 1024

router = APIRouter()


# =========================
# Dependencies
# =========================

def get_model_handle(request: Request) -> ModelHandle:
    handle = getattr(request.app.state, "model", None)
    if handle is None:
        raise ModelNotReadyError()
    return handle


async def read_upload(request: Request, image: Optional[UploadFile]) -> bytes:
    if image is None:
        raise MissingInputError()
    # Exactly one part may use the field; the parsed form is cached on the request.
    form = await request.form()
    if len(form.getlist("image")) > 1:
        raise UnexpectedFieldError("more than one image part")
    # One byte past the cap is enough to know the upload is too large.
    data = await image.read(MAX_UPLOAD_BYTES + 1)
    if len(data) > MAX_UPLOAD_BYTES:
        raise PayloadTooLargeError()
    return data


# =========================
# Routes
# =========================

@router.get("/health")
async def health_check(request: Request):
    handle = getattr(request.app.state, "model", None)
    return {
        "status": "healthy" if handle is not None else "unhealthy",
        "model_loaded": handle is not None,
        "model_source": handle.source if handle is not None else None,
    }


@router.post("/predict", response_model=PredictResponse)
async def predict(
    request: Request,
    image: Optional[UploadFile] = File(None),
    handle: ModelHandle = Depends(get_model_handle),
    store: HistoryStore = Depends(get_store),
):
    data = await read_upload(request, image)

    try:
        start = time.time()
        tensor = await run_in_threadpool(preprocess_image, data)
        probability = await run_in_threadpool(predict_probability, handle, tensor)
        latency = time.time() - start

        record = format_result(probability)
        await run_in_threadpool(store.put, record)
    except ServiceError:
        raise
    except Exception as e:
        logger.exception("[MODEL] Prediction failed")
        raise PredictionError(str(e)) from e

    PREDICTION_COUNT.labels(result=record.result).inc()
    await run_in_threadpool(log_inference_metrics, record.result, probability, latency, handle.source)

    return PredictResponse(data=record)


@router.get("/predict/histories", response_model=HistoryResponse)
def get_histories(store: HistoryStore = Depends(get_store)):
    try:
        entries = store.list_all()
    except ServiceError:
        raise
    except Exception as e:
        logger.exception("[DB] History listing failed")
        raise RetrievalError(str(e)) from e
    return HistoryResponse(data=entries)


# =========================
# Error envelope
# =========================

async def service_error_handler(request: Request, exc: ServiceError):
    logger.warning("[API] %s %s failed (%s): %s", request.method, request.url.path, exc.kind, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "fail", "message": exc.message},
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    # The only request input is the "image" form field.
    return await service_error_handler(request, MissingInputError(str(exc)))


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "fail", "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("[API] Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"status": "fail", "message": "Internal server error"},
    )


# =========================
# App factory
# =========================

def create_app(loader: Callable[..., ModelHandle] = load_model) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        settings = get_settings()
        app.state.model = None
        try:
            await run_in_threadpool(init_db)
        except SQLAlchemyError:
            # Store errors then surface per request as 500 / generic 400.
            logger.exception("[DB] Could not initialise the prediction store")
        try:
            app.state.model = await run_in_threadpool(loader, settings)
            logger.info("Server is running on http://localhost:%s", settings.port)
        except Exception:
            # Keep listening; /predict answers 503 until a restart loads a model.
            logger.exception("[MODEL] Error loading model from S3")
        yield

    app = FastAPI(title="Cancer Prediction API", lifespan=lifespan)

    # Register metrics route
    app.include_router(metrics_router)
    app.include_router(router)

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Prometheus middleware
    @app.middleware("http")
    async def prometheus_metrics_middleware(request: Request, call_next):
        method = request.method
        endpoint = request.url.path
        REQUEST_COUNT.labels(method=method, endpoint=endpoint).inc()
        start_time = time.time()
        response = await call_next(request)
        duration = time.time() - start_time
        REQUEST_LATENCY.labels(method=method, endpoint=endpoint).observe(duration)
        return response

    # Enable CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(get_settings().cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app


app = create_app()
