# backend/cancer_api/monitoring/metrics.py

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import APIRouter, Response

router = APIRouter()

# Metric Definitions
REQUEST_COUNT = Counter("request_count", "Total API requests", ["method", "endpoint"])
REQUEST_LATENCY = Histogram("request_latency_seconds", "API request latency", ["method", "endpoint"])
PREDICTION_COUNT = Counter("prediction_count", "Successful predictions by result", ["result"])

# /metrics route for Prometheus scraping
@router.get("/metrics")
async def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
