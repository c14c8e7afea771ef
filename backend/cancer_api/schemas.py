# backend/cancer_api/schemas.py
from typing import Any, Dict, List, Literal

from pydantic import BaseModel


class PredictionRecord(BaseModel):
    id: str
    result: Literal["Cancer", "Non-cancer"]
    suggestion: str
    createdAt: str


class PredictResponse(BaseModel):
    status: str = "success"
    message: str = "Model is predicted successfully"
    data: PredictionRecord


class HistoryEntry(BaseModel):
    id: str
    history: Dict[str, Any]


class HistoryResponse(BaseModel):
    status: str = "success"
    data: List[HistoryEntry]
