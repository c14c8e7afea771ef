# backend/cancer_api/db/store.py
import logging
from typing import Any, Dict, List

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cancer_api.db.models import PredictionDocument
from cancer_api.db.session import get_db
from cancer_api.errors import PersistenceError, RetrievalError
from cancer_api.schemas import PredictionRecord

logger = logging.getLogger(__name__)


class HistoryStore:
    """Prediction history kept as one JSON document per record id."""

    def __init__(self, db: Session):
        self.db = db

    def put(self, record: PredictionRecord) -> None:
        try:
            self.db.merge(PredictionDocument(id=record.id, body=record.model_dump()))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("[DB] Failed to store prediction %s: %s", record.id, e)
            raise PersistenceError(str(e)) from e

    def list_all(self) -> List[Dict[str, Any]]:
        try:
            rows = self.db.query(PredictionDocument).all()
        except SQLAlchemyError as e:
            logger.error("[DB] Failed to read prediction history: %s", e)
            raise RetrievalError(str(e)) from e
        return [{"id": row.id, "history": row.body} for row in rows]


def get_store(db: Session = Depends(get_db)) -> HistoryStore:
    return HistoryStore(db)
