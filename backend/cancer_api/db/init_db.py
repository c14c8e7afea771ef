# backend/cancer_api/db/init_db.py
import logging

from cancer_api.db.session import engine
from cancer_api.db.models import Base, PredictionDocument  # noqa: F401  registers the table

logger = logging.getLogger(__name__)

def init_db(bind=None):
    logger.info("[DB INIT] Creating tables...")
    Base.metadata.create_all(bind=bind or engine)
    logger.info("[DB INIT] Done.")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
