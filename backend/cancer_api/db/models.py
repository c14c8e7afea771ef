from sqlalchemy import JSON, Column, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()

class PredictionDocument(Base):
    __tablename__ = "predictions"

    id = Column(String, primary_key=True, index=True)
    body = Column(JSON, nullable=False)
