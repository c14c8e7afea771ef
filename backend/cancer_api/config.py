# backend/cancer_api/config.py
from functools import lru_cache
from typing import Annotated, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    port: int = 3000
    model_bucket: str = "ml-model-bucket-dicoding"
    model_prefix: str = "models/model.onnx"
    model_local_path: str = "models/model.onnx"
    model_cache_reuse: bool = False
    aws_region: str = "us-east-1"
    database_url: str = "sqlite:///./predictions.db"
    cors_origins: Annotated[List[str], NoDecode] = ["*"]
    tracking_enabled: bool = False
    mlflow_tracking_uri: str = "http://localhost:5000"
    wandb_project: str = "cancer-predict-inference"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        # "model_" fields are ours, not pydantic's.
        protected_namespaces=(),
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value):
        # CORS_ORIGINS="https://a.example,https://b.example"
        if isinstance(value, str):
            return [o.strip() for o in value.split(",") if o.strip()]
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()
