# lexrel/shared/config.py
from enum import Enum
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class AppEnv(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"

class Settings(BaseSettings):
    """
    Central Configuration Registry.
    Strictly typed and validated via Pydantic.

    These values only provide defaults for the DI container; every component
    can also be constructed directly with explicit arguments.
    """

    # --- Application Meta ---
    APP_NAME: str = "lexrel"
    APP_ENV: AppEnv = AppEnv.DEVELOPMENT
    DEBUG: bool = False

    # --- Logging & Observability ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    OTEL_SERVICE_NAME: str = "lexrel"
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[str] = None

    # --- Embedding Source ---
    # Folder holding dict.bin + vectors.bin
    EMBEDDINGS_PATH: str = "data/glove"
    LOAD_VECTORS_IN_MEMORY: bool = False

    # --- Neighbour Search ---
    BUILD_NEIGHBOR_INDEX: bool = False
    KD_TREE_LEAF_SIZE: int = Field(16, ge=1)

    # --- Relatedness ---
    RELATEDNESS_THRESHOLD: float = Field(0.70, ge=0.0, le=1.0)
    MAX_RELATED_WORDS: int = Field(10, ge=1)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
