import os
import logging
from dataclasses import dataclass, field
from typing import List

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
]


@dataclass
class Config:
    data_dir: str = "data"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))


def load_config() -> Config:
    """Reads LANGREADER_* environment variables."""
    origins = os.environ.get("LANGREADER_CORS_ORIGINS")
    return Config(
        data_dir=os.environ.get("LANGREADER_DATA_DIR", "data"),
        log_level=os.environ.get("LANGREADER_LOG_LEVEL", "INFO").upper(),
        host=os.environ.get("LANGREADER_HOST", "127.0.0.1"),
        port=int(os.environ.get("LANGREADER_PORT", "8000")),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()] if origins else list(DEFAULT_CORS_ORIGINS),
    )


def configure_logging(config: Config):
    logging.basicConfig(level=config.log_level, format='%(asctime)s - %(levelname)s - %(message)s')
