from __future__ import annotations
import os
from dataclasses import dataclass

@dataclass(frozen=True)
class StorageConfig:
    data_root: str


def get_storage_config() -> StorageConfig:
    return StorageConfig(data_root=os.getenv("DATA_ROOT", "./roi_data"))


@dataclass(frozen=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 5000
    frontend_url: str = "http://localhost:3000"


def get_server_config() -> ServerConfig:
    return ServerConfig(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
        frontend_url=os.getenv("FRONTEND_URL", "http://localhost:3000"),
    )


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    fmt: str = "text"  # text|json


def get_logging_config() -> LoggingConfig:
    return LoggingConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        fmt=os.getenv("LOG_FORMAT", "text"),
    )
