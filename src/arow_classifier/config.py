"""Configuration management for the classifier."""

from __future__ import annotations

from pathlib import Path
import tomllib

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel):
    """Logging configuration settings."""

    # Logging severity threshold (INFO/DEBUG/etc.).
    level: str = Field(default="INFO", description="Logging level")
    # Emit JSON if True; otherwise emit a human-readable format.
    json_format: bool = Field(default=True, description="Emit JSON logs")
    # Optional file path for log output; if None, logs go to stderr.
    log_file: str | None = Field(default=None, description="Optional log file path")
    # Maximum size (bytes) before log rotation.
    max_bytes: int = Field(default=1_000_000, ge=1, description="Max log file size before rotation")
    # Number of backup files to retain.
    backup_count: int = Field(default=3, ge=0, description="Number of rotated log files to keep")


class ModelConfig(BaseModel):
    """Parameters for a freshly created model."""

    dimension: int = Field(default=2**20, ge=1, description="Number of features")
    r: float = Field(default=0.1, gt=0.0, allow_inf_nan=False, description="Regularization hyperparameter")


class ArowSettings(BaseSettings):
    """Configuration settings loaded from env or optional TOML."""

    # Environment keys use AROW_ prefix and "__" nesting, e.g. AROW_MODEL__R.
    model_config = SettingsConfigDict(env_prefix="AROW_", env_nested_delimiter="__", extra="ignore")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    model: ModelConfig = Field(default_factory=ModelConfig)

    @classmethod
    def from_toml(cls, path: str | Path) -> "ArowSettings":
        data = tomllib.loads(Path(path).read_text())
        return cls.model_validate(data)
