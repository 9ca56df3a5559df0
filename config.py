"""
Application configuration.

Settings are grouped by concern and loaded from environment variables
(prefix CAPNORM_, nested groups separated by "__") or a .env file, e.g.
CAPNORM_SYSTEM__LOG_LEVEL=DEBUG or CAPNORM_NORMALIZATION__QUALITY=90.
"""

import os
import tempfile
from functools import lru_cache
from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.constants import CaptureConstants, NormalizationConstants, SystemConstants


class SystemSettings(BaseModel):
    """Process-wide settings"""

    log_level: str = SystemConstants.LOG_LEVEL_DEFAULT
    debug: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {value}")
        return level


class APISettings(BaseModel):
    """HTTP server settings"""

    host: str = SystemConstants.DEFAULT_HOST
    port: int = Field(SystemConstants.DEFAULT_PORT, ge=1, le=65535)
    cors_enabled: bool = True
    cors_origins: List[str] = ["*"]


class CaptureSettings(BaseModel):
    """Still capture settings"""

    cache_dir: str = Field(
        default_factory=lambda: os.path.join(
            tempfile.gettempdir(), CaptureConstants.CACHE_DIR_NAME
        )
    )
    file_prefix: str = CaptureConstants.TEMPORARY_FILE_PREFIX
    file_suffix: str = CaptureConstants.TEMPORARY_FILE_SUFFIX
    capture_format: str = CaptureConstants.CAPTURE_FORMAT
    capture_quality: int = Field(CaptureConstants.CAPTURE_QUALITY, ge=1, le=100)
    max_workers: int = Field(CaptureConstants.DEFAULT_MAX_WORKERS, ge=1)


class NormalizationSettings(BaseModel):
    """Post-capture normalization settings"""

    aspect_width: int = Field(NormalizationConstants.ASPECT_WIDTH, gt=0)
    aspect_height: int = Field(NormalizationConstants.ASPECT_HEIGHT, gt=0)
    output_width: int = Field(NormalizationConstants.OUTPUT_WIDTH, gt=0)
    output_height: int = Field(NormalizationConstants.OUTPUT_HEIGHT, gt=0)
    output_format: str = NormalizationConstants.OUTPUT_FORMAT
    quality: int = Field(
        NormalizationConstants.MAX_QUALITY,
        ge=NormalizationConstants.MIN_QUALITY,
        le=NormalizationConstants.MAX_QUALITY,
    )

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, value: str) -> str:
        fmt = value.upper()
        if fmt not in NormalizationConstants.SUPPORTED_OUTPUT_FORMATS:
            raise ValueError(
                f"Unsupported output format {value}, expected one of "
                f"{NormalizationConstants.SUPPORTED_OUTPUT_FORMATS}"
            )
        return fmt


class Settings(BaseSettings):
    """Root settings object"""

    model_config = SettingsConfigDict(
        env_prefix="CAPNORM_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    environment: str = "development"
    system: SystemSettings = SystemSettings()
    api: APISettings = APISettings()
    capture: CaptureSettings = CaptureSettings()
    normalization: NormalizationSettings = NormalizationSettings()

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict view of the configuration"""
        return self.model_dump()


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
