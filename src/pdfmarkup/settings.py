"""Runtime settings loaded from `.env` and environment variables."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pdfmarkup.exceptions import SettingsError
from pdfmarkup.typing.enums import ImageFormat

logger = logging.getLogger(__name__)

DEFAULT_RENDER_WIDTH = 800
DEFAULT_MAX_FILE_SIZE = 100 * 1024 * 1024


class Settings(BaseSettings):
    """Package settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    project_name: str = "pdfmarkup"
    app_env: str = Field(
        default="dev",
        validation_alias="APP_ENV",
        description="Application environment, e.g. 'dev', 'prod'.",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level, e.g. 'INFO', 'DEBUG'.",
    )
    log_json: bool = Field(
        default=True,
        validation_alias="LOG_JSON",
        description="Enable JSON formatted logs.",
    )
    log_file: str | None = Field(
        default=None,
        validation_alias="LOG_FILE",
        description="File path for log output.",
    )

    render_width: int = Field(
        default=DEFAULT_RENDER_WIDTH,
        gt=0,
        validation_alias="RENDER_WIDTH",
        description="Pixel width pages are rendered at; defines display space.",
    )
    render_image_format: ImageFormat = Field(
        default=ImageFormat.PNG,
        validation_alias="RENDER_IMAGE_FORMAT",
        description="Image format used for rendered pages.",
    )
    output_dir: str = Field(
        default="results",
        validation_alias="OUTPUT_DIR",
        description="Directory receiving produced documents.",
    )
    max_file_size: int = Field(
        default=DEFAULT_MAX_FILE_SIZE,
        gt=0,
        validation_alias="MAX_FILE_SIZE",
        description="Largest accepted input document, in bytes.",
    )

    @field_validator("render_image_format", mode="before")
    @classmethod
    def _parse_image_format(cls, value: object) -> object:
        """Accept image format names in any case.

        Args:
            value (object): Raw field value.

        Returns:
            object: Parsed `ImageFormat`, or the value untouched when it is not a string.
        """
        if isinstance(value, str):
            return ImageFormat.from_str(value)
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance.

    Raises:
        SettingsError: If settings cannot be loaded or validated.

    Returns:
        Settings: The loaded settings instance.
    """
    try:
        return Settings()
    except Exception as exc:
        if _is_missing_settings_error(exc):
            ensure_env_file_exists()
            try:
                return Settings()
            except Exception as retry_exc:
                raise SettingsError(exc=retry_exc) from retry_exc
        raise SettingsError(exc=exc) from exc


def ensure_env_file_exists(
    *,
    env_path: Path = Path(".env"),
    template_path: Path = Path(".env.template"),
) -> None:
    """Create `.env` from template when missing.

    Args:
        env_path (Path): Target environment file path.
        template_path (Path): Template file path.
    """
    if env_path.exists() or not template_path.exists():
        return
    env_path.write_text(template_path.read_text(encoding="utf-8"), encoding="utf-8")
    logger.info(
        "Created environment file from template",
        extra={"env_path": str(env_path), "template_path": str(template_path)},
    )


def _is_missing_settings_error(exc: Exception) -> bool:
    """Return whether the settings failure is due to missing values.

    Args:
        exc (Exception): Caught settings initialization error.

    Returns:
        bool: True when the error represents missing settings values.
    """
    if not isinstance(exc, ValidationError):
        return False
    return any(error.get("type") == "missing" for error in exc.errors())
