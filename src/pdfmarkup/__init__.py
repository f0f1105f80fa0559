"""pdfmarkup package."""

from pdfmarkup.async_runner import run_async
from pdfmarkup.exceptions import (
    DocumentLoadError,
    DocumentSaveError,
    EmptyAnnotationSetError,
    EmptySelectionError,
    PackageError,
    PageIndexOutOfRangeError,
    SettingsError,
)
from pdfmarkup.logging import configure_logging, get_logger
from pdfmarkup.settings import Settings, get_settings

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("pdfmarkup")

__all__ = [
    "DocumentLoadError",
    "DocumentSaveError",
    "EmptyAnnotationSetError",
    "EmptySelectionError",
    "PackageError",
    "PageIndexOutOfRangeError",
    "Settings",
    "SettingsError",
    "__version__",
    "configure_logging",
    "get_logger",
    "get_settings",
    "logger",
    "run_async",
]
