from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from pdfmarkup.exceptions import SettingsError
from pdfmarkup.settings import Settings, ensure_env_file_exists, get_settings
from pdfmarkup.typing.enums import ImageFormat

if TYPE_CHECKING:
    from pathlib import Path


def test_settings_defaults(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    settings = Settings()

    assert settings.render_width == 800
    assert settings.render_image_format == ImageFormat.PNG
    assert settings.output_dir == "results"


def test_settings_load_from_env_file(tmp_path: Path, monkeypatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "APP_ENV=test\nLOG_LEVEL=DEBUG\nLOG_JSON=false\nRENDER_WIDTH=1024\nRENDER_IMAGE_FORMAT=jpeg\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)

    settings = Settings()

    assert settings.app_env == "test"
    assert settings.log_level == "DEBUG"
    assert settings.log_json is False
    assert settings.render_width == 1024
    assert settings.render_image_format == ImageFormat.JPEG


def test_settings_reject_non_positive_render_width(monkeypatch) -> None:
    monkeypatch.setenv("RENDER_WIDTH", "0")
    with pytest.raises(ValidationError):
        Settings()


def test_settings_parse_image_format_in_any_case(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("RENDER_IMAGE_FORMAT", "JPEG")

    assert Settings().render_image_format == ImageFormat.JPEG


def test_settings_reject_unknown_image_format(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("RENDER_IMAGE_FORMAT", "gif")

    with pytest.raises(ValidationError, match="Expected one of: png, jpeg"):
        Settings()


def test_get_settings_uses_environment(monkeypatch) -> None:
    get_settings.cache_clear()
    monkeypatch.setenv("APP_ENV", "ci")

    settings = get_settings()
    assert settings.app_env == "ci"

    get_settings.cache_clear()


def test_get_settings_wraps_validation_errors(monkeypatch) -> None:
    get_settings.cache_clear()
    monkeypatch.setenv("MAX_FILE_SIZE", "-1")

    with pytest.raises(SettingsError, match="Failed to load settings"):
        get_settings()

    get_settings.cache_clear()


def test_ensure_env_file_exists_copies_template(tmp_path: Path) -> None:
    template = tmp_path / ".env.template"
    template.write_text("RENDER_WIDTH=640\n", encoding="utf-8")
    env_path = tmp_path / ".env"

    ensure_env_file_exists(env_path=env_path, template_path=template)

    assert env_path.read_text(encoding="utf-8") == "RENDER_WIDTH=640\n"


def test_ensure_env_file_exists_keeps_existing_file(tmp_path: Path) -> None:
    template = tmp_path / ".env.template"
    template.write_text("RENDER_WIDTH=640\n", encoding="utf-8")
    env_path = tmp_path / ".env"
    env_path.write_text("RENDER_WIDTH=1\n", encoding="utf-8")

    ensure_env_file_exists(env_path=env_path, template_path=template)

    assert env_path.read_text(encoding="utf-8") == "RENDER_WIDTH=1\n"
