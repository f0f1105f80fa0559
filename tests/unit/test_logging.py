from __future__ import annotations

from pdfmarkup import logger as package_logger
from pdfmarkup.logging import configure_logging, get_logger
from pdfmarkup.settings import Settings


def test_stdlib_logger_is_configured(capsys) -> None:
    configure_logging(settings=Settings(log_json=False, log_level="INFO"), force=True)
    logger = get_logger("tests")
    logger.info("hello")

    captured = capsys.readouterr()
    assert "hello" in captured.err.lower()


def test_json_logs_carry_app_context(capsys) -> None:
    configure_logging(settings=Settings(log_json=True, log_level="INFO", app_env="ci"), force=True)
    logger = get_logger("tests-json")
    logger.info("committed")

    captured = capsys.readouterr()
    assert '"message": "committed"' in captured.err
    assert '"env": "ci"' in captured.err


def test_package_logger_created_on_import() -> None:
    assert callable(getattr(package_logger, "info", None))
