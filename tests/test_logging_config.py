"""로깅 및 설정 테스트.

Logging and configuration tests — JSON formatter output, root logger setup,
and environment overrides of the settings model.
"""

import json
import logging

import pytest

from generic_repository.config import Settings
from generic_repository.logging_config import JSONFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    """테스트 후 루트 로거 상태를 복원합니다."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_formatter_includes_extras():
    """extra 속성이 JSON에 병합됨."""
    record = logging.LogRecord(
        "generic_repository.context", logging.INFO, __file__, 10,
        "Committed %d change(s)", (3,), None,
    )
    record.entity = "Person"

    data = json.loads(JSONFormatter().format(record))

    assert data["message"] == "Committed 3 change(s)"
    assert data["level"] == "INFO"
    assert data["logger"] == "generic_repository.context"
    assert data["entity"] == "Person"
    assert "args" not in data


def test_setup_logging_installs_json_handler(restore_root_logger):
    """루트 로거에 JSON 핸들러 하나만 설치."""
    setup_logging("DEBUG")

    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1
    assert isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)


def test_settings_env_override(monkeypatch):
    """환경 변수로 설정 덮어쓰기."""
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.setenv("DEFAULT_PAGE_SIZE", "50")

    settings = Settings()

    assert settings.LOG_LEVEL == "WARNING"
    assert settings.DEFAULT_PAGE_SIZE == 50
