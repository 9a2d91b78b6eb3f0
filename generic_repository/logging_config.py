"""로깅 설정 모듈.

Logging configuration module.
Installs a JSON-lines formatter on the root logger so repository and
context log records carry structured fields.
"""

import json
import logging
import sys
from datetime import datetime

from generic_repository.config import settings

# LogRecord 기본 속성 — Built-in LogRecord attributes excluded from extras
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """LogRecord를 JSON 문자열로 출력하는 포매터.

    Formatter that renders each LogRecord as one JSON object.
    Attributes passed through ``extra=`` are merged into the object.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "funcName": record.funcName,
            "lineNo": record.lineno,
        }

        if record.exc_info:
            log_obj["exc_info"] = self.formatException(record.exc_info)

        # 구조화 로깅용 추가 속성 병합 — Merge extra attributes
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_obj[key] = value

        return json.dumps(log_obj, ensure_ascii=False, default=str)


def setup_logging(level: str | None = None) -> None:
    """루트 로거에 JSON 포매터를 설치합니다.

    Equivalent to ``logging.basicConfig`` but with JSONFormatter.

    Args:
        level: 로그 레벨, None이면 settings.LOG_LEVEL 사용
               (Log level; falls back to settings.LOG_LEVEL)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level or settings.LOG_LEVEL)

    # 기존 핸들러 제거 — Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    root_logger.addHandler(handler)

    # echo가 꺼져 있으면 SQL 엔진 로그 억제 — Keep engine logs quiet unless echo is on
    if not settings.DEBUG:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
