"""
日誌模組
整個自動化程序共用一個 logger，同時輸出到 console 與檔案。

環境變數：
    LOG_LEVEL: console 日誌等級 (預設 INFO)
    LOG_DIR:   日誌檔目錄 (預設 <repo>/reports)
    LOG_JSON:  設為 "1" 另外輸出 JSON lines 日誌檔

用法：
    from utils.logger import logger

    logger.info("開始等待")
    logger.warning("參數不足", extra={"context": {"template": tpl}})
"""

import json
import logging
import os
import sys
from pathlib import Path

LOGGER_NAME = "console_automation"
LOG_DIR = Path(
    os.getenv("LOG_DIR", Path(__file__).resolve().parent.parent / "reports")
)

_TEXT_FORMATTER = logging.Formatter(
    "[%(asctime)s] %(levelname)-7s %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
)


class JsonFormatter(logging.Formatter):
    """每筆紀錄一行 JSON；查詢樣板等細節放在 extra={"context": ...}"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "message": record.getMessage(),
            "source": f"{record.module}:{record.lineno}",
        }
        if getattr(record, "context", None):
            entry["context"] = record.context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _handler(handler: logging.Handler, level: int, formatter: logging.Formatter):
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _create_logger() -> logging.Logger:
    _logger = logging.getLogger(LOGGER_NAME)
    _logger.setLevel(logging.DEBUG)
    _logger.propagate = False
    # pytest 重新 import 時不要重複掛 handler
    if _logger.handlers:
        return _logger

    LOG_DIR.mkdir(parents=True, exist_ok=True)
    console_level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)

    handlers = [
        _handler(logging.StreamHandler(sys.stdout), console_level, _TEXT_FORMATTER),
        _handler(logging.FileHandler(LOG_DIR / "automation.log", encoding="utf-8"),
                 logging.DEBUG, _TEXT_FORMATTER),
    ]
    if os.getenv("LOG_JSON") == "1":
        handlers.append(_handler(
            logging.FileHandler(LOG_DIR / "automation.json.log", encoding="utf-8"),
            logging.DEBUG, JsonFormatter(),
        ))
    for handler in handlers:
        _logger.addHandler(handler)
    return _logger


logger = _create_logger()
