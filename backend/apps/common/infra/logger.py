"""
GlimGate 日志

- 文件输出 {LOG_PATH}/system.log，每天午夜轮转，保留 30 天
- LOG_FORMAT=plain（默认，便于 grep）或 json（便于采集）
- 每行自动带上请求上下文（request_id / 用户 / ip / 路径）
- 业务字段通过 extra=logger_extra({...}) 传入，敏感键统一打码
- DEBUG 时同时输出到控制台
"""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from django.conf import settings as django_settings

_configured = False

# LogRecord 自带的属性；其余属性都来自调用方的 extra
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}

SENSITIVE_KEYS = {"password", "token", "access", "refresh", "authorization", "secret"}


def _timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")


def _context() -> dict[str, Any]:
    # 延迟导入：logger 会在 settings 加载早期被引用
    from apps.common.utils.request_context import get_request_context

    return get_request_context()


def record_extra(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS and not k.startswith("_")}


class GlimJSONFormatter(logging.Formatter):
    """
    每行一条 JSON：
    {"timestamp": "2025-06-01 10:00:00", "level": "INFO", "logger": "apps.scores.services",
     "message": "评分已创建", "request_id": "3f9a...", "user_id": 2, "score_id": 7, ...}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": _timestamp(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update({k: v for k, v in _context().items() if v not in ("", None)})
        entry.update(record_extra(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class GlimPlainFormatter(logging.Formatter):
    """
    2025-06-01 10:00:00 INFO apps.scores.services 评分已创建 [3f9a|mgr|2|127.0.0.1|/api/admin/scores] score_id=7 score=85
    """

    def format(self, record: logging.LogRecord) -> str:
        ctx = _context()
        where = "|".join(
            str(ctx.get(key) or "-") for key in ("request_id", "username", "user_id", "ip", "path")
        )
        line = f"{_timestamp(record)} {record.levelname} {record.name} {record.getMessage()} [{where}]"
        extra = record_extra(record)
        if extra:
            line += " " + " ".join(f"{k}={v}" for k, v in extra.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


FORMATTERS: dict[str, type[logging.Formatter]] = {
    "plain": GlimPlainFormatter,
    "json": GlimJSONFormatter,
}


def _log_file() -> str:
    log_dir = Path(getattr(django_settings, "LOG_PATH", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    return str(log_dir / "system.log")


def _level() -> int:
    level = logging.getLevelName(str(getattr(django_settings, "LOG_LEVEL", "INFO")).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(force: bool = False) -> None:
    """进程内只配置一次；force=True 时丢弃旧 handler 重新配置"""
    global _configured
    if _configured and not force:
        return

    level = _level()
    fmt = str(getattr(django_settings, "LOG_FORMAT", "plain")).lower()
    formatter = FORMATTERS.get(fmt, GlimPlainFormatter)()

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        handler.close()
    root.handlers.clear()

    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=_log_file(),
        when="midnight",
        backupCount=30,
        encoding="utf-8",
        delay=True,
    )
    file_handler.suffix = "%Y-%m-%d"
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    if getattr(django_settings, "DEBUG", False):
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        root.addHandler(console)

    _configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    logger = get_logger(__name__)
    logger.info("评分已创建", extra=logger_extra({"score_id": score.pk}))
    """
    if not _configured:
        configure_logging()
    return logging.getLogger(name)


def logger_extra(extra: Optional[dict] = None) -> dict:
    """extra 中的密码、令牌等字段替换为 ***"""
    if not extra:
        return {}
    return {k: ("***" if k.lower() in SENSITIVE_KEYS else v) for k, v in extra.items()}
