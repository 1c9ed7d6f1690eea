# src/recruitportal/utils/logging_config.py
"""
File-based logging for the admin portal.

Usage:
    from recruitportal.utils.logging_config import Logger, LogFiles

    Logger.info("Listing applicants", file=LogFiles.ADMIN)
    Logger.error("Update failed", file=LogFiles.ERROR)

    # Default file (logs/recruitportal.log)
    Logger.info("General message")

Every line carries the trace id of the current request (see ``set_trace_id``).

Environment variables:
    RECRUITPORTAL_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: INFO)
    RECRUITPORTAL_LOG_DIR: base directory for log files (default: logs/)
    RECRUITPORTAL_LOG_MAX_BYTES: rotation size per file (default: 10MB)
    RECRUITPORTAL_LOG_BACKUP_COUNT: rotated files kept (default: 5)
"""

from __future__ import annotations

import inspect
import logging
import os
import threading
import uuid
from contextvars import ContextVar
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Optional

import yaml

_trace_id_var: ContextVar[Optional[str]] = ContextVar("recruitportal_trace_id", default=None)

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "recruitportal.log"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024
DEFAULT_BACKUP_COUNT = 5
LINE_FORMAT = "{timestamp} [{level}] [{trace_id}] {filename}:{lineno} - {message}"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_CONFIG_FILE = Path(__file__).parent / "log_config.yaml"

LOG_LEVELS: Dict[str, int] = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}

_DEFAULT_FILES: Dict[str, str] = {
    "api": "api/api.log",
    "admin": "admin/admin.log",
    "auth": "auth/auth.log",
    "store": "store/store.log",
    "error": "errors/error.log",
}


def _load_file_map() -> Dict[str, str]:
    files = dict(_DEFAULT_FILES)
    if not LOG_CONFIG_FILE.exists():
        return files
    try:
        with open(LOG_CONFIG_FILE, "r", encoding="utf-8") as fh:
            config = yaml.safe_load(fh) or {}
    except (OSError, yaml.YAMLError):
        return files
    files.update({str(k).lower(): str(v) for k, v in (config.get("files") or {}).items()})
    return files


class _LogFilesMeta(type):
    def __getattr__(cls, name: str) -> str:
        path = cls.lookup(name)
        if path is None:
            raise AttributeError(f"Log file '{name}' is not configured")
        return path


class LogFiles(metaclass=_LogFilesMeta):
    """Named log destinations from ``log_config.yaml``, e.g. ``LogFiles.ADMIN``."""

    _files: Optional[Dict[str, str]] = None

    @classmethod
    def lookup(cls, name: str) -> Optional[str]:
        if cls._files is None:
            cls._files = _load_file_map()
        return cls._files.get(name.lower())

    @classmethod
    def get(cls, name: str) -> str:
        return cls.lookup(name) or f"{name}/{name}.log"


_config: Dict[str, object] = {}
_handlers: Dict[str, RotatingFileHandler] = {}
_handlers_lock = threading.Lock()


def _env_config() -> Dict[str, object]:
    return {
        "level": os.environ.get("RECRUITPORTAL_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        "base_dir": os.environ.get("RECRUITPORTAL_LOG_DIR", DEFAULT_LOG_DIR),
        "max_bytes": int(os.environ.get("RECRUITPORTAL_LOG_MAX_BYTES", DEFAULT_MAX_BYTES)),
        "backup_count": int(os.environ.get("RECRUITPORTAL_LOG_BACKUP_COUNT", DEFAULT_BACKUP_COUNT)),
    }


def _handler_for(file: Optional[str]) -> RotatingFileHandler:
    base_dir = Path(str(_config.get("base_dir", DEFAULT_LOG_DIR)))
    path = str(base_dir / (file or DEFAULT_LOG_FILE))
    with _handlers_lock:
        handler = _handlers.get(path)
        if handler is None:
            Path(path).parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                filename=path,
                maxBytes=int(_config.get("max_bytes", DEFAULT_MAX_BYTES)),
                backupCount=int(_config.get("backup_count", DEFAULT_BACKUP_COUNT)),
                encoding="utf-8",
            )
            _handlers[path] = handler
        return handler


def _emit(level: str, message: str, file: Optional[str]) -> None:
    if not _config:
        Logger.init()
    threshold = LOG_LEVELS.get(str(_config.get("level", DEFAULT_LOG_LEVEL)), 0)
    if LOG_LEVELS.get(level, 0) < threshold:
        return

    # two frames up: _emit <- Logger.<level> <- caller
    frame = inspect.currentframe()
    caller = frame.f_back.f_back if frame and frame.f_back else None
    filename = os.path.basename(caller.f_code.co_filename) if caller else "unknown"
    lineno = caller.f_lineno if caller else 0

    line = LINE_FORMAT.format(
        timestamp=datetime.now().strftime(DATE_FORMAT),
        level=level,
        trace_id=_trace_id_var.get() or "-",
        filename=filename,
        lineno=lineno,
        message=message,
    )
    handler = _handler_for(file)
    # rollover check and write share the handler lock
    handler.acquire()
    try:
        if handler.shouldRollover(logging.makeLogRecord({"msg": line})):
            handler.doRollover()
        handler.stream.write(line + "\n")
        handler.stream.flush()
    finally:
        handler.release()


class Logger:
    """Static file logger; auto-initializes from the environment on first use."""

    @staticmethod
    def init(
        level: Optional[str] = None,
        base_dir: Optional[str] = None,
        max_bytes: Optional[int] = None,
        backup_count: Optional[int] = None,
    ) -> None:
        _config.clear()
        _config.update(_env_config())
        if level:
            _config["level"] = level.upper()
        if base_dir:
            _config["base_dir"] = base_dir
        if max_bytes:
            _config["max_bytes"] = max_bytes
        if backup_count:
            _config["backup_count"] = backup_count
        Logger.close()

    @staticmethod
    def debug(message: str, file: Optional[str] = None) -> None:
        _emit("DEBUG", message, file)

    @staticmethod
    def info(message: str, file: Optional[str] = None) -> None:
        _emit("INFO", message, file)

    @staticmethod
    def warning(message: str, file: Optional[str] = None) -> None:
        _emit("WARNING", message, file)

    @staticmethod
    def error(message: str, file: Optional[str] = None) -> None:
        _emit("ERROR", message, file)

    @staticmethod
    def critical(message: str, file: Optional[str] = None) -> None:
        _emit("CRITICAL", message, file)

    @staticmethod
    def set_level(level: str) -> None:
        if not _config:
            Logger.init()
        _config["level"] = level.upper()

    @staticmethod
    def close() -> None:
        for handler in _handlers.values():
            handler.close()
        _handlers.clear()


def generate_trace_id() -> str:
    return f"req-{uuid.uuid4().hex[:12]}"


def set_trace_id(trace_id: Optional[str] = None) -> str:
    """Bind a trace id to the current context, generating one if needed."""
    tid = (trace_id or "").strip()[:64] or generate_trace_id()
    _trace_id_var.set(tid)
    return tid


def get_trace_id() -> Optional[str]:
    return _trace_id_var.get()


def clear_trace_id() -> None:
    _trace_id_var.set(None)
