"""Structured logging: console plus a JSON-lines event log."""

import json
import logging
import os
import sys
import threading
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

from src.core.config import config

_ALLOWED_LOG_KWARGS = {"exc_info", "stack_info", "stacklevel", "extra"}


def _format_duration(seconds: float) -> str:
    if seconds <= 0:
        return "0ms"
    if seconds >= 1:
        return f"{seconds:.1f}s"
    ms = seconds * 1000
    if ms < 0.1:
        return "<0.1ms"
    return f"{ms:.1f}ms"


def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    try:
        return sys.stdout.isatty()
    except Exception:
        return False


def _c(role: str) -> str:
    if not _use_color():
        return ""
    # 38;5;N = foreground 256-color
    codes = {
        "ok": "\033[38;5;78m",
        "fail": "\033[38;5;203m",
        "duration": "\033[38;5;221m",
    }
    return codes.get(role, "")


def _reset() -> str:
    if not _use_color():
        return ""
    return "\033[0m"


def _log_kwargs(kwargs: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in kwargs.items() if k in _ALLOWED_LOG_KWARGS}


@dataclass
class LogEvent:
    event_type: str
    timestamp: str
    data: dict[str, Any]

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


class WebsearchLogger:
    def __init__(self):
        config.logs_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = config.logs_dir / "websearch.log"
        self._file_lock = threading.Lock()
        self._log_file_handle = open(self.log_file, "a", encoding="utf-8")
        self._setup_console_logger()

    def _setup_console_logger(self):
        self.console = logging.getLogger("websearch")
        self.console.setLevel(logging.DEBUG)
        self._console_formatter = logging.Formatter(
            "%(asctime)s │ %(message)s", datefmt="%H:%M:%S"
        )
        if not self.console.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(getattr(logging, config.log_level, logging.INFO))
            handler.setFormatter(self._console_formatter)
            self.console.addHandler(handler)
        self._setup_module_console_logging()

    def _setup_module_console_logging(self):
        # Library modules log via logging.getLogger(__name__), i.e. under "src"
        log = logging.getLogger("src")
        if log.handlers:
            return
        handler = logging.StreamHandler()
        handler.setLevel(getattr(logging, config.log_level, logging.INFO))
        handler.setFormatter(self._console_formatter)
        log.setLevel(logging.DEBUG)
        log.propagate = False
        log.addHandler(handler)

    def log_event(self, event: LogEvent) -> None:
        with self._file_lock:
            self._log_file_handle.write(event.to_json() + "\n")
            self._log_file_handle.flush()

    def _timestamp(self) -> str:
        return datetime.now().isoformat()

    def query_handled(
        self, query: str, match_count: int, fallback_count: int, duration_seconds: float
    ) -> None:
        event = LogEvent(
            event_type="QUERY_HANDLED",
            timestamp=self._timestamp(),
            data={
                "query": query[:200],
                "matches": match_count,
                "fallbacks": fallback_count,
                "duration_seconds": round(duration_seconds, 6),
            },
        )
        self.log_event(event)
        dur = f"{_c('duration')}{_format_duration(duration_seconds)}{_reset()}"
        self.console.debug(
            f"Query {query[:60]!r}: {match_count} match(es), "
            f"{fallback_count} fallback(s)  {dur}"
        )

    def engines_loaded(self, path: str, count: int, *, seeded: bool = False) -> None:
        event = LogEvent(
            event_type="ENGINES_LOADED",
            timestamp=self._timestamp(),
            data={"path": path, "count": count, "seeded": seeded},
        )
        self.log_event(event)
        source = "defaults" if seeded else path
        self.console.info(f"Loaded {count} search engine(s) from {source}")

    def engines_saved(self, path: str, count: int, success: bool) -> None:
        event = LogEvent(
            event_type="ENGINES_SAVED",
            timestamp=self._timestamp(),
            data={"path": path, "count": count, "success": success},
        )
        self.log_event(event)
        status = f"{_c('ok')}[ok]{_reset()}" if success else f"{_c('fail')}[failed]{_reset()}"
        self.console.debug(f"Saved {count} search engine(s) to {path}  {status}")

    def critical(self, message: str, *args, exception: Exception | None = None, **kwargs):
        event = LogEvent(
            event_type="CRITICAL",
            timestamp=self._timestamp(),
            data={
                "message": message[:500],
                "exception": str(exception) if exception else None,
            },
        )
        self.log_event(event)
        self.console.critical(f"‼ {message}", *args, **_log_kwargs(kwargs))

    def info(self, message: str, *args, **kwargs):
        self.console.info(message, *args, **_log_kwargs(kwargs))

    def warning(self, message: str, *args, **kwargs):
        event = LogEvent(
            event_type="WARNING",
            timestamp=self._timestamp(),
            data={"message": message[:500]},
        )
        self.log_event(event)
        self.console.warning(f"⚠️ {message}", *args, **_log_kwargs(kwargs))


logger = WebsearchLogger()
