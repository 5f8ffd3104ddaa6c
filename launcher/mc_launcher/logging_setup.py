"""
Logging for the launcher.

Console output goes through rich (on stderr, so command output on stdout
stays clean); ``<MC_ROOT>/logs/launcher.log`` keeps a rotating plain-text
copy of everything logged under ``mc.launcher``. ``LOG_JSON=true`` switches
both to one JSON object per line.
"""
from __future__ import annotations
import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional
from rich.console import Console
from rich.logging import RichHandler
from .settings import Settings

LOGGER_ROOT = "mc.launcher"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)

def _console_handler(settings: Settings, console: Optional[Console]) -> logging.Handler:
    if settings.log_json:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_JsonFormatter())
        return handler
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
        log_time_format="[%X]",
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler

def setup_logging(settings: Settings, console: Optional[Console] = None) -> None:
    level = settings.log_level.upper()

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(_console_handler(settings, console))

    launcher_log = logging.getLogger(LOGGER_ROOT)
    for h in list(launcher_log.handlers):
        launcher_log.removeHandler(h)
        h.close()
    launcher_log.propagate = True

    logs_dir = settings.mc_root / "logs"
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(logs_dir / "launcher.log", maxBytes=5_000_000, backupCount=3, encoding="utf-8")
    except OSError as e:
        # keep console logging when the root is not writable
        launcher_log.warning("Could not open log file in %s (%s), logging to console only.", logs_dir, e)
        return
    fh.setFormatter(_JsonFormatter() if settings.log_json else logging.Formatter(FILE_FORMAT, datefmt=FILE_DATEFMT))
    fh.setLevel(level)
    launcher_log.addHandler(fh)

def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
