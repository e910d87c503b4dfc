"""
Logging for the dashboard process.

Streamlit re-executes app.py on every widget interaction, so
``configure_logging`` is safe to call on each run: the first call installs
one stderr handler on the root logger, later calls only re-apply the level.
"""
import json
import logging
import os
import sys
from datetime import datetime, timezone

HANDLER_NAME = "adboard"

# Streamlit's own server loggers are chatty at INFO
QUIET_LOGGERS = ("tornado", "watchdog", "urllib3")


class JSONFormatter(logging.Formatter):

    def format(self, record):
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _build_handler(fmt: str) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-7s %(name)s | %(message)s", "%H:%M:%S"))
    return handler


def configure_logging(environ=None) -> logging.Handler:
    """
    Attach the dashboard handler to the root logger once per process.

    LOG_LEVEL (default INFO) sets the level; LOG_FORMAT=json switches to one
    JSON object per line. Returns the installed handler.
    """
    environ = os.environ if environ is None else environ
    level = logging.getLevelName(environ.get("LOG_LEVEL", "INFO").upper())
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    handler = next((h for h in root.handlers if h.get_name() == HANDLER_NAME), None)
    if handler is None:
        handler = _build_handler(environ.get("LOG_FORMAT", "text").lower())
        root.addHandler(handler)
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    root.setLevel(level)
    return handler
