"""Crash reporting: unhandled exceptions go to stderr and a JSON-lines crash log."""

import json
import os
import sys
import traceback

from ids.ulid import generate_sortable_id
from utils.timestamp import format_timestamp

# Default crash log path, can be overridden by configure()
_crash_log = "logs/crash.log"


def configure(crash_file):
    """Set crash log file path from config."""
    global _crash_log
    _crash_log = crash_file


def build_record(exc, context=None):
    """Crash record for an exception; the ULID id sorts crashes by time."""
    record = {
        "id": generate_sortable_id(),
        "timestamp": format_timestamp(),
        "type": type(exc).__name__,
        "msg": str(exc),
        "traceback": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
    }
    # Codec errors carry their own tracking id and context
    if hasattr(exc, "error_id"):
        record["error_id"] = exc.error_id
    if context or getattr(exc, "context", None):
        record["context"] = context or exc.context
    return record


def append_record(record):
    """Append to the crash log. Never raises: the process is already failing."""
    try:
        directory = os.path.dirname(_crash_log)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(_crash_log, "a", encoding="utf-8") as file:
            file.write(json.dumps(record, default=str) + "\n")
    except OSError as exc:
        sys.stderr.write(f"crash log unavailable ({_crash_log}): {exc}\n")


def log_crash(exc_type, exc_value, exc_tb):
    """sys.excepthook replacement."""
    if exc_value is None:
        exc_value = exc_type()
    if exc_value.__traceback__ is None:
        exc_value = exc_value.with_traceback(exc_tb)
    record = build_record(exc_value)

    rule = "=" * 60
    sys.stderr.write(f"\n{rule}\nCRASH [{record['id']}] {record['timestamp']}\n{rule}\n")
    sys.stderr.write(f"{record['type']}: {record['msg']}\n{'-' * 60}\n{record['traceback']}{rule}\n\n")
    append_record(record)


def create_async_handler(logger=None):
    """Event loop exception handler writing to the crash log."""
    def handler(loop, context):
        exc = context.get("exception") or RuntimeError(context.get("message", "Unknown async error"))
        record = build_record(exc, {"message": context.get("message"), "task": str(context.get("future"))})
        if logger:
            logger.error("Async exception", error=exc, crash_id=record["id"], task=record["context"]["task"])
        append_record(record)
    return handler


def install_crash_handler():
    """Install global sync exception handler."""
    sys.excepthook = log_crash
