import asyncio
import json
import os
import sys
import threading
from enum import IntEnum

from utils.timestamp import format_timestamp


class LogLevel(IntEnum):
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40

    @classmethod
    def from_name(cls, name):
        name = str(name).upper()
        if name == "WARNING":
            name = "WARN"
        return cls.__members__.get(name, cls.INFO)


_logger = None
_logger_lock = threading.Lock()


class StructuredLogger:
    """JSON-lines logger; `bind()` returns a child carrying fixed fields."""

    def __init__(self, level=LogLevel.INFO, stream=None, fields=None):
        self.level = level
        self.stream = stream
        self.fields = fields or {}

    def bind(self, **fields):
        return StructuredLogger(self.level, self.stream, {**self.fields, **fields})

    def enabled(self, level):
        return level >= self.level

    def _emit(self, level, message, error=None, **kwargs):
        if not self.enabled(level):
            return
        record = {"timestamp": format_timestamp(), "level": level.name, "msg": message}
        record.update(self.fields)
        record.update(kwargs)
        if error is not None:
            record["err"] = getattr(error, "message", str(error))
            record["err_type"] = type(error).__name__
            if hasattr(error, "error_id"):
                record["error_id"] = error.error_id
        try:
            print(json.dumps(record, default=str), file=self.stream or sys.stderr, flush=True)
        except (OSError, ValueError):
            # Closed or broken stream; nothing useful left to report to
            pass

    def debug(self, message, **kwargs):
        self._emit(LogLevel.DEBUG, message, **kwargs)

    def info(self, message, **kwargs):
        self._emit(LogLevel.INFO, message, **kwargs)

    def warn(self, message, error=None, **kwargs):
        self._emit(LogLevel.WARN, message, error, **kwargs)

    def error(self, message, error=None, **kwargs):
        self._emit(LogLevel.ERROR, message, error, **kwargs)

    @classmethod
    def configure(cls, min_level=LogLevel.INFO, stream=None):
        global _logger
        with _logger_lock:
            _logger = cls(min_level, stream)
        return _logger


def get_logger(**fields):
    global _logger
    if _logger is None:
        with _logger_lock:
            if _logger is None:
                _logger = StructuredLogger()
    return _logger.bind(**fields) if fields else _logger


class AuditLog:
    """Append-only JSON-lines log of issued identifiers.

    `record()` never blocks: records go to a bounded queue and are dropped
    when it is full. A background task drains the queue into the file.
    """

    def __init__(self, path, queue_size=1000, poll_interval=0.5):
        self.path = path
        self.queue = asyncio.Queue(maxsize=queue_size)
        self.poll_interval = poll_interval
        self.written = 0
        self.dropped = 0
        self._task = None
        self._stop = asyncio.Event()
        self._log = get_logger(component="audit")

    @property
    def running(self):
        return self._task is not None and not self._task.done()

    def record(self, kind, value):
        try:
            self.queue.put_nowait({"issued_at": format_timestamp(), "kind": kind, "id": value})
        except asyncio.QueueFull:
            self.dropped += 1
            return False
        return True

    def get_stats(self):
        return {"queued": self.queue.qsize(), "written": self.written, "dropped": self.dropped}

    async def start(self):
        if self.running:
            return
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self._stop.clear()
        self._task = asyncio.create_task(self._drain())
        self._log.info("Audit log started", path=self.path)

    async def stop(self):
        self._stop.set()
        if self._task:
            await self._task
            self._task = None
        self._log.info("Audit log stopped", **self.get_stats())

    def _write(self, file, entry):
        try:
            file.write(json.dumps(entry) + "\n")
        except OSError as exc:
            self.dropped += 1
            self._log.error("Audit write failed", error=exc, path=self.path)
        else:
            self.written += 1

    async def _drain(self):
        try:
            file = open(self.path, "a", encoding="utf-8")
        except OSError as exc:
            # Task ends here, so `running` reports False
            self._log.error("Audit log open failed", error=exc, path=self.path)
            return
        with file:
            while not self._stop.is_set():
                try:
                    entry = await asyncio.wait_for(self.queue.get(), timeout=self.poll_interval)
                except asyncio.TimeoutError:
                    continue
                self._write(file, entry)
                file.flush()

            while not self.queue.empty():
                self._write(file, self.queue.get_nowait())
            file.flush()
