from internal.logging import get_logger, LogLevel, StructuredLogger, AuditLog

__all__ = [
    "get_logger",
    "LogLevel",
    "StructuredLogger",
    "AuditLog",
]
