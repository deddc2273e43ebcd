"""Codec and identifier errors with tracking IDs."""

import uuid

from utils.timestamp import format_timestamp


class BaseCodecError(Exception):
    """Base error with unique ID and timestamp for tracking."""

    def __init__(self, message, context=None, cause=None):
        super().__init__(message)
        self.error_id = uuid.uuid4().hex[:12]
        self.timestamp = format_timestamp()
        self.context = context or {}
        self.cause = cause

    def __str__(self):
        return f"[{self.error_id}] {super().__str__()}"

    @property
    def message(self):
        return super().__str__()

    def to_dict(self):
        return {
            "error": type(self).__name__,
            "message": self.message,
            "error_id": self.error_id,
            "timestamp": self.timestamp,
            "context": self.context,
        }


class MalformedInputError(BaseCodecError, ValueError):
    """Text contains symbols outside the alphabet, or bad padding."""

    def __init__(self, message, value=None, position=None, **kwargs):
        context = kwargs.pop("context", {})
        if value is not None:
            context["value"] = value
        if position is not None:
            context["position"] = position
        super().__init__(message, context=context, **kwargs)


class FormatError(BaseCodecError, ValueError):
    """Well-formed looking text that fails a semantic check."""

    def __init__(self, message, value=None, **kwargs):
        context = kwargs.pop("context", {})
        if value is not None:
            context["value"] = value
        super().__init__(message, context=context, **kwargs)


class InvalidArgument(BaseCodecError, ValueError):
    """Caller passed an unusable value (wrong type, out of range)."""

    def __init__(self, message, field=None, value=None, **kwargs):
        context = kwargs.pop("context", {})
        if field:
            context["field"] = field
        if value is not None:
            context["value"] = value
        super().__init__(message, context=context, **kwargs)
