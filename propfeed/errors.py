# propfeed/errors.py
from __future__ import annotations

from enum import Enum


class PipelineError(Exception):
    """Base for every failure the request pipeline can report."""


class ConfigError(PipelineError):
    pass


class FetchError(PipelineError):
    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class NormalizeErrorKind(str, Enum):
    MISSING_FIELD = "MissingField"
    INVALID_NUMBER = "InvalidNumber"


class NormalizeError(PipelineError):
    def __init__(self, kind: NormalizeErrorKind, field: str, detail: str) -> None:
        super().__init__(f"{kind.value}: {field}: {detail}")
        self.kind = kind
        self.field = field
        self.detail = detail


class EncodeError(PipelineError):
    pass


class AbiTypeError(EncodeError):
    """Unknown or malformed ABI type string."""


class DecodeError(PipelineError):
    pass
