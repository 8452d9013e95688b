# propfeed/service_layer/harness.py
from __future__ import annotations

import asyncio
import io
import logging
import threading
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

import httpx

from ..errors import PipelineError
from ..schemas import RequestConfig, RequestResult, ReturnType
from .use_cases.encode_property import encode_property

log = logging.getLogger(__name__)

_CAPTURE_LOGGER = "propfeed"

# identifies the capture that owns records logged from the current task
_current_capture: ContextVar[object | None] = ContextVar("propfeed_current_capture", default=None)

# the `propfeed` logger level is shared; lower it while any capture is open
_level_lock = threading.Lock()
_open_captures = 0
_saved_level = logging.NOTSET


class _CaptureFilter(logging.Filter):
    def __init__(self, owner: object) -> None:
        super().__init__()
        self.owner = owner

    def filter(self, record: logging.LogRecord) -> bool:
        return _current_capture.get() is self.owner


def _acquire_level(logger: logging.Logger, level: int) -> None:
    global _open_captures, _saved_level
    with _level_lock:
        if _open_captures == 0:
            _saved_level = logger.level
        _open_captures += 1
        if logger.getEffectiveLevel() > level:
            logger.setLevel(level)


def _release_level(logger: logging.Logger) -> None:
    global _open_captures
    with _level_lock:
        _open_captures -= 1
        if _open_captures == 0:
            logger.setLevel(_saved_level)


@contextmanager
def capture_output(level: int = logging.INFO) -> Iterator[io.StringIO]:
    """
    Collect everything logged under `propfeed` by the current task while the
    block runs.

    Records from other tasks (concurrent runs) are filtered out via a context
    variable. The logger level is lowered while any capture is open so INFO
    diagnostics are captured even when the root logger is at WARNING.
    """
    owner = object()
    buf = io.StringIO()
    handler = logging.StreamHandler(buf)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.addFilter(_CaptureFilter(owner))

    logger = logging.getLogger(_CAPTURE_LOGGER)
    token = _current_capture.set(owner)
    _acquire_level(logger, level)
    logger.addHandler(handler)
    try:
        yield buf
    finally:
        logger.removeHandler(handler)
        _release_level(logger)
        _current_capture.reset(token)
        handler.close()


def _error_string(e: PipelineError) -> str:
    return f"{type(e).__name__}: {e}"


async def run_request(
    config: RequestConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> RequestResult:
    """
    Run one request end to end and report {hex payload, captured output, error}.

    Pipeline failures become `error_string`; they are never raised from here.
    """
    if config.expected_return_type != ReturnType.bytes:
        return RequestResult(
            error_string=f"ConfigError: unsupported expected_return_type {config.expected_return_type.value!r}"
        )

    with capture_output() as buf:
        try:
            url = config.resolve_url()
            payload = await encode_property(url, timeout_s=config.timeout_s, transport=transport)
        except PipelineError as e:
            log.warning("request failed: %s", _error_string(e))
            return RequestResult(captured_terminal_output=buf.getvalue(), error_string=_error_string(e))

        log.info("encoded %d bytes", len(payload))

    return RequestResult(response_bytes_hexstring=payload.hex(), captured_terminal_output=buf.getvalue())


def run_request_sync(config: RequestConfig) -> RequestResult:
    return asyncio.run(run_request(config))
