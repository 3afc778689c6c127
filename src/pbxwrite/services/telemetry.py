"""Timing for service calls: ``@traced`` and ``trace_span``.

Off by default; a disabled call costs one ContextVar lookup. When enabled,
each traced call records its own duration plus one entry per named phase
(``encode``, ``references``, ...) and the result is placed under
``ServiceResult.meta["telemetry"]``. Phases do not nest.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from pbxwrite.services.result import ServiceResult

log = structlog.get_logger("pbxwrite.telemetry")

_enabled: ContextVar[bool] = ContextVar("_enabled", default=False)
_active: ContextVar[Span | None] = ContextVar("_active", default=None)


def _ms(seconds: float) -> float:
    return round(seconds * 1000, 2)


@dataclass
class Span:
    """Timing for one traced call: total duration, phases, and annotations."""

    name: str
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None
    phases: dict[str, float] = field(default_factory=dict)
    annotations: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        if self.end_time is None:
            return 0.0
        return _ms(self.end_time - self.start_time)

    def end(self) -> None:
        self.end_time = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name, "duration_ms": self.duration_ms}
        if self.phases:
            result["phases"] = dict(self.phases)
        if self.annotations:
            result["annotations"] = dict(self.annotations)
        return result


@contextmanager
def trace_span(phase: str) -> Generator[Span | None]:
    """Time *phase* inside the current traced call.

    Yields that call's Span so the phase can annotate it, or None when
    telemetry is off or no traced call is running. Repeated phases add up.
    """
    span = _active.get() if _enabled.get() else None
    if span is None:
        yield None
        return

    started = time.perf_counter()
    try:
        yield span
    finally:
        span.phases[phase] = span.phases.get(phase, 0.0) + _ms(time.perf_counter() - started)


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Time a service method and attach its Span to the returned ServiceResult."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        span = Span(name=func.__qualname__)
        token = _active.set(span)
        ok = False
        try:
            result = func(*args, **kwargs)
            ok = not isinstance(result, ServiceResult) or result.ok
        finally:
            span.end()
            _active.reset(token)
            log.debug(
                "span.complete",
                span_name=span.name,
                duration_ms=span.duration_ms,
                phases=list(span.phases),
                ok=ok,
            )

        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": span.to_dict()}
            result = result.model_copy(update={"meta": meta})  # type: ignore[assignment]
        return result

    return wrapper


def enable_telemetry() -> None:
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)
