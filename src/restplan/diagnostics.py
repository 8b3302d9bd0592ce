"""Structured side channel for non-fatal translation events.

Translators never log directly: they record `Diagnostic` events here and
the caller receives them with the plan. When a sink is attached, each
event is also forwarded to it as it is recorded.
"""

from typing import Any, List, Optional

from .schema import Diagnostic


class Diagnostics:
    """Per-translation collector of warning and error events.

    Args:
        sink: Optional logging sink. Anything exposing `warning(msg)` (or
            `warn(msg)`) and `error(msg)` works, including `restplan.logger.Logger`.
    """

    def __init__(self, sink: Optional[Any] = None) -> None:
        self.events: List[Diagnostic] = []
        self._sink = sink

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self):
        return iter(self.events)

    def warning(self, code: str, message: str, **context: Any) -> Diagnostic:
        return self._record("warning", code, message, context)

    def error(self, code: str, message: str, **context: Any) -> Diagnostic:
        return self._record("error", code, message, context)

    def codes(self) -> List[str]:
        return [event.code for event in self.events]

    def _record(self, level: str, code: str, message: str, context: dict) -> Diagnostic:
        event = Diagnostic(level=level, code=code, message=message, context=context)
        self.events.append(event)
        if self._sink is not None:
            self._forward(event)
        return event

    def _forward(self, event: Diagnostic) -> None:
        log_fn = getattr(self._sink, event.level, None)
        if log_fn is None and event.level == "warning":
            log_fn = getattr(self._sink, "warn", None)
        if log_fn is None:
            return
        if event.context:
            details = ", ".join(f"{k}={v!r}" for k, v in event.context.items())
            log_fn(f"{event.message} ({details})")
        else:
            log_fn(event.message)
