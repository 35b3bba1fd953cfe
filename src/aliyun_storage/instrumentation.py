"""Instrumentation hook wrapping every storage operation."""

import logging
import time
import uuid
from collections.abc import Callable, Iterable
from typing import Any, NamedTuple

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class Outcome(NamedTuple):
    """An operation result paired with metadata for the event payload."""

    result: Any
    metadata: dict[str, Any]


class InstrumentationEvent(BaseModel, frozen=True):
    """A finished storage operation, as delivered to subscribers."""

    name: str
    service: str
    span_id: str
    duration_ms: float
    payload: dict[str, Any]

    @property
    def failed(self) -> bool:
        return "exception" in self.payload


Subscriber = Callable[[InstrumentationEvent], None]


class Instrumenter:
    """Runs operation bodies inside a span and publishes the resulting event."""

    def __init__(self, service: str, subscribers: Iterable[Subscriber] = ()):
        self._service = service
        self._subscribers = list(subscribers)

    def subscribe(self, subscriber: Subscriber) -> None:
        self._subscribers.append(subscriber)

    def instrument(
        self, operation: str, body: Callable[[], Any], **attributes: Any
    ) -> Any:
        """
        Runs an operation body and records it as an event.

        Args:
            operation: Operation name (e.g. "upload").
            body: Zero-argument callable. It may return an Outcome, whose
                metadata is merged into the payload, or a plain result.
            **attributes: Input parameters recorded in the payload.

        Returns:
            The body's result.

        Raises:
            Exception: Whatever the body raised, unmodified.
        """
        payload: dict[str, Any] = dict(attributes)
        span_id = uuid.uuid4().hex
        started = time.perf_counter()
        try:
            outcome = body()
        except Exception as e:
            payload["exception"] = [type(e).__name__, str(e)]
            self._publish(operation, span_id, started, payload)
            raise

        if isinstance(outcome, Outcome):
            payload.update(outcome.metadata)
            result = outcome.result
        else:
            result = outcome
        self._publish(operation, span_id, started, payload)
        return result

    def _publish(
        self, operation: str, span_id: str, started: float, payload: dict[str, Any]
    ) -> None:
        event = InstrumentationEvent(
            name=f"service_{operation}",
            service=self._service,
            span_id=span_id,
            duration_ms=round((time.perf_counter() - started) * 1000, 3),
            payload=payload,
        )
        extra = {
            "operation": event.name,
            "service": event.service,
            "span_id": event.span_id,
            "duration_ms": event.duration_ms,
            "payload": event.payload,
        }
        if event.failed:
            logger.error("Storage operation failed", extra=extra)
        else:
            logger.info("Storage operation completed", extra=extra)

        for subscriber in self._subscribers:
            subscriber(event)
