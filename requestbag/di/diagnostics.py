"""
DI Diagnostics - event tracking for DI containers.
"""

import time
import dataclasses
import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol

logger = logging.getLogger("requestbag.di.diagnostics")


class DIEventType(Enum):
    """Types of DI events."""
    REGISTRATION = "registration"
    RESOLUTION_SUCCESS = "resolution_success"
    RESOLUTION_FAILURE = "resolution_failure"
    LIFECYCLE_SHUTDOWN = "lifecycle_shutdown"


@dataclasses.dataclass
class DIEvent:
    """A diagnostic event in the DI system."""
    type: DIEventType
    timestamp: float = dataclasses.field(default_factory=time.time)
    token: Optional[str] = None
    tag: Optional[str] = None
    provider_name: Optional[str] = None
    duration: Optional[float] = None
    error: Optional[BaseException] = None
    metadata: Dict[str, Any] = dataclasses.field(default_factory=dict)


class DiagnosticListener(Protocol):
    """Interface for DI diagnostic listeners."""
    def on_event(self, event: DIEvent) -> None:
        ...


class LoggingDiagnosticListener:
    """Writes DI events to the diagnostics logger."""

    def __init__(self, log_level: int = logging.DEBUG):
        self.log_level = log_level

    def on_event(self, event: DIEvent) -> None:
        if event.type == DIEventType.REGISTRATION:
            logger.log(
                self.log_level, "Registered provider '%s' for token=%s (tag=%s)",
                event.provider_name, event.token, event.tag,
            )
        elif event.type == DIEventType.RESOLUTION_SUCCESS:
            logger.log(
                self.log_level, "Resolved token=%s in %.6fs",
                event.token, event.duration or 0.0,
            )
        elif event.type == DIEventType.RESOLUTION_FAILURE:
            logger.error("Failed to resolve token=%s: %s", event.token, event.error)
        elif event.type == DIEventType.LIFECYCLE_SHUTDOWN:
            logger.log(
                self.log_level, "Container shutdown (scope=%s)",
                event.metadata.get("scope", "unknown"),
            )


class DIDiagnostics:
    """Coordinator for DI diagnostic listeners."""

    def __init__(self):
        self._listeners: List[DiagnosticListener] = []

    @property
    def enabled(self) -> bool:
        return bool(self._listeners)

    def add_listener(self, listener: DiagnosticListener) -> None:
        self._listeners.append(listener)

    def has_listener(self, listener_type: type) -> bool:
        """Check if a listener of the given type is already attached."""
        return any(isinstance(l, listener_type) for l in self._listeners)

    def emit(self, event_type: DIEventType, **kwargs) -> None:
        """Emit a diagnostic event to all listeners."""
        if not self._listeners:
            return
        event = DIEvent(type=event_type, **kwargs)
        for listener in self._listeners:
            try:
                listener.on_event(event)
            except Exception as e:
                # A broken listener must not break resolution
                logger.error("Diagnostic listener error: %s", e)
