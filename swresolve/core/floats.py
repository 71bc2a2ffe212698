"""
Floats - execution markers for resolver runs.

A float is a named event with attached data, emitted at each resolution step
(codec decode/encode, pair write-back, list write-back, relation steps).
Collection is off by default so production runs pay nothing; tests switch it
on with FloatContext and assert on what happened.

Usage:
    >>> with FloatContext() as fc:
    ...     resolve_instance(True, "instance-id", "instance-name", "service-id", ctx)
    ...     assert fc.has_float("instance.resolved")
"""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime
import logging
from typing import Any

logger = logging.getLogger(__name__)


class FloatEvent:
    """
    Single float event.

    Attributes:
        name: Float name (e.g., "codec.decoded")
        timestamp: When the float occurred
        data: Data attached to the float
    """

    def __init__(self, name: str, data: dict[str, Any] | None = None):
        self.name = name
        self.timestamp = datetime.now()
        self.data = data or {}

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __repr__(self) -> str:
        return f"FloatEvent(name={self.name!r}, data={self.data})"


class FloatController:
    """
    Collects float events for the process.

    Singleton: use ``FloatController.get_instance()``. The first call reads
    ``floats_enabled`` from the default configuration.
    """

    _instance: FloatController | None = None

    def __init__(self, enabled: bool = False):
        self.enabled = enabled
        self._floats: list[FloatEvent] = []
        self._floats_by_name: dict[str, list[FloatEvent]] = defaultdict(list)

    @classmethod
    def get_instance(cls) -> FloatController:
        if cls._instance is None:
            from swresolve.core.config import get_config

            cls._instance = cls(enabled=get_config().floats_enabled)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset singleton (for tests)."""
        cls._instance = None

    def float(self, event_name: str, **data: Any) -> FloatEvent | None:
        """
        Record a float event.

        Returns:
            FloatEvent if enabled, None otherwise
        """
        if not self.enabled:
            return None

        event = FloatEvent(name=event_name, data=data)
        self._floats.append(event)
        self._floats_by_name[event_name].append(event)

        logger.debug("FLOAT[%s] %s", event_name, data)
        return event

    def has_float(self, name: str) -> bool:
        return name in self._floats_by_name

    def get_floats(self, pattern: str | None = None) -> list[FloatEvent]:
        """
        Get floats, optionally filtered.

        A pattern ending in ``*`` matches by prefix ("instance.*"), anything
        else matches the exact name.
        """
        if pattern is None:
            return self._floats.copy()

        if pattern.endswith("*"):
            prefix = pattern[:-1]
            return [event for event in self._floats if event.name.startswith(prefix)]
        return self._floats_by_name.get(pattern, []).copy()

    def get_float(self, name: str, index: int = 0) -> FloatEvent | None:
        events = self._floats_by_name.get(name, [])
        if index < len(events):
            return events[index]
        return None

    def count_floats(self, pattern: str | None = None) -> int:
        return len(self.get_floats(pattern))

    def clear(self) -> None:
        self._floats.clear()
        self._floats_by_name.clear()

    def get_report(self) -> dict[str, Any]:
        """Counts of collected floats by name."""
        return {
            "enabled": self.enabled,
            "total_floats": len(self._floats),
            "float_counts": {name: len(events) for name, events in self._floats_by_name.items()},
        }

    def __repr__(self) -> str:
        return f"FloatController(enabled={self.enabled}, floats={len(self._floats)})"


def float_event(event_name: str, **data: Any) -> FloatEvent | None:
    """Emit a float event on the global controller."""
    return FloatController.get_instance().float(event_name, **data)


class FloatContext:
    """
    Context manager that enables and clears float collection.

    The previous enabled state is restored on exit; collected floats stay
    available for inspection afterwards.
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.fc = FloatController.get_instance()
        self._old_enabled = self.fc.enabled

    def __enter__(self) -> FloatController:
        self.fc.enabled = self.enabled
        self.fc.clear()
        return self.fc

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.fc.enabled = self._old_enabled
        return False


__all__ = ["FloatContext", "FloatController", "FloatEvent", "float_event"]
