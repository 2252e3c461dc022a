"""Module for tracking the status of every object in a sync pass.

The applier records a status for each object as it is actuated (applied or
deleted) and then reconciled. The map is created empty at the start of a
pass and discarded or reset at the end; it is never persisted.

Writes to different objects may happen concurrently, however a write and a
read of the same object must be synchronized by the caller, which is
expected to be the single writer for that object. Reports built while
writes are in flight may see a mix of old and new statuses.
"""

from collections.abc import Iterator
import logging
import threading

from .config import DEFAULT_LOG_CONFIG
from .report import log_status_map
from .resource import ObjectID
from .status import (
    ActuationStatus,
    ActuationStrategy,
    ObjectStatus,
    ReconcileStatus,
)

__all__ = [
    "ObjectStatusMap",
]

_LOGGER = logging.getLogger(__name__)


class ObjectStatusMap:
    """A map of object IDs to ObjectStatus.

    An object may be present with no status (see `set`), in which case it is
    treated the same as an object that was never seen: it never matches a
    filter and is never counted in a report.
    """

    def __init__(self) -> None:
        """Initialize the ObjectStatusMap."""
        self._statuses: dict[ObjectID, ObjectStatus | None] = {}
        self._lock = threading.Lock()

    def set(self, object_id: ObjectID, status: ObjectStatus | None) -> None:
        """Set the status for an object, replacing any previous status."""
        _LOGGER.debug("Setting status for object %s to %s", object_id, status)
        with self._lock:
            self._statuses[object_id] = status

    def get(self, object_id: ObjectID) -> ObjectStatus | None:
        """Retrieve the status for an object, if any."""
        with self._lock:
            return self._statuses.get(object_id)

    def reset(self) -> None:
        """Remove all object statuses at the end of a sync pass."""
        with self._lock:
            self._statuses.clear()

    def __contains__(self, object_id: object) -> bool:
        with self._lock:
            return object_id in self._statuses

    def __len__(self) -> int:
        with self._lock:
            return len(self._statuses)

    def __iter__(self) -> Iterator[ObjectID]:
        with self._lock:
            return iter(list(self._statuses))

    def filter(
        self,
        strategy: ActuationStrategy | str | None = None,
        actuation: ActuationStatus | str | None = None,
        reconcile: ReconcileStatus | str | None = None,
    ) -> list[ObjectID]:
        """Return an unsorted list of IDs that satisfy the specified constraints.

        Use None (or the empty string) to specify the constraint is not required.
        Objects without a status never match.
        """
        with self._lock:
            items = list(self._statuses.items())
        ids: list[ObjectID] = []
        for object_id, status in items:
            if status is None:
                continue
            if strategy and status.strategy != strategy:
                continue
            if actuation and status.actuation != actuation:
                continue
            if reconcile and status.reconcile != reconcile:
                continue
            ids.append(object_id)
        return ids

    def has_failures(self) -> bool:
        """Check if any object failed to actuate or reconcile.

        Returns:
            bool: True if any object has failed, False otherwise.
        """
        with self._lock:
            statuses = list(self._statuses.values())
        for status in statuses:
            if status is None:
                continue
            if status.actuation == ActuationStatus.FAILED:
                return True
            if status.reconcile in (ReconcileStatus.FAILED, ReconcileStatus.TIMEOUT):
                return True
        return False

    def log(
        self, logger: logging.Logger, level: int = DEFAULT_LOG_CONFIG.level
    ) -> None:
        """Log object statuses to the specified logger.

        This produces multiple log entries if the level is enabled for the logger.
        """
        log_status_map(self, logger, level)
