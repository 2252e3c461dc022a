"""Status information for an object in a sync pass."""

from dataclasses import dataclass
from enum import StrEnum

__all__ = [
    "ActuationStrategy",
    "ActuationStatus",
    "ReconcileStatus",
    "ObjectStatus",
]


class ActuationStrategy(StrEnum):
    """Method of actuation used or planned to be used for an object."""

    APPLY = "Apply"
    DELETE = "Delete"


class ActuationStatus(StrEnum):
    """Whether actuation has been performed yet and how it went."""

    PENDING = "Pending"
    SKIPPED = "Skipped"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"


class ReconcileStatus(StrEnum):
    """Whether reconciliation has been performed yet and how it went."""

    PENDING = "Pending"
    SKIPPED = "Skipped"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    TIMEOUT = "Timeout"


@dataclass(frozen=True)
class ObjectStatus:
    """Strategy, actuation and reconcile status of a single object."""

    strategy: ActuationStrategy
    actuation: ActuationStatus
    reconcile: ReconcileStatus

    def __str__(self) -> str:
        """Return a string representation of the status."""
        return f"{self.strategy}/{self.actuation}/{self.reconcile}"
