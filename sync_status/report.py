"""Module for summarizing object statuses at the end of a sync pass.

Each report counts the objects for one strategy in each status of one
dimension (actuation or reconcile). Pending statuses are not reported since
they are not emitted for all objects; pending objects are simply left out of
every bucket and the total.
"""

from dataclasses import dataclass
from enum import StrEnum
import io
import logging
from typing import TYPE_CHECKING

from .config import DEFAULT_LOG_CONFIG
from .resource import ObjectID
from .status import ActuationStatus, ActuationStrategy, ReconcileStatus

if TYPE_CHECKING:
    from .status_map import ObjectStatusMap

__all__ = [
    "ACTUATION_STATUSES",
    "RECONCILE_STATUSES",
    "Dimension",
    "StatusReport",
    "build_report",
    "log_status_map",
]

# Keeps a report on a single log line
COMMA_ESCAPED_NEWLINE_DELIMITER = ",\\n"
COMMA_SPACE_DELIMITER = ", "

ACTUATION_STATUSES: tuple[ActuationStatus, ...] = (
    ActuationStatus.SKIPPED,
    ActuationStatus.SUCCEEDED,
    ActuationStatus.FAILED,
)
"""Actuation statuses in order for logging, excluding pending."""

RECONCILE_STATUSES: tuple[ReconcileStatus, ...] = (
    ReconcileStatus.SKIPPED,
    ReconcileStatus.SUCCEEDED,
    ReconcileStatus.FAILED,
    ReconcileStatus.TIMEOUT,
)
"""Reconcile statuses in order for logging, excluding pending."""


class Dimension(StrEnum):
    """The status dimension summarized by a report."""

    ACTUATION = "Actuation"
    RECONCILE = "Reconcile"


REPORT_ORDER: tuple[tuple[ActuationStrategy, Dimension], ...] = (
    (ActuationStrategy.APPLY, Dimension.ACTUATION),
    (ActuationStrategy.APPLY, Dimension.RECONCILE),
    (ActuationStrategy.DELETE, Dimension.ACTUATION),
    (ActuationStrategy.DELETE, Dimension.RECONCILE),
)

_DIMENSION_STATUSES: dict[Dimension, tuple[ActuationStatus | ReconcileStatus, ...]] = {
    Dimension.ACTUATION: ACTUATION_STATUSES,
    Dimension.RECONCILE: RECONCILE_STATUSES,
}


@dataclass(frozen=True)
class StatusReport:
    """Summary of object counts for a strategy in each status of a dimension."""

    strategy: ActuationStrategy
    dimension: Dimension
    total: int
    text: str
    """Status segments joined by an escaped newline."""

    @property
    def title(self) -> str:
        """Return the strategy and dimension heading of the report."""
        return f"{self.strategy} {self.dimension}s"

    @property
    def message(self) -> str:
        """Return the report as a single log line."""
        if self.total == 0:
            return f"{self.title} (Total: {self.total})"
        return f"{self.title} (Total: {self.total}):\\n{self.text}"


def _join_ids(ids: list[ObjectID]) -> str:
    return COMMA_SPACE_DELIMITER.join(sorted(str(object_id) for object_id in ids))


def _write_status(
    buf: io.StringIO, status: ActuationStatus | ReconcileStatus, ids: list[ObjectID]
) -> None:
    if not ids:
        buf.write(f"{status} ({len(ids)})")
    else:
        buf.write(f"{status} ({len(ids)}): [{_join_ids(ids)}]")


def build_report(
    status_map: "ObjectStatusMap",
    strategy: ActuationStrategy,
    dimension: Dimension,
) -> StatusReport:
    """Build a report of the objects with the strategy in each status."""
    total = 0
    buf = io.StringIO()
    for i, status in enumerate(_DIMENSION_STATUSES[dimension]):
        if i > 0:
            buf.write(COMMA_ESCAPED_NEWLINE_DELIMITER)
        if dimension == Dimension.ACTUATION:
            ids = status_map.filter(strategy, actuation=status)
        else:
            ids = status_map.filter(strategy, reconcile=status)
        total += len(ids)
        _write_status(buf, status, ids)
    return StatusReport(
        strategy=strategy,
        dimension=dimension,
        total=total,
        text=buf.getvalue(),
    )


def log_status_map(
    status_map: "ObjectStatusMap",
    logger: logging.Logger,
    level: int = DEFAULT_LOG_CONFIG.level,
) -> None:
    """Log a report for each strategy and dimension.

    Nothing is computed unless the level is enabled for the logger.
    """
    if not logger.isEnabledFor(level):
        return
    for strategy, dimension in REPORT_ORDER:
        report = build_report(status_map, strategy, dimension)
        logger.log(level, report.message)
