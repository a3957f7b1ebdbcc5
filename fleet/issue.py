"""Issue value object and issue kinds."""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .status import Severity


class IssueKind(Enum):
    """What an issue is about."""

    INSPECTION_OVERDUE = "INSPECTION_OVERDUE"
    INSPECTION_CRITICAL = "INSPECTION_CRITICAL"
    RECENT_FAILURE = "RECENT_FAILURE"
    RECURRING_FAILURE = "RECURRING_FAILURE"
    NEVER_INSPECTED = "NEVER_INSPECTED"
    MAINTENANCE_OVERDUE = "MAINTENANCE_OVERDUE"
    MAINTENANCE_CRITICAL = "MAINTENANCE_CRITICAL"
    ODOMETER_GAP = "ODOMETER_GAP"
    NEVER_MAINTAINED = "NEVER_MAINTAINED"

    @property
    def action(self) -> str:
        """Record type that resolves this issue: 'inspection' or 'maintenance'."""
        if self in (
            IssueKind.MAINTENANCE_OVERDUE,
            IssueKind.MAINTENANCE_CRITICAL,
            IssueKind.ODOMETER_GAP,
            IssueKind.NEVER_MAINTAINED,
        ):
            return "maintenance"
        return "inspection"


@dataclass(frozen=True)
class Issue:
    """A single detected problem with a pre-formatted message."""

    severity: Severity
    message: str
    kind: IssueKind
    failed_items: Tuple[str, ...] = ()

    @property
    def is_critical(self) -> bool:
        return self.severity == Severity.CRITICAL
