"""Type definitions for the ratio compliance module."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import config
from roster.types import QualificationType, WorkerRecord


class CheckSeverity(str, Enum):
    """Outcome severities for a compliance check."""
    OK = "ok"
    WARNING = "warning"  # Proceed, surface advisory text
    BLOCKING = "blocking"  # Refuse unless explicitly overridden


class ShiftAction(str, Enum):
    CREATE = "create"
    MODIFY = "modify"
    DELETE = "delete"


@dataclass(frozen=True)
class RatioRule:
    """Educator-to-child ratio requirement for an age band."""
    age_group: str
    min_age: float
    max_age: float
    ratio: float  # children per educator
    requires_qualified_educator: bool = False
    qualification_required: Optional[QualificationType] = None

    @property
    def effective_qualification(self) -> Optional[QualificationType]:
        """Qualification staff must hold, or None when the rule does not require one."""
        return self.qualification_required if self.requires_qualified_educator else None

    def to_dict(self) -> dict:
        return {
            "age_group": self.age_group,
            "min_age": self.min_age,
            "max_age": self.max_age,
            "ratio": self.ratio,
            "requires_qualified_educator": self.requires_qualified_educator,
            "qualification_required": self.qualification_required.value if self.qualification_required else None,
        }


# National Quality Framework ratio requirements
NQF_RATIO_RULES: tuple[RatioRule, ...] = (
    RatioRule("babies", 0, 2, 4, True, QualificationType.DIPLOMA_ECE),
    RatioRule("toddlers", 2, 3, 5, True, QualificationType.CERTIFICATE_III),
    RatioRule("preschool", 3, 4, 10, True, QualificationType.CERTIFICATE_III),
    RatioRule("kindy", 4, 5, 11, True, QualificationType.CERTIFICATE_III),
)

# Room age-group names used by centres that differ from the NQF band names
AGE_GROUP_ALIASES = {
    "nursery": "babies",
    "baby": "babies",
    "toddler": "toddlers",
    "kinder": "kindy",
}


@dataclass(frozen=True)
class RatioPolicy:
    """Internal staffing policy layered on top of the regulatory ratio."""
    qualified_staff_ratio: float = 0.5
    qualification_shortfall_severity: CheckSeverity = CheckSeverity.WARNING

    @classmethod
    def from_config(cls) -> "RatioPolicy":
        """Create from the environment-backed defaults in config."""
        return cls(
            qualified_staff_ratio=config.QUALIFIED_STAFF_RATIO,
            qualification_shortfall_severity=CheckSeverity(config.QUALIFICATION_SHORTFALL_SEVERITY),
        )


@dataclass(frozen=True)
class ShiftActionOptions:
    enforce_blocking: bool = True
    allow_override: bool = False


@dataclass
class AssignedStaff:
    """A worker rostered into the room on the checked date."""
    worker_id: str
    name: str
    is_qualified: bool
    qualifications: list[QualificationType] = field(default_factory=list)
    shift_time: str = "Unknown"

    def to_dict(self) -> dict:
        return {
            "worker_id": self.worker_id,
            "name": self.name,
            "is_qualified": self.is_qualified,
            "qualifications": [q.value for q in self.qualifications],
            "shift_time": self.shift_time,
        }


@dataclass
class RatioStatus:
    """Ratio snapshot for a room on a date and time slot."""
    room_id: str
    room_name: str
    date: str
    time_slot: str

    booked_children: int = 0
    projected_children: int = 0
    scheduled_educators: int = 0
    qualified_educators: int = 0

    required_educators: int = 0
    required_qualified_educators: int = 0
    ratio: float = 0

    is_compliant: bool = True
    is_qualification_compliant: bool = True
    educator_shortfall: int = 0
    qualification_shortfall: int = 0

    assigned_staff: list[AssignedStaff] = field(default_factory=list)

    warnings: list[str] = field(default_factory=list)
    blocking_issues: list[str] = field(default_factory=list)

    def add_issue(self, message: str, severity: CheckSeverity):
        """Record an issue under the list matching its severity."""
        if severity == CheckSeverity.BLOCKING:
            self.blocking_issues.append(message)
        elif severity == CheckSeverity.WARNING:
            self.warnings.append(message)

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "room_id": self.room_id,
            "room_name": self.room_name,
            "date": self.date,
            "time_slot": self.time_slot,
            "booked_children": self.booked_children,
            "projected_children": self.projected_children,
            "scheduled_educators": self.scheduled_educators,
            "qualified_educators": self.qualified_educators,
            "required_educators": self.required_educators,
            "required_qualified_educators": self.required_qualified_educators,
            "ratio": self.ratio,
            "is_compliant": self.is_compliant,
            "is_qualification_compliant": self.is_qualification_compliant,
            "educator_shortfall": self.educator_shortfall,
            "qualification_shortfall": self.qualification_shortfall,
            "assigned_staff": [s.to_dict() for s in self.assigned_staff],
            "warnings": list(self.warnings),
            "blocking_issues": list(self.blocking_issues),
        }


@dataclass
class ComplianceCheckResult:
    """Outcome of simulating a shift mutation against the room ratio."""
    can_proceed: bool
    ratio_status: RatioStatus
    message: str
    severity: CheckSeverity
    suggested_actions: list[str] = field(default_factory=list)
    overridden: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "can_proceed": self.can_proceed,
            "ratio_status": self.ratio_status.to_dict(),
            "message": self.message,
            "severity": self.severity.value,
            "suggested_actions": list(self.suggested_actions),
            "overridden": self.overridden,
        }


@dataclass
class CentreComplianceSummary:
    overall_compliant: bool
    room_statuses: list[RatioStatus]
    total_educators_needed: int
    total_educators_scheduled: int
    critical_issues: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "overall_compliant": self.overall_compliant,
            "room_statuses": [r.to_dict() for r in self.room_statuses],
            "total_educators_needed": self.total_educators_needed,
            "total_educators_scheduled": self.total_educators_scheduled,
            "critical_issues": list(self.critical_issues),
            "warnings": list(self.warnings),
        }


@dataclass
class StaffingRecommendation:
    recommended: list[WorkerRecord]
    minimum_required: int
    qualified_required: int
    message: str

    def to_dict(self) -> dict:
        return {
            "recommended": [
                {"worker_id": w.id, "name": w.name, "hourly_rate": w.hourly_rate}
                for w in self.recommended
            ],
            "minimum_required": self.minimum_required,
            "qualified_required": self.qualified_required,
            "message": self.message,
        }


@dataclass
class RoomCheckContext:
    """Inputs shared by the room validators for one compliance check."""
    room_capacity: int
    booked_children: int
    ratio: float
    policy: RatioPolicy
