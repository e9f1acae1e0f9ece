"""Type definitions for the fatigue module."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class RiskLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


class FatigueViolationType(str, Enum):
    CONSECUTIVE_DAYS = "consecutive_days"
    WEEKLY_HOURS = "weekly_hours"
    REST_BREAK = "rest_break"


class FatigueViolationSeverity(str, Enum):
    WARNING = "warning"
    VIOLATION = "violation"
    CRITICAL = "critical"


@dataclass(frozen=True)
class FatigueRuleConfig:
    """Fatigue limits for a rule set. Defaults follow Fair Work guidance."""
    name: str = "Standard Fatigue Management"
    max_consecutive_days: int = 6
    max_weekly_hours: float = 40.0
    min_rest_between_shifts: float = 10.0
    max_night_shifts: int = 3
    night_shift_start: str = "22:00"  # HH:MM format
    night_shift_end: str = "06:00"  # HH:MM format
    fatigue_score_threshold: int = 80

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "max_consecutive_days": self.max_consecutive_days,
            "max_weekly_hours": self.max_weekly_hours,
            "min_rest_between_shifts": self.min_rest_between_shifts,
            "max_night_shifts": self.max_night_shifts,
            "night_shift_start": self.night_shift_start,
            "night_shift_end": self.night_shift_end,
            "fatigue_score_threshold": self.fatigue_score_threshold,
        }


DEFAULT_FATIGUE_RULES = FatigueRuleConfig()


@dataclass
class FatigueFactor:
    """One weighted contribution to a fatigue score."""
    factor: str
    contribution: int
    details: str

    def to_dict(self) -> dict:
        return {"factor": self.factor, "contribution": self.contribution, "details": self.details}


@dataclass
class FatigueScore:
    """Weighted 0-100 fatigue score for a worker."""
    worker_id: str
    worker_name: str
    current_score: int
    risk_level: RiskLevel
    factors: list[FatigueFactor] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    # Advisory only; never used for compliance decisions
    projected_score_next_week: int = 0
    projection_method: str = ""
    calculated_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "worker_id": self.worker_id,
            "worker_name": self.worker_name,
            "current_score": self.current_score,
            "risk_level": self.risk_level.value,
            "factors": [f.to_dict() for f in self.factors],
            "recommendations": list(self.recommendations),
            "projected_score_next_week": self.projected_score_next_week,
            "projection_method": self.projection_method,
            "calculated_at": self.calculated_at.isoformat() if self.calculated_at else None,
        }


@dataclass
class FatigueViolation:
    """A single breach of a fatigue limit."""
    id: str
    worker_id: str
    worker_name: str
    violation_type: FatigueViolationType
    severity: FatigueViolationSeverity
    description: str
    current_value: float
    limit_value: float
    shift_ids: list[str] = field(default_factory=list)
    detected_at: datetime | None = None
    acknowledged: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "id": self.id,
            "worker_id": self.worker_id,
            "worker_name": self.worker_name,
            "violation_type": self.violation_type.value,
            "severity": self.severity.value,
            "description": self.description,
            "current_value": self.current_value,
            "limit_value": self.limit_value,
            "shift_ids": list(self.shift_ids),
            "detected_at": self.detected_at.isoformat() if self.detected_at else None,
            "acknowledged": self.acknowledged,
        }


@dataclass(frozen=True)
class FatigueMetrics:
    """Raw metrics derived from a worker's recent shift history."""
    weekly_hours: float
    consecutive_days: int
    night_shift_count: int
    min_rest_hours: float | None  # None when no pair of shifts has a positive gap
    avg_rest_hours: float | None
    shift_ids: tuple[str, ...] = ()
