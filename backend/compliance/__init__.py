"""Educator-to-child ratio compliance module."""

from .types import (
    CheckSeverity,
    ShiftAction,
    ShiftActionOptions,
    RatioRule,
    RatioPolicy,
    RatioStatus,
    AssignedStaff,
    ComplianceCheckResult,
    CentreComplianceSummary,
    StaffingRecommendation,
    NQF_RATIO_RULES,
)
from .engine import (
    resolve_ratio_rule,
    has_required_qualification,
    calculate_required_educators,
    check_room_compliance,
    simulate_shift_action,
    validate_shift_action,
    can_remove_staff_from_shift,
    get_centre_compliance_summary,
)
from .staffing import suggest_optimal_staffing
from .validators import (
    BaseValidator,
    RatioHeadcountValidator,
    QualificationMixValidator,
    RoomCapacityValidator,
)

__all__ = [
    "CheckSeverity",
    "ShiftAction",
    "ShiftActionOptions",
    "RatioRule",
    "RatioPolicy",
    "RatioStatus",
    "AssignedStaff",
    "ComplianceCheckResult",
    "CentreComplianceSummary",
    "StaffingRecommendation",
    "NQF_RATIO_RULES",
    "resolve_ratio_rule",
    "has_required_qualification",
    "calculate_required_educators",
    "check_room_compliance",
    "simulate_shift_action",
    "validate_shift_action",
    "can_remove_staff_from_shift",
    "get_centre_compliance_summary",
    "suggest_optimal_staffing",
    "BaseValidator",
    "RatioHeadcountValidator",
    "QualificationMixValidator",
    "RoomCapacityValidator",
]
