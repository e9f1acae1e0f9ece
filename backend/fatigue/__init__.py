"""Worker fatigue scoring module."""

from .types import (
    RiskLevel,
    FatigueViolationType,
    FatigueViolationSeverity,
    FatigueRuleConfig,
    FatigueFactor,
    FatigueScore,
    FatigueViolation,
    FatigueMetrics,
    DEFAULT_FATIGUE_RULES,
)
from .metrics import calculate_fatigue_metrics, is_night_shift
from .projection import (
    ProjectorType,
    ScoreProjector,
    LinearDecayProjector,
    RandomDecayProjector,
    create_projector,
)
from .scorer import (
    classify_risk,
    calculate_fatigue_score,
    detect_fatigue_violations,
    calculate_all_fatigue_scores,
)

__all__ = [
    "RiskLevel",
    "FatigueViolationType",
    "FatigueViolationSeverity",
    "FatigueRuleConfig",
    "FatigueFactor",
    "FatigueScore",
    "FatigueViolation",
    "FatigueMetrics",
    "DEFAULT_FATIGUE_RULES",
    "calculate_fatigue_metrics",
    "is_night_shift",
    "ProjectorType",
    "ScoreProjector",
    "LinearDecayProjector",
    "RandomDecayProjector",
    "create_projector",
    "classify_risk",
    "calculate_fatigue_score",
    "detect_fatigue_violations",
    "calculate_all_fatigue_scores",
]
