"""Fatigue scoring and violation detection."""

import logging
import math
from datetime import datetime

import config
from roster.types import ShiftRecord, WorkerRecord
from .metrics import calculate_fatigue_metrics
from .projection import LinearDecayProjector, ScoreProjector
from .types import (
    DEFAULT_FATIGUE_RULES,
    FatigueFactor,
    FatigueMetrics,
    FatigueRuleConfig,
    FatigueScore,
    FatigueViolation,
    FatigueViolationSeverity,
    FatigueViolationType,
    RiskLevel,
)

# Point budget per factor; the four budgets sum to 100
WEEKLY_HOURS_POINTS = 35
CONSECUTIVE_DAYS_POINTS = 30
NIGHT_SHIFT_POINTS = 20
REST_DEFICIT_POINTS = 15


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _weighted(ratio: float, points: int) -> int:
    return min(points, _round_half_up(ratio * points))


def classify_risk(score: int, rules: FatigueRuleConfig = DEFAULT_FATIGUE_RULES) -> RiskLevel:
    if score >= rules.fatigue_score_threshold:
        return RiskLevel.CRITICAL
    if score < 40:
        return RiskLevel.LOW
    if score < 60:
        return RiskLevel.MODERATE
    return RiskLevel.HIGH


def score_factors(metrics: FatigueMetrics, rules: FatigueRuleConfig) -> list[FatigueFactor]:
    """Convert raw metrics into the four weighted factor contributions."""
    factors = []

    hours_ratio = metrics.weekly_hours / rules.max_weekly_hours if rules.max_weekly_hours else 0
    overtime = " (overtime)" if metrics.weekly_hours > rules.max_weekly_hours else ""
    factors.append(FatigueFactor(
        factor="Weekly Hours",
        contribution=_weighted(hours_ratio, WEEKLY_HOURS_POINTS),
        details=f"{_round_half_up(metrics.weekly_hours)} of {rules.max_weekly_hours:g} max hours{overtime}",
    ))

    days_ratio = metrics.consecutive_days / rules.max_consecutive_days if rules.max_consecutive_days else 0
    factors.append(FatigueFactor(
        factor="Consecutive Days",
        contribution=_weighted(days_ratio, CONSECUTIVE_DAYS_POINTS),
        details=f"{metrics.consecutive_days} of {rules.max_consecutive_days} max days",
    ))

    night_ratio = metrics.night_shift_count / rules.max_night_shifts if rules.max_night_shifts else 0
    factors.append(FatigueFactor(
        factor="Night Shifts",
        contribution=_weighted(night_ratio, NIGHT_SHIFT_POINTS),
        details=f"{metrics.night_shift_count} night shifts this week",
    ))

    if metrics.min_rest_hours is None:
        rest_contribution = 0
        rest_details = "No consecutive shifts to compare"
    else:
        rest_deficit = max(0.0, rules.min_rest_between_shifts - metrics.min_rest_hours)
        deficit_ratio = rest_deficit / rules.min_rest_between_shifts if rules.min_rest_between_shifts else 0
        rest_contribution = _weighted(deficit_ratio, REST_DEFICIT_POINTS)
        rest_details = f"Avg {metrics.avg_rest_hours:g} hours rest"
        if metrics.min_rest_hours < rules.min_rest_between_shifts:
            rest_details += f" (min {metrics.min_rest_hours:g}h gap detected)"
    factors.append(FatigueFactor(
        factor="Rest Between Shifts",
        contribution=rest_contribution,
        details=rest_details,
    ))

    return factors


def build_recommendations(score: int, metrics: FatigueMetrics, rules: FatigueRuleConfig) -> list[str]:
    recommendations = []
    if score < 40:
        recommendations.append("Schedule maintained well within limits")
    if metrics.weekly_hours > rules.max_weekly_hours:
        recommendations.append("Consider reducing hours next week")
    if metrics.min_rest_hours is not None and metrics.min_rest_hours < rules.min_rest_between_shifts:
        recommendations.append(f"Ensure minimum {rules.min_rest_between_shifts:g} hours rest between shifts")
    if metrics.consecutive_days >= rules.max_consecutive_days:
        recommendations.append("URGENT: Schedule rest day immediately")
    if metrics.night_shift_count > rules.max_night_shifts:
        recommendations.append("Reduce night shifts next roster")
    if score >= rules.fatigue_score_threshold:
        recommendations.append("CRITICAL: Immediate intervention required")
        recommendations.append("Manager review required")
    return recommendations


def calculate_fatigue_score(
    worker: WorkerRecord,
    all_shifts: list[ShiftRecord],
    rules: FatigueRuleConfig,
    reference: datetime,
    projector: ScoreProjector | None = None,
    lookback_days: int = config.FATIGUE_LOOKBACK_DAYS,
) -> FatigueScore:
    """
    Calculate a worker's weighted 0-100 fatigue score.

    Args:
        worker: The worker being scored
        all_shifts: Shift history; only this worker's shifts in the lookback window are used
        rules: Fatigue limits
        reference: Instant the lookback windows end at
        projector: Estimator for the advisory next-week score (deterministic linear decay by default)
        lookback_days: History window length

    Returns:
        FatigueScore with factor breakdown and recommendations
    """
    projector = projector or LinearDecayProjector()
    metrics = calculate_fatigue_metrics(worker.id, all_shifts, rules, reference, lookback_days)

    factors = score_factors(metrics, rules)
    total_score = min(100, sum(f.contribution for f in factors))
    risk_level = classify_risk(total_score, rules)

    if risk_level == RiskLevel.CRITICAL:
        logging.warning(f"Critical fatigue score {total_score} for worker {worker.id}")

    return FatigueScore(
        worker_id=worker.id,
        worker_name=worker.name,
        current_score=total_score,
        risk_level=risk_level,
        factors=factors,
        recommendations=build_recommendations(total_score, metrics, rules),
        projected_score_next_week=projector.project(total_score, metrics, rules),
        projection_method=projector.name,
        calculated_at=reference,
    )


def detect_fatigue_violations(
    worker: WorkerRecord,
    all_shifts: list[ShiftRecord],
    rules: FatigueRuleConfig,
    reference: datetime,
    lookback_days: int = config.FATIGUE_LOOKBACK_DAYS,
) -> list[FatigueViolation]:
    """Detect each fatigue limit the worker's recent history exceeds."""
    metrics = calculate_fatigue_metrics(worker.id, all_shifts, rules, reference, lookback_days)
    violations = []

    def violation(kind: FatigueViolationType, suffix: str, **kwargs) -> FatigueViolation:
        return FatigueViolation(
            id=f"viol-{worker.id}-{suffix}",
            worker_id=worker.id,
            worker_name=worker.name,
            violation_type=kind,
            shift_ids=list(metrics.shift_ids),
            detected_at=reference,
            **kwargs,
        )

    if metrics.consecutive_days > rules.max_consecutive_days:
        violations.append(violation(
            FatigueViolationType.CONSECUTIVE_DAYS,
            "consecutive",
            severity=(
                FatigueViolationSeverity.CRITICAL
                if metrics.consecutive_days > rules.max_consecutive_days + 1
                else FatigueViolationSeverity.VIOLATION
            ),
            description="Exceeded maximum consecutive work days",
            current_value=metrics.consecutive_days,
            limit_value=rules.max_consecutive_days,
        ))

    if metrics.weekly_hours > rules.max_weekly_hours:
        violations.append(violation(
            FatigueViolationType.WEEKLY_HOURS,
            "hours",
            severity=(
                FatigueViolationSeverity.CRITICAL
                if metrics.weekly_hours > rules.max_weekly_hours * 1.2
                else FatigueViolationSeverity.VIOLATION
            ),
            description="Exceeded maximum weekly hours",
            current_value=round(metrics.weekly_hours, 1),
            limit_value=rules.max_weekly_hours,
        ))

    if metrics.min_rest_hours is not None and metrics.min_rest_hours < rules.min_rest_between_shifts:
        violations.append(violation(
            FatigueViolationType.REST_BREAK,
            "rest",
            severity=(
                FatigueViolationSeverity.VIOLATION
                if metrics.min_rest_hours < rules.min_rest_between_shifts - 2
                else FatigueViolationSeverity.WARNING
            ),
            description="Insufficient rest between shifts",
            current_value=metrics.min_rest_hours,
            limit_value=rules.min_rest_between_shifts,
        ))

    return violations


def calculate_all_fatigue_scores(
    workers: list[WorkerRecord],
    shifts: list[ShiftRecord],
    rules: FatigueRuleConfig,
    reference: datetime,
    projector: ScoreProjector | None = None,
) -> tuple[list[FatigueScore], list[FatigueViolation]]:
    """Score a whole team against one shared reference instant."""
    scores = []
    violations = []

    for worker in workers:
        scores.append(calculate_fatigue_score(worker, shifts, rules, reference, projector))
        violations.extend(detect_fatigue_violations(worker, shifts, rules, reference))

    return scores, violations
