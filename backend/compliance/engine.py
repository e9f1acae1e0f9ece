"""Ratio compliance engine for rooms, shift actions and whole centres."""

import logging
import math
from datetime import date as date_type
from typing import Optional

import config
from roster.types import Centre, QualificationType, Room, ShiftRecord, WorkerRecord
from utils.time import parse_iso_date
from .types import (
    AGE_GROUP_ALIASES,
    NQF_RATIO_RULES,
    AssignedStaff,
    CentreComplianceSummary,
    CheckSeverity,
    ComplianceCheckResult,
    RatioPolicy,
    RatioRule,
    RatioStatus,
    RoomCheckContext,
    ShiftAction,
    ShiftActionOptions,
)
from .validators import BaseValidator, DEFAULT_ROOM_VALIDATORS


def resolve_ratio_rule(
    age_group: str,
    rules: tuple[RatioRule, ...] = NQF_RATIO_RULES,
) -> Optional[RatioRule]:
    """Find the ratio rule for a room age group, following known aliases."""
    key = age_group.lower()
    key = AGE_GROUP_ALIASES.get(key, key)
    for rule in rules:
        if rule.age_group == key:
            return rule
    return None


def has_required_qualification(
    worker: WorkerRecord,
    required: Optional[QualificationType],
    as_of: date_type,
) -> bool:
    """A worker counts when they hold the required qualification unexpired as of the date."""
    if not required:
        return True

    return any(q.type == required and not q.is_expired(as_of) for q in worker.qualifications)


def calculate_required_educators(
    child_count: int,
    ratio: float,
    policy: RatioPolicy = RatioPolicy(),
) -> tuple[int, int]:
    """
    Calculate required educators for a child count.

    Returns:
        Tuple of (total_required, qualified_required)
    """
    if child_count <= 0 or ratio <= 0:
        return 0, 0

    total_required = math.ceil(child_count / ratio)
    qualified_required = math.ceil(total_required * policy.qualified_staff_ratio)

    return total_required, qualified_required


def check_room_compliance(
    room: Room,
    ratio_rule: Optional[RatioRule],
    shifts: list[ShiftRecord],
    workers: list[WorkerRecord],
    date: str,
    booked_children: int,
    time_slot: str = config.DEFAULT_TIME_SLOT,
    policy: RatioPolicy = RatioPolicy(),
    as_of: Optional[date_type] = None,
    validators: tuple[BaseValidator, ...] = DEFAULT_ROOM_VALIDATORS,
) -> RatioStatus:
    """
    Check ratio compliance for a room on a date.

    Args:
        room: The room being checked
        ratio_rule: Age-band rule naming the required qualification (None means no requirement)
        shifts: Candidate shifts; only this room's shifts on the date are used
        workers: Worker directory used to resolve shift assignments
        date: ISO date string being checked
        booked_children: Booked or projected child count
        time_slot: Label of the time slot being checked
        policy: Qualified-share and severity policy
        as_of: Reference date for qualification expiry (defaults to the checked date)
        validators: Room validators producing warnings and blocking issues

    Returns:
        RatioStatus with counts, shortfalls and issues
    """
    as_of = as_of or parse_iso_date(date)
    required_qual = ratio_rule.effective_qualification if ratio_rule else None
    worker_map = {w.id: w for w in workers}

    room_shifts = [s for s in shifts if s.room_id == room.id and s.date == date]

    # Distinct workers in first-seen order, first shift kept for the time span
    first_shift: dict[str, ShiftRecord] = {}
    for shift in room_shifts:
        if shift.worker_id not in worker_map:
            logging.debug(f"Shift {shift.id} references unknown worker {shift.worker_id}, skipping")
            continue
        first_shift.setdefault(shift.worker_id, shift)

    assigned_staff = []
    for worker_id, shift in first_shift.items():
        worker = worker_map[worker_id]
        assigned_staff.append(AssignedStaff(
            worker_id=worker.id,
            name=worker.name,
            is_qualified=has_required_qualification(worker, required_qual, as_of),
            qualifications=worker.active_qualifications(as_of),
            shift_time=shift.time_span,
        ))

    scheduled_educators = len(assigned_staff)
    qualified_educators = sum(1 for s in assigned_staff if s.is_qualified)

    total_required, qualified_required = calculate_required_educators(
        booked_children, room.required_ratio, policy
    )

    educator_shortfall = max(0, total_required - scheduled_educators)
    qualification_shortfall = max(0, qualified_required - qualified_educators)

    status = RatioStatus(
        room_id=room.id,
        room_name=room.name,
        date=date,
        time_slot=time_slot,
        booked_children=booked_children,
        projected_children=booked_children,
        scheduled_educators=scheduled_educators,
        qualified_educators=qualified_educators,
        required_educators=total_required,
        required_qualified_educators=qualified_required,
        ratio=room.required_ratio,
        is_compliant=educator_shortfall == 0,
        is_qualification_compliant=qualification_shortfall == 0,
        educator_shortfall=educator_shortfall,
        qualification_shortfall=qualification_shortfall,
        assigned_staff=assigned_staff,
    )

    context = RoomCheckContext(
        room_capacity=room.capacity,
        booked_children=booked_children,
        ratio=room.required_ratio,
        policy=policy,
    )
    for validator in validators:
        validator.validate(context, status)

    return status


def simulate_shift_action(
    action: ShiftAction | str,
    shift: ShiftRecord,
    all_shifts: list[ShiftRecord],
) -> list[ShiftRecord]:
    """Build the post-action shift list without touching the caller's list."""
    action = ShiftAction(action)

    if action == ShiftAction.CREATE:
        return [*all_shifts, shift]
    elif action == ShiftAction.DELETE:
        return [s for s in all_shifts if s.id != shift.id]
    return [shift if s.id == shift.id else s for s in all_shifts]


def validate_shift_action(
    action: ShiftAction | str,
    shift: ShiftRecord,
    all_shifts: list[ShiftRecord],
    workers: list[WorkerRecord],
    room: Room,
    booked_children: int,
    options: ShiftActionOptions = ShiftActionOptions(),
    ratio_rule: Optional[RatioRule] = None,
    policy: RatioPolicy = RatioPolicy(),
    as_of: Optional[date_type] = None,
) -> ComplianceCheckResult:
    """
    Check whether a shift create/modify/delete keeps the room compliant.

    Blocking issues refuse the action unless options.allow_override is set
    or options.enforce_blocking is False. Warnings never refuse it.
    """
    action = ShiftAction(action)
    if ratio_rule is None:
        ratio_rule = resolve_ratio_rule(room.age_group)

    simulated_shifts = simulate_shift_action(action, shift, all_shifts)
    ratio_status = check_room_compliance(
        room,
        ratio_rule,
        simulated_shifts,
        workers,
        shift.date,
        booked_children,
        policy=policy,
        as_of=as_of,
    )

    if ratio_status.blocking_issues:
        can_proceed = options.allow_override or not options.enforce_blocking
        overridden = can_proceed and options.allow_override
        if overridden:
            logging.info(f"Override applied to {action.value} of shift {shift.id}: {'; '.join(ratio_status.blocking_issues)}")
        else:
            logging.debug(f"Blocking {action.value} of shift {shift.id} in room {room.id}")

        suggested_actions = []
        if ratio_status.educator_shortfall > 0:
            suggested_actions.append(f"Add {ratio_status.educator_shortfall} more educator(s)")
        if ratio_status.qualification_shortfall > 0:
            suggested_actions.append(f"Add {ratio_status.qualification_shortfall} more qualified educator(s)")
        suggested_actions.append("Reduce booked children for this time slot")
        suggested_actions.append("Consider splitting the group between rooms")

        return ComplianceCheckResult(
            can_proceed=can_proceed,
            ratio_status=ratio_status,
            message="; ".join(ratio_status.blocking_issues),
            severity=CheckSeverity.BLOCKING,
            suggested_actions=suggested_actions,
            overridden=overridden,
        )

    if ratio_status.warnings:
        return ComplianceCheckResult(
            can_proceed=True,
            ratio_status=ratio_status,
            message="; ".join(ratio_status.warnings),
            severity=CheckSeverity.WARNING,
            suggested_actions=[
                f"Add {ratio_status.qualification_shortfall} more qualified educator(s)",
            ],
        )

    return ComplianceCheckResult(
        can_proceed=True,
        ratio_status=ratio_status,
        message="Action complies with ratio requirements",
        severity=CheckSeverity.OK,
    )


def can_remove_staff_from_shift(
    shift: ShiftRecord,
    all_shifts: list[ShiftRecord],
    workers: list[WorkerRecord],
    room: Room,
    booked_children: int,
    options: ShiftActionOptions = ShiftActionOptions(),
    policy: RatioPolicy = RatioPolicy(),
    as_of: Optional[date_type] = None,
) -> ComplianceCheckResult:
    """Check whether removing a worker's shift would breach the room ratio."""
    return validate_shift_action(
        ShiftAction.DELETE,
        shift,
        all_shifts,
        workers,
        room,
        booked_children,
        options=options,
        policy=policy,
        as_of=as_of,
    )


def get_centre_compliance_summary(
    centre: Centre,
    shifts: list[ShiftRecord],
    workers: list[WorkerRecord],
    date: str,
    demand_by_room: dict[str, int],
    policy: RatioPolicy = RatioPolicy(),
    as_of: Optional[date_type] = None,
) -> CentreComplianceSummary:
    """Check every room of a centre for a date. Rooms without demand count zero children."""
    room_statuses = [
        check_room_compliance(
            room,
            resolve_ratio_rule(room.age_group),
            shifts,
            workers,
            date,
            demand_by_room.get(room.id, 0),
            policy=policy,
            as_of=as_of,
        )
        for room in centre.rooms
    ]

    return CentreComplianceSummary(
        overall_compliant=all(r.is_compliant for r in room_statuses),
        room_statuses=room_statuses,
        total_educators_needed=sum(r.required_educators for r in room_statuses),
        total_educators_scheduled=sum(r.scheduled_educators for r in room_statuses),
        critical_issues=[issue for r in room_statuses for issue in r.blocking_issues],
        warnings=[warning for r in room_statuses for warning in r.warnings],
    )
