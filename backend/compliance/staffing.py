"""Lowest-cost staffing recommendation for a room."""

from datetime import date as date_type
from typing import Optional

from roster.types import Room, WorkerRecord
from .engine import calculate_required_educators, has_required_qualification
from .types import RatioPolicy, RatioRule, StaffingRecommendation


def suggest_optimal_staffing(
    room: Room,
    ratio_rule: Optional[RatioRule],
    booked_children: int,
    available_workers: list[WorkerRecord],
    as_of: date_type,
    policy: RatioPolicy = RatioPolicy(),
) -> StaffingRecommendation:
    """
    Pick the cheapest worker set that meets the room ratio.

    Candidates are ordered qualified-first, then by ascending hourly rate,
    and taken greedily up to the required headcount. If the pick is still
    short of qualified educators, unqualified picks are swapped for unpicked
    qualified candidates.
    """
    total_required, qualified_required = calculate_required_educators(
        booked_children, room.required_ratio, policy
    )
    required_qual = ratio_rule.effective_qualification if ratio_rule else None

    def is_qualified(worker: WorkerRecord) -> bool:
        return has_required_qualification(worker, required_qual, as_of)

    # sorted() is stable so equal-rate candidates keep directory order
    sorted_workers = sorted(
        available_workers,
        key=lambda w: (not is_qualified(w), w.hourly_rate),
    )

    recommended = sorted_workers[:total_required]
    qualified_count = sum(1 for w in recommended if is_qualified(w))

    if qualified_count < qualified_required:
        picked_ids = {w.id for w in recommended}
        unqualified_picked = [w for w in recommended if not is_qualified(w)]
        qualified_unpicked = [w for w in sorted_workers if is_qualified(w) and w.id not in picked_ids]

        for to_remove, to_add in zip(unqualified_picked, qualified_unpicked):
            if qualified_count >= qualified_required:
                break
            recommended[recommended.index(to_remove)] = to_add
            qualified_count += 1

    still_need_qualified = max(0, qualified_required - qualified_count)

    message = f"{total_required} educator(s) needed for {booked_children} children (1:{room.required_ratio:g})"
    if len(recommended) < total_required:
        message += f". Warning: only {len(recommended)} staff available."
    if still_need_qualified > 0:
        message += f". Warning: {still_need_qualified} more qualified staff needed."

    return StaffingRecommendation(
        recommended=recommended,
        minimum_required=total_required,
        qualified_required=qualified_required,
        message=message,
    )
