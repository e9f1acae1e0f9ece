"""Unit tests for room ratio compliance.

Covers required educator counts, room checks, the validator chain,
shift action simulation with override, and centre summaries.
"""

import pytest
from datetime import date

from compliance.engine import (
    calculate_required_educators,
    can_remove_staff_from_shift,
    check_room_compliance,
    get_centre_compliance_summary,
    has_required_qualification,
    resolve_ratio_rule,
    simulate_shift_action,
    validate_shift_action,
)
from compliance.types import (
    CheckSeverity,
    RatioPolicy,
    RatioRule,
    RatioStatus,
    RoomCheckContext,
    ShiftAction,
    ShiftActionOptions,
)
from compliance.validators import QualificationMixValidator, RoomCapacityValidator
from roster.types import Centre, QualificationType

DIPLOMA = QualificationType.DIPLOMA_ECE
DAY = "2024-01-15"


@pytest.fixture
def two_diploma_workers(make_worker):
    return [
        make_worker("alice", qualifications=[DIPLOMA]),
        make_worker("bob", qualifications=[DIPLOMA]),
    ]


@pytest.fixture
def two_shifts(make_shift):
    return [
        make_shift("alice", DAY, shift_id="s-alice"),
        make_shift("bob", DAY, shift_id="s-bob"),
    ]


class TestRequiredEducators:

    @pytest.mark.parametrize("children,ratio,expected", [
        (9, 4, (3, 2)),
        (8, 4, (2, 1)),
        (1, 10, (1, 1)),
        (21, 10, (3, 2)),
    ])
    def test_ceiling_formula(self, children, ratio, expected):
        assert calculate_required_educators(children, ratio) == expected

    def test_zero_children_requires_nobody(self):
        assert calculate_required_educators(0, 4) == (0, 0)

    def test_non_positive_ratio_requires_nobody(self):
        assert calculate_required_educators(10, 0) == (0, 0)

    def test_policy_changes_qualified_share(self):
        policy = RatioPolicy(qualified_staff_ratio=1.0)
        assert calculate_required_educators(9, 4, policy) == (3, 3)


class TestQualificationChecks:

    def test_no_requirement_counts_everyone(self, make_worker):
        assert has_required_qualification(make_worker("w"), None, date(2024, 1, 1))

    def test_expired_qualification_does_not_count(self, make_worker):
        worker = make_worker("w", qualifications=[DIPLOMA], expiry_date=date(2023, 12, 31))
        assert not has_required_qualification(worker, DIPLOMA, date(2024, 1, 1))
        assert has_required_qualification(worker, DIPLOMA, date(2023, 12, 31))

    def test_alias_resolves_to_nqf_rule(self):
        assert resolve_ratio_rule("Nursery").age_group == "babies"
        assert resolve_ratio_rule("toddler").ratio == 5
        assert resolve_ratio_rule("outdoor") is None

    def test_rule_without_flag_has_no_effective_qualification(self):
        rule = RatioRule("babies", 0, 2, 4, requires_qualified_educator=False, qualification_required=DIPLOMA)
        assert rule.effective_qualification is None


class TestCheckRoomCompliance:

    def test_ratio_breach_is_blocking(
        self, babies_room, babies_rule, two_diploma_workers, two_shifts
    ):
        """Nine babies with two educators at 1:4 is one educator short."""
        status = check_room_compliance(babies_room, babies_rule, two_shifts, two_diploma_workers, DAY, 9)

        assert status.required_educators == 3
        assert status.scheduled_educators == 2
        assert status.educator_shortfall == 1
        assert not status.is_compliant
        assert len(status.blocking_issues) == 1
        assert "2/3" in status.blocking_issues[0]

    def test_compliant_room_has_no_issues(
        self, babies_room, babies_rule, two_diploma_workers, two_shifts
    ):
        status = check_room_compliance(babies_room, babies_rule, two_shifts, two_diploma_workers, DAY, 8)

        assert status.is_compliant
        assert status.is_qualification_compliant
        assert status.blocking_issues == []
        assert status.warnings == []
        assert status.time_slot == "09:00-15:00"

    def test_rule_not_requiring_qualification_counts_everyone(self, babies_room, make_worker, two_shifts):
        """A named qualification is ignored when the rule does not require qualified educators."""
        rule = RatioRule("babies", 0, 2, 4, requires_qualified_educator=False, qualification_required=DIPLOMA)
        workers = [make_worker("alice"), make_worker("bob")]

        status = check_room_compliance(babies_room, rule, two_shifts, workers, DAY, 8)

        assert status.qualified_educators == 2
        assert status.is_qualification_compliant
        assert status.warnings == []

    def test_zero_children_is_compliant(self, babies_room, babies_rule):
        status = check_room_compliance(babies_room, babies_rule, [], [], DAY, 0)

        assert status.is_compliant
        assert status.required_educators == 0
        assert status.required_qualified_educators == 0
        assert status.blocking_issues == []

    def test_is_idempotent(self, babies_room, babies_rule, two_diploma_workers, two_shifts):
        first = check_room_compliance(babies_room, babies_rule, two_shifts, two_diploma_workers, DAY, 9)
        second = check_room_compliance(babies_room, babies_rule, two_shifts, two_diploma_workers, DAY, 9)
        assert first.to_dict() == second.to_dict()

    def test_other_rooms_and_dates_ignored(self, babies_room, babies_rule, make_worker, make_shift):
        workers = [make_worker("alice", qualifications=[DIPLOMA])]
        shifts = [
            make_shift("alice", DAY, room_id="room-preschool"),
            make_shift("alice", "2024-01-16"),
        ]
        status = check_room_compliance(babies_room, babies_rule, shifts, workers, DAY, 4)
        assert status.scheduled_educators == 0

    def test_worker_with_two_shifts_counted_once(self, babies_room, babies_rule, make_worker, make_shift):
        workers = [make_worker("alice", qualifications=[DIPLOMA])]
        shifts = [
            make_shift("alice", DAY, "07:00", "11:00"),
            make_shift("alice", DAY, "13:00", "17:00"),
        ]
        status = check_room_compliance(babies_room, babies_rule, shifts, workers, DAY, 4)

        assert status.scheduled_educators == 1
        assert status.assigned_staff[0].shift_time == "07:00-11:00"

    def test_unknown_worker_skipped(self, babies_room, babies_rule, make_shift):
        status = check_room_compliance(babies_room, babies_rule, [make_shift("ghost", DAY)], [], DAY, 4)
        assert status.scheduled_educators == 0
        assert status.assigned_staff == []

    def test_qualification_gap_is_warning_by_default(
        self, babies_room, babies_rule, make_worker, two_shifts
    ):
        workers = [make_worker("alice"), make_worker("bob")]
        status = check_room_compliance(babies_room, babies_rule, two_shifts, workers, DAY, 8)

        assert status.is_compliant
        assert not status.is_qualification_compliant
        assert status.qualification_shortfall == 1
        assert status.blocking_issues == []
        assert status.warnings == ["Qualification gap: 0/1 qualified educators required"]

    def test_qualification_gap_can_be_blocking(
        self, babies_room, babies_rule, make_worker, two_shifts
    ):
        workers = [make_worker("alice"), make_worker("bob")]
        policy = RatioPolicy(qualification_shortfall_severity=CheckSeverity.BLOCKING)
        status = check_room_compliance(babies_room, babies_rule, two_shifts, workers, DAY, 8, policy=policy)

        assert status.warnings == []
        assert len(status.blocking_issues) == 1

    def test_expiry_evaluated_against_checked_date(self, babies_room, babies_rule, make_worker, make_shift):
        workers = [make_worker("alice", qualifications=[DIPLOMA], expiry_date=date(2024, 1, 10))]
        status = check_room_compliance(babies_room, babies_rule, [make_shift("alice", DAY)], workers, DAY, 4)
        assert status.qualified_educators == 0

        status = check_room_compliance(
            babies_room, babies_rule, [make_shift("alice", DAY)], workers, DAY, 4, as_of=date(2024, 1, 5)
        )
        assert status.qualified_educators == 1


class TestRoomValidators:

    def _status(self) -> RatioStatus:
        return RatioStatus(room_id="r", room_name="R", date=DAY, time_slot="09:00-15:00")

    def test_capacity_breach_blocks(self):
        status = self._status()
        context = RoomCheckContext(room_capacity=12, booked_children=13, ratio=4, policy=RatioPolicy())
        RoomCapacityValidator().validate(context, status)
        assert status.blocking_issues == ["Room capacity exceeded: 13/12 children"]

    def test_capacity_at_limit_passes(self):
        status = self._status()
        context = RoomCheckContext(room_capacity=12, booked_children=12, ratio=4, policy=RatioPolicy())
        RoomCapacityValidator().validate(context, status)
        assert status.blocking_issues == []

    def test_qualification_validator_skips_compliant(self):
        status = self._status()
        context = RoomCheckContext(room_capacity=12, booked_children=4, ratio=4, policy=RatioPolicy())
        QualificationMixValidator().validate(context, status)
        assert status.warnings == []


class TestValidateShiftAction:

    def test_simulation_does_not_mutate_input(self, two_shifts):
        original = list(two_shifts)
        result = simulate_shift_action(ShiftAction.DELETE, two_shifts[0], two_shifts)
        assert two_shifts == original
        assert [s.id for s in result] == ["s-bob"]

    def test_modify_replaces_by_id(self, make_shift, two_shifts):
        moved = make_shift("alice", DAY, "10:00", "18:00", shift_id="s-alice")
        result = simulate_shift_action("modify", moved, two_shifts)
        assert result[0].start_time == "10:00"
        assert len(result) == 2

    def test_deleting_only_shift_blocks(self, babies_room, make_worker, make_shift):
        """Removing the only educator from a room with children is refused."""
        workers = [make_worker("alice", qualifications=[DIPLOMA])]
        shift = make_shift("alice", DAY, shift_id="s1")

        result = can_remove_staff_from_shift(shift, [shift], workers, babies_room, 3)

        assert not result.can_proceed
        assert result.severity == CheckSeverity.BLOCKING
        assert result.ratio_status.educator_shortfall == 1
        assert "Add 1 more educator(s)" in result.suggested_actions
        assert "Reduce booked children for this time slot" in result.suggested_actions

    def test_override_proceeds_but_reports_issue(self, babies_room, make_worker, make_shift):
        workers = [make_worker("alice", qualifications=[DIPLOMA])]
        shift = make_shift("alice", DAY, shift_id="s1")

        result = validate_shift_action(
            ShiftAction.DELETE, shift, [shift], workers, babies_room, 3,
            options=ShiftActionOptions(allow_override=True),
        )

        assert result.can_proceed
        assert result.overridden
        assert result.severity == CheckSeverity.BLOCKING
        assert "Ratio breach" in result.message
        assert result.ratio_status.blocking_issues

    def test_blocking_not_enforced(self, babies_room, make_worker, make_shift):
        workers = [make_worker("alice", qualifications=[DIPLOMA])]
        shift = make_shift("alice", DAY, shift_id="s1")

        result = validate_shift_action(
            "delete", shift, [shift], workers, babies_room, 3,
            options=ShiftActionOptions(enforce_blocking=False),
        )
        assert result.can_proceed
        assert not result.overridden

    def test_create_fixes_breach(self, babies_room, make_worker, two_diploma_workers, two_shifts, make_shift):
        workers = two_diploma_workers + [make_worker("cara")]
        new_shift = make_shift("cara", DAY, shift_id="s-cara")

        result = validate_shift_action(ShiftAction.CREATE, new_shift, two_shifts, workers, babies_room, 9)

        assert result.can_proceed
        assert result.severity == CheckSeverity.OK
        assert result.message == "Action complies with ratio requirements"

    def test_qualification_warning_proceeds(self, babies_room, make_worker, make_shift):
        workers = [make_worker("alice"), make_worker("bob")]
        shifts = [make_shift("alice", DAY, shift_id="s1")]
        new_shift = make_shift("bob", DAY, shift_id="s2")

        result = validate_shift_action(ShiftAction.CREATE, new_shift, shifts, workers, babies_room, 8)

        assert result.can_proceed
        assert result.severity == CheckSeverity.WARNING
        assert result.suggested_actions == ["Add 1 more qualified educator(s)"]

    def test_capacity_breach_blocks_even_when_ratio_met(self, make_worker, make_shift, babies_room):
        workers = [make_worker(f"w{i}", qualifications=[DIPLOMA]) for i in range(4)]
        shifts = [make_shift(f"w{i}", DAY, shift_id=f"s{i}") for i in range(3)]
        new_shift = make_shift("w3", DAY, shift_id="s3")

        result = validate_shift_action(ShiftAction.CREATE, new_shift, shifts, workers, babies_room, 13)

        assert result.ratio_status.is_compliant
        assert result.severity == CheckSeverity.BLOCKING
        assert not result.can_proceed
        assert not any(a.startswith("Add ") for a in result.suggested_actions)

    def test_blocking_qualification_gap_suggests_qualified_staff(self, babies_room, make_worker, make_shift):
        workers = [make_worker("alice"), make_worker("bob")]
        shifts = [make_shift("alice", DAY, shift_id="s1")]
        new_shift = make_shift("bob", DAY, shift_id="s2")
        policy = RatioPolicy(qualification_shortfall_severity=CheckSeverity.BLOCKING)

        result = validate_shift_action(ShiftAction.CREATE, new_shift, shifts, workers, babies_room, 8, policy=policy)

        assert not result.can_proceed
        assert result.ratio_status.is_compliant
        assert result.suggested_actions[0] == "Add 1 more qualified educator(s)"
        assert "Add 1 more educator(s)" not in result.suggested_actions
        assert "Reduce booked children for this time slot" in result.suggested_actions


class TestCentreSummary:

    def test_summary_aggregates_rooms(
        self, babies_room, preschool_room, two_diploma_workers, two_shifts
    ):
        centre = Centre(id="centre-1", name="Main", rooms=(babies_room, preschool_room))

        summary = get_centre_compliance_summary(
            centre, two_shifts, two_diploma_workers, DAY, {"room-babies": 9}
        )

        assert not summary.overall_compliant
        assert summary.total_educators_needed == 3
        assert summary.total_educators_scheduled == 2
        assert len(summary.room_statuses) == 2
        assert summary.room_statuses[1].booked_children == 0
        assert len(summary.critical_issues) == 1
