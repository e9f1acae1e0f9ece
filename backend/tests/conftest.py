import pytest
from datetime import date, datetime

from compliance.types import NQF_RATIO_RULES, RatioRule
from fatigue.types import FatigueRuleConfig
from leave.types import AustralianState, EmploymentBasis, LeaveAccrualConfig
from roster.types import (
    QualificationRecord,
    QualificationType,
    Room,
    ShiftRecord,
    WorkerRecord,
)


@pytest.fixture
def make_shift():
    """Factory to create ShiftRecord objects."""
    def _make_shift(
        worker_id: str,
        date_str: str,
        start_time: str = "09:00",
        end_time: str = "17:00",
        room_id: str = "room-babies",
        shift_id: str = None,
        break_minutes: int = 0,
    ) -> ShiftRecord:
        return ShiftRecord(
            id=shift_id or f"{worker_id}-{date_str}-{start_time}",
            worker_id=worker_id,
            room_id=room_id,
            centre_id="centre-1",
            date=date_str,
            start_time=start_time,
            end_time=end_time,
            break_minutes=break_minutes,
        )
    return _make_shift


@pytest.fixture
def make_worker():
    """Factory to create WorkerRecord objects."""
    def _make_worker(
        worker_id: str,
        name: str = None,
        qualifications: list[QualificationType] = None,
        expiry_date: date = None,
        hourly_rate: float = 30.0,
    ) -> WorkerRecord:
        return WorkerRecord(
            id=worker_id,
            name=name or worker_id.title(),
            qualifications=tuple(
                QualificationRecord(type=q, expiry_date=expiry_date) for q in (qualifications or [])
            ),
            hourly_rate=hourly_rate,
        )
    return _make_worker


@pytest.fixture
def babies_room():
    """Babies room with a 1:4 ratio."""
    return Room(
        id="room-babies",
        name="Babies",
        centre_id="centre-1",
        age_group="babies",
        capacity=12,
        required_ratio=4,
    )


@pytest.fixture
def preschool_room():
    return Room(
        id="room-preschool",
        name="Preschool",
        centre_id="centre-1",
        age_group="preschool",
        capacity=22,
        required_ratio=10,
    )


@pytest.fixture
def babies_rule() -> RatioRule:
    return NQF_RATIO_RULES[0]


@pytest.fixture
def default_fatigue_rules():
    return FatigueRuleConfig()


@pytest.fixture
def reference():
    """Reference instant for fatigue windows: Sunday evening."""
    return datetime(2024, 1, 21, 23, 0)


@pytest.fixture
def make_accrual_config():
    """Factory to create LeaveAccrualConfig objects."""
    def _make_config(
        state: AustralianState = AustralianState.NSW,
        service_start_date: date = date(2020, 1, 1),
        has_casual_loading: bool = False,
        **kwargs
    ) -> LeaveAccrualConfig:
        return LeaveAccrualConfig(
            worker_id="w1",
            state=state,
            service_start_date=service_start_date,
            employment_basis=EmploymentBasis.CASUAL if has_casual_loading else EmploymentBasis.FULL_TIME,
            has_casual_loading=has_casual_loading,
            **kwargs
        )
    return _make_config
