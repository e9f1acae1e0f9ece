from datetime import date as date_type, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from compliance.types import CheckSeverity, RatioPolicy, RatioRule, ShiftAction, ShiftActionOptions
from fatigue.projection import ProjectorType
from fatigue.types import FatigueRuleConfig
from leave.export import PayrollLeaveMapping, PayrollUnitType, HOURS_PER_DAY
from leave.types import (
    AustralianState,
    EmploymentBasis,
    LeaveAccrualConfig,
    LeaveBalance,
    LeaveType,
    TerminationType,
)
from roster.types import (
    Centre,
    EmploymentType,
    QualificationRecord,
    QualificationType,
    Room,
    ShiftRecord,
    ShiftStatus,
    WorkerRecord,
    WorkerRole,
)
from utils.time import parse_clock_time, to_wall_clock


def _check_clock(value: str) -> str:
    # Raises ValueError, which pydantic reports as a 422
    parse_clock_time(value)
    return value


# ============================================================================
# Roster records
# ============================================================================


class QualificationSchema(BaseModel):
    type: QualificationType
    name: str = ""
    expiry_date: date_type | None = None

    def to_domain(self) -> QualificationRecord:
        return QualificationRecord(type=self.type, name=self.name, expiry_date=self.expiry_date)


class WorkerSchema(BaseModel):
    id: str
    name: str
    role: WorkerRole = WorkerRole.EDUCATOR
    employment_type: EmploymentType = EmploymentType.PERMANENT
    qualifications: list[QualificationSchema] = []
    max_hours_per_week: float = Field(38.0, ge=0)
    hourly_rate: float = Field(0.0, ge=0)

    def to_domain(self) -> WorkerRecord:
        return WorkerRecord(
            id=self.id,
            name=self.name,
            role=self.role,
            employment_type=self.employment_type,
            qualifications=tuple(q.to_domain() for q in self.qualifications),
            max_hours_per_week=self.max_hours_per_week,
            hourly_rate=self.hourly_rate,
        )


class ShiftSchema(BaseModel):
    id: str
    worker_id: str
    room_id: str
    centre_id: str = ""
    date: date_type  # ISO date string: "2025-01-20"
    start_time: str  # "HH:MM"
    end_time: str
    break_minutes: int = Field(0, ge=0)
    status: ShiftStatus = ShiftStatus.DRAFT

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_clock(cls, v: str) -> str:
        return _check_clock(v)

    def to_domain(self) -> ShiftRecord:
        return ShiftRecord(
            id=self.id,
            worker_id=self.worker_id,
            room_id=self.room_id,
            centre_id=self.centre_id,
            date=self.date.isoformat(),
            start_time=self.start_time,
            end_time=self.end_time,
            break_minutes=self.break_minutes,
            status=self.status,
        )


class RoomSchema(BaseModel):
    id: str
    name: str
    centre_id: str = ""
    age_group: str
    capacity: int = Field(..., ge=0)
    required_ratio: float = Field(..., ge=0)  # children per educator

    def to_domain(self) -> Room:
        return Room(
            id=self.id,
            name=self.name,
            centre_id=self.centre_id,
            age_group=self.age_group,
            capacity=self.capacity,
            required_ratio=self.required_ratio,
        )


class CentreSchema(BaseModel):
    id: str
    name: str
    rooms: list[RoomSchema] = []

    def to_domain(self) -> Centre:
        return Centre(id=self.id, name=self.name, rooms=tuple(r.to_domain() for r in self.rooms))


# ============================================================================
# Ratio compliance
# ============================================================================


class RatioRuleSchema(BaseModel):
    age_group: str
    min_age: float = 0
    max_age: float = 0
    ratio: float = Field(..., ge=0)
    requires_qualified_educator: bool = False
    qualification_required: QualificationType | None = None

    def to_domain(self) -> RatioRule:
        return RatioRule(
            age_group=self.age_group,
            min_age=self.min_age,
            max_age=self.max_age,
            ratio=self.ratio,
            requires_qualified_educator=self.requires_qualified_educator,
            qualification_required=self.qualification_required,
        )


class RatioPolicySchema(BaseModel):
    """Per-request policy overrides. Unset fields fall back to the configured defaults."""
    qualified_staff_ratio: float | None = Field(None, gt=0, le=1)
    qualification_shortfall_severity: CheckSeverity | None = None

    def to_domain(self) -> RatioPolicy:
        defaults = RatioPolicy.from_config()
        return RatioPolicy(
            qualified_staff_ratio=(
                self.qualified_staff_ratio
                if self.qualified_staff_ratio is not None
                else defaults.qualified_staff_ratio
            ),
            qualification_shortfall_severity=(
                self.qualification_shortfall_severity or defaults.qualification_shortfall_severity
            ),
        )


class RatioCheckRequest(BaseModel):
    room: RoomSchema
    ratio_rule: RatioRuleSchema | None = None
    shifts: list[ShiftSchema] = []
    workers: list[WorkerSchema] = []
    date: date_type
    booked_children: int = Field(..., ge=0)
    time_slot: str | None = None
    as_of: date_type | None = None
    policy: RatioPolicySchema = RatioPolicySchema()


class ValidateActionRequest(BaseModel):
    action: ShiftAction
    shift: ShiftSchema
    all_shifts: list[ShiftSchema] = []
    workers: list[WorkerSchema] = []
    room: RoomSchema
    booked_children: int = Field(..., ge=0)
    enforce_blocking: bool = True
    allow_override: bool = False
    ratio_rule: RatioRuleSchema | None = None
    as_of: date_type | None = None
    policy: RatioPolicySchema = RatioPolicySchema()

    def options(self) -> ShiftActionOptions:
        return ShiftActionOptions(enforce_blocking=self.enforce_blocking, allow_override=self.allow_override)


class CentreSummaryRequest(BaseModel):
    centre: CentreSchema
    shifts: list[ShiftSchema] = []
    workers: list[WorkerSchema] = []
    date: date_type
    demand_by_room: dict[str, int] = {}
    as_of: date_type | None = None
    policy: RatioPolicySchema = RatioPolicySchema()


class StaffingSuggestRequest(BaseModel):
    room: RoomSchema
    ratio_rule: RatioRuleSchema | None = None
    booked_children: int = Field(..., ge=0)
    available_workers: list[WorkerSchema] = []
    as_of: date_type
    policy: RatioPolicySchema = RatioPolicySchema()


# ============================================================================
# Fatigue
# ============================================================================


class FatigueRulesSchema(BaseModel):
    name: str = "Standard Fatigue Management"
    max_consecutive_days: int = Field(6, gt=0)
    max_weekly_hours: float = Field(40.0, gt=0)
    min_rest_between_shifts: float = Field(10.0, gt=0)
    max_night_shifts: int = Field(3, gt=0)
    night_shift_start: str = "22:00"
    night_shift_end: str = "06:00"
    fatigue_score_threshold: int = Field(80, ge=0, le=100)

    @field_validator("night_shift_start", "night_shift_end")
    @classmethod
    def validate_clock(cls, v: str) -> str:
        return _check_clock(v)

    def to_domain(self) -> FatigueRuleConfig:
        return FatigueRuleConfig(**self.model_dump())


class FatigueScoreRequest(BaseModel):
    worker: WorkerSchema
    shifts: list[ShiftSchema] = []
    rules: FatigueRulesSchema = FatigueRulesSchema()
    reference: datetime
    projector: ProjectorType = ProjectorType.LINEAR_DECAY
    seed: int | None = None

    @field_validator("reference")
    @classmethod
    def drop_timezone(cls, v: datetime) -> datetime:
        # Shift instants are local wall-clock times
        return to_wall_clock(v)


class FatigueTeamRequest(BaseModel):
    workers: list[WorkerSchema] = []
    shifts: list[ShiftSchema] = []
    rules: FatigueRulesSchema = FatigueRulesSchema()
    reference: datetime
    projector: ProjectorType = ProjectorType.LINEAR_DECAY
    seed: int | None = None

    @field_validator("reference")
    @classmethod
    def drop_timezone(cls, v: datetime) -> datetime:
        return to_wall_clock(v)


# ============================================================================
# Leave
# ============================================================================


class LeaveAccrualConfigSchema(BaseModel):
    worker_id: str
    state: AustralianState
    service_start_date: date_type
    employment_basis: EmploymentBasis = EmploymentBasis.FULL_TIME
    standard_hours_per_week: float = Field(38.0, gt=0)
    average_hours_per_week: float | None = None
    has_casual_loading: bool = False
    casual_loading_percent: float | None = None
    custom_annual_leave_rate: float | None = Field(None, ge=0)
    custom_personal_leave_rate: float | None = Field(None, ge=0)
    allow_leave_in_advance: bool = False
    max_advance_leave_hours: float | None = None

    def to_domain(self) -> LeaveAccrualConfig:
        return LeaveAccrualConfig(**self.model_dump())


class PeriodAccrualRequest(BaseModel):
    worker_id: str
    hours_worked: float = Field(..., ge=0)
    period_start: date_type
    period_end: date_type
    accrual_config: LeaveAccrualConfigSchema

    @model_validator(mode="after")
    def check_period(self):
        if self.period_end < self.period_start:
            raise ValueError("period_end must not be before period_start")
        return self


class LSLProRataRequest(BaseModel):
    state: AustralianState
    service_years: float = Field(..., ge=0)
    termination_type: TerminationType
    hourly_rate: float = Field(..., ge=0)
    standard_hours_per_week: float = Field(38.0, gt=0)


class LeaveBalanceSchema(BaseModel):
    id: str
    worker_id: str
    leave_type: LeaveType
    current_balance_hours: float = 0.0
    accrued_this_period: float = 0.0
    taken_this_period: float = 0.0
    accrued_ytd: float = 0.0
    taken_ytd: float = 0.0
    opening_balance: float = 0.0
    value_at_current_rate: float = 0.0
    last_updated: Optional[datetime] = None
    service_years: Optional[int] = None
    lsl_state: Optional[AustralianState] = None

    def to_domain(self) -> LeaveBalance:
        return LeaveBalance(**self.model_dump())


class PayrollMappingSchema(BaseModel):
    payroll_leave_type_id: str
    unit_type: PayrollUnitType = PayrollUnitType.HOURS
    conversion_rate: float = Field(HOURS_PER_DAY, gt=0)

    def to_domain(self) -> PayrollLeaveMapping:
        return PayrollLeaveMapping(
            payroll_leave_type_id=self.payroll_leave_type_id,
            unit_type=self.unit_type,
            conversion_rate=self.conversion_rate,
        )


class LeaveExportRequest(BaseModel):
    balances: list[LeaveBalanceSchema] = []
    worker_mapping: dict[str, str]  # worker id -> payroll employee id
    leave_type_mapping: dict[LeaveType, PayrollMappingSchema] | None = None
    as_of: date_type
