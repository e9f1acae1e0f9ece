"""Type definitions for the leave accrual module.

Covers annual leave, personal/carer's leave and long service leave (LSL)
for every Australian state and territory.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional


class AustralianState(str, Enum):
    NSW = "NSW"
    VIC = "VIC"
    QLD = "QLD"
    SA = "SA"
    WA = "WA"
    TAS = "TAS"
    NT = "NT"
    ACT = "ACT"


class LeaveType(str, Enum):
    ANNUAL_LEAVE = "annual_leave"
    PERSONAL_LEAVE = "personal_leave"  # Sick and carer's leave combined
    LONG_SERVICE_LEAVE = "long_service_leave"
    COMPASSIONATE_LEAVE = "compassionate_leave"
    PARENTAL_LEAVE = "parental_leave"
    UNPAID_LEAVE = "unpaid_leave"
    PUBLIC_HOLIDAY = "public_holiday"
    JURY_DUTY = "jury_duty"
    COMMUNITY_SERVICE = "community_service"


class EmploymentBasis(str, Enum):
    FULL_TIME = "full_time"
    PART_TIME = "part_time"
    CASUAL = "casual"


class TransactionType(str, Enum):
    ACCRUAL = "accrual"
    TAKEN = "taken"
    ADJUSTMENT = "adjustment"
    PAYOUT = "payout"
    FORFEIT = "forfeit"


class TerminationType(str, Enum):
    RESIGNATION = "resignation"
    TERMINATION = "termination"
    REDUNDANCY = "redundancy"


@dataclass(frozen=True)
class LSLStateRules:
    """Long service leave rules for one state or territory."""
    state: AustralianState
    state_name: str
    entitlement_years: int  # first full entitlement
    entitlement_weeks: float
    pro_rata_years: Optional[int]  # minimum service for a pro-rata payout
    pro_rata_on_resignation: bool
    pro_rata_on_termination: bool
    additional_weeks_per_year: float  # accrual after the first entitlement
    includes_allowances: bool = True
    includes_loadings: bool = True
    notes: str = ""
    effective_date: str = "2024-01-01"

    @property
    def pro_rata_threshold(self) -> int:
        return self.pro_rata_years or self.entitlement_years

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "state_name": self.state_name,
            "entitlement_years": self.entitlement_years,
            "entitlement_weeks": self.entitlement_weeks,
            "pro_rata_years": self.pro_rata_years,
            "pro_rata_on_resignation": self.pro_rata_on_resignation,
            "pro_rata_on_termination": self.pro_rata_on_termination,
            "additional_weeks_per_year": self.additional_weeks_per_year,
            "includes_allowances": self.includes_allowances,
            "includes_loadings": self.includes_loadings,
            "notes": self.notes,
            "effective_date": self.effective_date,
        }


LSL_STATE_RULES: dict[AustralianState, LSLStateRules] = {
    AustralianState.NSW: LSLStateRules(
        state=AustralianState.NSW,
        state_name="New South Wales",
        entitlement_years=10,
        entitlement_weeks=8.67,
        pro_rata_years=5,
        pro_rata_on_resignation=True,
        pro_rata_on_termination=True,
        additional_weeks_per_year=0.867,
        notes="Long Service Leave Act 1955. Pro-rata available after 5 years.",
    ),
    AustralianState.VIC: LSLStateRules(
        state=AustralianState.VIC,
        state_name="Victoria",
        entitlement_years=7,
        entitlement_weeks=6.07,
        pro_rata_years=7,
        pro_rata_on_resignation=True,
        pro_rata_on_termination=True,
        additional_weeks_per_year=0.867,
        notes="Long Service Leave Act 2018. Entitlement at 7 years.",
    ),
    AustralianState.QLD: LSLStateRules(
        state=AustralianState.QLD,
        state_name="Queensland",
        entitlement_years=10,
        entitlement_weeks=8.67,
        pro_rata_years=7,
        pro_rata_on_resignation=False,
        pro_rata_on_termination=True,
        additional_weeks_per_year=0.867,
        includes_allowances=False,
        notes="Industrial Relations Act 2016. Pro-rata on termination after 7 years.",
    ),
    AustralianState.SA: LSLStateRules(
        state=AustralianState.SA,
        state_name="South Australia",
        entitlement_years=10,
        entitlement_weeks=13,
        pro_rata_years=7,
        pro_rata_on_resignation=True,
        pro_rata_on_termination=True,
        additional_weeks_per_year=1.3,
        notes="Long Service Leave Act 1987. 13 weeks entitlement.",
    ),
    AustralianState.WA: LSLStateRules(
        state=AustralianState.WA,
        state_name="Western Australia",
        entitlement_years=10,
        entitlement_weeks=8.67,
        pro_rata_years=7,
        pro_rata_on_resignation=False,
        pro_rata_on_termination=True,
        additional_weeks_per_year=0.867,
        includes_allowances=False,
        notes="Long Service Leave Act 1958. Pro-rata only on termination.",
    ),
    AustralianState.TAS: LSLStateRules(
        state=AustralianState.TAS,
        state_name="Tasmania",
        entitlement_years=10,
        entitlement_weeks=8.67,
        pro_rata_years=7,
        pro_rata_on_resignation=True,
        pro_rata_on_termination=True,
        additional_weeks_per_year=0.867,
        notes="Long Service Leave Act 1976.",
    ),
    AustralianState.NT: LSLStateRules(
        state=AustralianState.NT,
        state_name="Northern Territory",
        entitlement_years=10,
        entitlement_weeks=13,
        pro_rata_years=7,
        pro_rata_on_resignation=True,
        pro_rata_on_termination=True,
        additional_weeks_per_year=1.3,
        notes="Long Service Leave Act 1981. 13 weeks entitlement.",
    ),
    AustralianState.ACT: LSLStateRules(
        state=AustralianState.ACT,
        state_name="Australian Capital Territory",
        entitlement_years=7,
        entitlement_weeks=6.07,
        pro_rata_years=5,
        pro_rata_on_resignation=True,
        pro_rata_on_termination=True,
        additional_weeks_per_year=0.867,
        notes="Long Service Leave Act 1976. Entitlement at 7 years.",
    ),
}


@dataclass(frozen=True)
class NESEntitlement:
    """National Employment Standards minimum for a leave type."""
    weeks_per_year: float
    description: str

    @property
    def accrual_rate(self) -> float:
        """Hours accrued per hour worked."""
        return self.weeks_per_year / 52


NES_ENTITLEMENTS = {
    LeaveType.ANNUAL_LEAVE: NESEntitlement(4, "4 weeks annual leave for full-time employees"),
    LeaveType.PERSONAL_LEAVE: NESEntitlement(2, "10 days personal/carer's leave for full-time employees"),
}


@dataclass(frozen=True)
class LeaveAccrualConfig:
    """Leave accrual configuration for one worker."""
    worker_id: str
    state: AustralianState
    service_start_date: date
    employment_basis: EmploymentBasis = EmploymentBasis.FULL_TIME
    standard_hours_per_week: float = 38.0
    average_hours_per_week: Optional[float] = None
    has_casual_loading: bool = False
    casual_loading_percent: Optional[float] = None
    # Custom rates override NES, in hours per year
    custom_annual_leave_rate: Optional[float] = None
    custom_personal_leave_rate: Optional[float] = None
    allow_leave_in_advance: bool = False
    max_advance_leave_hours: Optional[float] = None


@dataclass(frozen=True)
class LeaveBalance:
    """Running leave balance for a worker and leave type. Amounts in hours."""
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

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "worker_id": self.worker_id,
            "leave_type": self.leave_type.value,
            "current_balance_hours": self.current_balance_hours,
            "accrued_this_period": self.accrued_this_period,
            "taken_this_period": self.taken_this_period,
            "accrued_ytd": self.accrued_ytd,
            "taken_ytd": self.taken_ytd,
            "opening_balance": self.opening_balance,
            "value_at_current_rate": self.value_at_current_rate,
            "last_updated": self.last_updated.isoformat() if self.last_updated else None,
            "service_years": self.service_years,
            "lsl_state": self.lsl_state.value if self.lsl_state else None,
        }


@dataclass(frozen=True)
class LeaveTransaction:
    """Immutable ledger entry for one balance mutation."""
    id: str
    worker_id: str
    leave_type: LeaveType
    transaction_type: TransactionType
    hours: float
    value: float
    balance_after: float
    reason: str
    created_by: str
    created_at: datetime
    leave_request_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    pay_period_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "worker_id": self.worker_id,
            "leave_type": self.leave_type.value,
            "transaction_type": self.transaction_type.value,
            "hours": self.hours,
            "value": self.value,
            "balance_after": self.balance_after,
            "reason": self.reason,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat(),
            "leave_request_id": self.leave_request_id,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "pay_period_id": self.pay_period_id,
        }


@dataclass
class AccrualLine:
    """How one leave type's accrual was worked out."""
    leave_type: LeaveType
    hours_accrued: float
    rate: float
    formula: str
    notes: str = ""

    def to_dict(self) -> dict:
        return {
            "leave_type": self.leave_type.value,
            "hours_accrued": self.hours_accrued,
            "rate": self.rate,
            "formula": self.formula,
            "notes": self.notes,
        }


@dataclass
class AccrualCalculation:
    """Pay-period accrual result with an audit trail per leave type."""
    worker_id: str
    period_start: date
    period_end: date
    hours_worked: float
    annual_leave_accrued: float
    personal_leave_accrued: float
    lsl_accrued: float
    calculations: list[AccrualLine] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "worker_id": self.worker_id,
            "period_start": self.period_start.isoformat(),
            "period_end": self.period_end.isoformat(),
            "hours_worked": self.hours_worked,
            "annual_leave_accrued": self.annual_leave_accrued,
            "personal_leave_accrued": self.personal_leave_accrued,
            "lsl_accrued": self.lsl_accrued,
            "calculations": [c.to_dict() for c in self.calculations],
        }


@dataclass
class LSLAccrual:
    hours: float
    rate: float
    eligible: bool
    entitlement_date: Optional[date] = None

    def to_dict(self) -> dict:
        return {
            "hours": self.hours,
            "rate": self.rate,
            "eligible": self.eligible,
            "entitlement_date": self.entitlement_date.isoformat() if self.entitlement_date else None,
        }


@dataclass
class LSLProRataEntitlement:
    eligible: bool
    weeks: float
    hours: float
    value: float
    reason: str

    def to_dict(self) -> dict:
        return {
            "eligible": self.eligible,
            "weeks": self.weeks,
            "hours": self.hours,
            "value": self.value,
            "reason": self.reason,
        }
