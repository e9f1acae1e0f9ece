"""
Leave accrual calculations.

Accruals are proportional to hours worked. Annual and personal leave follow
the National Employment Standards unless the worker's agreement sets a
custom rate; long service leave follows the rules of the worker's state.
"""

import logging
from datetime import date
from typing import Optional

from dateutil.relativedelta import relativedelta

from .types import (
    AccrualCalculation,
    AccrualLine,
    AustralianState,
    LeaveAccrualConfig,
    LeaveType,
    LSL_STATE_RULES,
    LSLAccrual,
    LSLProRataEntitlement,
    NES_ENTITLEMENTS,
    TerminationType,
)

WEEKS_PER_YEAR = 52
DEFAULT_HOURS_PER_WEEK = 38.0


def _accrual_rate(custom_hours_per_year: Optional[float], leave_type: LeaveType, config: LeaveAccrualConfig) -> float:
    if custom_hours_per_year:
        hours_per_year = config.standard_hours_per_week * WEEKS_PER_YEAR
        return custom_hours_per_year / hours_per_year
    return NES_ENTITLEMENTS[leave_type].accrual_rate


def annual_leave_rate(config: LeaveAccrualConfig) -> float:
    """Annual leave hours accrued per hour worked."""
    return _accrual_rate(config.custom_annual_leave_rate, LeaveType.ANNUAL_LEAVE, config)


def personal_leave_rate(config: LeaveAccrualConfig) -> float:
    """Personal/carer's leave hours accrued per hour worked."""
    return _accrual_rate(config.custom_personal_leave_rate, LeaveType.PERSONAL_LEAVE, config)


def lsl_rate(state: AustralianState) -> float:
    """Long service leave hours accrued per hour worked in a state."""
    rules = LSL_STATE_RULES[state]
    return rules.entitlement_weeks / rules.entitlement_years / WEEKS_PER_YEAR


def calculate_annual_leave_accrual(hours_worked: float, config: LeaveAccrualConfig) -> float:
    # Casual loading is paid in lieu of annual leave
    if config.has_casual_loading:
        return 0.0
    return hours_worked * annual_leave_rate(config)


def calculate_personal_leave_accrual(hours_worked: float, config: LeaveAccrualConfig) -> float:
    if config.has_casual_loading:
        return 0.0
    return hours_worked * personal_leave_rate(config)


def calculate_service_years(start_date: date, as_of: date) -> int:
    """Completed whole years of service, zero if as_of is before the start."""
    if as_of < start_date:
        return 0
    return relativedelta(as_of, start_date).years


def calculate_service_months(start_date: date, as_of: date) -> int:
    """Completed whole months of service."""
    if as_of < start_date:
        return 0
    delta = relativedelta(as_of, start_date)
    return delta.years * 12 + delta.months


def calculate_lsl_accrual(
    hours_worked: float,
    service_years: int,
    state: AustralianState,
    config: LeaveAccrualConfig,
) -> LSLAccrual:
    """
    Calculate long service leave accrued for hours worked.

    Casual workers accrue LSL too; casual loading does not apply to it.

    Args:
        hours_worked: Hours worked in the period
        service_years: Completed years of continuous service
        state: State whose LSL legislation applies
        config: Worker's accrual configuration

    Returns:
        LSLAccrual with accrued hours and entitlement status
    """
    rules = LSL_STATE_RULES[state]
    rate = lsl_rate(state)
    eligible = service_years >= rules.entitlement_years

    entitlement_date = None
    if not eligible:
        entitlement_date = config.service_start_date + relativedelta(years=rules.entitlement_years)

    return LSLAccrual(
        hours=hours_worked * rate,
        rate=rate,
        eligible=eligible,
        entitlement_date=entitlement_date,
    )


def _pro_rata_allowed(termination_type: TerminationType, state: AustralianState) -> bool:
    rules = LSL_STATE_RULES[state]
    if termination_type == TerminationType.RESIGNATION:
        return rules.pro_rata_on_resignation
    if termination_type == TerminationType.TERMINATION:
        return rules.pro_rata_on_termination
    return True


def get_lsl_pro_rata_entitlement(
    state: AustralianState,
    service_years: float,
    termination_type: TerminationType,
    hourly_rate: float,
    standard_hours_per_week: float = DEFAULT_HOURS_PER_WEEK,
) -> LSLProRataEntitlement:
    """
    LSL payable when employment ends.

    A full entitlement always applies once the state's entitlement years are
    reached. Below that, a pro-rata payout applies if the state allows one for
    the termination type (redundancy always qualifies) and the pro-rata
    service threshold is met.
    """
    rules = LSL_STATE_RULES[state]
    threshold = rules.pro_rata_threshold

    pro_rata = _pro_rata_allowed(termination_type, state) and service_years >= threshold
    if not pro_rata and service_years < rules.entitlement_years:
        return LSLProRataEntitlement(
            eligible=False,
            weeks=0.0,
            hours=0.0,
            value=0.0,
            reason=f"Minimum {threshold} years service required for pro-rata LSL in {rules.state_name}",
        )

    if service_years >= rules.entitlement_years:
        extra_years = service_years - rules.entitlement_years
        weeks = rules.entitlement_weeks + extra_years * rules.additional_weeks_per_year
    else:
        weeks = service_years / rules.entitlement_years * rules.entitlement_weeks

    hours = weeks * standard_hours_per_week
    value = hours * hourly_rate

    return LSLProRataEntitlement(
        eligible=True,
        weeks=round(weeks, 2),
        hours=round(hours, 2),
        value=round(value, 2),
        reason=f"{rules.state_name} LSL: {weeks:.2f} weeks for {service_years:g} years service",
    )


def _formula(hours_worked: float, rate: float, accrued: float) -> str:
    return f"{hours_worked:g} hours × {rate:.5f} = {accrued:.4f} hours"


def _rate_note(custom_rate: Optional[float]) -> str:
    return "Custom rate applied" if custom_rate else "NES standard rate"


def calculate_period_accruals(
    worker_id: str,
    hours_worked: float,
    period_start: date,
    period_end: date,
    config: LeaveAccrualConfig,
) -> AccrualCalculation:
    """
    Full accrual calculation for one pay period.

    Service years are measured at the period end. Each non-zero accrual gets
    an AccrualLine recording the exact rate used.
    """
    service_years = calculate_service_years(config.service_start_date, period_end)

    annual = calculate_annual_leave_accrual(hours_worked, config)
    personal = calculate_personal_leave_accrual(hours_worked, config)
    lsl = calculate_lsl_accrual(hours_worked, service_years, config.state, config)

    lines = []
    if annual > 0:
        rate = annual_leave_rate(config)
        lines.append(AccrualLine(
            leave_type=LeaveType.ANNUAL_LEAVE,
            hours_accrued=annual,
            rate=rate,
            formula=_formula(hours_worked, rate, annual),
            notes=_rate_note(config.custom_annual_leave_rate),
        ))

    if personal > 0:
        rate = personal_leave_rate(config)
        lines.append(AccrualLine(
            leave_type=LeaveType.PERSONAL_LEAVE,
            hours_accrued=personal,
            rate=rate,
            formula=_formula(hours_worked, rate, personal),
            notes=_rate_note(config.custom_personal_leave_rate),
        ))

    if lsl.hours > 0:
        state_name = LSL_STATE_RULES[config.state].state_name
        status = "Eligible for entitlement" if lsl.eligible else f"Eligible from {lsl.entitlement_date.isoformat()}"
        lines.append(AccrualLine(
            leave_type=LeaveType.LONG_SERVICE_LEAVE,
            hours_accrued=lsl.hours,
            rate=lsl.rate,
            formula=_formula(hours_worked, lsl.rate, lsl.hours),
            notes=f"{state_name} LSL rules. {status}",
        ))

    logging.debug(
        f"Accruals for worker {worker_id} ({period_start} to {period_end}): "
        f"annual={annual:.4f} personal={personal:.4f} lsl={lsl.hours:.4f}"
    )

    return AccrualCalculation(
        worker_id=worker_id,
        period_start=period_start,
        period_end=period_end,
        hours_worked=hours_worked,
        annual_leave_accrued=annual,
        personal_leave_accrued=personal,
        lsl_accrued=lsl.hours,
        calculations=lines,
    )
