"""Payroll export of leave balances.

Balances are kept in hours; payroll systems may book leave in hours or days.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

import config
from .types import LeaveBalance, LeaveType

HOURS_PER_DAY = config.PAYROLL_HOURS_PER_DAY


class PayrollUnitType(str, Enum):
    HOURS = "hours"
    DAYS = "days"


@dataclass(frozen=True)
class PayrollLeaveMapping:
    """How one leave type is booked in the payroll system."""
    payroll_leave_type_id: str
    unit_type: PayrollUnitType = PayrollUnitType.HOURS
    conversion_rate: float = HOURS_PER_DAY


@dataclass
class PayrollLeaveExport:
    employee_id: str
    leave_type_id: str
    number_of_units: float
    unit_type: PayrollUnitType
    description: str

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "leave_type_id": self.leave_type_id,
            "number_of_units": self.number_of_units,
            "unit_type": self.unit_type.value,
            "description": self.description,
        }


DEFAULT_PAYROLL_MAPPINGS = {
    LeaveType.ANNUAL_LEAVE: PayrollLeaveMapping("annual-leave"),
    LeaveType.PERSONAL_LEAVE: PayrollLeaveMapping("personal-carers-leave"),
    LeaveType.LONG_SERVICE_LEAVE: PayrollLeaveMapping("long-service-leave"),
}


def convert_to_payroll_units(
    hours: float,
    unit_type: PayrollUnitType,
    conversion_rate: float = HOURS_PER_DAY,
) -> float:
    if unit_type == PayrollUnitType.DAYS:
        return hours / conversion_rate
    return hours


def format_leave_balance(hours: float, hours_per_day: float = HOURS_PER_DAY) -> str:
    """Human-readable balance, e.g. '2.0 days (15.2 hours)'."""
    days = hours / hours_per_day
    if days >= 1:
        return f"{days:.1f} days ({hours:.1f} hours)"
    return f"{hours:.1f} hours"


def export_leave_balances(
    balances: list[LeaveBalance],
    worker_mapping: dict[str, str],
    as_of: date,
    leave_type_mapping: Optional[dict[LeaveType, PayrollLeaveMapping]] = None,
) -> list[PayrollLeaveExport]:
    """
    Convert leave balances into payroll import rows.

    Args:
        balances: Balances to export
        worker_mapping: Worker id -> payroll employee id
        as_of: Date stamped in each row's description
        leave_type_mapping: Leave type -> payroll mapping (DEFAULT_PAYROLL_MAPPINGS if omitted)

    Returns:
        One row per balance whose worker and leave type are both mapped
    """
    leave_type_mapping = leave_type_mapping or DEFAULT_PAYROLL_MAPPINGS

    rows = []
    for balance in balances:
        employee_id = worker_mapping.get(balance.worker_id)
        mapping = leave_type_mapping.get(balance.leave_type)
        if not employee_id or not mapping:
            continue

        units = convert_to_payroll_units(balance.current_balance_hours, mapping.unit_type, mapping.conversion_rate)
        rows.append(PayrollLeaveExport(
            employee_id=employee_id,
            leave_type_id=mapping.payroll_leave_type_id,
            number_of_units=round(units, 2),
            unit_type=mapping.unit_type,
            description=f"Leave balance as of {as_of.strftime('%d/%m/%Y')}",
        ))

    return rows
