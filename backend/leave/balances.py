"""Leave balance records and ledger entries.

All functions return new records; nothing here mutates its inputs.
"""

import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from .types import (
    LeaveAccrualConfig,
    LeaveBalance,
    LeaveTransaction,
    LeaveType,
    TransactionType,
)

BALANCE_ID_PREFIXES = {
    LeaveType.ANNUAL_LEAVE: "al",
    LeaveType.PERSONAL_LEAVE: "pl",
    LeaveType.LONG_SERVICE_LEAVE: "lsl",
}


def initialize_leave_balances(
    worker_id: str,
    config: LeaveAccrualConfig,
    as_of: datetime,
) -> list[LeaveBalance]:
    """Zero balances for a new worker. Casual-loaded workers only get LSL."""
    leave_types = [LeaveType.LONG_SERVICE_LEAVE]
    if not config.has_casual_loading:
        leave_types = [LeaveType.ANNUAL_LEAVE, LeaveType.PERSONAL_LEAVE] + leave_types

    balances = []
    for leave_type in leave_types:
        is_lsl = leave_type == LeaveType.LONG_SERVICE_LEAVE
        balances.append(LeaveBalance(
            id=f"lb-{BALANCE_ID_PREFIXES[leave_type]}-{worker_id}",
            worker_id=worker_id,
            leave_type=leave_type,
            last_updated=as_of,
            service_years=0 if is_lsl else None,
            lsl_state=config.state if is_lsl else None,
        ))
    return balances


def apply_accrual_to_balance(
    balance: LeaveBalance,
    accrual: float,
    hourly_rate: float,
    as_of: datetime,
) -> LeaveBalance:
    new_hours = balance.current_balance_hours + accrual
    return replace(
        balance,
        current_balance_hours=new_hours,
        accrued_this_period=accrual,
        accrued_ytd=balance.accrued_ytd + accrual,
        value_at_current_rate=new_hours * hourly_rate,
        last_updated=as_of,
    )


def apply_leave_taken(
    balance: LeaveBalance,
    hours: float,
    hourly_rate: float,
    as_of: datetime,
) -> LeaveBalance:
    """Deduct leave taken. The balance may go negative for leave in advance."""
    new_hours = balance.current_balance_hours - hours
    return replace(
        balance,
        current_balance_hours=new_hours,
        taken_this_period=hours,
        taken_ytd=balance.taken_ytd + hours,
        value_at_current_rate=new_hours * hourly_rate,
        last_updated=as_of,
    )


def create_leave_transaction(
    worker_id: str,
    leave_type: LeaveType,
    transaction_type: TransactionType,
    hours: float,
    hourly_rate: float,
    balance_after: float,
    reason: str,
    created_by: str,
    created_at: datetime,
    leave_request_id: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    pay_period_id: Optional[str] = None,
) -> LeaveTransaction:
    return LeaveTransaction(
        id=f"lt-{uuid.uuid4().hex[:12]}",
        worker_id=worker_id,
        leave_type=leave_type,
        transaction_type=transaction_type,
        hours=hours,
        value=hours * hourly_rate,
        balance_after=balance_after,
        reason=reason,
        created_by=created_by,
        created_at=created_at,
        leave_request_id=leave_request_id,
        start_date=start_date,
        end_date=end_date,
        pay_period_id=pay_period_id,
    )
