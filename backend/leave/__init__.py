"""Leave accrual module: NES annual/personal leave and state LSL rules."""

from .types import (
    AustralianState,
    LeaveType,
    EmploymentBasis,
    TransactionType,
    TerminationType,
    LSLStateRules,
    LSL_STATE_RULES,
    NESEntitlement,
    NES_ENTITLEMENTS,
    LeaveAccrualConfig,
    LeaveBalance,
    LeaveTransaction,
    AccrualLine,
    AccrualCalculation,
    LSLAccrual,
    LSLProRataEntitlement,
)
from .accrual import (
    calculate_annual_leave_accrual,
    calculate_personal_leave_accrual,
    calculate_lsl_accrual,
    calculate_service_years,
    calculate_service_months,
    get_lsl_pro_rata_entitlement,
    calculate_period_accruals,
)
from .balances import (
    initialize_leave_balances,
    apply_accrual_to_balance,
    apply_leave_taken,
    create_leave_transaction,
)
from .export import (
    HOURS_PER_DAY,
    PayrollUnitType,
    PayrollLeaveMapping,
    PayrollLeaveExport,
    DEFAULT_PAYROLL_MAPPINGS,
    convert_to_payroll_units,
    format_leave_balance,
    export_leave_balances,
)

__all__ = [
    "AustralianState",
    "LeaveType",
    "EmploymentBasis",
    "TransactionType",
    "TerminationType",
    "LSLStateRules",
    "LSL_STATE_RULES",
    "NESEntitlement",
    "NES_ENTITLEMENTS",
    "LeaveAccrualConfig",
    "LeaveBalance",
    "LeaveTransaction",
    "AccrualLine",
    "AccrualCalculation",
    "LSLAccrual",
    "LSLProRataEntitlement",
    "calculate_annual_leave_accrual",
    "calculate_personal_leave_accrual",
    "calculate_lsl_accrual",
    "calculate_service_years",
    "calculate_service_months",
    "get_lsl_pro_rata_entitlement",
    "calculate_period_accruals",
    "initialize_leave_balances",
    "apply_accrual_to_balance",
    "apply_leave_taken",
    "create_leave_transaction",
    "HOURS_PER_DAY",
    "PayrollUnitType",
    "PayrollLeaveMapping",
    "PayrollLeaveExport",
    "DEFAULT_PAYROLL_MAPPINGS",
    "convert_to_payroll_units",
    "format_leave_balance",
    "export_leave_balances",
]
