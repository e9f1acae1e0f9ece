"""Unit tests for leave accrual.

Tests NES annual and personal leave, state long service leave rules,
service length and pay-period accrual breakdowns.
"""

import pytest
from datetime import date

from leave.accrual import (
    calculate_annual_leave_accrual,
    calculate_lsl_accrual,
    calculate_period_accruals,
    calculate_personal_leave_accrual,
    calculate_service_months,
    calculate_service_years,
    get_lsl_pro_rata_entitlement,
)
from leave.types import AustralianState, LeaveType, LSL_STATE_RULES, TerminationType


class TestAnnualAndPersonalLeave:

    def test_nes_annual_rate(self, make_accrual_config):
        assert calculate_annual_leave_accrual(52, make_accrual_config()) == pytest.approx(4.0)

    def test_nes_personal_rate(self, make_accrual_config):
        assert calculate_personal_leave_accrual(52, make_accrual_config()) == pytest.approx(2.0)

    def test_casual_loading_accrues_nothing(self, make_accrual_config):
        config = make_accrual_config(has_casual_loading=True)
        assert calculate_annual_leave_accrual(38, config) == 0
        assert calculate_personal_leave_accrual(38, config) == 0

    def test_accrual_is_linear_in_hours(self, make_accrual_config):
        config = make_accrual_config()
        a = calculate_annual_leave_accrual(20, config)
        b = calculate_annual_leave_accrual(18, config)
        assert calculate_annual_leave_accrual(38, config) == pytest.approx(a + b)

    def test_custom_annual_rate(self, make_accrual_config):
        """Five weeks a year for a 38 hour week is 190 hours per 1976 worked."""
        config = make_accrual_config(custom_annual_leave_rate=190)
        assert calculate_annual_leave_accrual(1976, config) == pytest.approx(190)


class TestServiceLength:

    def test_years_before_anniversary(self):
        assert calculate_service_years(date(2014, 3, 15), date(2024, 3, 14)) == 9

    def test_years_on_anniversary(self):
        assert calculate_service_years(date(2014, 3, 15), date(2024, 3, 15)) == 10

    def test_leap_day_start(self):
        assert calculate_service_years(date(2020, 2, 29), date(2021, 2, 28)) == 1

    def test_before_start_is_zero(self):
        assert calculate_service_years(date(2024, 1, 1), date(2023, 1, 1)) == 0

    def test_months(self):
        assert calculate_service_months(date(2023, 1, 31), date(2024, 3, 1)) == 13


class TestLSLAccrual:

    def test_rate_and_entitlement_date(self, make_accrual_config):
        config = make_accrual_config(service_start_date=date(2020, 1, 1))

        lsl = calculate_lsl_accrual(520, 4, AustralianState.NSW, config)

        assert lsl.hours == pytest.approx(520 * 8.67 / 10 / 52)
        assert not lsl.eligible
        assert lsl.entitlement_date == date(2030, 1, 1)

    def test_eligible_has_no_entitlement_date(self, make_accrual_config):
        lsl = calculate_lsl_accrual(38, 7, AustralianState.VIC, make_accrual_config(state=AustralianState.VIC))
        assert lsl.eligible
        assert lsl.entitlement_date is None

    def test_casuals_still_accrue_lsl(self, make_accrual_config):
        config = make_accrual_config(has_casual_loading=True)
        assert calculate_lsl_accrual(38, 1, AustralianState.NSW, config).hours > 0

    def test_every_state_has_rules(self):
        assert set(LSL_STATE_RULES) == set(AustralianState)


class TestLSLProRata:

    def test_below_pro_rata_threshold(self):
        result = get_lsl_pro_rata_entitlement(AustralianState.NSW, 4, TerminationType.RESIGNATION, 30)

        assert not result.eligible
        assert result.hours == 0
        assert result.reason == "Minimum 5 years service required for pro-rata LSL in New South Wales"

    def test_at_pro_rata_threshold(self):
        result = get_lsl_pro_rata_entitlement(AustralianState.NSW, 5, TerminationType.RESIGNATION, 30)

        assert result.eligible
        assert result.weeks == pytest.approx(4.335, abs=0.01)
        assert result.hours == pytest.approx(164.73, abs=0.01)
        assert result.value == pytest.approx(4941.9, abs=0.01)

    def test_threshold_from_service_dates(self):
        """Pro-rata flips exactly on the anniversary, not the day before."""
        start = date(2019, 6, 1)
        day_before = calculate_service_years(start, date(2024, 5, 31))
        anniversary = calculate_service_years(start, date(2024, 6, 1))

        assert not get_lsl_pro_rata_entitlement(AustralianState.NSW, day_before, TerminationType.TERMINATION, 30).eligible
        assert get_lsl_pro_rata_entitlement(AustralianState.NSW, anniversary, TerminationType.TERMINATION, 30).eligible

    def test_resignation_not_pro_rata_in_queensland(self):
        result = get_lsl_pro_rata_entitlement(AustralianState.QLD, 8, TerminationType.RESIGNATION, 30)
        assert not result.eligible

    def test_redundancy_always_pro_rata(self):
        result = get_lsl_pro_rata_entitlement(AustralianState.QLD, 7, TerminationType.REDUNDANCY, 30)
        assert result.eligible

    def test_full_entitlement_regardless_of_termination_type(self):
        result = get_lsl_pro_rata_entitlement(AustralianState.WA, 10, TerminationType.RESIGNATION, 30)

        assert result.eligible
        assert result.weeks == pytest.approx(8.67)

    def test_additional_years_past_entitlement(self):
        result = get_lsl_pro_rata_entitlement(AustralianState.NSW, 12, TerminationType.RESIGNATION, 0)

        assert result.weeks == pytest.approx(10.4, abs=0.01)
        assert result.value == 0
        assert result.reason == "New South Wales LSL: 10.40 weeks for 12 years service"


class TestPeriodAccruals:

    def test_full_time_breakdown(self, make_accrual_config):
        config = make_accrual_config(service_start_date=date(2020, 1, 1))

        calc = calculate_period_accruals("w1", 76, date(2024, 1, 1), date(2024, 1, 14), config)

        assert [line.leave_type for line in calc.calculations] == [
            LeaveType.ANNUAL_LEAVE,
            LeaveType.PERSONAL_LEAVE,
            LeaveType.LONG_SERVICE_LEAVE,
        ]
        annual = calc.calculations[0]
        assert annual.formula == "76 hours × 0.07692 = 5.8462 hours"
        assert annual.notes == "NES standard rate"
        assert calc.calculations[2].notes == "New South Wales LSL rules. Eligible from 2030-01-01"

    def test_custom_rate_reported(self, make_accrual_config):
        config = make_accrual_config(custom_annual_leave_rate=190)

        calc = calculate_period_accruals("w1", 38, date(2024, 1, 1), date(2024, 1, 7), config)

        annual = calc.calculations[0]
        assert annual.rate == pytest.approx(190 / (38 * 52))
        assert annual.notes == "Custom rate applied"

    def test_casual_only_accrues_lsl(self, make_accrual_config):
        config = make_accrual_config(has_casual_loading=True)

        calc = calculate_period_accruals("w1", 38, date(2024, 1, 1), date(2024, 1, 7), config)

        assert calc.annual_leave_accrued == 0
        assert calc.personal_leave_accrued == 0
        assert [line.leave_type for line in calc.calculations] == [LeaveType.LONG_SERVICE_LEAVE]

    def test_zero_hours_has_no_lines(self, make_accrual_config):
        calc = calculate_period_accruals("w1", 0, date(2024, 1, 1), date(2024, 1, 7), make_accrual_config())
        assert calc.calculations == []
        assert calc.to_dict()["period_end"] == "2024-01-07"
