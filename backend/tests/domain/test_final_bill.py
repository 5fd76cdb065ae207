"""Tests for frontdesk.domain.final_bill"""
import pytest
from datetime import datetime
from decimal import Decimal

from frontdesk.domain.final_bill import (
    actual_days_stayed, calculate_final_bill, max_occupancy, occupancy_warning,
)

CHECKIN = datetime(2024, 1, 1, 10, 0)


class TestActualDays:
    def test_exact_days(self):
        assert actual_days_stayed(CHECKIN, datetime(2024, 1, 3, 10, 0)) == 2

    def test_one_minute_over_starts_a_new_day(self):
        assert actual_days_stayed(CHECKIN, datetime(2024, 1, 3, 10, 1)) == 3

    def test_grace_period_absorbs_short_overstay(self):
        assert actual_days_stayed(CHECKIN, datetime(2024, 1, 3, 11, 0), grace_period_hours=2) == 2
        assert actual_days_stayed(CHECKIN, datetime(2024, 1, 3, 13, 0), grace_period_hours=2) == 3

    def test_same_instant_is_zero_days(self):
        assert actual_days_stayed(CHECKIN, CHECKIN) == 0

    def test_clock_behind_checkin_is_zero_days(self):
        assert actual_days_stayed(CHECKIN, datetime(2023, 12, 31, 10, 0)) == 0


class TestCalculateFinalBill:
    def test_end_to_end_balance(self):
        bill = calculate_final_bill(
            checkin=CHECKIN, now=datetime(2024, 1, 4, 10, 0), daily_rate=1000,
            guest_state="Karnataka", advance_paid=500, discount=100, extra_charges=0,
        )
        assert bill.actual_days == 3
        assert bill.room_charge == Decimal("3000")
        assert bill.cgst_total == Decimal("75")
        assert bill.sgst_total == Decimal("75")
        assert bill.igst_total == 0
        assert bill.tax_total == Decimal("150")
        assert bill.total_before_adjustments == Decimal("3150")
        assert bill.balance_due == Decimal("2550")
        assert bill.gross_total == Decimal("3050")

    def test_inter_state_tax_is_igst(self):
        bill = calculate_final_bill(CHECKIN, datetime(2024, 1, 2, 10, 0), 1000, "Goa")
        assert bill.igst_total == Decimal("50")
        assert bill.cgst_total == 0

    def test_extra_charges_are_added_untaxed(self):
        bill = calculate_final_bill(CHECKIN, datetime(2024, 1, 2, 10, 0), 1000, "Karnataka",
                                    extra_charges="250")
        assert bill.total_before_adjustments == Decimal("1300")

    def test_balance_never_negative(self):
        bill = calculate_final_bill(CHECKIN, datetime(2024, 1, 2, 10, 0), "952.38", "Goa",
                                    advance_paid=1200)
        assert bill.balance_due == 0
        assert bill.total_before_adjustments == Decimal("999.9990")

    def test_advance_covering_exact_total(self):
        bill = calculate_final_bill(CHECKIN, datetime(2024, 1, 2, 10, 0), 1000, "Karnataka",
                                    advance_paid=1000, discount=50)
        assert bill.balance_due == 0

    def test_negative_extra_charges_rejected(self):
        with pytest.raises(ValueError, match="Extra charges"):
            calculate_final_bill(CHECKIN, datetime(2024, 1, 2, 10, 0), 1000, "Karnataka",
                                 extra_charges=-1)

    def test_zero_days_bills_nothing(self):
        bill = calculate_final_bill(CHECKIN, CHECKIN, 1000, "Karnataka")
        assert bill.room_charge == 0
        assert bill.balance_due == 0


class TestOccupancy:
    @pytest.mark.parametrize("room_type,limit", [
        ("Ordinary", 1), ("Single", 1), ("Double", 2), ("triple", 3), ("Suite", 1), (None, 1),
    ])
    def test_max_occupancy(self, room_type, limit):
        assert max_occupancy(room_type) == limit

    def test_warning_only_over_limit(self):
        assert occupancy_warning("Double", 2) is None
        message = occupancy_warning("Double", 3)
        assert "3 guests" in message
        assert "2-person" in message
