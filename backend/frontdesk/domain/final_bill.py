"""
Final bill at checkout

Charges are based on the actual time spent, not the planned stay: every
started day past the grace window is billed as a full day.
"""
from dataclasses import dataclass, asdict
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Optional

from frontdesk.domain.gst import ZERO, calculate_gst, to_money

ONE_DAY = timedelta(days=1)
ONE_HOUR = timedelta(hours=1)

# Maximum occupants per room type; unknown types allow one guest
MAX_OCCUPANCY = {
    "ORDINARY": 1,
    "SINGLE": 1,
    "DOUBLE": 2,
    "TRIPLE": 3,
}


@dataclass(frozen=True)
class FinalBill:
    actual_days: int
    daily_rate: Decimal
    gst_percent: int
    room_charge: Decimal
    cgst_total: Decimal
    sgst_total: Decimal
    igst_total: Decimal
    extra_charges: Decimal
    total_before_adjustments: Decimal
    advance_paid: Decimal
    discount: Decimal
    balance_due: Decimal
    gross_total: Decimal

    @property
    def tax_total(self) -> Decimal:
        return self.cgst_total + self.sgst_total + self.igst_total

    def to_dict(self) -> dict:
        return asdict(self)


def actual_days_stayed(checkin: datetime, now: datetime, grace_period_hours: Any = 0) -> int:
    """
    Whole days between check-in and now, plus one for any leftover time
    longer than the grace period.
    """
    elapsed = now - checkin
    if elapsed < timedelta(0):
        elapsed = timedelta(0)
    full_days, leftover = divmod(elapsed, ONE_DAY)
    leftover_hours = Decimal(str(leftover / ONE_HOUR))
    if leftover_hours <= to_money(grace_period_hours):
        return full_days
    return full_days + 1


def calculate_final_bill(checkin: datetime, now: datetime, daily_rate: Any,
                         guest_state: Optional[str], advance_paid: Any = 0,
                         discount: Any = 0, extra_charges: Any = 0,
                         grace_period_hours: Any = 0) -> FinalBill:
    """
    Bill for a stay ending at `now`.

    Both instants must be on the same (civil) time basis. The balance due is
    floored at zero; the gross total is not.
    """
    rate = to_money(daily_rate)
    advance_paid = to_money(advance_paid)
    discount = to_money(discount)
    extra_charges = to_money(extra_charges)
    if extra_charges < 0:
        raise ValueError("Extra charges cannot be negative")

    actual_days = actual_days_stayed(checkin, now, grace_period_hours)
    gst = calculate_gst(guest_state, rate)

    room_charge = rate * actual_days
    tax_charge = (gst.cgst + gst.sgst + gst.igst) * actual_days
    total_before_adjustments = room_charge + tax_charge + extra_charges

    return FinalBill(
        actual_days=actual_days,
        daily_rate=rate,
        gst_percent=gst.gst_percent,
        room_charge=room_charge,
        cgst_total=gst.cgst * actual_days,
        sgst_total=gst.sgst * actual_days,
        igst_total=gst.igst * actual_days,
        extra_charges=extra_charges,
        total_before_adjustments=total_before_adjustments,
        advance_paid=advance_paid,
        discount=discount,
        balance_due=max(total_before_adjustments - advance_paid - discount, ZERO),
        gross_total=total_before_adjustments - discount,
    )


def max_occupancy(room_type: Optional[str]) -> int:
    return MAX_OCCUPANCY.get((room_type or "").strip().upper(), 1)


def occupancy_warning(room_type: Optional[str], guest_count: int) -> Optional[str]:
    """Message when a booking holds more guests than its room type allows"""
    allowed = max_occupancy(room_type)
    if guest_count > allowed:
        return (f"{guest_count} guests exceed the {allowed}-person limit "
                f"for a {room_type or 'room'}; extra person charges may apply")
    return None
