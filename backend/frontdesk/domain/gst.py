"""
GST calculation

Room tariffs carry 5% GST. Guests from the home state pay it as equal
CGST + SGST halves; guests from any other state pay it as a single IGST.
"""
from dataclasses import dataclass, asdict
from decimal import Decimal
from typing import Any, Optional

HOME_STATE = "KARNATAKA"
GST_PERCENT = 5
HALF_RATE = Decimal("0.025")
FULL_RATE = Decimal("0.05")
ZERO = Decimal("0")


def to_money(value: Any) -> Decimal:
    """Coerce an amount to Decimal; None counts as zero"""
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def normalize_state(state: Optional[str]) -> str:
    """Trim and upper-case a declared state, defaulting to the home state"""
    normalized = (state or "").strip().upper()
    return normalized or HOME_STATE


@dataclass(frozen=True)
class GSTBreakdown:
    """Per-day tax split"""
    cgst: Decimal
    sgst: Decimal
    igst: Decimal
    gst_percent: int
    total_gst: Decimal
    final_daily_charge: Decimal

    @property
    def is_intra_state(self) -> bool:
        return self.igst == 0 and self.cgst > 0

    def to_dict(self) -> dict:
        return asdict(self)


def calculate_gst(guest_state: Optional[str], base_daily_rate: Any) -> GSTBreakdown:
    """
    Tax split for one day at the given rate.

    A zero or negative rate yields an all-zero breakdown.
    """
    rate = to_money(base_daily_rate)
    if rate <= 0:
        return GSTBreakdown(ZERO, ZERO, ZERO, 0, ZERO, ZERO)

    if normalize_state(guest_state) == HOME_STATE:
        cgst = sgst = rate * HALF_RATE
        igst = ZERO
    else:
        cgst = sgst = ZERO
        igst = rate * FULL_RATE

    total_gst = cgst + sgst + igst
    return GSTBreakdown(
        cgst=cgst,
        sgst=sgst,
        igst=igst,
        gst_percent=GST_PERCENT,
        total_gst=total_gst,
        final_daily_charge=rate + total_gst,
    )


@dataclass(frozen=True)
class CheckinBill:
    """Provisional bill shown before a check-in is confirmed"""
    stay_days: int
    daily_rate: Decimal
    gst: GSTBreakdown
    room_charge: Decimal
    gst_per_day: Decimal
    gst_total: Decimal
    discount: Decimal
    advance_payment: Decimal
    gross_total: Decimal

    def to_dict(self) -> dict:
        return asdict(self)


def calculate_checkin_bill(daily_rate: Any, guest_state: Optional[str], stay_days: int,
                           discount: Any = 0, advance_payment: Any = 0) -> CheckinBill:
    """room_charge is tax exclusive; gross_total includes tax and is net of discount"""
    rate = to_money(daily_rate)
    days = max(1, int(stay_days or 1))
    discount = to_money(discount)
    gst = calculate_gst(guest_state, rate)

    room_charge = rate * days
    gst_total = gst.total_gst * days
    return CheckinBill(
        stay_days=days,
        daily_rate=rate,
        gst=gst,
        room_charge=room_charge,
        gst_per_day=gst.total_gst,
        gst_total=gst_total,
        discount=discount,
        advance_payment=to_money(advance_payment),
        gross_total=room_charge + gst_total - discount,
    )
