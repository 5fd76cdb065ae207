"""
Front desk domain core: civil time, GST, stay duration, final bill and
record shaping. Pure functions only; no database or HTTP access.
"""
from frontdesk.domain.civil_time import (
    Clock, SystemClock, system_clock, get_clock, to_civil_time, civil_now,
    format_for_storage, format_for_input, format_for_display,
    add_days, days_between,
)
from frontdesk.domain.gst import (
    GSTBreakdown, CheckinBill, calculate_gst, calculate_checkin_bill,
)
from frontdesk.domain.stay import (
    StayPlan, days_from_checkout, checkout_from_days, reconcile,
)
from frontdesk.domain.final_bill import (
    FinalBill, calculate_final_bill, actual_days_stayed,
    max_occupancy, occupancy_warning,
)
from frontdesk.domain.records import (
    select_primary, reassign_primary_on_removal,
    to_booking_insert, to_guest_inserts, to_history_rows,
)

__all__ = [
    "Clock", "SystemClock", "system_clock", "get_clock", "to_civil_time", "civil_now",
    "format_for_storage", "format_for_input", "format_for_display",
    "add_days", "days_between",
    "GSTBreakdown", "CheckinBill", "calculate_gst", "calculate_checkin_bill",
    "StayPlan", "days_from_checkout", "checkout_from_days", "reconcile",
    "FinalBill", "calculate_final_bill", "actual_days_stayed",
    "max_occupancy", "occupancy_warning",
    "select_primary", "reassign_primary_on_removal",
    "to_booking_insert", "to_guest_inserts", "to_history_rows",
]
