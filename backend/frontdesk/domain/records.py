"""
Record shaping

Pure mappings from check-in form data to the rows stored for a booking,
its guests and, at checkout, the guest history snapshot.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, TypeVar

from frontdesk.domain.final_bill import FinalBill
from frontdesk.domain.gst import calculate_checkin_bill, normalize_state, to_money

G = TypeVar("G")

GUEST_FIELDS = ("name", "age", "phone", "gender", "is_primary")
PRIMARY_ONLY_FIELDS = (
    "id_proof_type", "id_proof_number", "address", "city", "state",
    "emergency_contact_name", "emergency_contact_number",
)


def _field(guest: Any, name: str, default: Any = None) -> Any:
    if isinstance(guest, dict):
        return guest.get(name, default)
    return getattr(guest, name, default)


def select_primary(guests: Sequence[G]) -> Optional[G]:
    """The guest flagged primary, else the first guest"""
    for guest in guests:
        if _field(guest, "is_primary", False):
            return guest
    return guests[0] if guests else None


def primary_state(guests: Sequence[Any]) -> str:
    """Tax state of a stay, driven by its primary guest"""
    primary = select_primary(guests)
    return normalize_state(_field(primary, "state") if primary else None)


def _with_primary(guest: G, is_primary: bool) -> G:
    if isinstance(guest, dict):
        return dict(guest, is_primary=is_primary)
    if hasattr(guest, "model_copy"):
        return guest.model_copy(update={"is_primary": is_primary})
    guest.is_primary = is_primary
    return guest


def reassign_primary_on_removal(guests: Sequence[G], removed_id: Any) -> List[G]:
    """
    Drop a guest; when the primary leaves, the first remaining guest is
    promoted. Works on form models, rows and plain dicts alike.
    """
    removed = next((g for g in guests if _field(g, "id") == removed_id), None)
    remaining = [g for g in guests if _field(g, "id") != removed_id]
    if removed is not None and _field(removed, "is_primary", False) and remaining:
        remaining[0] = _with_primary(remaining[0], True)
    return remaining


def count_primaries(guests: Sequence[Any]) -> int:
    return sum(1 for g in guests if _field(g, "is_primary", False))


def to_booking_insert(room: Any, guests: Sequence[Any], stay_days: int,
                      checkout: datetime, checkin: datetime,
                      discount: Any = 0, advance_payment: Any = 0) -> Dict[str, Any]:
    """Booking row for a confirmed check-in"""
    bill = calculate_checkin_bill(room.base_price, primary_state(guests), stay_days,
                                  discount, advance_payment)
    return {
        "room_id": room.id,
        "checkin_time": checkin,
        "checkout_time": checkout,
        "stay_days": bill.stay_days,
        "room_charge": bill.room_charge,
        "discount": bill.discount,
        "advance_payment": bill.advance_payment,
        "gross_total": bill.gross_total,
    }


def to_guest_inserts(booking_id: int, room: Any, guests: Sequence[Any]) -> List[Dict[str, Any]]:
    """Guest rows for a booking; identity and address only kept for the primary"""
    rows = []
    for guest in guests:
        row = {"booking_id": booking_id, "room_id": room.id}
        for field in GUEST_FIELDS:
            row[field] = getattr(guest, field, None)
        row["is_primary"] = bool(row["is_primary"])
        for field in PRIMARY_ONLY_FIELDS:
            row[field] = (getattr(guest, field, None) or None) if row["is_primary"] else None
        rows.append(row)
    return rows


def to_history_rows(booking: Any, guests: Sequence[Any], bill: FinalBill,
                    checkout: datetime, payment_method: str) -> List[Dict[str, Any]]:
    """
    Guest history snapshot taken at checkout.

    Money fields are attributed to the primary guest's row only; the other
    rows carry zero so that sums across history count each stay once.
    """
    rows = []
    zero = to_money(0)
    for guest in guests:
        primary = bool(guest.is_primary)
        rows.append({
            "booking_id": booking.id,
            "room_id": booking.room_id,
            "name": guest.name,
            "age": guest.age,
            "phone": guest.phone,
            "gender": guest.gender,
            "is_primary": primary,
            "id_proof_type": guest.id_proof_type,
            "id_proof_number": guest.id_proof_number,
            "address": guest.address,
            "city": guest.city,
            "state": guest.state,
            "checkin_time": booking.checkin_time,
            "checkout_time": checkout,
            "gross_total": bill.gross_total if primary else zero,
            "discount": bill.discount if primary else zero,
            "advance_payment": bill.advance_paid if primary else zero,
            "extra_charges": bill.extra_charges if primary else zero,
            "total_amount": bill.gross_total if primary else zero,
            "payment_method": payment_method,
        })
    return rows
