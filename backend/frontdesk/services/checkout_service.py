"""
Checkout service
Final bill review, settlement and invoice data.
Settlement snapshots the stay into guest_history, frees the room and removes
the booking in one transaction; the booking id keys the whole operation.
"""
import logging
from datetime import datetime
from typing import Any, List, Optional
from sqlalchemy.orm import Session
from frontdesk.config import settings
from frontdesk.domain.civil_time import Clock, civil_now, format_for_display, format_for_storage
from frontdesk.domain.final_bill import FinalBill, calculate_final_bill, occupancy_warning
from frontdesk.domain.records import primary_state, select_primary, to_history_rows
from frontdesk.models.ontology import Booking, GuestHistory, Room, RoomStatus
from frontdesk.models.schemas import CheckOutRequest
from frontdesk.services.audit_service import AuditService

logger = logging.getLogger(__name__)


class CheckOutService:
    """Checkout service"""

    def __init__(self, db: Session, clock: Optional[Clock] = None,
                 grace_period_hours: Optional[float] = None):
        self.db = db
        self.clock = clock
        self.audit = AuditService(db, clock)
        self.grace_period_hours = (settings.GRACE_PERIOD_HOURS
                                   if grace_period_hours is None else grace_period_hours)

    def get_occupied_bookings(self, search: Optional[str] = None) -> List[Booking]:
        """Bookings of occupied rooms, optionally matched on room number"""
        query = self.db.query(Booking).join(Room).filter(Room.status == RoomStatus.OCCUPIED)
        if search:
            query = query.filter(Room.room_number.ilike(f"%{search.strip()}%"))
        return query.order_by(Room.room_number).all()

    def get_booking(self, booking_id: int) -> Booking:
        booking = self.db.query(Booking).filter(Booking.id == booking_id).first()
        if not booking:
            raise ValueError("Booking not found")
        return booking

    def start_checkout(self, booking_id: int, operator_id: int) -> Booking:
        """Record that checkout of a booking has begun"""
        booking = self.get_booking(booking_id)
        self.audit.log(
            "CHECKOUT_INITIATED",
            f"Checkout started for Booking ID {booking.id}, Room {booking.room.room_number}",
            user_id=operator_id,
            booking_id=booking.id,
            commit=True
        )
        return booking

    def calculate_bill(self, booking: Booking, extra_charges: Any = 0,
                       now: Optional[datetime] = None) -> FinalBill:
        """Final bill for a booking settled at `now`, civil now by default"""
        return calculate_final_bill(
            checkin=booking.checkin_time,
            now=now if now is not None else civil_now(self.clock),
            daily_rate=booking.room.base_price,
            guest_state=primary_state(booking.guests),
            advance_paid=booking.advance_payment,
            discount=booking.discount,
            extra_charges=extra_charges,
            grace_period_hours=self.grace_period_hours
        )

    def review(self, booking_id: int, extra_charges: Any = 0) -> dict:
        """Bill review shown before the operator confirms checkout"""
        booking = self.get_booking(booking_id)
        now = civil_now(self.clock)
        bill = self.calculate_bill(booking, extra_charges, now)
        primary = select_primary(booking.guests)

        return {
            'booking_id': booking.id,
            'room_number': booking.room.room_number,
            'room_type': booking.room.room_type,
            'floor': booking.room.floor,
            'primary_guest': primary.name if primary else None,
            'total_guests': len(booking.guests),
            'checkin_time': format_for_display(booking.checkin_time),
            'checkout_time': format_for_display(now),
            'planned_days': booking.stay_days,
            'bill': bill.to_dict(),
            'occupancy_warning': occupancy_warning(booking.room.room_type, len(booking.guests))
        }

    def check_out(self, booking_id: int, data: CheckOutRequest, operator_id: int) -> dict:
        """
        Settle and close a booking
        Business rules:
        - a payment method is required
        - every guest gets a guest_history row; money fields go on the primary's row
        - the room becomes Available, guests and booking are deleted
        - all of the above commit together or not at all
        """
        if data.payment_method is None:
            raise ValueError("Please select a payment method before completing the checkout.")

        booking = self.get_booking(booking_id)
        now = civil_now(self.clock)
        bill = self.calculate_bill(booking, data.extra_charges, now)
        room = booking.room
        room_number = room.room_number

        try:
            rows = to_history_rows(booking, booking.guests, bill, now, data.payment_method.value)
            for row in rows:
                self.db.add(GuestHistory(**row))

            room.status = RoomStatus.AVAILABLE
            self.db.delete(booking)

            self.audit.log(
                "CHECKOUT_COMPLETED",
                f"Guest(s) checked out from booking {booking_id}, room {room_number}",
                user_id=operator_id,
                booking_id=booking_id
            )
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.exception(f"Checkout of booking {booking_id} failed")
            self.audit.log_failure(
                "CHECKOUT_FAILED",
                f"Failed to checkout booking {booking_id}. Error: {e}",
                user_id=operator_id,
                booking_id=booking_id
            )
            raise

        logger.info(f"Booking {booking_id} checked out, balance due {bill.balance_due}")
        return {
            'booking_id': booking_id,
            'room_number': room_number,
            'checkout_time': format_for_storage(now),
            'payment_method': data.payment_method.value,
            'history_rows': len(rows),
            'bill': bill.to_dict()
        }

    def build_invoice(self, booking_id: int, extra_charges: Any = 0,
                      operator_id: Optional[int] = None) -> dict:
        """Numbers and labels an invoice renderer needs; no formatting of currency"""
        booking = self.get_booking(booking_id)
        now = civil_now(self.clock)
        bill = self.calculate_bill(booking, extra_charges, now)
        primary = select_primary(booking.guests)
        guest_name = primary.name if primary else "Guest"

        self.audit.log(
            "DOWNLOAD_PDF",
            f"Final bill downloaded for booking {booking.id} "
            f"(FinalBill_{guest_name}_{now:%Y-%m-%d}.pdf)",
            user_id=operator_id,
            booking_id=booking.id,
            commit=True
        )

        return {
            'hotel_name': settings.HOTEL_NAME,
            'hotel_address': settings.HOTEL_ADDRESS,
            'hotel_phone': settings.HOTEL_PHONE,
            'guest_name': guest_name,
            'guest_phone': primary.phone if primary else "-",
            'room_number': booking.room.room_number,
            'room_type': booking.room.room_type,
            'floor': booking.room.floor,
            'checkin': format_for_display(booking.checkin_time),
            'checkout': format_for_display(now),
            'days': bill.actual_days,
            'room_rate': bill.daily_rate,
            'advance_paid': bill.advance_paid,
            'discount': bill.discount,
            'extra_charges': bill.extra_charges,
            'balance_due': bill.balance_due,
            'cgst': bill.cgst_total,
            'sgst': bill.sgst_total,
            'igst': bill.igst_total,
            'total_amount': bill.total_before_adjustments,
            'gross_total': bill.gross_total
        }
