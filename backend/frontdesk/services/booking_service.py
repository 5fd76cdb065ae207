"""
Booking service
Viewing and editing active stays
"""
import logging
from collections import OrderedDict
from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from frontdesk.domain.civil_time import Clock
from frontdesk.domain.gst import calculate_checkin_bill
from frontdesk.domain.records import primary_state
from frontdesk.domain.stay import reconcile
from frontdesk.models.ontology import Booking, Guest, Room, RoomStatus
from frontdesk.models.schemas import BookingUpdate
from frontdesk.services.audit_service import AuditService

logger = logging.getLogger(__name__)


class BookingService:
    """Booking service"""

    def __init__(self, db: Session, clock: Optional[Clock] = None):
        self.db = db
        self.audit = AuditService(db, clock)

    def get_active_bookings(self) -> List[Booking]:
        return self.db.query(Booking).join(Room).order_by(Room.floor, Room.room_number).all()

    def get_bookings_by_floor(self) -> Dict[str, List[Booking]]:
        """Active bookings grouped by the floor of their room"""
        grouped: Dict[str, List[Booking]] = OrderedDict()
        for booking in self.get_active_bookings():
            floor = booking.room.floor if booking.room else "Unknown"
            grouped.setdefault(floor, []).append(booking)
        return grouped

    def get_booking(self, booking_id: int) -> Optional[Booking]:
        return self.db.query(Booking).filter(Booking.id == booking_id).first()

    def _target_room(self, booking: Booking, room_id: Optional[int]) -> Optional[Room]:
        if room_id is None or room_id == booking.room_id:
            return None
        room = self.db.query(Room).filter(Room.id == room_id).first()
        if not room:
            raise ValueError("Room not found")
        if room.status != RoomStatus.AVAILABLE:
            raise ValueError(f"Room {room.room_number} is not available")
        return room

    def update_booking(self, booking_id: int, data: BookingUpdate, operator_id: int) -> Booking:
        """
        Edit an active booking
        - stay days / planned checkout are reconciled against the check-in time
        - a room change frees the old room and occupies the new one
        - accompanying guests replace the stored non-primary guests
        - room charge and gross total are recomputed for the new plan
        """
        booking = self.get_booking(booking_id)
        if not booking:
            raise ValueError("Booking not found")

        if data.checkout_time is not None and data.checkout_time <= booking.checkin_time:
            raise ValueError("Checkout time must be after the check-in time")
        new_room = self._target_room(booking, data.room_id)
        old_room = booking.room
        old_guest_count = len(booking.guests)

        try:
            if data.stay_days is not None or data.checkout_time is not None:
                plan = reconcile(booking.checkin_time, data.stay_days, data.checkout_time)
                booking.stay_days = plan.stay_days
                booking.checkout_time = plan.checkout

            if new_room is not None:
                old_room.status = RoomStatus.AVAILABLE
                new_room.status = RoomStatus.OCCUPIED
                booking.room = new_room
                for guest in booking.guests:
                    guest.room_id = new_room.id

            if data.advance_payment is not None:
                booking.advance_payment = data.advance_payment

            if data.accompanying_guests is not None:
                for guest in [g for g in booking.guests if not g.is_primary]:
                    booking.guests.remove(guest)
                for guest in data.accompanying_guests:
                    booking.guests.append(Guest(
                        room_id=booking.room.id,
                        name=guest.name,
                        age=guest.age,
                        phone=guest.phone,
                        gender=guest.gender,
                        is_primary=False
                    ))

            bill = calculate_checkin_bill(booking.room.base_price, primary_state(booking.guests),
                                          booking.stay_days, booking.discount, booking.advance_payment)
            booking.room_charge = bill.room_charge
            booking.gross_total = bill.gross_total

            changes = ", ".join([
                f"Stay: {booking.stay_days} day(s)",
                f"Room: {old_room.room_number} → {booking.room.room_number}",
                f"Guest count: {old_guest_count} → {len(booking.guests)}",
            ])
            self.audit.log("EDIT_SUCCESSFUL", changes, user_id=operator_id, booking_id=booking.id)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.exception(f"Edit of booking {booking_id} failed")
            self.audit.log_failure(
                "EDIT_FAILED",
                f"Failed to update booking {booking_id}. Error: {e}",
                user_id=operator_id,
                booking_id=booking_id
            )
            raise

        self.db.refresh(booking)
        logger.info(f"Booking {booking_id} updated: {changes}")
        return booking
