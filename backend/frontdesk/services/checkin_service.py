"""
Check-in service
Stay planning, provisional billing and confirmed check-in.
A confirmed check-in writes the booking, its guests and the room status
in one transaction.
"""
import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from frontdesk.domain.civil_time import Clock, civil_now, format_for_input, format_for_storage
from frontdesk.domain.final_bill import occupancy_warning
from frontdesk.domain.gst import calculate_checkin_bill
from frontdesk.domain.records import (
    count_primaries, primary_state, select_primary, to_booking_insert, to_guest_inserts
)
from frontdesk.domain.stay import StayPlan, reconcile
from frontdesk.models.ontology import Booking, Guest, Room, RoomStatus
from frontdesk.models.schemas import CheckInRequest, GuestForm, StayPlanRequest
from frontdesk.services.audit_service import AuditService
from frontdesk.services.draft_service import DraftService

logger = logging.getLogger(__name__)


class CheckInService:
    """Check-in service"""

    def __init__(self, db: Session, clock: Optional[Clock] = None):
        self.db = db
        self.clock = clock
        self.audit = AuditService(db, clock)

    @staticmethod
    def _plan(now: datetime, stay_days: Optional[int], checkout: Optional[datetime]) -> StayPlan:
        if checkout is not None and checkout <= now:
            raise ValueError("Checkout time must be after the check-in time")
        return reconcile(now, stay_days, checkout)

    def plan_stay(self, data: StayPlanRequest) -> StayPlan:
        """Recompute days or checkout, anchored at now"""
        return self._plan(civil_now(self.clock), data.stay_days, data.checkout_time)

    def _get_room(self, room_id: int) -> Room:
        room = self.db.query(Room).filter(Room.id == room_id).first()
        if not room:
            raise ValueError("Room not found")
        return room

    @staticmethod
    def _check_guests(guests: List[GuestForm]) -> None:
        primaries = count_primaries(guests)
        if primaries == 0:
            raise ValueError("A primary guest is required")
        if primaries > 1:
            raise ValueError("Only one primary guest is allowed")

    def preview(self, data: CheckInRequest) -> dict:
        """Provisional bill for a check-in that has not been confirmed yet"""
        room = self._get_room(data.room_id)
        self._check_guests(data.guests)

        plan = self._plan(civil_now(self.clock), data.stay_days, data.checkout_time)
        bill = calculate_checkin_bill(room.base_price, primary_state(data.guests),
                                      plan.stay_days, data.discount, data.advance_payment)
        primary = select_primary(data.guests)

        return {
            'room_id': room.id,
            'room_number': room.room_number,
            'room_type': room.room_type,
            'floor': room.floor,
            'primary_guest': primary.name,
            'guest_count': len(data.guests),
            'checkin_time': format_for_storage(plan.checkin),
            'checkout_time': format_for_storage(plan.checkout),
            'checkout_input': format_for_input(plan.checkout),
            'bill': bill.to_dict(),
            'occupancy_warning': occupancy_warning(room.room_type, len(data.guests))
        }

    def check_in(self, data: CheckInRequest, operator_id: int) -> Booking:
        """
        Confirm a check-in
        Business rules:
        - the room must be Available
        - exactly one primary guest
        - booking, guests and room status are committed together
        - the operator's draft is cleared on success
        """
        room = self._get_room(data.room_id)
        if room.status != RoomStatus.AVAILABLE:
            raise ValueError(f"Room {room.room_number} is not available")
        self._check_guests(data.guests)

        room_number = room.room_number
        now = civil_now(self.clock)
        plan = self._plan(now, data.stay_days, data.checkout_time)

        try:
            booking = Booking(
                **to_booking_insert(room, data.guests, plan.stay_days, plan.checkout, now,
                                    data.discount, data.advance_payment),
                created_by=operator_id
            )
            self.db.add(booking)
            self.db.flush()

            for row in to_guest_inserts(booking.id, room, data.guests):
                self.db.add(Guest(**row))

            room.status = RoomStatus.OCCUPIED

            self.audit.log(
                "CHECKIN_COMPLETED",
                f"User {operator_id} checked in Room {room.room_number} ({room.room_type}) "
                f"with {len(data.guests)} guest(s). Stay: {plan.stay_days} day(s).",
                user_id=operator_id,
                booking_id=booking.id
            )
            DraftService(self.db, self.clock).discard(operator_id, commit=False)

            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.exception(f"Check-in of room {room_number} failed")
            self.audit.log_failure(
                "CHECKIN_FAILED",
                f"User {operator_id} failed to check in Room {room_number}. Error: {e}",
                user_id=operator_id
            )
            raise

        self.db.refresh(booking)
        logger.info(f"Booking {booking.id} created for room {room.room_number}")
        return booking
