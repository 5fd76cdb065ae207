"""
Report service
Dashboard figures and guest history for administrators.
Revenue sums guest_history.gross_total, which is carried by the primary
guest's row only, so each settled stay is counted once.
"""
import logging
import math
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session
from frontdesk.domain.civil_time import Clock, civil_now
from frontdesk.domain.gst import to_money
from frontdesk.models.ontology import Booking, Guest, GuestHistory, Room, RoomStatus

logger = logging.getLogger(__name__)

PERIODS = ("weekly", "monthly", "yearly", "custom")
DEFAULT_PAGE_SIZE = 5


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


class ReportService:
    """Report service"""

    def __init__(self, db: Session, clock: Optional[Clock] = None):
        self.db = db
        self.clock = clock

    def _revenue(self, start: datetime, end: datetime) -> Decimal:
        total = self.db.query(func.sum(GuestHistory.gross_total)).filter(
            GuestHistory.checkout_time >= start,
            GuestHistory.checkout_time < end
        ).scalar()
        return to_money(total)

    def get_dashboard_stats(self) -> dict:
        """Room, guest and revenue figures for the current civil day, week and month"""
        now = civil_now(self.clock)
        today = start_of_day(now)
        tomorrow = today + timedelta(days=1)
        week_start = today - timedelta(days=today.weekday())
        week_end = week_start + timedelta(days=7)
        month_start = today.replace(day=1)

        rooms = self.db.query(Room).all()
        available = len([r for r in rooms if r.status == RoomStatus.AVAILABLE])
        occupied = len([r for r in rooms if r.status == RoomStatus.OCCUPIED])

        current_guests = self.db.query(Guest).filter(Guest.is_primary == True).count()

        checkins_today = self.db.query(Booking).filter(
            Booking.checkin_time >= today,
            Booking.checkin_time < tomorrow
        ).count()

        checkouts_today = self.db.query(GuestHistory).filter(
            GuestHistory.is_primary == True,
            GuestHistory.checkout_time >= today,
            GuestHistory.checkout_time < tomorrow
        ).count()

        return {
            'total_rooms': len(rooms),
            'available_rooms': available,
            'occupied_rooms': occupied,
            'current_guests': current_guests,
            'checkins_today': checkins_today,
            'checkouts_today': checkouts_today,
            'revenue_today': self._revenue(today, tomorrow),
            'revenue_week': self._revenue(week_start, week_end),
            'revenue_month': self._revenue(month_start, now + timedelta(seconds=1))
        }

    def _period_range(self, period: str, from_date: Optional[datetime],
                      to_date: Optional[datetime]) -> Tuple[Optional[datetime], Optional[datetime]]:
        now = civil_now(self.clock)
        if period == "weekly":
            return now - timedelta(days=7), None
        if period == "monthly":
            return start_of_day(now).replace(day=1), None
        if period == "yearly":
            return start_of_day(now).replace(month=1, day=1), None
        if period == "custom":
            start = start_of_day(from_date) if from_date else None
            end = start_of_day(to_date) + timedelta(days=1) if to_date else None
            return start, end
        raise ValueError(f"Unknown period '{period}', expected one of {', '.join(PERIODS)}")

    def get_guest_history(self, period: str = "weekly", from_date: Optional[datetime] = None,
                          to_date: Optional[datetime] = None, page: int = 1,
                          page_size: int = DEFAULT_PAGE_SIZE) -> dict:
        """
        Settled guests in a period, newest checkout first

        Args:
            period: weekly (last 7 days), monthly, yearly, or custom
            from_date: custom period start, inclusive; open when omitted
            to_date: custom period end, inclusive of the whole day; open when omitted
            page: 1-based page number
            page_size: rows per page

        Returns:
            {'items', 'page', 'page_size', 'total', 'total_pages'}
        """
        if page < 1 or page_size < 1:
            raise ValueError("page and page_size must be positive")

        start, end = self._period_range(period, from_date, to_date)
        query = self.db.query(GuestHistory)
        if start is not None:
            query = query.filter(GuestHistory.checkout_time >= start)
        if end is not None:
            query = query.filter(GuestHistory.checkout_time < end)

        total = query.count()
        items = query.order_by(
            GuestHistory.checkout_time.desc(), GuestHistory.id.desc()
        ).offset((page - 1) * page_size).limit(page_size).all()

        return {
            'items': items,
            'page': page,
            'page_size': page_size,
            'total': total,
            'total_pages': max(1, math.ceil(total / page_size))
        }

    def delete_guest_history(self, history_id: int) -> None:
        """Administrative removal of one history row"""
        row = self.db.query(GuestHistory).filter(GuestHistory.id == history_id).first()
        if not row:
            raise ValueError("Guest history record not found")
        self.db.delete(row)
        self.db.commit()
        logger.info(f"Guest history record {history_id} deleted")
