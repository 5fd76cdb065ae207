# API Routers
from frontdesk.routers import auth, rooms, checkin, checkout, bookings, reports, system_logs

__all__ = ['auth', 'rooms', 'checkin', 'checkout', 'bookings', 'reports', 'system_logs']
