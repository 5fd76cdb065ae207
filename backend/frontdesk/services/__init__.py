# Business Services
from frontdesk.services.audit_service import AuditService
from frontdesk.services.employee_service import EmployeeService
from frontdesk.services.room_service import RoomService
from frontdesk.services.draft_service import DraftService
from frontdesk.services.checkin_service import CheckInService
from frontdesk.services.checkout_service import CheckOutService
from frontdesk.services.booking_service import BookingService
from frontdesk.services.report_service import ReportService

__all__ = [
    'AuditService', 'EmployeeService', 'RoomService', 'DraftService',
    'CheckInService', 'CheckOutService', 'BookingService', 'ReportService'
]
