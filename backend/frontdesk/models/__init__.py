# Persisted models
from frontdesk.models.ontology import (
    Room, Booking, Guest, GuestHistory, SystemLog, Employee, CheckinDraft
)

__all__ = [
    'Room', 'Booking', 'Guest', 'GuestHistory', 'SystemLog', 'Employee', 'CheckinDraft'
]
