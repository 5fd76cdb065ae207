"""
Persisted objects
Rooms, bookings, guests, guest history, system logs, operators and check-in drafts.
Timestamps on booking, history and log rows are civil (UTC+5:30) wall-clock values.
"""
from datetime import datetime
from enum import Enum
from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, Text, Enum as SQLEnum, Boolean, Numeric
)
from sqlalchemy.orm import relationship
from frontdesk.database import Base


# ============== Enums ==============

class RoomStatus(str, Enum):
    """Room status"""
    AVAILABLE = "Available"
    OCCUPIED = "Occupied"


class EmployeeRole(str, Enum):
    """Operator role"""
    ADMIN = "admin"
    RECEPTIONIST = "receptionist"


class PaymentMethod(str, Enum):
    """Settlement method at checkout"""
    UPI = "UPI"
    CASH = "Cash"


# ============== Tables ==============

class Employee(Base):
    """Front desk operator"""
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(100), nullable=False)
    role = Column(SQLEnum(EmployeeRole), nullable=False, default=EmployeeRole.RECEPTIONIST)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class Room(Base):
    """
    Room
    room_type decides maximum occupancy (Ordinary/Single 1, Double 2, Triple 3)
    """
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True)
    room_number = Column(String(10), unique=True, nullable=False)
    room_type = Column(String(30), nullable=False)
    floor = Column(String(20), nullable=False)
    base_price = Column(Numeric(10, 2), nullable=False, default=0)   # per day, tax exclusive
    status = Column(SQLEnum(RoomStatus), nullable=False, default=RoomStatus.AVAILABLE)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    bookings = relationship("Booking", back_populates="room")


class Booking(Base):
    """
    Active stay
    checkout_time and stay_days are the planned values; removed at checkout
    """
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False)
    checkin_time = Column(DateTime, nullable=False)
    checkout_time = Column(DateTime, nullable=False)
    stay_days = Column(Integer, nullable=False, default=1)
    room_charge = Column(Numeric(10, 2), default=0)      # rate x planned days, tax exclusive
    discount = Column(Numeric(10, 2), default=0)
    advance_payment = Column(Numeric(10, 2), default=0)
    gross_total = Column(Numeric(10, 2), default=0)      # tax inclusive, net of discount
    created_by = Column(Integer, ForeignKey("employees.id"))

    room = relationship("Room", back_populates="bookings")
    guests = relationship("Guest", back_populates="booking", cascade="all, delete-orphan",
                          order_by="Guest.id")
    creator = relationship("Employee")


class Guest(Base):
    """Occupant of an active booking; identity and address kept for the primary guest"""
    __tablename__ = "guests"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=False)
    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False)
    name = Column(String(100), nullable=False)
    age = Column(Integer)
    phone = Column(String(20))
    gender = Column(String(10))
    is_primary = Column(Boolean, default=False)
    id_proof_type = Column(String(20))
    id_proof_number = Column(String(30))
    address = Column(Text)
    city = Column(String(50))
    state = Column(String(50))
    emergency_contact_name = Column(String(100))
    emergency_contact_number = Column(String(20))

    booking = relationship("Booking", back_populates="guests")
    room = relationship("Room")


class GuestHistory(Base):
    """
    Completed stay snapshot, one row per guest
    Money fields are carried by the primary guest's row only
    """
    __tablename__ = "guest_history"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer)
    room_id = Column(Integer, ForeignKey("rooms.id"))
    name = Column(String(100), nullable=False)
    age = Column(Integer)
    phone = Column(String(20))
    gender = Column(String(10))
    is_primary = Column(Boolean, default=False)
    id_proof_type = Column(String(20))
    id_proof_number = Column(String(30))
    address = Column(Text)
    city = Column(String(50))
    state = Column(String(50))
    checkin_time = Column(DateTime)
    checkout_time = Column(DateTime, index=True)         # actual
    gross_total = Column(Numeric(10, 2), default=0)
    discount = Column(Numeric(10, 2), default=0)
    advance_payment = Column(Numeric(10, 2), default=0)
    extra_charges = Column(Numeric(10, 2), default=0)
    total_amount = Column(Numeric(10, 2), default=0)
    payment_method = Column(String(10))

    room = relationship("Room")


class SystemLog(Base):
    """Audit trail of operator actions"""
    __tablename__ = "system_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("employees.id"))
    booking_id = Column(Integer)
    action = Column(String(100), nullable=False)
    details = Column(Text)
    created_at = Column(DateTime, nullable=False)

    user = relationship("Employee")


class CheckinDraft(Base):
    """In-progress check-in form of one operator"""
    __tablename__ = "checkin_drafts"

    id = Column(Integer, primary_key=True, index=True)
    operator_id = Column(Integer, ForeignKey("employees.id"), unique=True, nullable=False)
    payload = Column(Text, nullable=False)               # JSON
    expires_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
