"""
Pydantic schemas
Request/response validation for the front desk API
"""
import re
from datetime import datetime
from decimal import Decimal
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict
from frontdesk.domain.civil_time import to_civil_time
from frontdesk.models.ontology import RoomStatus, EmployeeRole, PaymentMethod

NAME_PATTERN = re.compile(r"^[A-Za-z\s]+$")
PHONE_PATTERN = re.compile(r"^\d{10}$")

ID_PROOF_PATTERNS = {
    "Aadhaar": re.compile(r"^\d{12}$"),
    "PAN": re.compile(r"^[A-Za-z0-9]{1,10}$"),
    "Passport": re.compile(r"^[A-Z]\d{7}$"),
    "VoterID": re.compile(r"^\d{10}$"),
    "DL": re.compile(r"^[A-Za-z0-9]{15}$"),
}


def id_proof_is_valid(proof_type: Optional[str], number: Optional[str]) -> bool:
    """Unknown proof types are not checked"""
    pattern = ID_PROOF_PATTERNS.get(proof_type or "")
    if pattern is None:
        return True
    return bool(pattern.match(number or ""))


def as_civil(value: Optional[datetime]) -> Optional[datetime]:
    """Naive input is already civil wall-clock; aware input is converted"""
    if value is None or value.tzinfo is None:
        return value
    return to_civil_time(value)


# ============== Auth Schemas ==============

class LoginRequest(BaseModel):
    username: str
    password: str


class EmployeeResponse(BaseModel):
    id: int
    username: str
    name: str
    role: EmployeeRole
    is_active: bool
    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    employee: EmployeeResponse


# ============== Room Schemas ==============

class RoomResponse(BaseModel):
    id: int
    room_number: str
    room_type: str
    floor: str
    base_price: Decimal
    status: RoomStatus
    model_config = ConfigDict(from_attributes=True)


# ============== Guest Schemas ==============

class GuestBase(BaseModel):
    """Fields collected for every occupant"""
    name: str = Field(..., max_length=100)
    age: int
    phone: str
    gender: str

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required.")
        if not NAME_PATTERN.match(v):
            raise ValueError("Only alphabets allowed")
        return v

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Phone number is required.")
        if not PHONE_PATTERN.match(v):
            raise ValueError("Phone must be exactly 10 digits")
        return v

    @field_validator("age")
    @classmethod
    def check_age(cls, v: int) -> int:
        if v <= 0 or v > 99:
            raise ValueError("Age must be 1 or 2 digits")
        return v

    @field_validator("gender")
    @classmethod
    def check_gender(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Please select gender.")
        return v.strip()


class GuestForm(GuestBase):
    """
    Guest as entered at check-in
    id is the client-side identifier used while the form is being edited
    """
    id: Optional[int] = None
    is_primary: bool = False
    id_proof_type: Optional[str] = None
    id_proof_number: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_number: Optional[str] = None

    @model_validator(mode="after")
    def check_primary_details(self) -> "GuestForm":
        if self.id_proof_type and self.id_proof_number:
            if not id_proof_is_valid(self.id_proof_type, self.id_proof_number):
                raise ValueError(f"Invalid format for {self.id_proof_type}")

        if not self.is_primary:
            return self

        if not self.id_proof_type:
            raise ValueError("ID proof type is required for primary guest.")
        if not (self.id_proof_number or "").strip():
            raise ValueError("ID number is required for primary guest.")
        if not (self.address or "").strip():
            raise ValueError("Address is required for primary guest.")
        if not (self.city or "").strip():
            raise ValueError("City is required for primary guest.")
        if not (self.state or "").strip():
            raise ValueError("State is required for primary guest.")
        if not (self.emergency_contact_name or "").strip() or not (self.emergency_contact_number or "").strip():
            raise ValueError("Emergency contact name and number are required for primary guest.")
        if not PHONE_PATTERN.match(self.emergency_contact_number.strip()):
            raise ValueError("Emergency contact number must be 10 digits.")
        return self


class GuestResponse(BaseModel):
    id: int
    name: str
    age: Optional[int] = None
    phone: Optional[str] = None
    gender: Optional[str] = None
    is_primary: bool
    id_proof_type: Optional[str] = None
    id_proof_number: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_number: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


# ============== Check-in Schemas ==============

class StayPlanRequest(BaseModel):
    """Either field may be given; checkout_time wins when both are"""
    stay_days: Optional[int] = None
    checkout_time: Optional[datetime] = None

    civil_checkout = field_validator("checkout_time")(as_civil)


class CheckInRequest(BaseModel):
    room_id: int
    guests: List[GuestForm] = Field(..., min_length=1)
    stay_days: Optional[int] = None
    checkout_time: Optional[datetime] = None
    discount: Decimal = Field(default=0, ge=0)
    advance_payment: Decimal = Field(default=0, ge=0)

    civil_checkout = field_validator("checkout_time")(as_civil)


class CheckinDraftUpdate(BaseModel):
    """Partially filled check-in form; guests are not validated until confirm"""
    room_id: Optional[int] = None
    guests: List[Dict[str, Any]] = Field(default_factory=list)
    stay_days: Optional[int] = None
    checkout_time: Optional[str] = None


# ============== Checkout Schemas ==============

class CheckOutRequest(BaseModel):
    payment_method: Optional[PaymentMethod] = None
    extra_charges: Decimal = Field(default=0, ge=0)


# ============== Booking Schemas ==============

class BookingResponse(BaseModel):
    id: int
    room_id: int
    checkin_time: datetime
    checkout_time: datetime
    stay_days: int
    room_charge: Decimal
    discount: Decimal
    advance_payment: Decimal
    gross_total: Decimal
    room: RoomResponse
    guests: List[GuestResponse]
    model_config = ConfigDict(from_attributes=True)


class BookingUpdate(BaseModel):
    """Primary guest details are read-only once checked in"""
    stay_days: Optional[int] = None
    checkout_time: Optional[datetime] = None
    room_id: Optional[int] = None
    advance_payment: Optional[Decimal] = Field(None, ge=0)
    accompanying_guests: Optional[List[GuestBase]] = None

    civil_checkout = field_validator("checkout_time")(as_civil)


# ============== Report Schemas ==============

class GuestHistoryResponse(BaseModel):
    id: int
    booking_id: Optional[int] = None
    room_id: Optional[int] = None
    name: str
    phone: Optional[str] = None
    is_primary: bool
    state: Optional[str] = None
    checkin_time: Optional[datetime] = None
    checkout_time: Optional[datetime] = None
    gross_total: Decimal
    discount: Decimal
    advance_payment: Decimal
    extra_charges: Decimal
    payment_method: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


class SystemLogResponse(BaseModel):
    id: int
    user_id: Optional[int] = None
    booking_id: Optional[int] = None
    action: str
    details: Optional[str] = None
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)
