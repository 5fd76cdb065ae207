"""
Pytest configuration and shared fixtures
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from datetime import datetime, timezone
from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from frontdesk.database import Base, get_db
from frontdesk.domain.civil_time import CIVIL_OFFSET, Clock, get_clock
from frontdesk.models import ontology  # noqa
from frontdesk.models.ontology import Employee, EmployeeRole, Room, RoomStatus
from frontdesk.models.schemas import CheckInRequest
from frontdesk.security.auth import get_password_hash, create_access_token
from frontdesk.services.checkin_service import CheckInService
from frontdesk.main import app


class FixedClock(Clock):
    """Clock pinned to a civil wall-clock instant; move it with set_civil/advance"""

    def __init__(self, civil: datetime):
        self.set_civil(civil)

    def set_civil(self, civil: datetime) -> None:
        self._utc = (civil - CIVIL_OFFSET).replace(tzinfo=timezone.utc)

    def advance(self, delta) -> None:
        self._utc = self._utc + delta

    def now(self) -> datetime:
        return self._utc


@pytest.fixture
def clock():
    """Civil now = 2024-01-01 10:00"""
    return FixedClock(datetime(2024, 1, 1, 10, 0))


@pytest.fixture(scope="function")
def db_engine():
    """In-memory database engine"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Database session"""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db_session, clock):
    """Test client on the test session and the fixed clock"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============== Auth Fixtures ==============

def _employee(db, username, name, role):
    employee = Employee(
        username=username,
        password_hash=get_password_hash("123456"),
        name=name,
        role=role,
        is_active=True
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


@pytest.fixture
def admin(db_session):
    return _employee(db_session, "admin", "Front Office Manager", EmployeeRole.ADMIN)


@pytest.fixture
def receptionist(db_session):
    return _employee(db_session, "front1", "Front Desk", EmployeeRole.RECEPTIONIST)


@pytest.fixture
def admin_token(admin):
    return create_access_token(admin.id, admin.role)


@pytest.fixture
def receptionist_token(receptionist):
    return create_access_token(receptionist.id, receptionist.role)


@pytest.fixture
def admin_auth_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def receptionist_auth_headers(receptionist_token):
    return {"Authorization": f"Bearer {receptionist_token}"}


# ============== Entity Fixtures ==============

def _room(db, number, room_type, floor, price, status=RoomStatus.AVAILABLE):
    room = Room(
        room_number=number,
        room_type=room_type,
        floor=floor,
        base_price=Decimal(price),
        status=status
    )
    db.add(room)
    db.commit()
    db.refresh(room)
    return room


@pytest.fixture
def sample_room(db_session):
    """Single room 101, 1000/day"""
    return _room(db_session, "101", "Single", "Ground", "1000")


@pytest.fixture
def sample_room_102(db_session):
    """Double room 102, 1500/day"""
    return _room(db_session, "102", "Double", "Ground", "1500")


@pytest.fixture
def sample_room_201(db_session):
    """Triple room 201, 2000/day"""
    return _room(db_session, "201", "Triple", "First", "2000")


@pytest.fixture
def primary_guest_data():
    """Valid primary guest form from Karnataka"""
    return {
        "id": 1,
        "name": "Ravi Kumar",
        "age": 34,
        "phone": "9876543210",
        "gender": "Male",
        "is_primary": True,
        "id_proof_type": "Aadhaar",
        "id_proof_number": "123412341234",
        "address": "12 MG Road",
        "city": "Bengaluru",
        "state": "Karnataka",
        "emergency_contact_name": "Asha Kumar",
        "emergency_contact_number": "9123456780",
    }


@pytest.fixture
def companion_guest_data():
    return {
        "id": 2,
        "name": "Meena Kumar",
        "age": 31,
        "phone": "9876500000",
        "gender": "Female",
        "is_primary": False,
    }


@pytest.fixture
def checked_in_booking(db_session, clock, receptionist, sample_room, primary_guest_data):
    """
    Karnataka guest in room 101 at 1000/day for 3 days,
    500 advance and 100 discount, checked in at the fixed clock
    """
    data = CheckInRequest(
        room_id=sample_room.id,
        guests=[primary_guest_data],
        stay_days=3,
        discount=Decimal("100"),
        advance_payment=Decimal("500")
    )
    return CheckInService(db_session, clock).check_in(data, receptionist.id)
