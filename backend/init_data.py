"""
Seed data script
Creates rooms on three floors and the default operator accounts.

Default accounts (password 123456):
  admin     Front Office Manager   admin
  front1    Front Desk             receptionist
"""
import sys
sys.path.insert(0, '.')

from decimal import Decimal
from frontdesk.database import SessionLocal, init_db
from frontdesk.models.ontology import Room, RoomStatus, EmployeeRole
from frontdesk.services.employee_service import EmployeeService

ROOM_RATES = {
    'Ordinary': Decimal('800'),
    'Single': Decimal('1000'),
    'Double': Decimal('1500'),
    'Triple': Decimal('2000'),
}

ROOM_CONFIGS = {
    'Ground': [(101, 'Ordinary'), (102, 'Ordinary'), (103, 'Single'), (104, 'Single')],
    'First': [(201, 'Single'), (202, 'Double'), (203, 'Double'), (204, 'Triple')],
    'Second': [(301, 'Double'), (302, 'Double'), (303, 'Triple'), (304, 'Triple')],
}


def init_rooms(db):
    """Rooms per floor; existing room numbers are left alone"""
    for floor, configs in ROOM_CONFIGS.items():
        for num, room_type in configs:
            existing = db.query(Room).filter(Room.room_number == str(num)).first()
            if not existing:
                db.add(Room(
                    room_number=str(num), floor=floor, room_type=room_type,
                    base_price=ROOM_RATES[room_type],
                    status=RoomStatus.AVAILABLE,
                ))
    db.commit()


def init_employees(db):
    """Default admin and receptionist"""
    employees = [
        {'username': 'admin', 'password': '123456',
         'name': 'Front Office Manager', 'role': EmployeeRole.ADMIN},
        {'username': 'front1', 'password': '123456',
         'name': 'Front Desk', 'role': EmployeeRole.RECEPTIONIST},
    ]
    service = EmployeeService(db)
    for data in employees:
        if service.get_employee_by_username(data['username']):
            continue
        service.create_employee(data['username'], data['password'], data['name'], data['role'])


def main():
    print("=" * 50)
    print("Front desk seed data")
    print("=" * 50)

    init_db()
    print("Tables created")

    db = SessionLocal()
    try:
        init_rooms(db)
        init_employees(db)

        print("Done.")
        print()
        print("Default accounts (password 123456):")
        print("  admin    (admin)")
        print("  front1   (receptionist)")
        print("=" * 50)
    finally:
        db.close()


if __name__ == '__main__':
    main()
