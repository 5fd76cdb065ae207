"""
Employee service
Operators and login
"""
from typing import Optional
from sqlalchemy.orm import Session
from frontdesk.models.ontology import Employee, EmployeeRole
from frontdesk.security.auth import get_password_hash, verify_password, create_access_token


class EmployeeService:
    """Employee service"""

    def __init__(self, db: Session):
        self.db = db

    def get_employee_by_username(self, username: str) -> Optional[Employee]:
        return self.db.query(Employee).filter(Employee.username == username).first()

    def create_employee(self, username: str, password: str, name: str,
                        role: EmployeeRole = EmployeeRole.RECEPTIONIST) -> Employee:
        """Create an operator account"""
        if self.get_employee_by_username(username):
            raise ValueError(f"Username '{username}' already exists")

        employee = Employee(
            username=username,
            password_hash=get_password_hash(password),
            name=name,
            role=role
        )
        self.db.add(employee)
        self.db.commit()
        self.db.refresh(employee)
        return employee

    def authenticate(self, username: str, password: str) -> Optional[dict]:
        """Log in; None on bad credentials"""
        employee = self.get_employee_by_username(username)
        if not employee:
            return None

        if not employee.is_active:
            raise ValueError("Account disabled")

        if not verify_password(password, employee.password_hash):
            return None

        return {
            'access_token': create_access_token(employee.id, employee.role),
            'token_type': 'bearer',
            'employee': employee
        }
