"""
Authentication routes
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from frontdesk.database import get_db
from frontdesk.models.ontology import Employee
from frontdesk.models.schemas import EmployeeResponse, LoginRequest, LoginResponse
from frontdesk.services.employee_service import EmployeeService
from frontdesk.security.auth import get_current_user

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=LoginResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    """Operator login"""
    service = EmployeeService(db)
    try:
        result = service.authenticate(data.username, data.password)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    if not result:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password"
        )
    return LoginResponse(
        access_token=result['access_token'],
        token_type=result['token_type'],
        employee=EmployeeResponse.model_validate(result['employee'])
    )


@router.get("/me", response_model=EmployeeResponse)
def get_current_user_info(current_user: Employee = Depends(get_current_user)):
    """Logged-in operator"""
    return current_user
