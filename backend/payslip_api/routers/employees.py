import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import repository
from ..database import get_db
from ..errors import OperationError
from ..schemas.employee import EmployeeListItem, EmployeeRead
from ..validation import validate_employee

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[EmployeeListItem])
def list_employees(db: Session = Depends(get_db)):
    try:
        rows = repository.list_employees(db)
    except SQLAlchemyError as e:
        logger.exception("Error fetching employees")
        raise OperationError("Failed to fetch employees") from e
    return [
        EmployeeListItem.model_validate(employee).model_copy(update={"payslip_count": count})
        for employee, count in rows
    ]


@router.post("", response_model=EmployeeRead, status_code=201)
def create_employee(payload: Any = Body(None), db: Session = Depends(get_db)):
    data = validate_employee(payload)
    try:
        return repository.create_employee(db, data)
    except SQLAlchemyError as e:
        logger.exception("Error creating employee")
        raise OperationError("Failed to create employee") from e
