import logging
from typing import Any, Optional
from urllib.parse import quote

from fastapi import APIRouter, Body, Depends, Query, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import repository
from ..database import get_db
from ..domain.payslip import compute_totals
from ..errors import NotFound, OperationError
from ..render.document import payslip_filename, render_payslip_pdf
from ..schemas.payslip import PayslipRead
from ..validation import validate_payslip

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[PayslipRead])
def list_payslips(employee_id: Optional[str] = Query(None, alias="employeeId"), db: Session = Depends(get_db)):
    try:
        return repository.list_payslips(db, employee_id=employee_id)
    except SQLAlchemyError as e:
        logger.exception("Error fetching payslips")
        raise OperationError("Failed to fetch payslips") from e


@router.post("", response_model=PayslipRead, status_code=201)
def create_payslip(payload: Any = Body(None), db: Session = Depends(get_db)):
    data = validate_payslip(payload)
    # client-supplied totals are ignored, these are the only ones stored
    totals = compute_totals(data.amounts())
    try:
        if repository.get_employee(db, data.employee_id) is None:
            raise NotFound("Employee not found")
        return repository.create_payslip(db, data, totals)
    except SQLAlchemyError as e:
        logger.exception("Error creating payslip")
        raise OperationError("Failed to create payslip") from e


def _load(db: Session, payslip_id: str):
    try:
        return repository.get_payslip(db, payslip_id)
    except SQLAlchemyError as e:
        logger.exception("Error fetching payslip %s", payslip_id)
        raise OperationError("Failed to fetch payslip") from e


@router.get("/{payslip_id}", response_model=PayslipRead)
def get_payslip(payslip_id: str, db: Session = Depends(get_db)):
    payslip = _load(db, payslip_id)
    if payslip is None:
        raise NotFound("Payslip not found")
    return payslip


@router.get("/{payslip_id}/pdf")
def export_payslip_pdf(payslip_id: str, db: Session = Depends(get_db)):
    payslip = _load(db, payslip_id)
    if payslip is None:
        raise NotFound("Payslip not found")

    record = PayslipRead.model_validate(payslip)
    try:
        pdf = render_payslip_pdf(record)
    except (RuntimeError, OSError) as e:
        logger.exception("Error rendering payslip %s", payslip_id)
        raise OperationError("Failed to render payslip") from e

    filename = payslip_filename(record)
    ascii_name = filename.encode("ascii", "replace").decode("ascii").replace('"', "")
    disposition = f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"
    return Response(content=pdf, media_type="application/pdf", headers={"Content-Disposition": disposition})


@router.delete("/{payslip_id}")
def delete_payslip(payslip_id: str, db: Session = Depends(get_db)):
    try:
        deleted = repository.delete_payslip(db, payslip_id)
    except SQLAlchemyError as e:
        logger.exception("Error deleting payslip %s", payslip_id)
        raise OperationError("Failed to delete payslip") from e
    if not deleted:
        raise NotFound("Payslip not found")
    return {"message": "Payslip deleted successfully"}
