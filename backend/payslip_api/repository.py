"""Persistence gateway over a SQLAlchemy session.

Payslips are always loaded together with their employee through an explicit
joined load. Nothing here updates a record once written.
"""
import logging

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from . import models
from .domain.payslip import PayslipTotals
from .errors import ValidationFailed
from .schemas.employee import EmployeeCreate
from .schemas.payslip import PayslipCreate

logger = logging.getLogger(__name__)


def create_employee(db: Session, data: EmployeeCreate) -> models.Employee:
    employee = models.Employee(**data.model_dump())
    db.add(employee)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ValidationFailed([{"field": "email", "message": "Email already exists"}]) from e
    db.refresh(employee)
    logger.info("Created employee %s", employee.id)
    return employee


def get_employee(db: Session, employee_id: str) -> models.Employee | None:
    return db.get(models.Employee, employee_id)


def list_employees(db: Session) -> list[tuple[models.Employee, int]]:
    """Newest employees first, each paired with its payslip count."""
    payslip_count = func.count(models.Payslip.id)
    stmt = (
        select(models.Employee, payslip_count)
        .outerjoin(models.Payslip, models.Payslip.employee_id == models.Employee.id)
        .group_by(models.Employee.id)
        .order_by(models.Employee.created_at.desc())
    )
    return [(employee, count) for employee, count in db.execute(stmt).all()]


def _payslips_with_employee():
    return select(models.Payslip).options(joinedload(models.Payslip.employee))


def create_payslip(db: Session, data: PayslipCreate, totals: PayslipTotals) -> models.Payslip:
    payslip = models.Payslip(**data.model_dump(), **totals.model_dump())
    db.add(payslip)
    db.commit()
    logger.info("Created payslip %s for employee %s", payslip.id, payslip.employee_id)
    return get_payslip(db, payslip.id)


def list_payslips(db: Session, employee_id: str | None = None) -> list[models.Payslip]:
    stmt = _payslips_with_employee()
    if employee_id:
        stmt = stmt.where(models.Payslip.employee_id == employee_id)
    stmt = stmt.order_by(models.Payslip.pay_date.desc(), models.Payslip.created_at.desc())
    return list(db.scalars(stmt).all())


def get_payslip(db: Session, payslip_id: str) -> models.Payslip | None:
    stmt = _payslips_with_employee().where(models.Payslip.id == payslip_id)
    return db.scalars(stmt).first()


def delete_payslip(db: Session, payslip_id: str) -> bool:
    """Delete a payslip. Returns False when no such payslip exists."""
    result = db.execute(delete(models.Payslip).where(models.Payslip.id == payslip_id))
    db.commit()
    # 0 when a concurrent delete got there first
    if result.rowcount != 1:
        return False
    logger.info("Deleted payslip %s", payslip_id)
    return True
