import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Date, DateTime, ForeignKey, Numeric, Text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

MONEY = Numeric(12, 2)


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Employee(Base):
    __tablename__ = 'employees'

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)
    position = Column(String, nullable=False)
    department = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)
    # employees with payslips cannot be deleted out from under them
    payslips = relationship("Payslip", back_populates="employee", passive_deletes="all")


class Payslip(Base):
    __tablename__ = 'payslips'

    id = Column(String(36), primary_key=True, default=_new_id)
    employee_id = Column(String(36), ForeignKey('employees.id', ondelete='RESTRICT'), nullable=False, index=True)
    pay_period_start = Column(Date, nullable=False)
    pay_period_end = Column(Date, nullable=False)
    pay_date = Column(Date, nullable=False, index=True)

    basic_salary = Column(MONEY, nullable=False)
    house_allowance = Column(MONEY, nullable=False, default=0)
    transport_allowance = Column(MONEY, nullable=False, default=0)
    other_earnings = Column(MONEY, nullable=False, default=0)

    tax = Column(MONEY, nullable=False, default=0)
    insurance = Column(MONEY, nullable=False, default=0)
    pension = Column(MONEY, nullable=False, default=0)
    other_deductions = Column(MONEY, nullable=False, default=0)

    total_earnings = Column(MONEY, nullable=False)
    total_deductions = Column(MONEY, nullable=False)
    net_pay = Column(MONEY, nullable=False)

    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)

    employee = relationship("Employee", back_populates="payslips")
