from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from ..domain.payslip import PayslipAmounts, ZERO
from .employee import EmployeeRead

CENT = Decimal("0.01")
# matches the Numeric(12, 2) storage columns
MAX_INTEGER_DIGITS = 10

AMOUNT_FIELDS = tuple(PayslipAmounts.model_fields)

# money is exchanged as JSON numbers, kept as Decimal everywhere else
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class PayslipCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    employee_id: str = Field(min_length=1)
    pay_period_start: date
    pay_period_end: date
    pay_date: date

    # Earnings
    basic_salary: Decimal = Field(ge=0)
    house_allowance: Decimal = Field(default=ZERO, ge=0)
    transport_allowance: Decimal = Field(default=ZERO, ge=0)
    other_earnings: Decimal = Field(default=ZERO, ge=0)

    # Deductions
    tax: Decimal = Field(default=ZERO, ge=0)
    insurance: Decimal = Field(default=ZERO, ge=0)
    pension: Decimal = Field(default=ZERO, ge=0)
    other_deductions: Decimal = Field(default=ZERO, ge=0)

    notes: Optional[str] = None

    @field_validator("pay_period_start", "pay_period_end", "pay_date", mode="before")
    @classmethod
    def accept_timestamps(cls, v):
        """Allow full ISO timestamps (``2024-01-01T00:00:00Z``) for date fields."""
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and len(v.strip()) > 10:
            try:
                return datetime.fromisoformat(v.strip()).date()
            except ValueError:
                return v
        return v

    @field_validator(*AMOUNT_FIELDS, mode="before")
    @classmethod
    def reject_non_numbers(cls, v):
        # JSON numbers only, no booleans or numeric strings
        if isinstance(v, (bool, str)):
            raise PydanticCustomError("decimal_type", "Input should be a valid number")
        if isinstance(v, float):
            # shortest repr, so 0.1 stays 0.1
            return Decimal(repr(v))
        return v

    @field_validator(*AMOUNT_FIELDS)
    @classmethod
    def to_cents(cls, v: Decimal) -> Decimal:
        if v.adjusted() >= MAX_INTEGER_DIGITS:
            raise PydanticCustomError("amount_too_large", "Amount is too large")
        return v.quantize(CENT, rounding=ROUND_HALF_UP)

    def amounts(self) -> PayslipAmounts:
        return PayslipAmounts(**self.model_dump(include=set(AMOUNT_FIELDS)))


class PayslipRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    employee_id: str
    pay_period_start: date
    pay_period_end: date
    pay_date: date

    basic_salary: Money
    house_allowance: Money
    transport_allowance: Money
    other_earnings: Money

    tax: Money
    insurance: Money
    pension: Money
    other_deductions: Money

    total_earnings: Money
    total_deductions: Money
    net_pay: Money

    notes: Optional[str] = None
    created_at: datetime
    employee: EmployeeRead
