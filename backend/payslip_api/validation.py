"""Input validation for employees and payslips.

Each ``validate_*`` function takes the raw decoded JSON body and returns a
normalized pydantic model (defaults applied, dates coerced, money quantized
to cents) or raises :class:`ValidationFailed` carrying *every* field
violation, not just the first one.
"""
from typing import Any

from pydantic import BaseModel, ValidationError

from .errors import ValidationFailed
from .schemas.employee import EmployeeCreate
from .schemas.payslip import PayslipCreate

EMPLOYEE_MESSAGES = {
    "name": "Name is required",
    "email": "Invalid email address",
    "position": "Position is required",
}

PAYSLIP_MESSAGES = {
    "employeeId": "Employee ID is required",
    "basicSalary": "Basic salary must be positive",
}

# absent, wrong type or out of range; other errors keep their own message
REPLACED_ERROR_TYPES = {
    "missing",
    "string_type",
    "string_too_short",
    "value_error",
    "decimal_type",
    "decimal_parsing",
    "finite_number",
    "greater_than_equal",
}


def _field_name(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "body"


def _validate(model: type[BaseModel], raw: Any, messages: dict[str, str]):
    if not isinstance(raw, dict):
        raise ValidationFailed([{"field": "body", "message": "Request body must be a JSON object"}])
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        details = []
        for err in e.errors():
            field = _field_name(err["loc"])
            message = err["msg"]
            if field in messages and err["type"] in REPLACED_ERROR_TYPES:
                message = messages[field]
            details.append({"field": field, "message": message})
        raise ValidationFailed(details) from e


def validate_employee(raw: Any) -> EmployeeCreate:
    return _validate(EmployeeCreate, raw, EMPLOYEE_MESSAGES)


def validate_payslip(raw: Any) -> PayslipCreate:
    return _validate(PayslipCreate, raw, PAYSLIP_MESSAGES)
