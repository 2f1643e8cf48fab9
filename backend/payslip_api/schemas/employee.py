from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class EmployeeCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(min_length=1)
    email: EmailStr
    position: str = Field(min_length=1)
    department: Optional[str] = None


class EmployeeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    email: str
    position: str
    department: Optional[str] = None
    created_at: datetime


class EmployeeListItem(EmployeeRead):
    payslip_count: int = 0
