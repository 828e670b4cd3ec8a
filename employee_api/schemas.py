import re
from datetime import date
from typing import Any, Literal, Optional
from pydantic import BaseModel, ConfigDict

from employee_api.core.errors import ValidationError

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


class EmployeeRecord(BaseModel):
    """An employee row. Empty strings / None mean "not supplied" on updates."""
    model_config = ConfigDict(from_attributes=True)

    id:         Optional[int] = None
    first_name: str = ""
    last_name:  str = ""
    email:      str = ""
    hire_date:  Optional[date] = None

    def validate_new(self, hire_date: str) -> None:
        """
        Checks a candidate for creation. First failure wins, in the order
        first_name, last_name, email, hire_date, then the email format.
        """
        for field, value in (
            ("first_name", self.first_name),
            ("last_name", self.last_name),
            ("email", self.email),
            ("hire_date", hire_date),
        ):
            if not value:
                raise ValidationError(f"missing required field: {field}")
        if not is_valid_email(self.email):
            raise ValidationError("please input valid email")


class Envelope(BaseModel):
    status: Literal["success", "fail"] = "success"
    data:   Any = None

    @classmethod
    def success(cls, data: Any = None) -> "Envelope":
        return cls(status="success", data=data)

    @classmethod
    def fail(cls, message: str) -> "Envelope":
        return cls(status="fail", data=message)

    def render(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)
