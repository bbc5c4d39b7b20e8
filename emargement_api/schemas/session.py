import re
from datetime import date

from pydantic import BaseModel, Field, StrictStr, field_validator

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


# Input schema for creating or replacing a session
class SessionPayload(BaseModel):
    title: StrictStr = Field(min_length=2)
    date: date

    @field_validator("date", mode="before")
    @classmethod
    def validate_date_format(cls, value):
        # Only plain calendar dates, no timestamps or datetimes
        if not isinstance(value, str) or not ISO_DATE_RE.match(value):
            raise ValueError("Date must be a calendar date formatted as YYYY-MM-DD.")
        return value


# Output schema for a session
class SessionResponse(BaseModel):
    id: int
    title: str
    date: date
    formateur_id: int

    class Config:
        from_attributes = True
