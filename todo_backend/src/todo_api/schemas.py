from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Incoming expirationDate can be a date, datetime, or ISO8601 string
ExpirationDateInput = Union[date, datetime, str]


def _parse_expiration_date(value: Optional[ExpirationDateInput]) -> Optional[datetime]:
    """
    Normalize expirationDate input into a naive local datetime.
    - Strings are parsed via datetime.fromisoformat; date-only strings become 00:00.
    - A date (not datetime) is promoted to a datetime at 00:00.
    - Timezone-aware datetimes are converted to local time and made naive, since
      every comparison in the service runs against the local clock.
    """
    if value is None:
        return None

    if isinstance(value, str):
        s = value.strip()
        try:
            value = datetime.fromisoformat(s)
        except (ValueError, OverflowError):
            try:
                value = date.fromisoformat(s)
            except (ValueError, OverflowError) as e:
                raise ValueError(
                    "Invalid expirationDate format. Use ISO8601 date or datetime string "
                    "(e.g., '2025-01-31' or '2025-01-31T13:45:00')."
                ) from e

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            try:
                return value.astimezone().replace(tzinfo=None)
            except OverflowError as e:
                raise ValueError("expirationDate is outside the supported date range") from e
        return value

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, 0, 0, 0)

    raise ValueError("Invalid type for expirationDate; expected date, datetime, or ISO8601 string.")


# PUBLIC_INTERFACE
class TodoIn(BaseModel):
    """
    Request body for creating or replacing a Todo item.

    Business rules (non-empty title, expiration not in the past, percentage
    range) are enforced by the endpoints, so a rule violation is answered with
    a bare 400 instead of a validation error payload.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "title": "Prepare interview",
                "description": "Read the applicant's CV",
                "expirationDate": "2030-02-01T09:30:00",
                "percentageOfCompletion": 0,
            }
        },
    )

    id: Optional[int] = Field(
        default=None, description="Must match the path id on replace; ignored on create"
    )
    title: Optional[str] = Field(default=None, description="Short title for the todo item")
    description: Optional[str] = Field(default=None, description="Optional detailed description")
    expiration_date: datetime = Field(
        ...,
        alias="expirationDate",
        description="Expiration date/time. Accepts ISO8601 date or datetime; dates are set to 00:00",
    )
    percentage_of_completion: int = Field(
        default=0, alias="percentageOfCompletion", description="Completion percentage, 0..100"
    )

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: Optional[str]) -> Optional[str]:
        """Strip surrounding whitespace so a blank title counts as empty."""
        if v is None:
            return v
        return v.strip()

    @field_validator("expiration_date", mode="before")
    @classmethod
    def parse_expiration_date(cls, v: Optional[ExpirationDateInput]) -> Optional[datetime]:
        return _parse_expiration_date(v)


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": 7,
                "title": "Prepare interview",
                "description": "Read the applicant's CV",
                "expirationDate": "2030-02-01T09:30:00",
                "percentageOfCompletion": 40,
            }
        },
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    title: Optional[str] = Field(default=None, description="Short title for the todo item")
    description: Optional[str] = Field(default=None, description="Optional detailed description")
    expiration_date: datetime = Field(
        ..., alias="expirationDate", description="Expiration date/time as an ISO8601 datetime"
    )
    percentage_of_completion: int = Field(
        ..., alias="percentageOfCompletion", description="Completion percentage, 0..100"
    )
