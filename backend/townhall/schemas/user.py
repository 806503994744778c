"""
Townhall Backend — User Schemas
=================================

What:  Request and response bodies for /api/users.

Validation:
    name:     1-100 characters after stripping whitespace
    mobileNo: digits with an optional leading '+', spaces or dashes allowed
    email:    a single '@' with a dotted domain; stored as sent, compared
              without regard to case
"""

from pydantic import Field

from townhall.schemas.common import CamelModel

MOBILE_PATTERN = r"^\+?[0-9][0-9 \-]{1,19}$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserCreate(CamelModel):
    """Body of POST /api/users."""

    name: str = Field(min_length=1, max_length=100, description="Display name")
    mobile_no: str = Field(pattern=MOBILE_PATTERN, max_length=20, description="Mobile number")
    email: str = Field(pattern=EMAIL_PATTERN, max_length=255, description="Email address")


class UserUpdate(UserCreate):
    """
    Body of PUT /api/users/{id}.

    Every mutable field is required; the stored values are overwritten.
    """


class UserResponse(CamelModel):
    id: int = Field(description="Server-assigned identifier")
    name: str
    mobile_no: str
    email: str
