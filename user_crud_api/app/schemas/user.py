"""
Pydantic models for user data.

Defines schemas for creating, updating and reading users.  On the wire
the name fields are camelCase (``firstName``/``lastName``); in Python
they are snake_case.  Unknown keys in request bodies are ignored.

These schemas are the validation step in front of the service layer:
a body that does not satisfy them is rejected with HTTP 400 before any
database access happens.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


def _require_text(value: Optional[str], label: str) -> str:
    if value is None:
        raise ValueError(f"{label} must not be null")
    value = value.strip()
    if not value:
        raise ValueError(f"{label} cannot be empty")
    return value


class UserBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class UserCreate(UserBase):
    """Schema for registering a user.  All three fields are required."""

    email: EmailStr = Field(..., examples=["ada@lovelace.io"])
    first_name: str = Field(..., alias="firstName", examples=["Ada"])
    last_name: str = Field(..., alias="lastName", examples=["Lovelace"])

    @field_validator("first_name")
    @classmethod
    def validate_first_name(cls, v: str) -> str:
        return _require_text(v, "First name")

    @field_validator("last_name")
    @classmethod
    def validate_last_name(cls, v: str) -> str:
        return _require_text(v, "Last name")


class UserUpdate(UserBase):
    """Schema for a partial update.

    Any subset of fields may be sent; only the keys present in the body
    are applied.  A key that is present must hold a valid value: empty
    names and ``null`` are rejected just as they are on create.
    """

    email: Optional[EmailStr] = Field(None, examples=["ada@analytical.engine.org"])
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("Email must not be null")
        return v

    @field_validator("first_name")
    @classmethod
    def validate_first_name(cls, v: Optional[str]) -> str:
        return _require_text(v, "First name")

    @field_validator("last_name")
    @classmethod
    def validate_last_name(cls, v: Optional[str]) -> str:
        return _require_text(v, "Last name")

    def changes(self) -> dict:
        """Return only the fields supplied by the caller, keyed by column name."""
        return self.model_dump(exclude_unset=True)


class UserRead(UserBase):
    """Schema for reading a user from the API."""

    id: int
    email: str
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
