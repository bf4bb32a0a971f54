"""
Pydantic schemas for User API request / response serialisation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from lab_system.models.user import UserType


class UserCreate(BaseModel):
    """
    Schema for ``POST /users``.

    ``confirm_password`` must repeat ``password``; it is never stored.
    """

    email: EmailStr = Field(
        ...,
        description="Login email address (must be unique across users)",
        examples=["ada.lovelace@school.edu"],
    )
    first_name: str = Field(..., min_length=1, max_length=100, examples=["Ada"])
    last_name: str = Field(..., min_length=1, max_length=100, examples=["Lovelace"])
    password: str = Field(
        ...,
        min_length=8,
        max_length=72,
        description="Plain-text password, 8 to 72 characters",
        examples=["s3cure-Passw0rd"],
    )
    confirm_password: str = Field(..., min_length=8, max_length=72, examples=["s3cure-Passw0rd"])
    user_type: UserType = Field(
        ...,
        description="Role: teacher, technical_staff, or admin",
        examples=[UserType.TEACHER],
    )

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_name_not_blank(cls, v: str) -> str:
        """Reject whitespace-only names."""
        if not v.strip():
            raise ValueError("name must not be blank")
        return v.strip()

    @model_validator(mode="after")
    def validate_passwords_match(self) -> "UserCreate":
        if self.password != self.confirm_password:
            raise ValueError("passwords do not match")
        return self


class UserRead(BaseModel):
    """A user as returned by the API.  The password hash is never included."""

    id: int
    email: str
    first_name: str
    last_name: str
    user_type: UserType
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserCreatedResponse(BaseModel):
    message: str = Field(default="User created successfully")
    data: UserRead
