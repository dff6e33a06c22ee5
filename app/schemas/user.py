from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator
from app.config import settings
from app.models.user import Role
from app.utils.sanitization import normalize_email, sanitize_string


class UserBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr

    @field_validator("name", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    @field_validator("email")
    @classmethod
    def fold_email(cls, v):
        return normalize_email(v)


class UserCreate(UserBase):
    password: str
    password_confirmation: str

    @field_validator("password")
    @classmethod
    def password_length(cls, v):
        if len(v) < settings.MIN_PASSWORD_LENGTH:
            raise ValueError(f"The password must be at least {settings.MIN_PASSWORD_LENGTH} characters.")
        return v

    @field_validator("password_confirmation")
    @classmethod
    def passwords_match(cls, v, info: ValidationInfo):
        # info.data lacks "password" when that field already failed
        if "password" in info.data and v != info.data["password"]:
            raise ValueError("The password confirmation does not match.")
        return v


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def fold_email(cls, v):
        return normalize_email(v)


class Token(BaseModel):
    token: str


class UserResponse(BaseModel):
    user_id: int
    name: str
    email: str
    role: Role
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class RegisterResponse(BaseModel):
    user: UserResponse
    token: str
