from datetime import datetime

from pydantic import BaseModel, Field, field_validator
from app.utils.sanitization import sanitize_string


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., min_length=1, max_length=255)

    @field_validator("name", "type", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)


class CategoryUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    type: str | None = Field(None, min_length=1, max_length=255)

    @field_validator("name", "type", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    @field_validator("name", "type")
    @classmethod
    def not_null(cls, v):
        # Fields may be omitted, but not explicitly cleared
        if v is None:
            raise ValueError("This field cannot be null.")
        return v


class Category(BaseModel):
    category_id: int
    name: str
    type: str
    owner_id: int | None = None
    is_default: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
