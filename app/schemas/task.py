from pydantic import BaseModel, Field, computed_field, field_validator
from datetime import datetime
from app.database import MAX_ID
from app.services.status import TaskStatus, as_utc, task_status
from app.utils.sanitization import sanitize_string


# ── Common base for readable/writeable fields ──
class TaskBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    due_date: datetime
    category_id: int = Field(..., ge=1, le=MAX_ID)

    @field_validator("title", "description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    @field_validator("due_date")
    @classmethod
    def utc(cls, v):
        return as_utc(v)


class TaskCreate(TaskBase):
    pass


class TaskUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    due_date: datetime | None = None     # explicit null clears it
    category_id: int | None = Field(None, ge=1, le=MAX_ID)

    @field_validator("title", "description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    @field_validator("due_date")
    @classmethod
    def utc(cls, v):
        return as_utc(v)

    @field_validator("title", "category_id")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("This field cannot be null.")
        return v


class Task(BaseModel):
    task_id: int
    title: str
    description: str | None = None
    due_date: datetime | None = None
    category_id: int
    owner_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("due_date", "created_at", "updated_at")
    @classmethod
    def utc(cls, v):
        return as_utc(v)

    @computed_field
    @property
    def status(self) -> TaskStatus:
        return task_status(self.due_date)

    class Config:
        from_attributes = True
