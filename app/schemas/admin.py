from pydantic import BaseModel


class UserTaskCount(BaseModel):
    email: str
    tasks_count: int


class CategoryTaskCount(BaseModel):
    category_name: str
    task_count: int


class UserTaskBreakdown(BaseModel):
    email: str
    categories: list[CategoryTaskCount] = []
