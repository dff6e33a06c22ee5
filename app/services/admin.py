from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.exceptions import NotFound
from app.models.category import Category
from app.models.tasks import Task
from app.models.user import User


async def list_users_with_tasks(db: AsyncSession) -> list[dict]:
    # Inner join drops users that own no live tasks
    result = await db.execute(
        select(User.email, func.count(Task.task_id).label("tasks_count"))
        .join(Task, Task.owner_id == User.user_id)
        .filter(Task.is_deleted == False)
        .group_by(User.user_id, User.email)
        .order_by(User.user_id)
    )
    return [{"email": row.email, "tasks_count": row.tasks_count} for row in result.all()]


async def user_task_breakdown(db: AsyncSession, user_id: int) -> dict:
    result = await db.execute(select(User).filter(User.user_id == user_id))
    user = result.scalars().first()
    if not user:
        raise NotFound("User")

    result = await db.execute(
        select(Category.name, func.count(Task.task_id).label("task_count"))
        .join(Task, Task.category_id == Category.category_id)
        .filter(Task.owner_id == user_id, Task.is_deleted == False)
        .group_by(Category.category_id, Category.name)
        .order_by(Category.category_id)
    )
    categories = [
        {"category_name": row.name, "task_count": row.task_count}
        for row in result.all()
    ]
    return {"email": user.email, "categories": categories}
