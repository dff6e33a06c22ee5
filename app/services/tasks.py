import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.exceptions import NotFound, ValidationError
from app.models.tasks import Task
from app.models.user import User
from app.schemas.task import TaskCreate, TaskUpdate
from app.services.categories import category_exists

logger = logging.getLogger(__name__)

INVALID_CATEGORY = {"category_id": ["The selected category id is invalid."]}


async def ensure_category(db: AsyncSession, category_id: int) -> None:
    if not await category_exists(db, category_id):
        raise ValidationError(INVALID_CATEGORY)


async def list_tasks(
    db: AsyncSession,
    current_user: User,
    category_id: int | None = None,
    last_id: int | None = None,
    limit: int = 50,
) -> list[Task]:
    """The user's own tasks only; admins use the aggregation endpoints for cross-user views."""
    query = select(Task).filter(Task.owner_id == current_user.user_id, Task.is_deleted == False)

    if category_id is not None:
        query = query.filter(Task.category_id == category_id)
    if last_id:
        query = query.filter(Task.task_id > last_id)

    query = query.order_by(Task.task_id).limit(limit)
    result = await db.execute(query)
    return result.scalars().all()


async def get_task_by_id(db: AsyncSession, task_id: int) -> Task:
    result = await db.execute(
        select(Task).filter(Task.task_id == task_id, Task.is_deleted == False)
    )
    task = result.scalars().first()
    if not task:
        raise NotFound("Task")
    return task


async def create_task(db: AsyncSession, task_data: TaskCreate, owner: User) -> Task:
    await ensure_category(db, task_data.category_id)

    new_task = Task(
        title=task_data.title,
        description=task_data.description,
        due_date=task_data.due_date,
        category_id=task_data.category_id,
        owner_id=owner.user_id,
    )
    db.add(new_task)
    await db.commit()
    await db.refresh(new_task)
    return new_task


async def update_task(db: AsyncSession, task: Task, update_data: TaskUpdate) -> Task:
    changes = update_data.model_dump(exclude_unset=True)

    if "category_id" in changes:
        await ensure_category(db, changes["category_id"])

    for key, value in changes.items():
        setattr(task, key, value)

    await db.commit()
    await db.refresh(task)
    return task


async def delete_task(db: AsyncSession, task: Task) -> None:
    task.is_deleted = True
    task.deleted_at = datetime.now(timezone.utc)
    await db.commit()
    logger.info("Deleted task %s", task.task_id)
