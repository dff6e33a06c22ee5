from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app import policies
from app.dependencies import IdPath, IdQuery, get_db, get_current_user
from app.models.user import User as UserModel
from app.schemas.task import TaskCreate, Task as TaskSchema, TaskUpdate
from app.services import tasks as task_service

router = APIRouter(prefix="/tasks", tags=["tasks"])

@router.get("", response_model=list[TaskSchema])
async def list_tasks(
    category_id: IdQuery = None,
    last_id: IdQuery = None,
    limit: int = Query(50, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    return await task_service.list_tasks(db, current_user, category_id, last_id, limit)

@router.post("", response_model=TaskSchema, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreate,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    policies.authorize(policies.can_create_task(current_user), current_user, "create task")
    return await task_service.create_task(db, task_data, current_user)

@router.get("/{task_id}", response_model=TaskSchema)
async def get_task(
    task_id: IdPath,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    task = await task_service.get_task_by_id(db, task_id)
    policies.authorize(policies.can_view_task(current_user, task), current_user, "view task")
    return task

@router.put("/{task_id}", response_model=TaskSchema)
async def update_task(
    task_id: IdPath,
    update_data: TaskUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    task = await task_service.get_task_by_id(db, task_id)
    policies.authorize(policies.can_update_task(current_user, task), current_user, "update task")
    return await task_service.update_task(db, task, update_data)

@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: IdPath,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    task = await task_service.get_task_by_id(db, task_id)
    policies.authorize(policies.can_delete_task(current_user, task), current_user, "delete task")
    await task_service.delete_task(db, task)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
