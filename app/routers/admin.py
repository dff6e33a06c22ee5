from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.dependencies import IdPath, get_db, require_admin
from app.schemas.admin import UserTaskBreakdown, UserTaskCount
from app.services import admin as admin_service

# The role guard runs before any handler body touches the store
router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])

@router.get("/tasks", response_model=list[UserTaskCount])
async def list_users_with_tasks(db: AsyncSession = Depends(get_db)):
    return await admin_service.list_users_with_tasks(db)

@router.get("/tasks/{user_id}", response_model=UserTaskBreakdown)
async def user_task_breakdown(user_id: IdPath, db: AsyncSession = Depends(get_db)):
    return await admin_service.user_task_breakdown(db, user_id)
