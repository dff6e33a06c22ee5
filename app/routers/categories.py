from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app import policies
from app.dependencies import IdPath, get_db, get_current_user
from app.models.user import User as UserModel
from app.schemas.category import Category as CategorySchema, CategoryCreate, CategoryUpdate
from app.services import categories as category_service

router = APIRouter(prefix="/categories", tags=["categories"])

@router.get("", response_model=list[CategorySchema])
async def list_categories(
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    return await category_service.list_categories(db, current_user)

@router.post("", response_model=CategorySchema, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreate,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    policies.authorize(policies.can_create_category(current_user), current_user, "create category")
    return await category_service.create_category(db, category_data, current_user)

@router.get("/{category_id}", response_model=CategorySchema)
async def get_category(
    category_id: IdPath,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    category = await category_service.get_category_by_id(db, category_id)
    policies.authorize(policies.can_view_category(current_user, category), current_user, "view category")
    return category

@router.put("/{category_id}", response_model=CategorySchema)
async def update_category(
    category_id: IdPath,
    update_data: CategoryUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    category = await category_service.get_category_by_id(db, category_id)
    policies.authorize(policies.can_update_category(current_user, category), current_user, "update category")
    return await category_service.update_category(db, category, update_data)

@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: IdPath,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    category = await category_service.get_category_by_id(db, category_id)
    policies.authorize(policies.can_delete_category(current_user, category), current_user, "delete category")
    await category_service.delete_category(db, category)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
