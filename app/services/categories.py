import logging
from datetime import datetime, timezone

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.exceptions import NotFound
from app.models.category import Category
from app.models.user import User
from app.schemas.category import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)


async def list_categories(db: AsyncSession, current_user: User) -> list[Category]:
    """Categories the user owns plus the shared defaults."""
    result = await db.execute(
        select(Category)
        .filter(
            or_(Category.owner_id == current_user.user_id, Category.is_default == True),
            Category.is_deleted == False,
        )
        .order_by(Category.category_id)
    )
    return result.scalars().all()


async def get_category_by_id(db: AsyncSession, category_id: int) -> Category:
    result = await db.execute(
        select(Category).filter(Category.category_id == category_id, Category.is_deleted == False)
    )
    category = result.scalars().first()
    if not category:
        raise NotFound("Category")
    return category


async def category_exists(db: AsyncSession, category_id: int) -> bool:
    result = await db.execute(
        select(Category.category_id).filter(Category.category_id == category_id, Category.is_deleted == False)
    )
    return result.scalars().first() is not None


async def create_category(db: AsyncSession, category_data: CategoryCreate, owner: User) -> Category:
    new_category = Category(
        name=category_data.name,
        type=category_data.type,
        owner_id=owner.user_id,
        is_default=False,
    )
    db.add(new_category)
    await db.commit()
    await db.refresh(new_category)
    return new_category


async def update_category(db: AsyncSession, category: Category, update_data: CategoryUpdate) -> Category:
    for key, value in update_data.model_dump(exclude_unset=True).items():
        setattr(category, key, value)
    await db.commit()
    await db.refresh(category)
    return category


async def delete_category(db: AsyncSession, category: Category) -> None:
    category.is_deleted = True
    category.deleted_at = datetime.now(timezone.utc)
    await db.commit()
    logger.info("Deleted category %s", category.category_id)
