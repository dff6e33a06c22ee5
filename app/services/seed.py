import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.models.category import Category
from app.models.user import Role, User
from app.utils.sanitization import normalize_email
from app.utils.security import get_password_hash

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    ("Urgent tasks", "standard"),
    ("Planned tasks", "normal"),
]


async def seed_default_categories(db: AsyncSession) -> int:
    """Create the shared categories unless some default category already exists."""
    result = await db.execute(
        select(Category.category_id).filter(Category.is_default == True, Category.is_deleted == False)
    )
    if result.scalars().first() is not None:
        return 0

    for name, type_ in DEFAULT_CATEGORIES:
        db.add(Category(name=name, type=type_, owner_id=None, is_default=True))
    await db.commit()
    logger.info("Seeded %d default categories", len(DEFAULT_CATEGORIES))
    return len(DEFAULT_CATEGORIES)


async def ensure_admin(db: AsyncSession, email: str, password: str, name: str = "Administrator") -> User:
    """Create the admin account, or promote an existing account with that email."""
    email = normalize_email(email)
    result = await db.execute(select(User).filter(User.email == email))
    user = result.scalars().first()

    if user is None:
        user = User(name=name, email=email, hashed_password=get_password_hash(password), role=Role.ADMIN)
        db.add(user)
        logger.info("Created admin user %s", email)
    elif user.role is not Role.ADMIN:
        user.role = Role.ADMIN
        logger.info("Promoted %s to admin", email)
    else:
        return user

    await db.commit()
    await db.refresh(user)
    return user
