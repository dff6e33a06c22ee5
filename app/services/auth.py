import logging

from fastapi.concurrency import run_in_threadpool
from jose import JOSEError, JWTError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.database import MAX_ID
from app.exceptions import InvalidCredentials, TokenIssuanceError, Unauthenticated, ValidationError
from app.models.user import Role, User
from app.schemas.user import UserCreate
from app.utils.security import create_access_token, decode_access_token, get_password_hash, verify_password
from app.utils.sanitization import normalize_email

logger = logging.getLogger(__name__)

EMAIL_TAKEN = {"email": ["The email has already been taken."]}


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).filter(User.email == normalize_email(email)))
    return result.scalars().first()


def issue_token(user: User) -> str:
    try:
        return create_access_token(data={"sub": str(user.user_id)})
    except JOSEError as e:
        logger.error("Could not sign token for user %s: %s", user.user_id, e)
        raise TokenIssuanceError() from e


async def register(db: AsyncSession, user_data: UserCreate, role: Role = Role.USER) -> tuple[User, str]:
    if await get_user_by_email(db, user_data.email):
        raise ValidationError(EMAIL_TAKEN)

    # bcrypt is CPU-bound; keep it off the event loop
    hashed_password = await run_in_threadpool(get_password_hash, user_data.password)
    new_user = User(
        name=user_data.name,
        email=user_data.email,
        hashed_password=hashed_password,
        role=role,
    )
    db.add(new_user)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration with the same email
        await db.rollback()
        raise ValidationError(EMAIL_TAKEN)
    await db.refresh(new_user)

    logger.info("Registered user %s (%s)", new_user.user_id, new_user.role.value)
    return new_user, issue_token(new_user)


async def login(db: AsyncSession, email: str, password: str) -> str:
    user = await get_user_by_email(db, email)
    if not user or not await run_in_threadpool(verify_password, password, user.hashed_password):
        logger.info("Failed login for %s", email)
        raise InvalidCredentials()
    return issue_token(user)


async def authenticate(db: AsyncSession, token: str | None) -> User:
    if not token:
        raise Unauthenticated()
    try:
        payload = decode_access_token(token)
        user_id = int(payload["sub"])
    except (JWTError, KeyError, TypeError, ValueError):
        raise Unauthenticated()
    if not 1 <= user_id <= MAX_ID:
        raise Unauthenticated()

    result = await db.execute(select(User).filter(User.user_id == user_id))
    user = result.scalars().first()
    if user is None:
        raise Unauthenticated()
    return user
