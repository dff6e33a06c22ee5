from typing import Annotated

from fastapi import Depends, Path, Query
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import MAX_ID, get_db as db_session
from app.exceptions import Forbidden
from app.models.user import Role, User as UserModel
from app.services import auth as auth_service

# auto_error=False so a missing header surfaces as our own Unauthenticated body
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="login", auto_error=False)

# Out-of-range ids would overflow the driver; reject them as 422 up front
IdPath = Annotated[int, Path(ge=1, le=MAX_ID)]
IdQuery = Annotated[int | None, Query(ge=1, le=MAX_ID)]

def get_db(db: AsyncSession = Depends(db_session)):
    return db

async def get_current_user(
    db: AsyncSession = Depends(get_db),
    token: str | None = Depends(oauth2_scheme)
) -> UserModel:
    return await auth_service.authenticate(db, token)

async def require_admin(current_user: UserModel = Depends(get_current_user)) -> UserModel:
    match current_user.role:
        case Role.ADMIN:
            return current_user
        case _:
            raise Forbidden()
