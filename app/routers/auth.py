from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.dependencies import get_db
from app.schemas.user import LoginRequest, RegisterResponse, Token, UserCreate
from app.services import auth as auth_service

router = APIRouter(tags=["auth"])

@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(user: UserCreate, db: AsyncSession = Depends(get_db)):
    new_user, token = await auth_service.register(db, user)
    return {"user": new_user, "token": token}

@router.post("/login", response_model=Token)
async def login(credentials: LoginRequest, db: AsyncSession = Depends(get_db)):
    token = await auth_service.login(db, credentials.email, credentials.password)
    return {"token": token}
