from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.dependencies import get_db
from app.schemas.user import UserCreate, UserOut, UserBalanceOut
from app.services.user_service import list_users, create_user
from app.services.balance_service import get_user_balances


router = APIRouter()


@router.get("", response_model=list[UserOut])
async def all_users(db: AsyncSession = Depends(get_db)):
    return await list_users(db)


@router.post("", response_model=UserOut, status_code=201)
async def new_user(data: UserCreate, db: AsyncSession = Depends(get_db)):
    return await create_user(db, data)


@router.get("/balances", response_model=list[UserBalanceOut])
async def balances(db: AsyncSession = Depends(get_db)):
    return await get_user_balances(db)
