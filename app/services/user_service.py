import logging
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.user import User
from app.schemas.user import UserCreate
from app.services.user_queries import get_user_by_name, get_all_users
from fastapi import HTTPException

logger = logging.getLogger("wager_ledger.services.users")

async def list_users(db: AsyncSession):
    return await get_all_users(db)

async def create_user(db: AsyncSession, data: UserCreate):
    existing = await get_user_by_name(db, data.name)
    if existing:
        raise HTTPException(409, "User with this name already exists")

    user = User(name=data.name)

    db.add(user)
    await db.commit()
    await db.refresh(user)

    logger.info("Created user %s (%s)", user.id, user.name)
    return user
