import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.db.models import User
from app.schemas.user import UserProfileResponse

logger = logging.getLogger(__name__)


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


def get_user_profile(user: User) -> UserProfileResponse:
    return UserProfileResponse(
        email=user.email,
        name=user.name,
        wallet_money=user.wallet_money,
        address=user.address
    )


async def set_address(db: AsyncSession, user: User, address: str) -> User:
    user.address = address
    await db.commit()
    await db.refresh(user)
    logger.info(f"Address updated for user {user.email}")
    return user
