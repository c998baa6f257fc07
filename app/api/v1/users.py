from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_current_user
from app.db.session import get_db
from app.db.models import User
from app.schemas.user import AddressUpdate, UserProfileResponse
from app.services.user import get_user_profile, set_address


router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("/me", response_model=UserProfileResponse)
async def get_profile(user: User = Depends(get_current_user)):
    return get_user_profile(user)


@router.put("/me/address", response_model=UserProfileResponse)
async def update_address(
    data: AddressUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    updated = await set_address(db, user, data.address)
    return get_user_profile(updated)
