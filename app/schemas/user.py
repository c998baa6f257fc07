from pydantic import BaseModel, Field
from decimal import Decimal


class AddressUpdate(BaseModel):
    address: str = Field(min_length=20, max_length=1024)


class UserProfileResponse(BaseModel):
    email: str
    name: str
    wallet_money: Decimal
    address: str

    class Config:
        from_attributes = True
