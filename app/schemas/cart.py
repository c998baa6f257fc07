from pydantic import BaseModel, Field
from decimal import Decimal
from typing import List, Optional


class CartItemAdd(BaseModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)


class CartItemUpdate(BaseModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(ge=0)


class CartProductResponse(BaseModel):
    id: str
    name: str
    category: str
    cost: Decimal
    image: Optional[str] = None


class CartItemResponse(BaseModel):
    product: CartProductResponse
    quantity: int


class CartResponse(BaseModel):
    email: str
    payment_option: str
    items: List[CartItemResponse] = []
