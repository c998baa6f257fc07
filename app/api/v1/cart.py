from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_current_user
from app.db.session import get_db
from app.db.models import Cart, User
from app.schemas.cart import CartItemAdd, CartItemUpdate, CartItemResponse, CartProductResponse, CartResponse
from app.services.cart import (
    get_cart_by_user,
    add_product_to_cart,
    update_product_in_cart,
    delete_product_from_cart,
    checkout,
)


router = APIRouter(prefix="/api/v1/cart", tags=["cart"])


def to_cart_response(cart: Cart) -> CartResponse:
    return CartResponse(
        email=cart.email,
        payment_option=cart.payment_option,
        items=[
            CartItemResponse(
                product=CartProductResponse(
                    id=item.product_id,
                    name=item.product_name,
                    category=item.product_category,
                    cost=item.product_cost,
                    image=item.product_image
                ),
                quantity=item.quantity
            )
            for item in cart.items
        ]
    )


@router.get("", response_model=CartResponse)
async def get_cart(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    cart = await get_cart_by_user(db, user)
    return to_cart_response(cart)


@router.post("", response_model=CartResponse)
async def add_to_cart(
    item: CartItemAdd,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    cart = await add_product_to_cart(db, user, item.product_id, item.quantity)
    return to_cart_response(cart)


@router.put("", response_model=CartResponse)
async def update_cart_item(
    item: CartItemUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update cart item quantity. A quantity of 0 removes the product."""
    if item.quantity == 0:
        await delete_product_from_cart(db, user, item.product_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    cart = await update_product_in_cart(db, user, item.product_id, item.quantity)
    return to_cart_response(cart)


@router.put("/checkout", status_code=status.HTTP_204_NO_CONTENT)
async def checkout_cart(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await checkout(db, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_from_cart(
    product_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await delete_product_from_cart(db, user, product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
