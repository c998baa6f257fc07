import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select

from app.core.exceptions import NotFoundError, InvalidRequestError, InternalError
from app.db.models import Cart, CartItem, User
from app.services.product import get_product_by_id

logger = logging.getLogger(__name__)


PRODUCT_ALREADY_IN_CART = "Product already in cart. Use the cart sidebar to update or remove product from cart"
PRODUCT_NOT_IN_DATABASE = "Product doesn't exist in database"
PRODUCT_NOT_IN_CART = "Product not in cart"
NO_CART = "User does not have a cart"
INVALID_QUANTITY = "Quantity must be greater than 0"


async def find_cart_by_email(db: AsyncSession, email: str) -> Optional[Cart]:
    result = await db.execute(select(Cart).where(Cart.email == email))
    return result.scalar_one_or_none()


async def create_cart(db: AsyncSession, email: str) -> Cart:
    cart = Cart(email=email, items=[])
    db.add(cart)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to create cart for {email}: {str(e)}")
        raise InternalError()

    logger.info(f"Created cart for {email}")
    return cart


async def save_cart(db: AsyncSession, cart: Cart) -> Cart:
    email = cart.email
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to save cart for {email}: {str(e)}")
        raise InternalError()

    return cart


def find_cart_item(cart: Cart, product_id: str) -> Optional[CartItem]:
    return next((item for item in cart.items if item.product_id == product_id), None)


def cart_total(cart: Cart) -> Decimal:
    return sum((item.subtotal for item in cart.items), Decimal("0"))


async def get_cart_by_user(db: AsyncSession, user: User) -> Cart:
    cart = await find_cart_by_email(db, user.email)
    if not cart:
        raise NotFoundError(NO_CART)
    return cart


async def add_product_to_cart(db: AsyncSession, user: User, product_id: str, quantity: int) -> Cart:
    """
    Add a product to the user's cart, creating the cart on first use.
    The cart stays created even if a later check rejects the product.
    """
    if quantity < 1:
        raise InvalidRequestError(INVALID_QUANTITY)

    cart = await find_cart_by_email(db, user.email)
    if not cart:
        cart = await create_cart(db, user.email)

    if find_cart_item(cart, product_id):
        raise InvalidRequestError(PRODUCT_ALREADY_IN_CART)

    product = await get_product_by_id(db, product_id)
    if not product:
        raise InvalidRequestError(PRODUCT_NOT_IN_DATABASE)

    cart.items.append(CartItem.from_product(product, quantity))
    cart = await save_cart(db, cart)
    logger.info(f"Added to cart: email={user.email}, product_id={product_id}, quantity={quantity}")

    return cart


async def update_product_in_cart(db: AsyncSession, user: User, product_id: str, quantity: int) -> Cart:
    if quantity < 1:
        raise InvalidRequestError(INVALID_QUANTITY)

    cart = await find_cart_by_email(db, user.email)
    if not cart:
        raise InvalidRequestError(f"{NO_CART}. Use POST to create cart and add a product")

    product = await get_product_by_id(db, product_id)
    if not product:
        raise InvalidRequestError(PRODUCT_NOT_IN_DATABASE)

    cart_item = find_cart_item(cart, product_id)
    if not cart_item:
        raise InvalidRequestError(PRODUCT_NOT_IN_CART)

    cart_item.quantity = quantity
    cart = await save_cart(db, cart)
    logger.info(f"Updated cart item: email={user.email}, product_id={product_id}, quantity={quantity}")

    return cart


async def delete_product_from_cart(db: AsyncSession, user: User, product_id: str) -> None:
    cart = await find_cart_by_email(db, user.email)
    if not cart:
        raise InvalidRequestError(NO_CART)

    index = next((i for i, item in enumerate(cart.items) if item.product_id == product_id), None)
    if index is None:
        raise InvalidRequestError(PRODUCT_NOT_IN_CART)

    cart.items.pop(index)
    await save_cart(db, cart)
    logger.info(f"Removed from cart: email={user.email}, product_id={product_id}")


async def checkout(db: AsyncSession, user: User) -> None:
    """
    Checkout the user's cart.
    1. Validate cart and shipping address
    2. Check wallet balance against cart total
    3. Debit wallet and clear cart in a single commit
    """
    cart = await find_cart_by_email(db, user.email)
    if not cart:
        raise NotFoundError(NO_CART)

    if not cart.items:
        raise InvalidRequestError("Cart is empty")

    if not user.has_set_non_default_address():
        raise InvalidRequestError("User has no default address set")

    total = cart_total(cart)
    if total > user.wallet_money:
        raise InvalidRequestError("Insufficient Balance")

    email = user.email
    user.wallet_money = user.wallet_money - total
    cart.items.clear()

    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Checkout failed for {email}: {str(e)}")
        raise InternalError("Checkout could not be completed")

    logger.info(f"Checkout completed: email={email}, total={total}")
