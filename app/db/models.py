from datetime import datetime
import uuid

from sqlalchemy import Column, Integer, String, Text, Numeric, Float, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base import Base


DEFAULT_WALLET_MONEY = 500
DEFAULT_ADDRESS = "ADDRESS_NOT_SET"
DEFAULT_PAYMENT_OPTION = "PAYMENT_OPTION_DEFAULT"


def generate_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    wallet_money = Column(Numeric(12, 2), default=DEFAULT_WALLET_MONEY, nullable=False)
    address = Column(Text, default=DEFAULT_ADDRESS, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def has_set_non_default_address(self) -> bool:
        return bool(self.address) and self.address != DEFAULT_ADDRESS


class Product(Base):
    __tablename__ = "products"

    id = Column(String(64), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    category = Column(String(255), nullable=False)
    cost = Column(Numeric(10, 2), nullable=False)
    rating = Column(Float, default=0, nullable=False)
    image = Column(String(1024), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Cart(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    payment_option = Column(String(64), default=DEFAULT_PAYMENT_OPTION, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    items = relationship(
        "CartItem",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItem.id",
        lazy="selectin",
    )


class CartItem(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True, index=True)
    cart_id = Column(Integer, ForeignKey("carts.id"), nullable=False, index=True)
    # Snapshot of the product taken when it was added to the cart
    product_id = Column(String(64), nullable=False, index=True)
    product_name = Column(String(255), nullable=False)
    product_category = Column(String(255), nullable=False)
    product_cost = Column(Numeric(10, 2), nullable=False)
    product_image = Column(String(1024), nullable=True)
    quantity = Column(Integer, nullable=False)

    cart = relationship("Cart", back_populates="items")

    __table_args__ = (
        UniqueConstraint('cart_id', 'product_id', name='_cart_product_uc'),
    )

    @classmethod
    def from_product(cls, product: Product, quantity: int) -> "CartItem":
        return cls(
            product_id=product.id,
            product_name=product.name,
            product_category=product.category,
            product_cost=product.cost,
            product_image=product.image,
            quantity=quantity,
        )

    @property
    def subtotal(self):
        return self.product_cost * self.quantity
