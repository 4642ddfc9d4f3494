"""
Database Schemas

Each Pydantic model represents a MongoDB collection; the collection name is
the lowercase of the class name:
- Product -> "product" collection
- Cart -> "cart" collection
- Order -> "order" collection
- User -> "user" collection

The request models at the bottom validate incoming JSON bodies.
"""

import re
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

SIZES = ("S", "M", "L", "XL")
Size = Literal["S", "M", "L", "XL"]
OrderStatus = Literal["confirmed", "shipped", "delivered", "cancelled"]

CENT = Decimal("0.01")


def money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


class User(BaseModel):
    """
    Users collection schema
    Collection name: "user"
    """
    id: Optional[str] = None
    name: str = Field(..., description="Full name")
    email: EmailStr = Field(..., description="Email address")
    password_hash: str = Field(..., description="BCrypt password hash")
    profile_image: Optional[str] = Field(None, description="Profile image URL or data URI")
    created_at: Optional[datetime] = None


class Product(BaseModel):
    """
    Products collection schema
    Collection name: "product"
    """
    id: Optional[str] = None
    name: str = Field(..., description="Product name")
    description: str = Field("", description="Product description")
    price: float = Field(..., ge=0, description="Price in dollars")
    image_url: str = Field("", description="Primary image URL")
    category: str = Field(..., description="Men, Women, Kids or any other label")
    sizes: List[str] = Field(default_factory=list, description="Available sizes")
    stock: int = Field(0, ge=0, description="Units in stock")
    rating: float = Field(0, ge=0, le=5, description="Average rating")
    reviews: int = Field(0, ge=0, description="Number of reviews")
    created_at: Optional[datetime] = None


class CartItem(BaseModel):
    id: str
    product_id: str
    name: str
    price: float = Field(..., ge=0, description="Unit price when the item was added")
    image_url: str = ""
    size: Size
    quantity: int = Field(1, ge=1)

    def line_total(self) -> Decimal:
        return Decimal(str(self.price)) * self.quantity


class Cart(BaseModel):
    """
    Carts collection schema
    Collection name: "cart" (one document per user)
    """
    id: Optional[str] = None
    user_id: str
    items: List[CartItem] = Field(default_factory=list)
    updated_at: Optional[datetime] = None

    def get_total(self) -> float:
        return float(money(sum((item.line_total() for item in self.items), Decimal("0"))))

    def get_total_items(self) -> int:
        return sum(item.quantity for item in self.items)

    def find_item(self, item_id: str) -> Optional[CartItem]:
        return next((item for item in self.items if item.id == item_id), None)

    def view(self) -> dict:
        data = self.model_dump()
        data["total"] = self.get_total()
        data["total_items"] = self.get_total_items()
        return data


class OrderItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: str
    product_name: str
    size: Size
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0)

    def line_total(self) -> Decimal:
        return Decimal(str(self.price)) * self.quantity


class Order(BaseModel):
    """
    Orders collection schema
    Collection name: "order"

    Items and total are fixed when the order is created.
    """
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    user_id: str
    items: Tuple[OrderItem, ...]
    total_amount: float = Field(..., ge=0)
    status: OrderStatus = "confirmed"
    created_at: Optional[datetime] = None


# Lightweight request models

class AddToCartRequest(BaseModel):
    product_id: str
    size: str
    quantity: int = 1


class UpdateCartItemRequest(BaseModel):
    quantity: int


class PaymentDetails(BaseModel):
    """Card fields collected at checkout. Validated, never stored or forwarded."""
    card_holder: str = Field(..., min_length=1)
    card_number: str
    expiry_date: str
    cvv: str

    @field_validator("card_holder")
    @classmethod
    def holder_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Card holder name is required")
        return v.strip()

    @field_validator("card_number")
    @classmethod
    def card_number_digits(cls, v: str) -> str:
        digits = re.sub(r"\s", "", v)
        if not re.fullmatch(r"\d{13,19}", digits):
            raise ValueError("Card number must be 13-19 digits")
        return digits

    @field_validator("expiry_date")
    @classmethod
    def expiry_format(cls, v: str) -> str:
        if not re.fullmatch(r"\d{2}/\d{2}", v):
            raise ValueError("Expiry date must be MM/YY format")
        if not 1 <= int(v[:2]) <= 12:
            raise ValueError("Invalid month (01-12)")
        return v

    @field_validator("cvv")
    @classmethod
    def cvv_digits(cls, v: str) -> str:
        if not re.fullmatch(r"\d{3,4}", v):
            raise ValueError("CVV must be 3-4 digits")
        return v


class CheckoutRequest(BaseModel):
    payment: Optional[PaymentDetails] = None


class SignupRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class ProfileUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    profile_image: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=6)


class SeedRequest(BaseModel):
    force: bool = False
