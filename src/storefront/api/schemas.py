"""Pydantic request/response schemas for the Storefront API.

These are the external JSON contract (camelCase on the wire) and are kept
separate from the internal Protean commands and aggregates.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CreateProductRequest(ApiModel):
    name: str = Field(min_length=1)
    description: str | None = None
    price: float = Field(gt=0)
    stock: int = Field(ge=0)
    category: str | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "name": "Wireless Mouse",
                    "description": "Ergonomic 2.4GHz mouse",
                    "price": 25.99,
                    "stock": 40,
                    "category": "electronics",
                }
            ]
        },
    )


class AddToCartRequest(ApiModel):
    product_id: str = Field(min_length=1)
    quantity: StrictInt = 1


class UpdateCartItemRequest(ApiModel):
    quantity: StrictInt


class CheckoutRequest(ApiModel):
    customer_info: dict[str, Any] | None = None
    payment_method: str | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "customerInfo": {
                        "name": "Ada Lovelace",
                        "email": "ada@example.com",
                        "address": "12 Analytical St",
                        "phone": "+44 20 0000 0000",
                    },
                    "paymentMethod": "credit_card",
                }
            ]
        },
    )


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class ProductSchema(ApiModel):
    id: str
    name: str
    description: str
    price: float
    stock: int
    category: str
    created_at: datetime | None = None

    @classmethod
    def from_aggregate(cls, product) -> "ProductSchema":
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description or "",
            price=product.price,
            stock=product.stock,
            category=product.category,
            created_at=product.created_at,
        )


class CartItemSchema(ApiModel):
    product_id: str
    name: str
    price: float
    quantity: int
    added_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, item) -> "CartItemSchema":
        return cls(
            product_id=str(item.product_id),
            name=item.name,
            price=item.price,
            quantity=item.quantity,
            added_at=item.added_at,
            updated_at=item.updated_at,
        )


class CartSchema(ApiModel):
    items: list[CartItemSchema]
    total: float
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_aggregate(cls, cart) -> "CartSchema":
        return cls(
            items=[CartItemSchema.from_entity(item) for item in cart.items],
            total=cart.total or 0.0,
            created_at=cart.created_at,
            updated_at=cart.updated_at,
        )


class CustomerInfoSchema(ApiModel):
    name: str
    email: str
    address: str = ""
    phone: str = ""


class OrderItemSchema(ApiModel):
    product_id: str
    name: str
    price: float
    quantity: int
    subtotal: float


class PaymentSchema(ApiModel):
    method: str
    transaction_id: str
    processed_at: datetime


class OrderSchema(ApiModel):
    id: str
    customer_info: CustomerInfoSchema
    items: list[OrderItemSchema]
    total: float
    payment: PaymentSchema
    session_id: str
    status: str
    created_at: datetime | None = None

    @classmethod
    def from_aggregate(cls, order) -> "OrderSchema":
        info = order.customer_info
        return cls(
            id=str(order.id),
            customer_info=CustomerInfoSchema(
                name=info.name,
                email=info.email,
                address=info.address or "",
                phone=info.phone or "",
            ),
            items=[
                OrderItemSchema(
                    product_id=str(item.product_id),
                    name=item.name,
                    price=item.price,
                    quantity=item.quantity,
                    subtotal=item.subtotal,
                )
                for item in order.items
            ],
            total=order.total,
            payment=PaymentSchema(
                method=order.payment.method,
                transaction_id=order.payment.transaction_id,
                processed_at=order.payment.processed_at,
            ),
            session_id=order.session_id,
            status=order.status,
            created_at=order.created_at,
        )


class OrderSummarySchema(ApiModel):
    id: str
    customer_email: str | None = None
    total: float
    status: str
    created_at: datetime | None = None
    item_count: int

    @classmethod
    def from_aggregate(cls, order) -> "OrderSummarySchema":
        return cls(
            id=str(order.id),
            customer_email=order.customer_info.email,
            total=order.total,
            status=order.status,
            created_at=order.created_at,
            item_count=len(order.items),
        )


class CheckoutSummarySchema(ApiModel):
    id: str
    total: float
    status: str
    created_at: datetime | None = None
    transaction_id: str
    customer_email: str

    @classmethod
    def from_aggregate(cls, order) -> "CheckoutSummarySchema":
        return cls(
            id=str(order.id),
            total=order.total,
            status=order.status,
            created_at=order.created_at,
            transaction_id=order.payment.transaction_id,
            customer_email=order.customer_info.email,
        )


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ApiResponse(ApiModel):
    success: bool = True


class ProductResponse(ApiResponse):
    message: str | None = None
    product: ProductSchema


class ProductListResponse(ApiResponse):
    count: int
    products: list[ProductSchema]


class CartResponse(ApiResponse):
    message: str | None = None
    cart: CartSchema
    session_id: str
    is_empty: bool | None = None


class RemoveCartItemResponse(ApiResponse):
    message: str
    removed_item: CartItemSchema
    cart: CartSchema
    session_id: str


class ClearCartResponse(ApiResponse):
    message: str
    session_id: str


class CheckoutResponse(ApiResponse):
    message: str
    order: CheckoutSummarySchema


class OrderListResponse(ApiResponse):
    count: int
    orders: list[OrderSummarySchema]


class OrderResponse(ApiResponse):
    order: OrderSchema


class StatsResponse(ApiResponse):
    stats: dict[str, Any]
