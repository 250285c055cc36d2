"""FastAPI endpoints for the Storefront API.

Writes go through ``current_domain.process``; reads go straight to the
repositories.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Query
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    AddToCartRequest,
    CartItemSchema,
    CartResponse,
    CartSchema,
    CheckoutRequest,
    CheckoutResponse,
    CheckoutSummarySchema,
    ClearCartResponse,
    CreateProductRequest,
    OrderListResponse,
    OrderResponse,
    OrderSchema,
    OrderSummarySchema,
    ProductListResponse,
    ProductResponse,
    ProductSchema,
    RemoveCartItemResponse,
    StatsResponse,
    UpdateCartItemRequest,
)
from storefront.cart.items import AddToCart, RemoveFromCart, SetCartItemQuantity
from storefront.cart.management import ClearCart
from storefront.cart.queries import get_cart
from storefront.catalogue.creation import AddProduct
from storefront.catalogue.product import Product
from storefront.checkout.checkout import DEFAULT_PAYMENT_METHOD, Checkout
from storefront.config import get_settings
from storefront.order.order import Order
from storefront.stats.statistics import compute_stats, compute_stats_between

product_router = APIRouter(prefix="/products", tags=["products"])
cart_router = APIRouter(prefix="/cart", tags=["cart"])
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])
order_router = APIRouter(prefix="/orders", tags=["orders"])
stats_router = APIRouter(prefix="/stats", tags=["stats"])


def resolve_session_id(
    session_id: Annotated[str | None, Header(alias="session-id")] = None,
    x_session_id: Annotated[str | None, Header(alias="x-session-id")] = None,
) -> str:
    """Session from the ``session-id`` header, then ``x-session-id``, then the default."""
    return session_id or x_session_id or get_settings().default_session_id


SessionId = Annotated[str, Depends(resolve_session_id)]


# --- Product endpoints ---


@product_router.post("", status_code=201, response_model=ProductResponse, response_model_exclude_none=True)
async def create_product(body: CreateProductRequest) -> ProductResponse:
    command = AddProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        stock=body.stock,
        category=body.category,
    )
    product = current_domain.process(command, asynchronous=False)
    return ProductResponse(message="Product created successfully", product=ProductSchema.from_aggregate(product))


@product_router.get("", response_model=ProductListResponse)
async def list_products() -> ProductListResponse:
    products = current_domain.repository_for(Product).list_products()
    return ProductListResponse(
        count=len(products),
        products=[ProductSchema.from_aggregate(product) for product in products],
    )


@product_router.get("/{product_id}", response_model=ProductResponse, response_model_exclude_none=True)
async def get_product(product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).get_product(product_id)
    return ProductResponse(product=ProductSchema.from_aggregate(product))


# --- Cart endpoints ---


@cart_router.get("", response_model=CartResponse, response_model_exclude_none=True)
async def view_cart(session: SessionId) -> CartResponse:
    cart = get_cart(session)
    return CartResponse(cart=CartSchema.from_aggregate(cart), session_id=session, is_empty=cart.is_empty)


@cart_router.post("", response_model=CartResponse, response_model_exclude_none=True)
async def add_to_cart(body: AddToCartRequest, session: SessionId) -> CartResponse:
    command = AddToCart(session_id=session, product_id=body.product_id, quantity=body.quantity)
    cart, merged = current_domain.process(command, asynchronous=False)
    return CartResponse(
        message="Product updated in cart" if merged else "Product added to cart",
        cart=CartSchema.from_aggregate(cart),
        session_id=session,
    )


@cart_router.put("/{product_id}", response_model=CartResponse, response_model_exclude_none=True)
async def update_cart_item(product_id: str, body: UpdateCartItemRequest, session: SessionId) -> CartResponse:
    command = SetCartItemQuantity(session_id=session, product_id=product_id, quantity=body.quantity)
    cart = current_domain.process(command, asynchronous=False)
    return CartResponse(
        message="Product removed from cart" if body.quantity == 0 else "Cart item updated",
        cart=CartSchema.from_aggregate(cart),
        session_id=session,
    )


@cart_router.delete("/{product_id}", response_model=RemoveCartItemResponse)
async def remove_cart_item(product_id: str, session: SessionId) -> RemoveCartItemResponse:
    cart, removed = current_domain.process(
        RemoveFromCart(session_id=session, product_id=product_id),
        asynchronous=False,
    )
    return RemoveCartItemResponse(
        message="Product removed from cart",
        removed_item=CartItemSchema.from_entity(removed),
        cart=CartSchema.from_aggregate(cart),
        session_id=session,
    )


@cart_router.delete("", response_model=ClearCartResponse)
async def clear_cart(session: SessionId) -> ClearCartResponse:
    current_domain.process(ClearCart(session_id=session), asynchronous=False)
    return ClearCartResponse(message="Cart cleared successfully", session_id=session)


# --- Checkout ---


@checkout_router.post("", response_model=CheckoutResponse)
async def checkout(body: CheckoutRequest, session: SessionId) -> CheckoutResponse:
    command = Checkout(
        session_id=session,
        customer_info=body.customer_info or {},
        payment_method=body.payment_method or DEFAULT_PAYMENT_METHOD,
    )
    order = current_domain.process(command, asynchronous=False)
    return CheckoutResponse(message="Order placed successfully", order=CheckoutSummarySchema.from_aggregate(order))


# --- Orders ---


@order_router.get("", response_model=OrderListResponse)
async def list_orders() -> OrderListResponse:
    orders = current_domain.repository_for(Order).list_orders()
    return OrderListResponse(
        count=len(orders),
        orders=[OrderSummarySchema.from_aggregate(order) for order in orders],
    )


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    order = current_domain.repository_for(Order).get_order(order_id)
    return OrderResponse(order=OrderSchema.from_aggregate(order))


# --- Stats ---


@stats_router.get("", response_model=StatsResponse)
async def stats() -> StatsResponse:
    return StatsResponse(stats=compute_stats())


@stats_router.get("/date", response_model=StatsResponse)
async def stats_between(
    start_date: Annotated[str | None, Query(alias="startDate")] = None,
    end_date: Annotated[str | None, Query(alias="endDate")] = None,
) -> StatsResponse:
    return StatsResponse(stats=compute_stats_between(start_date, end_date))


routers = [product_router, cart_router, checkout_router, order_router, stats_router]
