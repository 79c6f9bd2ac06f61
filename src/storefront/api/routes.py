"""FastAPI endpoints for the Storefront domain."""

import json

from fastapi import APIRouter, HTTPException, Query
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    AddToCartRequest,
    CartItemResponse,
    CartLineResponse,
    CartSummaryResponse,
    ChangePriceRequest,
    ConnectWalletRequest,
    CreateOrderRequest,
    CreateProductRequest,
    MessageResponse,
    OrderResponse,
    OrderWithItemsResponse,
    ProductResponse,
    RegisterUserRequest,
    UpdateCartQuantityRequest,
    UpdateOrderStatusRequest,
    UpdateStockRequest,
    UserResponse,
)
from storefront.cart.cart_item import CartItem
from storefront.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartQuantity
from storefront.cart.listing import cart_summary, list_cart
from storefront.catalogue.creation import CreateProduct
from storefront.catalogue.lifecycle import DeactivateProduct, ReactivateProduct
from storefront.catalogue.pricing import ChangeProductPrice
from storefront.catalogue.product import Product
from storefront.catalogue.stock import UpdateStock
from storefront.identity.ownership import resolve_owner
from storefront.identity.registration import ConnectWallet, RegisterUser
from storefront.identity.user import User
from storefront.order.details import get_order_with_items, list_orders_for_user
from storefront.order.order import Order
from storefront.order.placement import PlaceOrder
from storefront.order.status import UpdateOrderStatus

product_router = APIRouter(prefix="/api/products", tags=["products"])
cart_router = APIRouter(prefix="/api/cart", tags=["cart"])
order_router = APIRouter(prefix="/api/orders", tags=["orders"])
user_router = APIRouter(prefix="/api/users", tags=["users"])

_OWNER_REQUIRED = "Either userId or sessionId is required"


def _amount(value):
    return format(value, "f") if value is not None else None


def _product_or_404(product_id: str) -> Product:
    product = current_domain.repository_for(Product).find(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


# --- Product endpoints ---


@product_router.get("", response_model=list[ProductResponse])
async def list_products(category: str | None = None) -> list[ProductResponse]:
    repo = current_domain.repository_for(Product)
    products = repo.list_active_by_category(category) if category else repo.list_active()
    return [ProductResponse.from_product(p) for p in products]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).get_active(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return ProductResponse.from_product(product)


@product_router.post("", status_code=201, response_model=ProductResponse)
async def create_product(body: CreateProductRequest) -> ProductResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        crypto_price=_amount(body.crypto_price),
        fiat_price=_amount(body.fiat_price),
        category=body.category,
        image_url=body.image_url,
        stock=body.stock,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(current_domain.repository_for(Product).get(product_id))


@product_router.put("/{product_id}/stock", response_model=ProductResponse)
async def update_stock(product_id: str, body: UpdateStockRequest) -> ProductResponse:
    _product_or_404(product_id)
    current_domain.process(UpdateStock(product_id=product_id, stock=body.stock), asynchronous=False)
    return ProductResponse.from_product(_product_or_404(product_id))


@product_router.put("/{product_id}/price", response_model=ProductResponse)
async def change_price(product_id: str, body: ChangePriceRequest) -> ProductResponse:
    _product_or_404(product_id)
    command = ChangeProductPrice(
        product_id=product_id,
        crypto_price=_amount(body.crypto_price),
        fiat_price=_amount(body.fiat_price),
    )
    current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(_product_or_404(product_id))


@product_router.put("/{product_id}/deactivate", response_model=ProductResponse)
async def deactivate_product(product_id: str) -> ProductResponse:
    _product_or_404(product_id)
    current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
    return ProductResponse.from_product(_product_or_404(product_id))


@product_router.put("/{product_id}/reactivate", response_model=ProductResponse)
async def reactivate_product(product_id: str) -> ProductResponse:
    _product_or_404(product_id)
    current_domain.process(ReactivateProduct(product_id=product_id), asynchronous=False)
    return ProductResponse.from_product(_product_or_404(product_id))


# --- Cart endpoints ---


@cart_router.get("", response_model=list[CartLineResponse])
async def get_cart(
    user_id: str | None = Query(None, alias="userId"),
    session_id: str | None = Query(None, alias="sessionId"),
) -> list[CartLineResponse]:
    owner = resolve_owner(user_id=user_id, session_id=session_id)
    return [CartLineResponse.from_line(line) for line in list_cart(owner)]


@cart_router.get("/summary", response_model=CartSummaryResponse)
async def get_cart_summary(
    user_id: str | None = Query(None, alias="userId"),
    session_id: str | None = Query(None, alias="sessionId"),
) -> CartSummaryResponse:
    lines, totals = cart_summary(resolve_owner(user_id=user_id, session_id=session_id))
    return CartSummaryResponse(
        items=[CartLineResponse.from_line(line) for line in lines],
        total_crypto=totals.total_crypto,
        total_fiat=totals.total_fiat,
    )


@cart_router.post("", response_model=CartItemResponse)
async def add_to_cart(body: AddToCartRequest) -> CartItemResponse:
    if resolve_owner(user_id=body.user_id, session_id=body.session_id) is None:
        raise HTTPException(status_code=400, detail=_OWNER_REQUIRED)

    command = AddToCart(
        product_id=body.product_id,
        quantity=body.quantity,
        user_id=body.user_id,
        session_id=body.session_id,
    )
    item_id = current_domain.process(command, asynchronous=False)
    return CartItemResponse.from_item(current_domain.repository_for(CartItem).get(item_id))


@cart_router.put("/{item_id}", response_model=CartItemResponse)
async def update_cart_item(item_id: str, body: UpdateCartQuantityRequest) -> CartItemResponse:
    repo = current_domain.repository_for(CartItem)
    if repo.find(item_id) is None:
        raise HTTPException(status_code=404, detail="Cart item not found")

    current_domain.process(UpdateCartQuantity(item_id=item_id, quantity=body.quantity), asynchronous=False)
    return CartItemResponse.from_item(repo.get(item_id))


@cart_router.delete("/{item_id}", response_model=MessageResponse)
async def remove_from_cart(item_id: str) -> MessageResponse:
    current_domain.process(RemoveFromCart(item_id=item_id), asynchronous=False)
    return MessageResponse(message="Item removed from cart")


@cart_router.delete("", response_model=MessageResponse)
async def clear_cart(
    user_id: str | None = Query(None, alias="userId"),
    session_id: str | None = Query(None, alias="sessionId"),
) -> MessageResponse:
    current_domain.process(ClearCart(user_id=user_id, session_id=session_id), asynchronous=False)
    return MessageResponse(message="Cart cleared")


# --- Order endpoints ---


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: CreateOrderRequest) -> OrderResponse:
    header = body.order
    items = [
        {
            "product_id": item.product_id,
            "quantity": item.quantity,
            "crypto_price": _amount(item.crypto_price),
            "fiat_price": _amount(item.fiat_price),
        }
        for item in body.order_items
    ]
    command = PlaceOrder(
        user_id=header.user_id,
        total_crypto_price=_amount(header.total_crypto_price),
        total_fiat_price=_amount(header.total_fiat_price),
        status=header.status,
        wallet_address=header.wallet_address,
        transaction_hash=header.transaction_hash,
        shipping_address=header.shipping_address,
        items=json.dumps(items),
    )
    order_id = current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(current_domain.repository_for(Order).get(order_id))


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(user_id: str | None = Query(None, alias="userId")) -> list[OrderResponse]:
    return [OrderResponse.from_order(order) for order in list_orders_for_user(user_id)]


@order_router.get("/{order_id}", response_model=OrderWithItemsResponse)
async def get_order(order_id: str) -> OrderWithItemsResponse:
    details = get_order_with_items(order_id)
    if details is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return OrderWithItemsResponse.from_details(details)


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderResponse:
    repo = current_domain.repository_for(Order)
    if repo.find(order_id) is None:
        raise HTTPException(status_code=404, detail="Order not found")

    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status,
        transaction_hash=body.transaction_hash,
    )
    current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(repo.get(order_id))


# --- User endpoints ---


@user_router.post("", status_code=201, response_model=UserResponse)
async def register_user(body: RegisterUserRequest) -> UserResponse:
    command = RegisterUser(
        username=body.username,
        password=body.password,
        wallet_address=body.wallet_address,
    )
    user_id = current_domain.process(command, asynchronous=False)
    return UserResponse.from_user(current_domain.repository_for(User).get(user_id))


@user_router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str) -> UserResponse:
    user = current_domain.repository_for(User).find(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return UserResponse.from_user(user)


@user_router.put("/{user_id}/wallet", response_model=UserResponse)
async def connect_wallet(user_id: str, body: ConnectWalletRequest) -> UserResponse:
    repo = current_domain.repository_for(User)
    if repo.find(user_id) is None:
        raise HTTPException(status_code=404, detail="User not found")

    current_domain.process(ConnectWallet(user_id=user_id, wallet_address=body.wallet_address), asynchronous=False)
    return UserResponse.from_user(repo.get(user_id))
