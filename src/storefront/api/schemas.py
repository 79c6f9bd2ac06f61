"""Pydantic request/response schemas for the Storefront API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands. Field names travel in camelCase on the wire and
prices travel as decimal strings.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class StorefrontSchema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


# ---------------------------------------------------------------------------
# Product Schemas
# ---------------------------------------------------------------------------
class CreateProductRequest(StorefrontSchema):
    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "name": "Crypto Pioneer Cap",
                    "description": "Premium quality baseball cap with embroidered crypto logo",
                    "cryptoPrice": "0.025",
                    "usdPrice": "89.99",
                    "category": "headwear",
                    "imageUrl": "https://images.example.com/cap.jpg",
                    "stock": 50,
                }
            ]
        }
    )

    name: str = Field(..., max_length=255)
    description: str
    crypto_price: Decimal = Field(..., ge=0)
    fiat_price: Decimal = Field(..., ge=0, alias="usdPrice")
    category: str = Field(..., max_length=100)
    image_url: str = Field(..., max_length=500)
    stock: int = Field(0, ge=0)


class UpdateStockRequest(StorefrontSchema):
    stock: int = Field(..., ge=0)


class ChangePriceRequest(StorefrontSchema):
    crypto_price: Decimal | None = Field(None, ge=0)
    fiat_price: Decimal | None = Field(None, ge=0, alias="usdPrice")


class ProductResponse(StorefrontSchema):
    id: str
    name: str
    description: str
    crypto_price: str
    fiat_price: str = Field(..., alias="usdPrice")
    category: str
    image_url: str
    stock: int
    is_active: bool
    created_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> "ProductResponse":
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description,
            crypto_price=product.crypto_price,
            fiat_price=product.fiat_price,
            category=product.category,
            image_url=product.image_url,
            stock=product.stock,
            is_active=product.is_active,
            created_at=product.created_at,
        )


# ---------------------------------------------------------------------------
# Cart Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(StorefrontSchema):
    product_id: str
    quantity: int = Field(1, ge=1)
    user_id: str | None = None
    session_id: str | None = Field(None, max_length=255)


class UpdateCartQuantityRequest(StorefrontSchema):
    quantity: int = Field(..., ge=1)


class CartItemResponse(StorefrontSchema):
    id: str
    user_id: str | None = None
    product_id: str
    quantity: int
    session_id: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_item(cls, item) -> "CartItemResponse":
        return cls(
            id=str(item.id),
            user_id=str(item.user_id) if item.user_id else None,
            product_id=str(item.product_id),
            quantity=item.quantity,
            session_id=item.session_id,
            created_at=item.created_at,
        )


class CartLineResponse(CartItemResponse):
    product: ProductResponse

    @classmethod
    def from_line(cls, line) -> "CartLineResponse":
        return cls(
            **CartItemResponse.from_item(line.item).model_dump(),
            product=ProductResponse.from_product(line.product),
        )


class CartSummaryResponse(StorefrontSchema):
    items: list[CartLineResponse]
    total_crypto: str
    total_fiat: str


# ---------------------------------------------------------------------------
# Order Schemas
# ---------------------------------------------------------------------------
class OrderHeaderSchema(StorefrontSchema):
    user_id: str | None = None
    total_crypto_price: Decimal = Field(..., ge=0)
    total_fiat_price: Decimal = Field(..., ge=0, alias="totalUsdPrice")
    status: str | None = None
    wallet_address: str = Field(..., min_length=1, max_length=255)
    transaction_hash: str | None = Field(None, max_length=255)
    shipping_address: str = Field(..., min_length=1)


class OrderItemSchema(StorefrontSchema):
    product_id: str
    quantity: int = Field(..., ge=1)
    crypto_price: Decimal = Field(..., ge=0)
    fiat_price: Decimal = Field(..., ge=0, alias="usdPrice")


class CreateOrderRequest(StorefrontSchema):
    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "order": {
                        "totalCryptoPrice": "0.075",
                        "totalUsdPrice": "269.97",
                        "walletAddress": "0x9f2c4e1a7b3d5f6e8a0c2b4d6f8e0a1c3b5d7f9e",
                        "shippingAddress": "1 Market St, San Francisco, CA 94105",
                    },
                    "orderItems": [
                        {"productId": "prod-001", "quantity": 3, "cryptoPrice": "0.025", "usdPrice": "89.99"},
                    ],
                }
            ]
        }
    )

    order: OrderHeaderSchema
    order_items: list[OrderItemSchema]


class UpdateOrderStatusRequest(StorefrontSchema):
    status: str
    transaction_hash: str | None = Field(None, max_length=255)


class OrderResponse(StorefrontSchema):
    id: str
    user_id: str | None = None
    total_crypto_price: str
    total_fiat_price: str = Field(..., alias="totalUsdPrice")
    status: str
    wallet_address: str
    transaction_hash: str | None = None
    shipping_address: str
    created_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        return cls(
            id=str(order.id),
            user_id=str(order.user_id) if order.user_id else None,
            total_crypto_price=order.total_crypto_price,
            total_fiat_price=order.total_fiat_price,
            status=order.status,
            wallet_address=order.wallet_address,
            transaction_hash=order.transaction_hash,
            shipping_address=order.shipping_address,
            created_at=order.created_at,
        )


class OrderItemResponse(StorefrontSchema):
    id: str
    order_id: str
    product_id: str
    quantity: int
    crypto_price: str
    fiat_price: str = Field(..., alias="usdPrice")
    product: ProductResponse | None = None


class OrderWithItemsResponse(OrderResponse):
    order_items: list[OrderItemResponse]

    @classmethod
    def from_details(cls, details) -> "OrderWithItemsResponse":
        order = details.order
        return cls(
            **OrderResponse.from_order(order).model_dump(),
            order_items=[
                OrderItemResponse(
                    id=str(line.item.id),
                    order_id=str(order.id),
                    product_id=str(line.item.product_id),
                    quantity=line.item.quantity,
                    crypto_price=line.item.crypto_price,
                    fiat_price=line.item.fiat_price,
                    product=ProductResponse.from_product(line.product) if line.product else None,
                )
                for line in details.lines
            ],
        )


# ---------------------------------------------------------------------------
# User Schemas
# ---------------------------------------------------------------------------
class RegisterUserRequest(StorefrontSchema):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=255)
    wallet_address: str | None = Field(None, max_length=255)


class ConnectWalletRequest(StorefrontSchema):
    wallet_address: str = Field(..., min_length=1, max_length=255)


class UserResponse(StorefrontSchema):
    id: str
    username: str
    wallet_address: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_user(cls, user) -> "UserResponse":
        return cls(
            id=str(user.id),
            username=user.username,
            wallet_address=user.wallet_address,
            created_at=user.created_at,
        )


class MessageResponse(StorefrontSchema):
    message: str
