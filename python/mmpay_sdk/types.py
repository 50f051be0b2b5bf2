"""
Location: python/mmpay_sdk/types.py

Summary:
    Pydantic models for mmpay-sdk. Defines the credential tuple, the
    outbound payment and handshake payloads, the gateway responses and
    the inbound callback record.

Usage:
    Models accept either camelCase wire names or snake_case attribute
    names. Use to_wire() to get the dict that is sent to the gateway:
    camelCase keys, unset optional fields omitted.

Example:
    from mmpay_sdk.types import PaymentRequest, Item

    request = PaymentRequest(
        order_id="ABC123",
        amount=30000,
        currency="MMK",
        items=[Item(name="Items", amount=3000, quantity=10)],
    )
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator


PaymentStatus = Literal["PENDING", "SUCCESS", "FAILED"]


class WireModel(BaseModel):
    """Base for models that travel over the wire with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Dump with wire aliases, dropping unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Item(WireModel):
    """
    A single order line.

    Attributes:
        name: Display name of the item
        amount: Unit price in minor currency units
        quantity: Number of units, at least 1
    """
    name: str
    amount: int
    quantity: int = Field(ge=1)


class PaymentRequest(WireModel):
    """
    Order creation payload sent to /payments/create.

    The client always overwrites app_id with its configured merchant app id
    before signing, so callers should leave it unset.

    Attributes:
        app_id: Merchant application id (injected by the client)
        order_id: Merchant-side order identifier
        amount: Total in minor currency units
        currency: Optional ISO 4217 style code, server default if omitted
        callback_url: Optional URL the gateway notifies on status change
        items: Ordered order lines
    """
    app_id: Optional[str] = Field(None, alias="appId")
    order_id: str = Field(alias="orderId")
    amount: int
    currency: Optional[str] = None
    callback_url: Optional[str] = Field(None, alias="callbackUrl")
    items: list[Item]


class GatewayResponse(WireModel):
    """Base for gateway answers. Fields the gateway adds are kept in model_extra."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class PaymentResponse(GatewayResponse):
    """
    Gateway answer to an order creation call.

    Attributes:
        order_id: Echoed order identifier
        amount: Order total
        currency: Currency code if the gateway returns one
        status: PENDING, SUCCESS or FAILED
        qr: QR payload or QR image URL
        url: Redirect / checkout URL
    """
    order_id: str = Field(alias="orderId")
    amount: int
    currency: Optional[str] = None
    status: PaymentStatus
    qr: str
    url: str


class HandshakeRequest(WireModel):
    """Connectivity probe payload. The value is opaque and echoed back."""
    handshake_signature: str = Field(alias="handshakeSignature")


class HandshakeResponse(GatewayResponse):
    """Connectivity probe answer."""
    handshake_signature: str = Field(alias="handshakeSignature")


class CallbackItem(WireModel):
    name: str
    amount: int
    quantity: int


class CallbackIncomingData(WireModel):
    """
    Server-originated order notification delivered to the merchant's
    callback URL. Only trust it after the signature has been verified.
    """
    app_id: str = Field(alias="appId")
    order_id: str = Field(alias="orderId")
    amount: int
    currency: str
    method: Optional[str] = None
    vendor: Optional[str] = None
    callback_url: Optional[str] = Field(None, alias="callbackUrl")
    items: list[CallbackItem]
    merchant_id: str = Field(alias="merchantId")
    status: PaymentStatus
    created_at: str = Field(alias="createdAt")


class Credentials(BaseModel):
    """
    Immutable merchant credentials held by a client for its lifetime.

    secret_key is a SecretStr so it is masked in repr(), str() and JSON
    dumps. Read it with get_secret_value() only where the HMAC is computed.
    """
    app_id: str
    publishable_key: str
    secret_key: SecretStr
    api_base_url: str

    model_config = ConfigDict(frozen=True)

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class SDKOptions(WireModel):
    """
    Construction options, mirroring the options object the gateway's other
    SDKs take. Pass to MMPayClient.from_options().

    Attributes:
        app_id: Merchant application id
        publishable_key: Public key sent as the bearer token
        secret_key: Shared HMAC secret
        api_base_url: Gateway base URL
        timeout: Optional request timeout in seconds (httpx default if None)
    """
    app_id: Optional[str] = Field(None, alias="appId")
    publishable_key: Optional[str] = Field(None, alias="publishableKey")
    secret_key: Optional[SecretStr] = Field(None, alias="secretKey")
    api_base_url: Optional[str] = Field(None, alias="apiBaseUrl")
    timeout: Optional[float] = None
