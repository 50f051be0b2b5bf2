"""
Location: python/mmpay_sdk/client.py

Summary:
    Main MMPayClient class for mmpay-sdk. Creates payment orders and runs
    connectivity handshakes against the MMPay gateway with HMAC-signed
    requests, and verifies the gateway's callback notifications.

Usage:
    The primary entry point for using the SDK. Create an MMPayClient with
    the merchant's credentials, then call pay()/handshake() (or their
    sandbox_ variants) and verify_cb() on inbound callbacks.

Example:
    from mmpay_sdk import MMPayClient, PaymentRequest, Item

    async with MMPayClient(
        app_id="MM0001",
        publishable_key="pk_test_...",
        secret_key="sk_test_...",
        api_base_url="https://api.example.com",
    ) as client:
        response = await client.sandbox_pay(PaymentRequest(
            order_id="ABC123",
            amount=30000,
            currency="MMK",
            items=[Item(name="Items", amount=3000, quantity=10)],
        ))
        print(response.url)
"""

import logging
from typing import Any, Callable, Mapping, Optional, TypeVar, Union

import httpx
from pydantic import BaseModel, SecretStr
from pydantic import ValidationError as PydanticValidationError

from .errors import ConfigurationError, ResponseFormatError, TransportError
from .signing import generate_signature, millisecond_nonce, serialize_body
from .transport import ENDPOINTS, build_signed_headers
from .types import (
    CallbackIncomingData,
    Credentials,
    HandshakeRequest,
    HandshakeResponse,
    PaymentRequest,
    PaymentResponse,
    SDKOptions,
)
from .verifier import CallbackVerifier

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class MMPayClient:
    """
    MMPay gateway client with request signing and callback verification.

    Every outbound call:
    1. Serializes the payload once to compact JSON
    2. Takes a nonce (epoch milliseconds by default)
    3. Signs "<nonce>.<body>" with HMAC-SHA256 and the secret key
    4. POSTs the exact signed bytes with bearer, nonce and signature headers

    The secret key is kept in a private SecretStr and never logged,
    included in errors or exposed through an attribute.

    Attributes:
        app_id: Merchant application id injected into payment requests
        api_base_url: Gateway base URL (trailing slash removed)
        timeout: Request timeout in seconds, or None for the httpx default
    """

    def __init__(
        self,
        app_id: Optional[str],
        publishable_key: Optional[str],
        secret_key: Optional[Union[str, SecretStr]],
        api_base_url: Optional[str],
        *,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        nonce_factory: Optional[Callable[[], str]] = None,
    ):
        """
        Initialize the MMPayClient.

        Args:
            app_id: Merchant application id
            publishable_key: Public key, sent as the bearer token
            secret_key: Shared HMAC secret
            api_base_url: Gateway base URL
            timeout: Optional request timeout in seconds
            http_client: Optional pre-built httpx.AsyncClient (not closed by us)
            nonce_factory: Optional nonce source, defaults to epoch milliseconds

        Raises:
            ConfigurationError: If publishable_key, secret_key or api_base_url is empty
        """
        if isinstance(secret_key, SecretStr):
            secret_key = secret_key.get_secret_value()
        if not publishable_key or not secret_key:
            raise ConfigurationError(
                "SDK initialization failed. Publishable Key and Secret Key are required."
            )
        if not api_base_url or not api_base_url.rstrip("/"):
            raise ConfigurationError("SDK initialization failed. API Base URL is required.")
        if not app_id:
            logger.warning("MMPayClient created without an app_id; payment requests will carry an empty appId")

        self.__credentials = Credentials(
            app_id=app_id or "",
            publishable_key=publishable_key,
            secret_key=secret_key,
            api_base_url=api_base_url,
        )
        self.__verifier = CallbackVerifier(self.__credentials.secret_key)
        self._nonce_factory = nonce_factory or millisecond_nonce
        self.timeout = timeout

        self._owns_http = http_client is None
        if http_client is not None:
            self._http = http_client
        elif timeout is not None:
            self._http = httpx.AsyncClient(timeout=timeout)
        else:
            self._http = httpx.AsyncClient()

    @classmethod
    def from_options(cls, options: Union[SDKOptions, Mapping[str, Any]], **kwargs: Any) -> "MMPayClient":
        """
        Build a client from an SDKOptions model or a camelCase options dict.

        Extra keyword arguments (http_client, nonce_factory) are forwarded.
        """
        if not isinstance(options, SDKOptions):
            options = SDKOptions.model_validate(options)
        return cls(
            options.app_id,
            options.publishable_key,
            options.secret_key,
            options.api_base_url,
            timeout=options.timeout,
            **kwargs,
        )

    @property
    def app_id(self) -> str:
        return self.__credentials.app_id

    @property
    def api_base_url(self) -> str:
        return self.__credentials.api_base_url

    def __repr__(self) -> str:
        return f"MMPayClient(app_id={self.app_id!r}, api_base_url={self.api_base_url!r})"

    async def close(self) -> None:
        """
        Close the HTTP client and release resources.

        An http_client passed in by the caller is left open.
        """
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "MMPayClient":
        """Enter async context manager."""
        return self

    async def __aexit__(self, *args) -> None:
        """Exit async context manager and close resources."""
        await self.close()

    # Sandbox environment

    async def sandbox_handshake(
        self, request: Union[HandshakeRequest, Mapping[str, Any]]
    ) -> HandshakeResponse:
        """
        Probe connectivity and credentials against the sandbox.

        Args:
            request: HandshakeRequest or {"handshakeSignature": ...}

        Returns:
            HandshakeResponse echoing the probe value

        Raises:
            TransportError: On network failure, non-2xx status or bad response
        """
        payload = _coerce(HandshakeRequest, request)
        return await self._signed_post(ENDPOINTS["SANDBOX_HANDSHAKE"], payload, HandshakeResponse)

    async def sandbox_pay(
        self, request: Union[PaymentRequest, Mapping[str, Any]]
    ) -> PaymentResponse:
        """
        Create a sandbox payment order.

        Args:
            request: PaymentRequest or camelCase dict; appId is overwritten,
                unknown keys are dropped

        Returns:
            PaymentResponse with status, QR payload and checkout URL

        Raises:
            ResponseFormatError: If a 2xx body does not parse; the order may exist
            TransportError: On network failure or non-2xx status
        """
        payload = self._with_app_id(_coerce(PaymentRequest, request))
        return await self._signed_post(ENDPOINTS["SANDBOX_PAY"], payload, PaymentResponse)

    # Production environment

    async def handshake(
        self, request: Union[HandshakeRequest, Mapping[str, Any]]
    ) -> HandshakeResponse:
        """
        Probe connectivity and credentials against production.

        Raises:
            TransportError: On network failure, non-2xx status or bad response
        """
        payload = _coerce(HandshakeRequest, request)
        return await self._signed_post(ENDPOINTS["HANDSHAKE"], payload, HandshakeResponse)

    async def pay(
        self, request: Union[PaymentRequest, Mapping[str, Any]]
    ) -> PaymentResponse:
        """
        Create a production payment order.

        The caller's request is not modified; a copy with app_id set to
        this client's app id is signed and sent. Keys of a dict request
        that are not PaymentRequest fields are dropped (logged at DEBUG).

        Args:
            request: PaymentRequest or camelCase dict; appId is overwritten

        Returns:
            PaymentResponse with status, QR payload and checkout URL; any
            extra gateway fields are available in model_extra

        Raises:
            ResponseFormatError: If a 2xx body does not parse; the order may exist
            TransportError: On network failure or non-2xx status
        """
        payload = self._with_app_id(_coerce(PaymentRequest, request))
        return await self._signed_post(ENDPOINTS["PAY"], payload, PaymentResponse)

    # Callbacks

    def verify_cb(
        self,
        payload: Union[str, bytes],
        nonce: str,
        expected_signature: str,
    ) -> bool:
        """
        Verify a gateway callback signature.

        Args:
            payload: Raw callback body, exactly as received
            nonce: x-mmpay-nonce header value
            expected_signature: x-mmpay-signature header value

        Returns:
            True if authentic, False on mismatch

        Raises:
            ValidationError: If any argument is empty or missing
        """
        return self.__verifier.verify(payload, nonce, expected_signature)

    def verify_headers(self, payload: Union[str, bytes], headers: Mapping[str, str]) -> bool:
        """Verify a callback using the nonce/signature from its headers."""
        return self.__verifier.verify_headers(payload, headers)

    def construct_callback(
        self,
        payload: Union[str, bytes],
        nonce: str,
        signature: str,
    ) -> CallbackIncomingData:
        """
        Verify a callback and return its parsed body.

        Raises:
            ValidationError: If inputs are missing or the body is malformed
            SignatureVerificationError: If the signature does not match
        """
        return self.__verifier.construct_callback(payload, nonce, signature)

    def _with_app_id(self, request: PaymentRequest) -> PaymentRequest:
        return request.model_copy(update={"app_id": self.__credentials.app_id})

    def _sign(self, body: bytes) -> tuple[str, str]:
        """
        Produce a nonce and the signature of "<nonce>.<body>".

        Returns:
            (nonce, signature)
        """
        nonce = self._nonce_factory()
        signature = generate_signature(
            self.__credentials.secret_key.get_secret_value(), nonce, body
        )
        return nonce, signature

    async def _signed_post(
        self,
        endpoint: str,
        payload: BaseModel,
        response_model: type[ModelT],
    ) -> ModelT:
        """
        Sign and POST a payload, then parse the response.

        The body is serialized exactly once; the same bytes are signed and
        sent so the gateway recomputes an identical signature.

        Args:
            endpoint: Path under api_base_url
            payload: Request model
            response_model: Model to validate the JSON response against

        Returns:
            Parsed response model

        Raises:
            TransportError: On network failure, non-2xx status or bad response
        """
        url = f"{self.__credentials.api_base_url}{endpoint}"
        body = serialize_body(payload.to_wire())
        nonce, signature = self._sign(body)
        headers = build_signed_headers(self.__credentials.publishable_key, nonce, signature)

        logger.debug("POST %s (nonce=%s)", url, nonce)
        try:
            response = await self._http.post(url, content=body, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.error("MMPay request to %s failed with status %s", endpoint, status)
            raise TransportError(
                f"MMPay request to {endpoint} failed with status {status}",
                status_code=status,
                response_body=exc.response.text,
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("MMPay request to %s failed: %s", endpoint, exc)
            raise TransportError(f"MMPay request to {endpoint} failed: {exc}") from exc

        # 2xx from here on; the call may already have taken effect.
        data = None
        try:
            data = response.json()
            return response_model.model_validate(data)
        except (ValueError, PydanticValidationError) as exc:
            logger.error(
                "MMPay returned %s from %s with an unreadable body",
                response.status_code,
                endpoint,
            )
            raise ResponseFormatError(
                f"Unexpected response from {endpoint}",
                status_code=response.status_code,
                response_body=response.text,
                data=data,
            ) from exc


def _coerce(model: type[ModelT], value: Union[BaseModel, Mapping[str, Any]]) -> ModelT:
    """Accept either a model instance or a plain mapping. Unknown keys are dropped."""
    if isinstance(value, model):
        return value
    if isinstance(value, Mapping):
        known = set(model.model_fields)
        known.update(field.alias for field in model.model_fields.values() if field.alias)
        dropped = sorted(str(key) for key in value if key not in known)
        if dropped:
            logger.debug("Dropping unknown %s keys: %s", model.__name__, ", ".join(dropped))
    return model.model_validate(value)
