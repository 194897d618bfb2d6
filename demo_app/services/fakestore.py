"""FakeStore API client for the product catalog.

API documentation: https://fakestoreapi.com/docs

The FakeStore API does not follow REST status conventions. This client
absorbs its quirks so callers see one contract:

- missing products come back as 200 with an empty body (GET) or with a
  literal ``null`` body (DELETE); both become ResourceNotFoundError
- creation replies 200 instead of 201 and only returns the assigned id
- updates always reply 200, even for ids that do not exist
"""

import logging
from typing import Any, Protocol

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from demo_app.config import settings
from demo_app.errors import ResourceNotFoundError
from demo_app.models.product import AddProductCommand, Product, UpdateProductCommand

logger = logging.getLogger(__name__)

# Expected size of the upstream product collection (informational only)
DEFAULT_COLLECTION_SIZE = 20
# Upper bound on how much of any response body is read
RESPONSE_MAX_SIZE = 102_400
# Enough to recognise the literal ``null`` returned by DELETE for unknown ids
NULL_SENTINEL_SIZE = 4

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

_product_list_adapter = TypeAdapter(list[Product])


class FakeStoreAPIError(Exception):
    """Raised when a FakeStore API call fails."""


class FakeStoreStatusError(FakeStoreAPIError):
    """Raised when the API responds with an unexpected status code."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"API responded with status {status_code}")


class FakeStoreTransportError(FakeStoreAPIError):
    """Raised when the request could not be sent or the response not read."""


class FakeStoreDecodeError(FakeStoreAPIError):
    """Raised when a response body is not the expected JSON document."""


class FakeStoreIntegrityError(FakeStoreAPIError):
    """Raised when a response contradicts the request that produced it."""


class FakeStoreAPI(Protocol):
    """Product catalog operations the API layer depends on."""

    async def get_products(self) -> list[Product]: ...

    async def get_product(self, product_id: int) -> Product: ...

    async def add_product(self, command: AddProductCommand) -> Product: ...

    async def update_product(self, command: UpdateProductCommand) -> Product: ...

    async def delete_product(self, product_id: int) -> None: ...


class _AssignedId(BaseModel):
    """The part of a create/update response this client trusts."""

    id: int | None = None


class FakeStoreClient:
    """Async client for the FakeStore products API.

    Must be used as an async context manager; the underlying
    httpx.AsyncClient lives for the duration of the ``async with`` block.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the FakeStore client.

        Args:
            base_url: API base URL. Defaults to settings.
            timeout: Client-level timeout in seconds. Defaults to settings.
        """
        self.base_url = (base_url or settings.fakestore_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.fakestore_timeout
        self._http_client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "FakeStoreClient":
        """Enter async context manager."""
        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Exit async context manager."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    @property
    def _client(self) -> httpx.AsyncClient:
        """Get the HTTP client, raising if not in context manager."""
        if self._http_client is None:
            raise RuntimeError(
                "FakeStoreClient must be used as an async context manager"
            )
        return self._http_client

    async def _request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
        limit: int = RESPONSE_MAX_SIZE,
    ) -> bytes:
        """Send a request and return at most ``limit`` bytes of a 200 response.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: Resource path (without base URL)
            payload: Optional JSON body
            limit: Maximum number of body bytes to read

        Returns:
            The (possibly truncated) response body.

        Raises:
            FakeStoreStatusError: If the status is anything but 200.
            FakeStoreTransportError: If sending or reading fails.
        """
        headers = {"Content-Type": JSON_CONTENT_TYPE} if payload is not None else None
        request = self._client.build_request(
            method,
            f"{self.base_url}{path}",
            json=payload,
            headers=headers,
        )

        try:
            response = await self._client.send(request, stream=True)
        except httpx.RequestError as e:
            logger.error("FakeStore request error: %s %s - %s", method, path, e)
            raise FakeStoreTransportError(f"Request failed: {e}") from e

        try:
            if response.status_code != httpx.codes.OK:
                logger.error(
                    "FakeStore API error: %s %s - status %d",
                    method,
                    path,
                    response.status_code,
                )
                raise FakeStoreStatusError(response.status_code)
            return await self._read_body(response, limit)
        except httpx.RequestError as e:
            logger.error("FakeStore read error: %s %s - %s", method, path, e)
            raise FakeStoreTransportError(f"Read response body failed: {e}") from e
        finally:
            await response.aclose()

    @staticmethod
    async def _read_body(response: httpx.Response, limit: int) -> bytes:
        """Read the response body, stopping once ``limit`` bytes are buffered."""
        buffer = bytearray()
        async for chunk in response.aiter_bytes():
            buffer.extend(chunk)
            if len(buffer) >= limit:
                break
        return bytes(buffer[:limit])

    async def get_products(self) -> list[Product]:
        """Fetch the whole product collection.

        Returns:
            List of products (typically DEFAULT_COLLECTION_SIZE of them).

        Raises:
            FakeStoreAPIError: If the call fails or the body is not a product list.
        """
        data = await self._request("GET", "/products")
        try:
            return _product_list_adapter.validate_json(data)
        except ValidationError as e:
            raise FakeStoreDecodeError(f"Unmarshal response json: {e}") from e

    async def get_product(self, product_id: int) -> Product:
        """Fetch a single product.

        Args:
            product_id: Catalog identifier.

        Returns:
            The decoded product.

        Raises:
            ResourceNotFoundError: If the API returns an empty body.
            FakeStoreAPIError: If the call fails or the body is not a product.
        """
        data = await self._request("GET", f"/products/{product_id}")
        # The API signals a missing product with 200 and no body, never 404
        if not data:
            logger.info("FakeStore product %d not found", product_id)
            raise ResourceNotFoundError(f"product {product_id} not found")

        try:
            return Product.model_validate_json(data)
        except ValidationError as e:
            raise FakeStoreDecodeError(f"Unmarshal response json: {e}") from e

    async def add_product(self, command: AddProductCommand) -> Product:
        """Create a product.

        The API replies with the assigned id only, so the result is
        rebuilt from the command fields plus that id.

        Args:
            command: Validated product fields.

        Returns:
            The created product, with a zeroed rating.

        Raises:
            FakeStoreAPIError: If the call fails or no id is returned.
        """
        data = await self._request("POST", "/products", payload=command.to_payload())
        assigned = self._decode_assigned_id(data)
        if assigned.id is None:
            raise FakeStoreDecodeError("Response does not contain the assigned id")

        return Product(id=assigned.id, **command.to_payload())

    async def update_product(self, command: UpdateProductCommand) -> Product:
        """Replace a product.

        The API replies 200 for any id, echoing at most the id back. A
        missing id is taken from the command; a different one is an error.

        Args:
            command: Validated product fields and target id.

        Returns:
            The updated product, with a zeroed rating.

        Raises:
            FakeStoreIntegrityError: If the returned id differs from the requested one.
            FakeStoreAPIError: If the call fails.
        """
        data = await self._request(
            "PUT",
            f"/products/{command.id}",
            payload=command.to_payload(),
        )
        assigned = self._decode_assigned_id(data)
        product_id = command.id if assigned.id is None else assigned.id
        if product_id != command.id:
            logger.error(
                "FakeStore returned product id %d for update of %d",
                product_id,
                command.id,
            )
            raise FakeStoreIntegrityError(
                f"Expected product id {command.id}, got {product_id}"
            )

        return Product(id=product_id, **command.to_payload())

    async def delete_product(self, product_id: int) -> None:
        """Delete a product.

        Args:
            product_id: Catalog identifier.

        Raises:
            ResourceNotFoundError: If the API returns a literal ``null``.
            FakeStoreAPIError: If the call fails.
        """
        # The deleted resource is returned on success and ``null`` otherwise
        data = await self._request(
            "DELETE",
            f"/products/{product_id}",
            limit=NULL_SENTINEL_SIZE,
        )
        if data == b"null":
            logger.info("FakeStore product %d not found for deletion", product_id)
            raise ResourceNotFoundError(f"product {product_id} not found")

    @staticmethod
    def _decode_assigned_id(data: bytes) -> _AssignedId:
        try:
            return _AssignedId.model_validate_json(data)
        except ValidationError as e:
            raise FakeStoreDecodeError(f"Unmarshal response json: {e}") from e
