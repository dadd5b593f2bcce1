"""
API Client Module

Async HTTP client for the posts REST resource. Maps the four logical
operations onto GET/POST/PUT/DELETE and turns every failure into a
ClientError. No retries are performed; retry policy belongs to the caller.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional
from urllib.parse import quote

import httpx

from ..config import config
from ..exceptions import DecodeError, HttpError, TransportError
from .models import FieldsLike, Post, PostFields


logger = logging.getLogger(__name__)

LIST_OK = frozenset({200})
CREATE_OK = frozenset({200, 201})
UPDATE_OK = frozenset({200})
REMOVE_OK = frozenset({200, 204})

_UNSET: Any = object()


class ResourceClient:
    """
    HTTP client for the posts API.

    Features:
    - Status-code based success detection per operation
    - Schema-checked decoding of the list response
    - Optional timeout (disabled by default)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        endpoint: Optional[str] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = _UNSET,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Server root (uses config default if None).
            endpoint: Collection path (uses config default if None).
            http_client: Pre-built client, e.g. one with a mock transport.
                The caller keeps ownership of it.
            timeout: Seconds before a request is abandoned, None for no
                timeout (uses config default when omitted).
        """
        self.base_url = (base_url or config.api.base_url).rstrip("/")
        self.endpoint = "/" + (endpoint or config.api.posts_endpoint).strip("/")
        self.timeout = config.api.timeout_seconds if timeout is _UNSET else timeout

        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=self.timeout)

        logger.info(f"ResourceClient initialized (endpoint: {self.url})")

    @property
    def url(self) -> str:
        """Full URL of the collection endpoint."""
        return f"{self.base_url}{self.endpoint}"

    def item_url(self, post_id: str) -> str:
        """Full URL of a single post."""
        return f"{self.url}/{quote(str(post_id), safe='')}"

    async def __aenter__(self) -> "ResourceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()

    async def list(self) -> List[Post]:
        """
        Fetch all posts.

        Returns:
            Posts in the order returned by the server.

        Raises:
            HttpError: If the status is not 200.
            DecodeError: If the body is not a JSON array of valid posts.
            TransportError: If no response was received.
        """
        response = await self._send("list", "GET", self.url, LIST_OK)

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f"List response is not valid JSON: {e}")
            raise DecodeError(f"Response body is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise DecodeError(f"Expected a JSON array, got {type(data).__name__}")

        posts = [Post.from_dict(item) for item in data]
        logger.info(f"Fetched {len(posts)} posts successfully")
        return posts

    async def create(self, fields: FieldsLike) -> None:
        """
        Create a post from the given fields.

        Raises:
            HttpError: If the status is not 200 or 201.
            TransportError: If no response was received.
        """
        payload = PostFields.coerce(fields).to_payload()
        await self._send("create", "POST", self.url, CREATE_OK, payload)

    async def update(self, post_id: str, fields: FieldsLike) -> None:
        """
        Replace the editable fields of an existing post.

        Raises:
            HttpError: If the status is not 200.
            TransportError: If no response was received.
        """
        payload = PostFields.coerce(fields).to_payload()
        await self._send("update", "PUT", self.item_url(post_id), UPDATE_OK, payload)

    async def remove(self, post_id: str) -> None:
        """
        Delete a post.

        Raises:
            HttpError: If the status is not 200 or 204.
            TransportError: If no response was received.
        """
        await self._send("remove", "DELETE", self.item_url(post_id), REMOVE_OK)

    async def _send(
        self,
        operation: str,
        method: str,
        url: str,
        accepted: Iterable[int],
        payload: Optional[Mapping[str, str]] = None,
    ) -> httpx.Response:
        """
        Perform one request and check its status code.

        Args:
            operation: Logical operation name used in messages.
            method: HTTP method.
            url: Target URL.
            accepted: Status codes that count as success.
            payload: JSON body, sent with Content-Type application/json.

        Returns:
            The response when its status is accepted.
        """
        logger.info(f"{method} {url}")

        kwargs = {"timeout": self.timeout}
        if payload is not None:
            kwargs["json"] = dict(payload)
            kwargs["headers"] = {"Content-Type": "application/json"}

        try:
            response = await self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{operation} transport error: {e}")
            raise TransportError(f"{operation} failed: {e}") from e

        if response.status_code not in accepted:
            logger.warning(f"{operation} rejected with HTTP {response.status_code}")
            raise HttpError(response.status_code, operation)

        logger.debug(f"{operation} succeeded with HTTP {response.status_code}")
        return response
