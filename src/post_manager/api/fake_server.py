"""
In-Memory Posts Backend

Serves the posts REST resource from process memory through an
httpx.MockTransport. Used by the CLI's offline mode, the demo script and
the test suite so that the client can run without network connectivity.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple
from urllib.parse import unquote

import httpx

from ..config import config


logger = logging.getLogger(__name__)


SAMPLE_POSTS = [
    {"date": "31 jul 2025", "title": "Design mistakes everyone should avoid", "readTime": "3 minutes"},
    {"date": "02 aug 2025", "title": "Why spacing matters in mobile layouts", "readTime": "5 minutes"},
    {"date": "10 aug 2025", "title": "Choosing a color palette", "readTime": "4 minutes"},
]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


class InMemoryPostsBackend:
    """
    A minimal posts server living in memory.

    Ids are assigned from an incrementing counter and returned as strings.
    Every served request is appended to `requests` as (method, path).
    """

    def __init__(self, endpoint: Optional[str] = None):
        """Initialize an empty backend."""
        self.endpoint = "/" + (endpoint or config.api.posts_endpoint).strip("/")
        self.posts: Dict[str, dict] = {}
        self.requests: List[Tuple[str, str]] = []
        self._next_id = 1
        self._failures: Dict[str, List[int]] = {}

    def seed_samples(self) -> "InMemoryPostsBackend":
        """Load the sample posts. Returns self for chaining."""
        for sample in SAMPLE_POSTS:
            self.add(sample)
        logger.info(f"Seeded {len(SAMPLE_POSTS)} sample posts")
        return self

    def add(self, fields: dict) -> dict:
        """Insert a post directly, bypassing HTTP."""
        post_id = str(self._next_id)
        self._next_id += 1
        timestamp = _now()
        post = {
            "id": post_id,
            "date": fields["date"],
            "title": fields["title"],
            "readTime": fields["readTime"],
            "createdAt": timestamp,
            "updatedAt": timestamp,
        }
        self.posts[post_id] = post
        return post

    def fail(self, method: str, status_code: int, times: int = 1) -> None:
        """Make the next `times` requests with `method` answer `status_code`."""
        self._failures.setdefault(method.upper(), []).extend([status_code] * times)

    def transport(self) -> httpx.MockTransport:
        """Transport to plug into an httpx.AsyncClient."""
        return httpx.MockTransport(self.handle)

    def client(self, base_url: str = "http://posts.local") -> httpx.AsyncClient:
        """An AsyncClient routed to this backend."""
        return httpx.AsyncClient(transport=self.transport(), base_url=base_url)

    def handle(self, request: httpx.Request) -> httpx.Response:
        """Route one request to the matching handler."""
        # raw_path keeps %2F inside ids distinct from path separators
        raw_path = request.url.raw_path.decode("ascii").split("?", 1)[0]
        path = request.url.path
        self.requests.append((request.method, path))

        pending = self._failures.get(request.method)
        if pending:
            status_code = pending.pop(0)
            logger.debug(f"Injected failure {status_code} for {request.method} {path}")
            return httpx.Response(status_code, json={"error": "injected failure"})

        if raw_path.rstrip("/") == self.endpoint:
            if request.method == "GET":
                return httpx.Response(200, json=list(self.posts.values()))
            if request.method == "POST":
                return self._create(request)
            return httpx.Response(405, json={"error": "method not allowed"})

        prefix = self.endpoint + "/"
        if raw_path.startswith(prefix) and "/" not in raw_path[len(prefix):]:
            post_id = unquote(raw_path[len(prefix):])
            if post_id not in self.posts:
                return httpx.Response(404, json={"error": "post not found"})
            if request.method == "PUT":
                return self._update(post_id, request)
            if request.method == "DELETE":
                del self.posts[post_id]
                return httpx.Response(204)
            if request.method == "GET":
                return httpx.Response(200, json=self.posts[post_id])
            return httpx.Response(405, json={"error": "method not allowed"})

        return httpx.Response(404, json={"error": "not found"})

    def _read_fields(self, request: httpx.Request) -> Optional[dict]:
        """Decode and validate a create/update body, None if unusable."""
        try:
            body = json.loads(request.content or b"null")
        except ValueError:
            return None
        if not isinstance(body, dict):
            return None
        for name in ("date", "title", "readTime"):
            if not isinstance(body.get(name), str) or not body[name]:
                return None
        return body

    def _create(self, request: httpx.Request) -> httpx.Response:
        fields = self._read_fields(request)
        if fields is None:
            return httpx.Response(400, json={"error": "invalid post"})
        return httpx.Response(201, json=self.add(fields))

    def _update(self, post_id: str, request: httpx.Request) -> httpx.Response:
        fields = self._read_fields(request)
        if fields is None:
            return httpx.Response(400, json={"error": "invalid post"})
        post = self.posts[post_id]
        post.update(
            date=fields["date"],
            title=fields["title"],
            readTime=fields["readTime"],
            updatedAt=_now(),
        )
        return httpx.Response(200, json=post)
