"""
Resource Store Module

Holds the in-memory collection of posts together with its loading, error
and edit-target state, and sequences user actions into client calls.

Each action is a single coroutine whose only suspension points are the
network round trips. Overlapping actions are not serialized: two
mutations fired without awaiting each other race their refreshes, and the
last list response to arrive wins. Guarding against duplicate submissions
is left to the caller (see PostForm).
"""

import inspect
import logging
from dataclasses import replace
from typing import Any, Awaitable, Callable, List, Optional, Union

from ..api.client import ResourceClient
from ..api.models import FieldsLike, Post, PostFields
from ..exceptions import ClientError, StoreClosedError, ValidationError
from .state import CollectionState, Status


logger = logging.getLogger(__name__)

Listener = Callable[[CollectionState], None]
Confirm = Callable[[Optional[Post]], Union[bool, Awaitable[bool]]]


def validate_fields(fields: FieldsLike) -> PostFields:
    """
    Check that every required field is non-empty.

    Returns:
        The trimmed fields.

    Raises:
        ValidationError: Listing the empty fields by wire name.
    """
    fields = PostFields.coerce(fields).stripped()
    missing = fields.missing()
    if missing:
        raise ValidationError(missing)
    return fields


class ResourceStore:
    """
    Observable state container for the posts collection.

    Listeners receive every new CollectionState snapshot. After `close()`
    the store ignores results of actions that were still in flight.
    """

    def __init__(self, client: ResourceClient):
        """Initialize the store with an idle, empty state."""
        self._client = client
        self._state = CollectionState()
        self._listeners: List[Listener] = []
        self._closed = False
        logger.info("ResourceStore initialized")

    @property
    def state(self) -> CollectionState:
        """Current snapshot."""
        return self._state

    @property
    def records(self):
        return self._state.records

    @property
    def closed(self) -> bool:
        return self._closed

    def add_listener(self, callback: Listener, flush: bool = False) -> Callable[[], None]:
        """
        Register a callback invoked with each new state.

        Args:
            callback: Receives the new CollectionState.
            flush: Deliver the current state immediately.

        Returns:
            A callable that removes the listener.
        """

        def remove() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        self._listeners.append(callback)
        if flush:
            callback(self._state)
        return remove

    def close(self) -> None:
        """
        Tear the store down.

        In-flight actions resuming after this point discard their results,
        and no listener is notified again.
        """
        if self._closed:
            return
        self._closed = True
        self._listeners.clear()
        logger.info("ResourceStore closed")

    async def load(self) -> CollectionState:
        """
        Refresh the collection from the server.

        A failed load keeps the previously displayed records and records the
        error message verbatim. Client errors are never raised from here.

        Returns:
            The resulting state.
        """
        self._ensure_open()
        self._set_state(status=Status.LOADING, error=None)

        try:
            posts = await self._client.list()
        except ClientError as e:
            if self._closed:
                return self._state
            logger.warning(f"Failed to load posts: {e}")
            self._set_state(status=Status.FAILED, error=str(e))
            return self._state

        if self._closed:
            logger.debug("Discarding load result, store was closed")
            return self._state

        records = tuple(posts)
        editing_id = self._state.editing_id
        if editing_id is not None and not any(r.id == editing_id for r in records):
            logger.info(f"Post {editing_id} disappeared, leaving edit mode")
            editing_id = None

        self._set_state(
            records=records,
            status=Status.READY,
            error=None,
            editing_id=editing_id,
        )
        logger.info(f"Loaded {len(records)} posts")
        return self._state

    async def create(self, fields: FieldsLike) -> None:
        """
        Create a post and refresh the collection.

        Raises:
            ValidationError: If a required field is empty. No request is made.
            ClientError: If the server rejects the post. Records are untouched.
        """
        self._ensure_open()
        fields = validate_fields(fields)

        await self._client.create(fields)
        if self._closed:
            return
        logger.info(f"Created post '{fields.title}'")
        await self.load()

    async def update(self, post_id: str, fields: FieldsLike) -> None:
        """
        Update a post, leave edit mode and refresh the collection.

        On failure the edit target stays set so the user can retry.

        Raises:
            ValidationError: If a required field is empty. No request is made.
            ClientError: If the server rejects the update.
        """
        self._ensure_open()
        fields = validate_fields(fields)

        await self._client.update(post_id, fields)
        if self._closed:
            return
        logger.info(f"Updated post {post_id}")
        self._set_state(editing_id=None)
        await self.load()

    async def remove(self, post_id: str, confirm: Confirm) -> bool:
        """
        Delete a post after the caller confirmed it.

        Args:
            post_id: Id of the post to delete.
            confirm: Called with the post (None if not displayed); a falsy
                result, or an awaitable resolving to one, cancels the delete.

        Returns:
            True if the post was deleted, False if the user declined.

        Raises:
            ClientError: If the server rejects the delete. Records are untouched.
        """
        self._ensure_open()

        decision: Any = confirm(self._state.find(post_id))
        if inspect.isawaitable(decision):
            decision = await decision
        if self._closed:
            return False
        if not decision:
            logger.info(f"Delete of post {post_id} cancelled")
            return False

        await self._client.remove(post_id)
        if self._closed:
            return True
        logger.info(f"Deleted post {post_id}")
        await self.load()
        return True

    def start_editing(self, post_id: str) -> bool:
        """
        Mark a displayed post as the edit target.

        Returns:
            False if no displayed post has this id.
        """
        self._ensure_open()
        if self._state.find(post_id) is None:
            logger.warning(f"Cannot edit unknown post {post_id}")
            return False
        self._set_state(editing_id=post_id)
        return True

    def cancel_editing(self) -> None:
        """Leave edit mode without saving."""
        self._ensure_open()
        if self._state.editing_id is not None:
            self._set_state(editing_id=None)

    def _ensure_open(self) -> None:
        if self._closed:
            raise StoreClosedError("ResourceStore has been closed")

    def _set_state(self, **changes) -> None:
        """Replace the snapshot and notify listeners."""
        self._state = replace(self._state, **changes)
        logger.debug(f"State -> {self._state}")

        for callback in list(self._listeners):
            try:
                callback(self._state)
            except Exception:
                logger.exception("Store listener callback failed")
