"""
Post Form Module

Toolkit-independent controller behind a create or edit form: holds the
entered values, validates them locally, trims them before submission and
blocks a second submission while one is in progress.
"""

import logging
from typing import Awaitable, Callable, Dict, Optional

from ..api.models import Post, PostFields
from ..config import config
from ..exceptions import PostManagerError
from .store import ResourceStore


logger = logging.getLogger(__name__)

SubmitHandler = Callable[[PostFields], Awaitable[None]]


class PostForm:
    """
    State of one post form.

    A failed submission keeps the entered values and exposes the error
    message in `error` so it can be shown next to the form.
    """

    def __init__(
        self,
        on_submit: SubmitHandler,
        *,
        initial: Optional[PostFields] = None,
        on_cancel: Optional[Callable[[], None]] = None,
        submit_label: Optional[str] = None,
    ):
        """
        Initialize the form.

        Args:
            on_submit: Coroutine called with the trimmed fields.
            initial: Values to prefill, e.g. from the post being edited.
            on_cancel: Called by `cancel()`; None for forms that cannot be cancelled.
            submit_label: Text of the submit button.
        """
        initial = initial or PostFields()
        self.date = initial.date
        self.title = initial.title
        self.read_time = initial.read_time

        self.submit_label = submit_label or config.display.create_label
        self.submitting = False
        self.error: Optional[str] = None
        self.field_errors: Dict[str, str] = {}

        self._on_submit = on_submit
        self._on_cancel = on_cancel
        self._disposed = False

    @classmethod
    def for_create(cls, store: ResourceStore) -> "PostForm":
        """A form that creates posts through the store."""
        return cls(store.create, submit_label=config.display.create_label)

    @classmethod
    def for_edit(cls, store: ResourceStore, post: Post) -> "PostForm":
        """A form prefilled from `post` that updates it through the store."""

        async def submit(fields: PostFields) -> None:
            await store.update(post.id, fields)

        return cls(
            submit,
            initial=post.fields,
            on_cancel=store.cancel_editing,
            submit_label=config.display.update_label,
        )

    @property
    def fields(self) -> PostFields:
        return PostFields(date=self.date, title=self.title, read_time=self.read_time)

    @property
    def can_cancel(self) -> bool:
        return self._on_cancel is not None

    @property
    def button_label(self) -> str:
        if self.submitting:
            return config.display.saving_label
        return self.submit_label

    @property
    def disposed(self) -> bool:
        return self._disposed

    def validate(self) -> bool:
        """
        Check required fields and fill `field_errors`.

        Returns:
            True if every field has a value.
        """
        labels = config.display.field_labels
        self.field_errors = {
            name: config.display.required_template.format(label=labels.get(name, name))
            for name in self.fields.missing()
        }
        return not self.field_errors

    async def submit(self) -> bool:
        """
        Submit the form.

        Returns:
            True if the handler succeeded. False if the form is already
            submitting, disposed, invalid, or the handler failed.
        """
        if self.submitting or self._disposed:
            logger.debug("Submit ignored, form busy or disposed")
            return False
        if not self.validate():
            return False

        self.submitting = True
        self.error = None
        fields = self.fields.stripped()

        try:
            await self._on_submit(fields)
        except PostManagerError as e:
            logger.warning(f"Form submission failed: {e}")
            if not self._disposed:
                self.error = str(e)
            return False
        finally:
            self.submitting = False

        if not self._disposed:
            self.clear()
        return True

    def clear(self) -> None:
        """Empty every field."""
        for name in ("date", "title", "read_time"):
            setattr(self, name, "")
        self.field_errors = {}

    def cancel(self) -> None:
        if self._on_cancel is not None:
            self._on_cancel()

    def dispose(self) -> None:
        """Detach the form; a pending submission will no longer touch it."""
        self._disposed = True

