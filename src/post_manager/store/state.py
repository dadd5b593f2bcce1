"""Observable state snapshot held by the resource store."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..api.models import Post


class Status(str, Enum):
    """Status of the collection as seen by the UI."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class CollectionState:
    """
    One immutable view of the collection.

    `editing_id` is a weak reference into `records`: it is resolved by id
    on every access and never yields a record that is no longer present.
    """

    records: Tuple[Post, ...] = ()
    status: Status = Status.IDLE
    error: Optional[str] = None
    editing_id: Optional[str] = None

    @property
    def editing(self) -> Optional[Post]:
        """The record being edited, or None when it is gone or unset."""
        if self.editing_id is None:
            return None
        return self.find(self.editing_id)

    @property
    def is_loading(self) -> bool:
        return self.status is Status.LOADING

    @property
    def is_empty(self) -> bool:
        """True once a load succeeded and returned no records."""
        return self.status is Status.READY and not self.records

    def find(self, post_id: str) -> Optional[Post]:
        """Look up a record by id."""
        for record in self.records:
            if record.id == post_id:
                return record
        return None

    def __str__(self) -> str:
        if self.error:
            return f"{self.status.value}: {self.error} ({len(self.records)} records)"
        return f"{self.status.value} ({len(self.records)} records)"
