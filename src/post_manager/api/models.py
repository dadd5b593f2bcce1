"""
Post Models

Typed records exchanged with the posts API and the editable field set
used by create and update requests.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional, Union

from ..config import config
from ..exceptions import DecodeError

REQUIRED_FIELDS = ("id", "date", "title", "readTime")
OPTIONAL_FIELDS = ("createdAt", "updatedAt")
EDITABLE_FIELDS = ("date", "title", "readTime")


@dataclass(frozen=True)
class PostFields:
    """The user-editable part of a post."""
    date: str = ""
    title: str = ""
    read_time: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PostFields":
        """
        Build fields from a mapping using either wire or Python names.

        Missing keys become empty strings so that validation can report them.
        """
        read_time = data.get("read_time", data.get("readTime", ""))
        return cls(
            date=str(data.get("date") or ""),
            title=str(data.get("title") or ""),
            read_time=str(read_time or ""),
        )

    @classmethod
    def coerce(cls, fields: "FieldsLike") -> "PostFields":
        """Accept either PostFields or a plain mapping."""
        if isinstance(fields, cls):
            return fields
        return cls.from_mapping(fields)

    def stripped(self) -> "PostFields":
        """Return a copy with surrounding whitespace removed."""
        return replace(
            self,
            date=self.date.strip(),
            title=self.title.strip(),
            read_time=self.read_time.strip(),
        )

    def missing(self) -> List[str]:
        """Wire names of the fields that are empty after trimming."""
        values = self.to_payload()
        return [name for name in EDITABLE_FIELDS if not values[name]]

    def to_payload(self) -> Dict[str, str]:
        """JSON body for create and update requests."""
        fields = self.stripped()
        return {
            "date": fields.date,
            "title": fields.title,
            "readTime": fields.read_time,
        }


FieldsLike = Union[PostFields, Mapping[str, Any]]


@dataclass(frozen=True)
class Post:
    """Represents a post from the API."""
    id: str
    date: str
    title: str
    read_time: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Post":
        """
        Decode a single JSON object into a Post.

        Args:
            data: One decoded item of the list response.

        Returns:
            The decoded Post.

        Raises:
            DecodeError: If the item is not an object, a required field is
                missing or any field has the wrong type.
        """
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")

        for name in REQUIRED_FIELDS:
            if name not in data:
                raise DecodeError(f"Missing required field '{name}'")
            if not isinstance(data[name], str):
                raise DecodeError(
                    f"Field '{name}' must be a string, got {type(data[name]).__name__}"
                )

        if not data["id"]:
            raise DecodeError("Field 'id' must not be empty")

        for name in OPTIONAL_FIELDS:
            value = data.get(name)
            if value is not None and not isinstance(value, str):
                raise DecodeError(
                    f"Field '{name}' must be a string or null, got {type(value).__name__}"
                )

        return cls(
            id=data["id"],
            date=data["date"],
            title=data["title"],
            read_time=data["readTime"],
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )

    @property
    def fields(self) -> PostFields:
        """The editable fields of this post, e.g. to prefill an edit form."""
        return PostFields(date=self.date, title=self.title, read_time=self.read_time)

    def format_summary(self) -> str:
        """Format the post for display in a list."""
        return config.display.summary_template.format(
            title=self.title,
            date=self.date,
            read_time=self.read_time,
        )
