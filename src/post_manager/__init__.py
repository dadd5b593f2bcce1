"""
Post Manager

Async CRUD client core for a REST "posts" resource: an HTTP/JSON client,
an observable store that orchestrates it, and a form controller.
"""

from .api import InMemoryPostsBackend, Post, PostFields, ResourceClient
from .store import CollectionState, PostForm, ResourceStore, Status

__version__ = "0.1.0"

__all__ = [
    "ResourceClient",
    "InMemoryPostsBackend",
    "Post",
    "PostFields",
    "CollectionState",
    "Status",
    "ResourceStore",
    "PostForm",
]
