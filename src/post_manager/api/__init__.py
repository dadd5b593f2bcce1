"""
API Client Module

Provides the async HTTP client and record types for the posts REST API.
"""

from .client import ResourceClient
from .fake_server import InMemoryPostsBackend
from .models import Post, PostFields

__all__ = ["ResourceClient", "InMemoryPostsBackend", "Post", "PostFields"]
