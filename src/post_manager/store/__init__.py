"""
Store Module

Provides the observable collection state, the store that orchestrates
client calls, and the form controller used to submit posts.
"""

from .state import CollectionState, Status
from .store import ResourceStore
from .form import PostForm

__all__ = ["CollectionState", "Status", "ResourceStore", "PostForm"]
