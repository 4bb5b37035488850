"""
Stories module.

Story generation for accounts with full access.
"""

from .models import StoryRequest, StoryResponse, CustomAdditions
from .service import StoryService, is_distinct
from .exceptions import InputTooSimilarError

__all__ = [
    "StoryRequest",
    "StoryResponse",
    "CustomAdditions",
    "StoryService",
    "is_distinct",
    "InputTooSimilarError",
]
