"""Post persistence, pagination and the post access service."""

from .pagination import FirstPage, InvalidCursorError, PageAfter, PostPageQuery
from .service import MutationResult, PostPage, PostService

__all__ = [
    "FirstPage",
    "InvalidCursorError",
    "MutationResult",
    "PageAfter",
    "PostPage",
    "PostPageQuery",
    "PostService",
]
