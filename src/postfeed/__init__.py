"""
postfeed backend
GraphQL API for a paginated feed of user posts
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
