"""
User GraphQL type definitions
"""

from datetime import datetime

import strawberry


@strawberry.type
class User:
    """User type for GraphQL API."""

    id: strawberry.ID
    username: str
    email: str
    created_at: datetime
    updated_at: datetime
