"""
Shared access control logic for GraphQL resolvers
"""

from typing import Any

import strawberry
from strawberry.permission import BasePermission

from ..auth.context import ANONYMOUS, AuthContext
from ..auth.session import get_auth_context_from_request
from ..logging import get_logger

logger = get_logger(__name__)


def get_auth_context_from_info(info: strawberry.Info) -> AuthContext:
    """
    Extract the caller from the GraphQL info object.

    Returns an anonymous context if the request is not available.
    """
    request = info.context.get("request")
    if request is None:
        logger.error("Request not found in GraphQL context")
        return ANONYMOUS

    return get_auth_context_from_request(request)


class IsAuthenticated(BasePermission):
    """Gate for operations that need a signed-in caller."""

    message = "Not authenticated to perform GraphQL operations"

    def has_permission(self, source: Any, info: strawberry.Info, **kwargs: Any) -> bool:
        auth_context = get_auth_context_from_info(info)
        if not auth_context.is_authenticated:
            logger.info("Rejected unauthenticated GraphQL operation", field=info.field_name)
            return False
        return True
