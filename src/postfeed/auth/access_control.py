"""Ownership checks shared by every mutation that touches an owned resource."""

from __future__ import annotations


def is_resource_owner(owner_id: int | None, caller_id: int | None) -> bool:
    """
    Check whether the caller owns a resource.

    Anonymous callers never own anything, even a resource whose owner is
    unset.

    Args:
        owner_id: Owner recorded on the resource
        caller_id: Authenticated user id of the caller, or None

    Returns:
        True if the caller is the owner, False otherwise
    """
    if caller_id is None or owner_id is None:
        return False
    return owner_id == caller_id
