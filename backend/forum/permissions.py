"""
Ownership guard
===============

Edits and deletes on topics, posts and comments are allowed only for the
user who created the resource. There is no admin or role override.

The check runs on the fetched instance (so a missing resource is a 404
before it is ever a 403) and strictly before any write.
"""
from typing import Optional

from rest_framework import permissions


def authorize(owner_id: int, requester_id: Optional[int]) -> bool:
    """True iff the requester owns the resource. Anonymous (None) never does."""
    if requester_id is None:
        return False
    return owner_id == requester_id


class IsOwnerOrReadOnly(permissions.BasePermission):
    """
    Object permission for owner-only mutation.

    The view names the owner column through `owner_field`
    (e.g. 'user_id' on posts, 'created_by_id' on topics).
    """
    message = 'You can only modify resources you created.'

    def has_object_permission(self, request, view, obj):
        if request.method in permissions.SAFE_METHODS:
            return True
        owner_field = getattr(view, 'owner_field', 'user_id')
        requester_id = request.user.id if request.user.is_authenticated else None
        return authorize(getattr(obj, owner_field), requester_id)
