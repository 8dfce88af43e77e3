"""
Error types and the custom exception handler for DRF

Taxonomy:
- validation failure  -> 400 (DRF ValidationError)
- not authenticated   -> 401
- not the owner       -> 403 (DRF PermissionDenied)
- not found           -> 404 (ResourceNotFound)
- conflict            -> 409 (LikeConflict, UsernameTaken, IntegrityError)
- persistence failure -> 500 (any other DatabaseError)

Every error body has the shape {'error': ..., 'details': ...}.
"""
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound
from django.db import DatabaseError, IntegrityError
import logging

logger = logging.getLogger(__name__)


class ResourceNotFound(NotFound):
    """The addressed topic, post, comment or user does not exist."""

    def __init__(self, kind, resource_id):
        super().__init__(f"{kind.capitalize()} {resource_id} does not exist.")
        self.kind = kind
        self.resource_id = resource_id


class LikeConflict(APIException):
    """
    A concurrent toggle by the same user on the same entity won the race.

    Nothing was applied; the caller may simply toggle again.
    """
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'A concurrent like operation conflicted with this one. Retry the request.'
    default_code = 'like_conflict'


class UsernameTaken(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'User already exists.'
    default_code = 'username_taken'


def custom_exception_handler(exc, context):
    """
    Custom exception handler that:
    1. Logs all exceptions
    2. Converts database exceptions to DRF responses
    3. Provides consistent error format
    """

    # Call DRF's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        if not isinstance(response.data, dict) or 'error' not in response.data:
            response.data = {
                'error': _summary(exc),
                'details': response.data
            }
        if response.status_code == status.HTTP_409_CONFLICT:
            logger.warning("Conflict: %s", exc)
        return response

    # IntegrityError is a DatabaseError subclass, check it first
    if isinstance(exc, IntegrityError):
        logger.warning("IntegrityError: %s", exc)
        return Response(
            {'error': 'Data integrity error. This may be a duplicate entry.', 'details': None},
            status=status.HTTP_409_CONFLICT
        )

    if isinstance(exc, DatabaseError):
        logger.exception("Persistence failure: %s", exc)
        return Response(
            {'error': 'A persistence error occurred. No changes were applied.', 'details': None},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    logger.exception("Unhandled exception: %s", exc)

    return Response(
        {'error': 'An unexpected error occurred.', 'details': None},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def _summary(exc):
    detail = getattr(exc, 'detail', None)
    if isinstance(detail, str):
        return detail
    if isinstance(exc, APIException):
        return str(exc.default_detail)
    return str(exc)
