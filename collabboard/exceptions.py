"""Typed failures raised by the service layer.

Services never build HTTP responses. They raise one of these and the
application-level handler in ``collabboard.main`` turns it into a response
with the matching status code.
"""
from fastapi import status


class CollabError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request could not be processed"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFound(CollabError):
    """The entity, or an ancestor in its ownership chain, does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found"


class Forbidden(CollabError):
    """The entity exists but the user's role does not allow the action."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You don't have permission to perform this action"


class Conflict(CollabError):
    """A uniqueness rule of the store was violated."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists"
