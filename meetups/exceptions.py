"""
Meetups Backend: Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions raised by the service layer.
Why:   A missing record is not an error for SQLAlchemy (it returns None);
       the service converts that into an exception the caller can map to
       a response (e.g. HTTP 404) without inspecting return values.

Exception Hierarchy:
    MeetupsError (base)
    └── NotFoundError            → the targeted meetup does not exist

Everything else (IntegrityError, connection errors, ...) propagates
unmodified from SQLAlchemy to the caller.
"""

from typing import Any, Dict, Optional


class MeetupsError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Caller-facing error description
        context:  Additional debug info (logged, not meant for end users)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(MeetupsError):
    """
    Raised when an operation targets a resource that does not exist.

    When:    find_by_id / update / attend / leave with an unknown meetup id.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id
