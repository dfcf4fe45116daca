"""
EntityNotFoundError - Raised when a looked-up user (or other record) is gone.
Maps to: HTTP 404 Not Found
"""


class EntityNotFoundError(Exception):
    """A session or request refers to an id the store does not know."""

    def __init__(self, message: str = "Not found"):
        super().__init__(message)
