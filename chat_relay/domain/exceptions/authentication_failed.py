"""
AuthenticationError - Raised when credentials cannot be verified.
Maps to: HTTP 401 Unauthorized
"""


class AuthenticationError(Exception):
    """Raised when a username/password pair or a session token is rejected"""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)
