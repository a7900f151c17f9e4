"""
Custom exceptions for the session client.
"""


class ClientError(Exception):
    """Base exception for client errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class AuthenticationError(ClientError):
    """Exception raised when an operation needs a session and none is stored."""
    pass


class PersistenceError(ClientError):
    """Exception raised when the credential store cannot be read or written."""
    pass
