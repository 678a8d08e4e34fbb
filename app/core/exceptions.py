"""
Domain exceptions raised by services.
Routers translate them into HTTP responses; services never import FastAPI.
"""


class DomainError(Exception):
    """Base class for business rule violations."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    """Referenced record does not exist."""


class ValidationError(DomainError):
    """Input is well-formed but violates a business rule."""
