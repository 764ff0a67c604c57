"""Domain errors raised by the service layer."""

from __future__ import annotations


class ServiceError(Exception):
    """Base class for errors the API layer maps to HTTP responses."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArgumentError(ServiceError):
    status_code = 400


class NotFoundError(ServiceError):
    status_code = 404


class AlreadyExistsError(ServiceError):
    status_code = 409


class StoreFailureError(ServiceError):
    """The underlying store rejected or failed an operation."""

    status_code = 500


__all__ = [
    "AlreadyExistsError",
    "InvalidArgumentError",
    "NotFoundError",
    "ServiceError",
    "StoreFailureError",
]
