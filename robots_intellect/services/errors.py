"""Failure kinds raised by the service layer.

Each carries the short human-readable message returned to the caller.
"""

from __future__ import annotations


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(ServiceError):
    status_code = 400


class NotFoundError(ServiceError):
    status_code = 404


ENTRY_NOT_FOUND = "Entry not found"
BAD_REQUEST_BODY = "Bad request body"
