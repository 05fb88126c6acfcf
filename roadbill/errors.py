"""Exceptions raised by the bill store and services.

Route handlers and CLI menus map these to user-facing responses:
``BillNotFoundError`` to 404, ``ValidationError`` to 400 and
``StorageError`` to a generic 500.
"""


class RoadbillError(Exception):
    """Base class for all application errors."""


class BillNotFoundError(RoadbillError, LookupError):
    def __init__(self, bill_id: str) -> None:
        super().__init__(f"Bill not found: {bill_id}")
        self.bill_id = bill_id


class ValidationError(RoadbillError, ValueError):
    def __init__(self, message: str, field: str = "") -> None:
        super().__init__(message)
        self.field = field


class StorageError(RoadbillError):
    """The underlying collection could not be read or written."""


class GenerationError(RoadbillError):
    """A bill number could not be generated."""
