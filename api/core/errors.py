"""
Error taxonomy shared by repositories and the HTTP layer.
"""

from __future__ import annotations


class DataAccessError(RuntimeError):
    """
    Any database, connectivity or timeout failure.

    The message is for server-side logs only; it is never sent to clients.
    """


class ForeignKeyViolation(DataAccessError):
    """
    A referenced row does not exist, or a referencing row still exists.

    Unlike its parent, the message is client-safe.
    """

    def __init__(self, message: str, *, constraint: str | None = None) -> None:
        super().__init__(message)
        self.constraint = constraint


class NotFound(LookupError):
    def __init__(self, entity: str) -> None:
        super().__init__(f"{entity} not found")
        self.entity = entity


class ValidationError(ValueError):
    def __init__(self, details: list[dict] | None = None) -> None:
        super().__init__("Invalid request body")
        self.details = details or []
