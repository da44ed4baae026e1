"""Typed failures raised by the walk core.

Every error carries a kind plus the offending field and entity id so the HTTP
layer can build a response without parsing messages.
"""
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class PetTrailError(Exception):
    kind: ErrorKind = ErrorKind.INTERNAL_ERROR
    message: str = "An unexpected error occurred."
    field: Optional[str] = None
    issue: Optional[str] = None

    def __init__(self, entity_id: Any = None, message: Optional[str] = None):
        self.entity_id = entity_id
        if message is not None:
            self.message = message
        super().__init__(self.message if entity_id is None else f"{self.message}: {entity_id}")

    def details(self) -> list[dict]:
        if self.field is None:
            return []
        return [{"field": self.field, "issue": self.issue or "invalid"}]


class PetNotFound(PetTrailError):
    kind = ErrorKind.NOT_FOUND
    message = "pet not found"
    field = "petId"
    issue = "unknown"


class WalkNotFound(PetTrailError):
    kind = ErrorKind.NOT_FOUND
    message = "walk not found"
    field = "id"
    issue = "unknown"


class ActiveWalkExists(PetTrailError):
    kind = ErrorKind.CONFLICT
    message = "active walk already exists"


class WalkFinished(PetTrailError):
    kind = ErrorKind.CONFLICT
    message = "walk already finished"


class InvalidPayload(PetTrailError):
    kind = ErrorKind.VALIDATION_ERROR
    message = "Invalid payload."

    def __init__(self, message: str, field: Optional[str] = None, issue: Optional[str] = None):
        self.field = field
        self.issue = issue
        super().__init__(None, message)


class NoActiveWalk(PetTrailError):
    kind = ErrorKind.NOT_FOUND
    message = "No active walk found for this pet"
