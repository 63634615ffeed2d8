"""Schemas for the commenter service."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class CommenterState(str, Enum):
    """Lifecycle of a Commenter session."""

    UNINITIALIZED = "uninitialized"
    HYDRATED = "hydrated"
    READY = "ready"


class PendingComment(BaseModel):
    """A lint finding in new-file coordinates, not yet mapped to a position."""

    model_config = ConfigDict(frozen=True)

    file: str
    line: int
    body: str


class BatchResult(BaseModel):
    """Outcome counts of a batch run."""

    processed: int = 0
    posted: int = 0
    skipped: int = 0
