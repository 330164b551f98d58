"""Server-specific data type definitions."""

from dataclasses import dataclass
from enum import Enum
from typing import List

from common.types import FileRecord


class DeleteOutcome(str, Enum):
    """What a delete request did to the file."""
    DELETED = "deleted"
    UNSHARED = "unshared"


@dataclass(frozen=True)
class FileList:
    """
    One page of files visible to a user.
    """
    documents: List[FileRecord]
    total: int


@dataclass(frozen=True)
class VerifiedSession:
    """Session created from an email one-time code."""
    session_id: str
    secret: str
    account_id: str
