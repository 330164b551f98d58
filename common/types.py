"""Shared data type definitions (FileRecord, User, SpaceUsageReport)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from common.constants import FILE_TYPES


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a backend ISO 8601 timestamp.

    Args:
        value: Timestamp string such as "2024-05-01T10:00:00.000+00:00"

    Returns:
        Timezone-aware datetime, or None when value is empty
    """
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


@dataclass(frozen=True)
class User:
    """
    A registered user, stored in the users collection.
    """
    user_id: str
    account_id: str
    full_name: str
    email: str
    avatar_url: str = ""

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "User":
        return cls(
            user_id=doc["$id"],
            account_id=doc.get("accountId", ""),
            full_name=doc.get("fullName", ""),
            email=doc.get("email", ""),
            avatar_url=doc.get("avatar") or "",
        )


@dataclass(frozen=True)
class FileRecord:
    """
    Metadata document describing one stored file.

    The owner attribute comes back from the backend either as a plain user
    id or as the expanded user document; owner_email is only known in the
    second case.
    """
    file_id: str
    owner_id: str
    account_id: str
    name: str
    type: str
    extension: str
    url: str
    size: int
    bucket_file_id: str
    shared_with: Tuple[str, ...] = ()
    owner_email: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "FileRecord":
        owner = doc.get("owner")
        if isinstance(owner, dict):
            owner_id = owner.get("$id", "")
            owner_email = owner.get("email")
        else:
            owner_id = owner or ""
            owner_email = None

        return cls(
            file_id=doc["$id"],
            owner_id=owner_id,
            account_id=doc.get("accountId", ""),
            name=doc.get("name", ""),
            type=doc.get("type", "other"),
            extension=doc.get("extension", ""),
            url=doc.get("url", ""),
            size=int(doc.get("size") or 0),
            bucket_file_id=doc.get("bucketFileId", ""),
            shared_with=tuple(doc.get("users") or ()),
            owner_email=owner_email,
            created_at=parse_timestamp(doc.get("$createdAt")),
            updated_at=parse_timestamp(doc.get("$updatedAt")),
        )


@dataclass
class SpaceBucket:
    """Bytes used by one file type and its most recent modification."""
    size: int = 0
    latest_date: Optional[datetime] = None


def _empty_buckets() -> Dict[str, SpaceBucket]:
    return {file_type: SpaceBucket() for file_type in FILE_TYPES}


@dataclass
class SpaceUsageReport:
    """
    Per-type storage usage for one user.
    """
    per_type: Dict[str, SpaceBucket] = field(default_factory=_empty_buckets)
    used: int = 0
    all: int = 0
