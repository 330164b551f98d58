"""Storage usage accounting per file type."""

import logging
from typing import Iterable

from common.types import FileRecord, SpaceUsageReport, User
from server import config
from server.backend import Query, SessionClient

logger = logging.getLogger(__name__)


def aggregate_space_usage(records: Iterable[FileRecord], capacity: int) -> SpaceUsageReport:
    """
    Sum file sizes per type and track each type's latest modification.

    The result does not depend on the order of records.

    Args:
        records: Files owned by one user
        capacity: Total bytes available to the user

    Returns:
        SpaceUsageReport with all five type buckets present
    """
    report = SpaceUsageReport(all=capacity)

    for record in records:
        bucket = report.per_type.get(record.type)
        if bucket is None:
            bucket = report.per_type["other"]

        bucket.size += record.size
        report.used += record.size

        if record.updated_at is not None and (
            bucket.latest_date is None or record.updated_at > bucket.latest_date
        ):
            bucket.latest_date = record.updated_at

    return report


def usage_percentage(used: int, total: int) -> float:
    """Percentage of capacity used, rounded to two decimals."""
    if total <= 0:
        return 0.0
    return round(used / total * 100, 2)


class UsageService:
    def __init__(self, session: SessionClient):
        self.databases = session.databases

    async def get_total_space_used(self, current_user: User) -> SpaceUsageReport:
        documents = await self.databases.list_all_documents(
            config.APPWRITE_DATABASE,
            config.APPWRITE_FILES_COLLECTION,
            [Query.equal("owner", [current_user.user_id])],
        )
        records = [FileRecord.from_document(doc) for doc in documents]
        report = aggregate_space_usage(records, config.TOTAL_CAPACITY)
        logger.info(
            f"Computed space usage for user {current_user.user_id}: "
            f"{report.used}/{report.all} bytes across {len(records)} files"
        )
        return report
