"""Utility helper functions for the server."""

from typing import List, Optional

from server import config


def construct_file_url(bucket_file_id: str) -> str:
    """
    Build the public view URL of a stored blob.

    Args:
        bucket_file_id: Id of the blob in the configured bucket

    Returns:
        URL such as "{endpoint}/storage/buckets/{bucket}/files/{id}/view?project={project}"
    """
    return (
        f"{config.APPWRITE_ENDPOINT}/storage/buckets/{config.APPWRITE_BUCKET}"
        f"/files/{bucket_file_id}/view?project={config.APPWRITE_PROJECT}"
    )


def construct_download_url(bucket_file_id: str) -> str:
    """Build the download URL of a stored blob."""
    return (
        f"{config.APPWRITE_ENDPOINT}/storage/buckets/{config.APPWRITE_BUCKET}"
        f"/files/{bucket_file_id}/download?project={config.APPWRITE_PROJECT}"
    )


def parse_types(types_str: Optional[str]) -> List[str]:
    """
    Parse comma-separated file types into a list.

    Args:
        types_str: Comma-separated types (e.g., "document,image")

    Returns:
        List of trimmed, lower-cased type names
    """
    if not types_str:
        return []
    return [t.strip().lower() for t in types_str.split(',') if t.strip()]
