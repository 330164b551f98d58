"""Predicate builder for listing a user's files."""

from typing import List, Optional, Sequence

from common.constants import DEFAULT_SORT
from common.types import User
from server.backend.query import Query


def parse_sort(sort: str) -> Query:
    """
    Turn a "<key>-<direction>" sort spec into an order predicate.

    Only "asc" sorts ascending; a missing or unknown direction sorts
    descending on the key.
    """
    sort_by, _, order_by = sort.partition("-")
    if order_by == "asc":
        return Query.order_asc(sort_by)
    return Query.order_desc(sort_by)


def build_file_queries(
    current_user: User,
    types: Sequence[str] = (),
    search_text: str = "",
    sort: Optional[str] = DEFAULT_SORT,
    limit: Optional[int] = None,
) -> List[Query]:
    """
    Build the list-documents predicates for the files a user can see.

    The ownership predicate always comes first: files the user owns or
    that were shared with the user's email.

    Args:
        current_user: Signed-in user
        types: File types to keep (empty keeps every type)
        search_text: Substring the file name must contain
        sort: Sort spec such as "$createdAt-desc" or "size-asc"
        limit: Maximum number of documents to return

    Returns:
        Ordered list of Query predicates
    """
    queries = [
        Query.or_([
            Query.equal("owner", [current_user.user_id]),
            Query.contains("users", [current_user.email]),
        ])
    ]

    if types:
        queries.append(Query.equal("type", list(types)))
    if search_text:
        queries.append(Query.contains("name", search_text))
    if limit is not None:
        queries.append(Query.limit(limit))
    if sort:
        queries.append(parse_sort(sort))

    return queries
