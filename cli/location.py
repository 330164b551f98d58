"""Current view of the CLI: a listing path plus query parameters."""

from typing import Dict, List, Optional
from urllib.parse import parse_qsl, urlencode

from common.constants import TYPE_ROUTES
from common.logging_config import get_logger

logger = get_logger(__name__)

VIEW_TYPES: Dict[str, List[str]] = {
    "/": [],
    "/documents": ["document"],
    "/images": ["image"],
    "/media": ["video", "audio"],
    "/others": ["other"],
}


def route_for_type(file_type: str) -> str:
    """Listing view that shows files of the given type."""
    return TYPE_ROUTES.get(file_type, TYPE_ROUTES["other"])


def normalize_view(view: str) -> Optional[str]:
    """
    Map a user-typed view name ("images", "/media") to a known path.

    Returns:
        Path such as "/images", or None when the view is unknown
    """
    path = "/" + view.strip().strip("/")
    return path if path in VIEW_TYPES else None


class Location:
    """
    Navigation state shared by the REPL and the search controller.

    Commands such as 'list' read the path and the 'query' parameter; the
    search controller writes them.
    """

    def __init__(self, path: str = "/", params: Optional[Dict[str, str]] = None):
        self.path = path
        self.params: Dict[str, str] = dict(params or {})

    @classmethod
    def parse(cls, url: str) -> "Location":
        path, _, query_string = url.partition("?")
        return cls(path or "/", dict(parse_qsl(query_string)))

    def navigate(self, path: str, query: Optional[str] = None) -> None:
        self.path = path
        self.params = {"query": query} if query else {}
        logger.debug(f"Navigated to {self}")

    def clear_query(self) -> None:
        """Drop the search query parameter, staying on the current path."""
        if self.params.pop("query", None) is not None:
            logger.debug(f"Cleared search query, now at {self}")

    @property
    def query(self) -> str:
        return self.params.get("query", "")

    def types(self) -> List[str]:
        """File types listed by the current view."""
        return list(VIEW_TYPES.get(self.path, []))

    def __str__(self) -> str:
        if not self.params:
            return self.path
        return f"{self.path}?{urlencode(self.params)}"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Location):
            return NotImplemented
        return self.path == other.path and self.params == other.params
