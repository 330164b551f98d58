"""Project-wide constants shared by the server and the CLI."""

FILE_TYPES: tuple[str, ...] = ("document", "image", "video", "audio", "other")

DEFAULT_SORT: str = "$createdAt-desc"

TOTAL_CAPACITY_BYTES: int = 2 * 1024 * 1024 * 1024  # 2 GiB bucket quota

SESSION_COOKIE_NAME: str = "appwrite-session"

SEARCH_DEBOUNCE_MS: int = 300

SEARCH_RESULT_LIMIT: int = 10

# Listing views a search result navigates to, keyed by file type.
TYPE_ROUTES: dict[str, str] = {
    "document": "/documents",
    "image": "/images",
    "video": "/media",
    "audio": "/media",
    "other": "/others",
}
