"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal

from common.constants import DEFAULT_SORT


@dataclass(frozen=True)
class SignUpCommand:
    """Create an account and request a sign-in code."""

    full_name: str
    email: str
    command: Literal["sign-up"] = "sign-up"


@dataclass(frozen=True)
class SignInCommand:
    """Request a sign-in code for an existing account."""

    email: str
    command: Literal["sign-in"] = "sign-in"


@dataclass(frozen=True)
class VerifyCommand:
    """Exchange an emailed code for a session."""

    account_id: str
    code: str
    command: Literal["verify"] = "verify"


@dataclass(frozen=True)
class SignOutCommand:
    command: Literal["sign-out"] = "sign-out"


@dataclass(frozen=True)
class WhoAmICommand:
    command: Literal["whoami"] = "whoami"


@dataclass(frozen=True)
class UploadCommand:
    """Upload local files."""

    file_paths: tuple[str, ...]
    command: Literal["upload"] = "upload"


@dataclass(frozen=True)
class ListCommand:
    """
    List files.

    view is None when the user did not name one; the handler then lists
    the REPL's current location.
    """

    view: str | None = None
    query: str | None = None
    sort: str = DEFAULT_SORT
    limit: int | None = None
    command: Literal["list"] = "list"


@dataclass(frozen=True)
class RenameCommand:
    file_id: str
    name: str
    command: Literal["rename"] = "rename"


@dataclass(frozen=True)
class ShareCommand:
    """Replace the list of emails a file is shared with."""

    file_id: str
    emails: tuple[str, ...]
    command: Literal["share"] = "share"


@dataclass(frozen=True)
class DeleteCommand:
    file_id: str
    bucket_file_id: str | None = None
    command: Literal["delete"] = "delete"


@dataclass(frozen=True)
class UsageCommand:
    command: Literal["usage"] = "usage"


@dataclass(frozen=True)
class SearchCommand:
    command: Literal["search"] = "search"


@dataclass(frozen=True)
class WhereCommand:
    command: Literal["where"] = "where"


CommandRequest = (
    SignUpCommand
    | SignInCommand
    | VerifyCommand
    | SignOutCommand
    | WhoAmICommand
    | UploadCommand
    | ListCommand
    | RenameCommand
    | ShareCommand
    | DeleteCommand
    | UsageCommand
    | SearchCommand
    | WhereCommand
)
