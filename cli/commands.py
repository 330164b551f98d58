"""Command handler functions for CLI operations."""

import asyncio
from typing import Optional

from common.logging_config import get_logger
from cli.config import Config
from cli.location import Location
from cli.models import (
    DeleteCommand,
    ListCommand,
    RenameCommand,
    SearchCommand,
    ShareCommand,
    SignInCommand,
    SignOutCommand,
    SignUpCommand,
    UploadCommand,
    UsageCommand,
    VerifyCommand,
    WhereCommand,
    WhoAmICommand,
)
from cli.search_ui import run_search
from cli.server_client import ServerClient

logger = get_logger(__name__)


_client: Optional[ServerClient] = None
_location: Optional[Location] = None


def get_client() -> ServerClient:
    """
    Get or create global ServerClient instance.

    Returns:
        ServerClient instance
    """
    global _client
    if _client is None:
        logger.debug("Creating new ServerClient instance")
        _client = ServerClient(Config())
    return _client


def get_location() -> Location:
    """Current view shared by 'list', 'search' and 'where'."""
    global _location
    if _location is None:
        _location = Location()
    return _location


def set_location(location: Location) -> None:
    """Replace the current view, as when the CLI starts on a given view."""
    global _location
    _location = location


def handle_sign_up(cmd: SignUpCommand, client: Optional[ServerClient] = None) -> str:
    """
    Handle 'sign-up' command.

    Args:
        cmd: SignUpCommand with full name and email
        client: Optional ServerClient for dependency injection (testing)

    Returns:
        Success or error message
    """
    if client is None:
        client = get_client()
    return client.sign_up(cmd.full_name, cmd.email)


def handle_sign_in(cmd: SignInCommand, client: Optional[ServerClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.sign_in(cmd.email)


def handle_verify(cmd: VerifyCommand, client: Optional[ServerClient] = None) -> str:
    """
    Handle 'verify' command.

    On success the session token is stored in the CLI config.
    """
    if client is None:
        client = get_client()
    return client.verify(cmd.account_id, cmd.code)


def handle_sign_out(cmd: SignOutCommand, client: Optional[ServerClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.sign_out()


def handle_whoami(cmd: WhoAmICommand, client: Optional[ServerClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.whoami()


def handle_upload(cmd: UploadCommand, client: Optional[ServerClient] = None) -> str:
    """
    Handle 'upload' command.

    Args:
        cmd: UploadCommand with local file paths
        client: Optional ServerClient for dependency injection (testing)

    Returns:
        One result line per file
    """
    logger.info(f"Executing upload command: {len(cmd.file_paths)} files")
    if client is None:
        client = get_client()
    result = client.upload_files(list(cmd.file_paths))
    logger.debug("Upload command completed")
    return result


def handle_list(
    cmd: ListCommand,
    client: Optional[ServerClient] = None,
    location: Optional[Location] = None,
) -> str:
    """
    Handle 'list' command.

    Naming a view or a query moves the current location there, the way
    following a link would; a bare 'list' lists the current location.

    Args:
        cmd: ListCommand with optional view, query, sort and limit
        client: Optional ServerClient for dependency injection (testing)
        location: Optional Location for dependency injection (testing)

    Returns:
        Formatted list of files
    """
    if client is None:
        client = get_client()
    if location is None:
        location = get_location()

    if cmd.view is not None:
        location.navigate(cmd.view, cmd.query)
    elif cmd.query is not None:
        location.navigate(location.path, cmd.query)

    logger.info(f"Executing list command: location={location} sort={cmd.sort} limit={cmd.limit}")
    result = client.list_files(location.types(), location.query, cmd.sort, cmd.limit)
    logger.debug("List command completed")
    return result


def handle_rename(cmd: RenameCommand, client: Optional[ServerClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.rename_file(cmd.file_id, cmd.name)


def handle_share(cmd: ShareCommand, client: Optional[ServerClient] = None) -> str:
    """
    Handle 'share' command.

    The emails replace the file's current share list; none unshares it.
    """
    if client is None:
        client = get_client()
    return client.share_file(cmd.file_id, list(cmd.emails))


def handle_delete(cmd: DeleteCommand, client: Optional[ServerClient] = None) -> str:
    """
    Handle 'delete' command.

    Args:
        cmd: DeleteCommand with file id and optional blob id
        client: Optional ServerClient for dependency injection (testing)

    Returns:
        Whether the file was deleted or only removed from the user's share list
    """
    logger.info(f"Executing delete command: file_id={cmd.file_id}")
    if client is None:
        client = get_client()
    return client.delete_file(cmd.file_id, cmd.bucket_file_id)


def handle_usage(cmd: UsageCommand, client: Optional[ServerClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.usage()


def handle_where(cmd: WhereCommand, location: Optional[Location] = None) -> str:
    if location is None:
        location = get_location()
    return str(location)


def handle_search(
    cmd: SearchCommand,
    client: Optional[ServerClient] = None,
    location: Optional[Location] = None,
) -> str:
    """
    Handle 'search' command.

    Runs the interactive search prompt until the user picks a result or
    leaves it, then lists the location the search ended on.
    """
    if client is None:
        client = get_client()
    if location is None:
        location = get_location()

    selected = asyncio.run(run_search(client, location))
    if selected is None:
        return f"Search closed. Current view: {location}"

    logger.info(f"Search selected {selected.get('name')!r}, now at {location}")
    listing = client.list_files(location.types(), location.query)
    return f"Opened {location}\n{listing}"
