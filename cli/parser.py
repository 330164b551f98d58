"""Command parser for CLI input."""

import shlex

from common.constants import DEFAULT_SORT
from cli.location import normalize_view
from cli.models import (
    CommandRequest,
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


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a CommandRequest object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        CommandRequest object

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    if not tokens:
        raise ParseError("Empty command")

    command_name = tokens[0]
    args = tokens[1:]

    if command_name == "sign-up":
        return _parse_sign_up(args)
    elif command_name == "sign-in":
        return _parse_sign_in(args)
    elif command_name == "verify":
        return _parse_verify(args)
    elif command_name == "sign-out":
        _expect_no_args(command_name, args)
        return SignOutCommand()
    elif command_name == "whoami":
        _expect_no_args(command_name, args)
        return WhoAmICommand()
    elif command_name == "upload":
        return _parse_upload(args)
    elif command_name == "list":
        return _parse_list(args)
    elif command_name == "rename":
        return _parse_rename(args)
    elif command_name == "share":
        return _parse_share(args)
    elif command_name == "delete":
        return _parse_delete(args)
    elif command_name == "usage":
        _expect_no_args(command_name, args)
        return UsageCommand()
    elif command_name == "search":
        _expect_no_args(command_name, args)
        return SearchCommand()
    elif command_name == "where":
        _expect_no_args(command_name, args)
        return WhereCommand()
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _expect_no_args(command_name: str, args: list[str]) -> None:
    if args:
        raise ParseError(f"{command_name} takes no arguments")


def _parse_sign_up(args: list[str]) -> SignUpCommand:
    """Parse 'sign-up <full name> <email>'; the name may span several words."""
    if len(args) < 2:
        raise ParseError("sign-up requires a full name and an email: sign-up <full name> <email>")

    email = args[-1]
    if "@" not in email:
        raise ParseError(f"Invalid email: {email}")

    full_name = " ".join(args[:-1])
    return SignUpCommand(full_name=full_name, email=email)


def _parse_sign_in(args: list[str]) -> SignInCommand:
    if len(args) != 1:
        raise ParseError("sign-in requires exactly 1 argument: <email>")
    if "@" not in args[0]:
        raise ParseError(f"Invalid email: {args[0]}")
    return SignInCommand(email=args[0])


def _parse_verify(args: list[str]) -> VerifyCommand:
    if len(args) != 2:
        raise ParseError("verify requires exactly 2 arguments: <account_id> <code>")
    account_id, code = args
    return VerifyCommand(account_id=account_id, code=code)


def _parse_upload(args: list[str]) -> UploadCommand:
    if not args:
        raise ParseError("upload requires at least one file path")
    return UploadCommand(file_paths=tuple(args))


def _parse_list(args: list[str]) -> ListCommand:
    """Parse 'list [view] [--query text] [--sort key-dir] [--limit n]'."""
    view = None
    query = None
    sort = DEFAULT_SORT
    limit = None

    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("--query", "--sort", "--limit"):
            if i + 1 >= len(args):
                raise ParseError(f"{arg} requires a value")
            value = args[i + 1]
            if arg == "--query":
                query = value
            elif arg == "--sort":
                if "-" not in value:
                    raise ParseError(f"Invalid sort '{value}': expected <field>-<asc|desc>")
                sort = value
            else:
                try:
                    limit = int(value)
                except ValueError:
                    raise ParseError(f"Invalid limit: {value}")
                if limit <= 0:
                    raise ParseError("--limit must be a positive integer")
            i += 2
            continue

        if arg.startswith("--"):
            raise ParseError(f"Unknown option: {arg}")
        if view is not None:
            raise ParseError("list accepts at most one view")

        view = normalize_view(arg)
        if view is None:
            raise ParseError(f"Unknown view: {arg} (expected documents, images, media or others)")
        i += 1

    return ListCommand(view=view, query=query, sort=sort, limit=limit)


def _parse_rename(args: list[str]) -> RenameCommand:
    if len(args) != 2:
        raise ParseError("rename requires exactly 2 arguments: <file_id> <name>")
    file_id, name = args
    if not name.strip():
        raise ParseError("rename requires a non-empty name")
    return RenameCommand(file_id=file_id, name=name)


def _parse_share(args: list[str]) -> ShareCommand:
    """Parse 'share <file_id> [email...]'; no emails unshares the file."""
    if not args:
        raise ParseError("share requires a file id: share <file_id> [email...]")

    emails = tuple(args[1:])
    for email in emails:
        if "@" not in email:
            raise ParseError(f"Invalid email: {email}")

    return ShareCommand(file_id=args[0], emails=emails)


def _parse_delete(args: list[str]) -> DeleteCommand:
    if len(args) not in (1, 2):
        raise ParseError("delete requires 1 or 2 arguments: <file_id> [bucket_file_id]")
    bucket_file_id = args[1] if len(args) > 1 else None
    return DeleteCommand(file_id=args[0], bucket_file_id=bucket_file_id)
