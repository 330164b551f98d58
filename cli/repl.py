"""REPL with prompt_toolkit for user interaction."""

import os
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from common.logging_config import get_logger
from cli.commands import (
    get_location,
    handle_delete,
    handle_list,
    handle_rename,
    handle_search,
    handle_share,
    handle_sign_in,
    handle_sign_out,
    handle_sign_up,
    handle_upload,
    handle_usage,
    handle_verify,
    handle_where,
    handle_whoami,
)
from cli.completer import SkyBoxCompleter
from cli.constants import (
    HELP_TEXT,
    LOGO,
    PROMPT_TEXT,
    STYLE,
    WELCOME_HELP,
    WELCOME_TITLE,
)
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
from cli.parser import ParseError, parse_command

logger = get_logger(__name__)


def clear_screen() -> None:
    """Clear the terminal screen (cross-platform)."""
    if sys.platform == "win32":
        os.system("cls")
    else:
        os.system("clear")


def show_welcome() -> None:
    """Display SkyBox logo with ANSI colors and the welcome text."""
    print(LOGO)
    print(WELCOME_TITLE)
    print(WELCOME_HELP)


def dispatch_command(cmd_obj) -> str:
    """Dispatch parsed command to appropriate handler."""
    if isinstance(cmd_obj, SignUpCommand):
        return handle_sign_up(cmd_obj)
    elif isinstance(cmd_obj, SignInCommand):
        return handle_sign_in(cmd_obj)
    elif isinstance(cmd_obj, VerifyCommand):
        return handle_verify(cmd_obj)
    elif isinstance(cmd_obj, SignOutCommand):
        return handle_sign_out(cmd_obj)
    elif isinstance(cmd_obj, WhoAmICommand):
        return handle_whoami(cmd_obj)
    elif isinstance(cmd_obj, UploadCommand):
        return handle_upload(cmd_obj)
    elif isinstance(cmd_obj, ListCommand):
        return handle_list(cmd_obj)
    elif isinstance(cmd_obj, RenameCommand):
        return handle_rename(cmd_obj)
    elif isinstance(cmd_obj, ShareCommand):
        return handle_share(cmd_obj)
    elif isinstance(cmd_obj, DeleteCommand):
        return handle_delete(cmd_obj)
    elif isinstance(cmd_obj, UsageCommand):
        return handle_usage(cmd_obj)
    elif isinstance(cmd_obj, SearchCommand):
        return handle_search(cmd_obj)
    elif isinstance(cmd_obj, WhereCommand):
        return handle_where(cmd_obj)
    else:
        return f"Unknown command type: {type(cmd_obj)}"


def repl_loop() -> None:
    """Start interactive REPL with prompt_toolkit."""
    history = InMemoryHistory()
    session: PromptSession = PromptSession(
        completer=SkyBoxCompleter(), history=history, style=STYLE
    )

    clear_screen()
    show_welcome()

    while True:
        try:
            user_input = session.prompt(
                [
                    ("class:prompt", PROMPT_TEXT),
                    ("class:location", f" {get_location()}"),
                    ("class:prompt", "> "),
                ]
            )

            if not user_input.strip():
                continue

            if user_input.strip() == "exit":
                print("Goodbye!")
                break

            if user_input.strip() == "help":
                print(HELP_TEXT)
                continue

            if user_input.strip() == "clear":
                clear_screen()
                show_welcome()
                continue

            cmd_obj = parse_command(user_input)
            logger.debug(f"Parsed command: {cmd_obj}")
            result = dispatch_command(cmd_obj)
            print(result)

        except ParseError as e:
            print(f"Error: {e}")
        except KeyboardInterrupt:
            continue
        except EOFError:
            print("\nGoodbye!")
            break
