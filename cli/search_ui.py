"""Interactive search prompt: debounced lookups with a results dropdown."""

from typing import Any, Dict, List, Optional, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.key_binding import KeyBindings

from common.logging_config import get_logger
from cli.constants import SEARCH_PROMPT_TEXT, STYLE
from cli.location import Location
from cli.search import SearchController, SearchState
from cli.server_client import ServerClient
from cli.utils import format_timestamp

logger = get_logger(__name__)

SEARCH_HINT = " Type to search file names. Enter opens the highlighted result, Tab moves, Esc closes."


def toolbar_fragments(controller: SearchController, highlighted: int = 0) -> List[Tuple[str, str]]:
    """
    Formatted text for the dropdown under the search prompt.

    Args:
        controller: Search state to render
        highlighted: Index of the result Enter would open

    Returns:
        prompt_toolkit (style, text) fragments
    """
    if controller.state == SearchState.LOADING:
        return [("class:toolbar", " Searching...")]
    if controller.state == SearchState.SHOWING_EMPTY:
        return [("class:search-empty", " No results")]
    if controller.state == SearchState.SHOWING_RESULTS:
        fragments = []
        for i, record in enumerate(controller.visible_results):
            marker = ">" if i == highlighted else " "
            line = (
                f"{marker} {record['name']}  [{record['type']}]  "
                f"{format_timestamp(record.get('created_at'))}"
            )
            if i:
                fragments.append(("", "\n"))
            fragments.append(("class:search-result", line))
        return fragments
    if controller.state == SearchState.DEBOUNCING:
        return [("class:toolbar", " ...")]
    return [("class:toolbar", SEARCH_HINT)]


def highlighted_record(controller: SearchController, highlighted: int) -> Optional[Dict[str, Any]]:
    """Record Enter would open, or None when no results are on screen."""
    results = controller.visible_results
    if not results:
        return None
    return results[highlighted % len(results)]


async def run_search(client: ServerClient, location: Location) -> Optional[Dict[str, Any]]:
    """
    Run the search prompt until a result is opened or the prompt is left.

    Opening a result moves location to the listing view of its type with
    the typed text as the query.

    Returns:
        The opened file record, or None
    """
    highlighted = 0
    session: PromptSession = PromptSession(style=STYLE)

    def on_change() -> None:
        nonlocal highlighted
        highlighted = 0
        session.app.invalidate()

    controller = SearchController(
        client.search_files,
        location,
        debounce_seconds=client.config.get_search_debounce_seconds(),
        on_change=on_change,
    )

    bindings = KeyBindings()

    @bindings.add("enter")
    def _open(event) -> None:
        record = highlighted_record(controller, highlighted)
        if record is None:
            if controller.state not in (SearchState.DEBOUNCING, SearchState.LOADING):
                event.app.exit(result=None)
            return
        controller.select(record)
        event.app.exit(result=record)

    @bindings.add("tab")
    @bindings.add("down")
    def _next(event) -> None:
        nonlocal highlighted
        if controller.visible_results:
            highlighted = (highlighted + 1) % len(controller.visible_results)

    @bindings.add("s-tab")
    @bindings.add("up")
    def _previous(event) -> None:
        nonlocal highlighted
        if controller.visible_results:
            highlighted = (highlighted - 1) % len(controller.visible_results)

    @bindings.add("escape", eager=True)
    def _close(event) -> None:
        event.app.exit(result=None)

    def on_text_changed(buffer) -> None:
        controller.on_input(buffer.text)

    session.default_buffer.on_text_changed += on_text_changed

    try:
        return await session.prompt_async(
            [("class:prompt", SEARCH_PROMPT_TEXT)],
            key_bindings=bindings,
            bottom_toolbar=lambda: toolbar_fragments(controller, highlighted),
        )
    except (KeyboardInterrupt, EOFError):
        return None
    finally:
        controller.close()
        logger.debug(f"Search prompt closed at {location}")
