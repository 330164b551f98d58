"""Custom completer for SkyBox CLI."""

from typing import Iterable

from prompt_toolkit.completion import Completer, Completion, PathCompleter
from prompt_toolkit.document import Document

from cli.constants import COMMANDS, SORT_KEYS, VIEWS

LIST_OPTIONS = ["--query", "--sort", "--limit"]


class SkyBoxCompleter(Completer):
    """
    Custom completer that provides:
    - Command name completion for the first token
    - Local path completion for 'upload' arguments
    - View, option and sort key completion for 'list'
    """

    def __init__(self):
        self._paths = PathCompleter(expanduser=True)

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        text = document.text_before_cursor
        tokens = text.split()

        is_typing_new_token = text.endswith(" ") or not tokens

        if not tokens or (len(tokens) == 1 and not is_typing_new_token):
            yield from self._complete_words(COMMANDS, tokens[0] if tokens else "")
            return

        command = tokens[0].lower()
        current_word = "" if is_typing_new_token else tokens[-1]

        if command == "upload":
            yield from self._complete_paths(current_word, complete_event)
        elif command == "list":
            previous = tokens[-1] if is_typing_new_token else tokens[-2]
            if previous == "--sort":
                yield from self._complete_words(SORT_KEYS, current_word)
            elif previous in ("--query", "--limit"):
                return
            elif current_word.startswith("-"):
                yield from self._complete_words(LIST_OPTIONS, current_word)
            else:
                yield from self._complete_words(VIEWS + LIST_OPTIONS, current_word)

    def _complete_words(self, words: Iterable[str], partial: str) -> Iterable[Completion]:
        """Complete words matching the partial input."""
        partial_lower = partial.lower()
        for word in words:
            if word.lower().startswith(partial_lower):
                yield Completion(word, start_position=-len(partial))

    def _complete_paths(self, partial: str, complete_event) -> Iterable[Completion]:
        """Complete local file paths for the word under the cursor."""
        yield from self._paths.get_completions(Document(partial), complete_event)
