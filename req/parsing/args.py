"""
Command line state machine.

Tokens are consumed in four states:

    OPTIONS     global flags, until the first token not starting with "-",
                which becomes the method
    FLAG_VALUE  the token after a flag that takes a value
    PATH        path segments (or the host, if none is known yet) until "--"
    PAIRS       key=value body fields and key=@path attachments
"""
import logging
from enum import Enum
from typing import Callable, Iterable

from ..errors import UsageError, quoted
from ..schemas import Draft, Format, split_path
from .classify import Classification, interpret


logger = logging.getLogger(__name__)

PAIRS_SEPARATOR = "--"

_DEBUG_FLAGS = {"-v", "--verbose", "-d", "--debug"}


class State(str, Enum):
    OPTIONS = "options"
    FLAG_VALUE = "flag_value"
    PATH = "path"
    PAIRS = "pairs"


def _set_scheme(draft: Draft, value: str) -> None:
    draft.scheme = value


def _set_host(draft: Draft, value: str) -> None:
    draft.host = value


def _set_format(draft: Draft, value: str) -> None:
    draft.format = Format.parse(value)


def _set_path(draft: Draft, value: str) -> None:
    draft.path = split_path(value)


def _add_header(draft: Draft, value: str) -> None:
    draft.add_header(value)


def _set_auth(draft: Draft, value: str) -> None:
    draft.set_header("Authorization", value)


VALUE_FLAGS: dict[str, Callable[[Draft, str], None]] = {
    "--scheme": _set_scheme,
    "--host": _set_host,
    "--format": _set_format,
    "--path": _set_path,
    "--head": _add_header,
    "--header": _add_header,
    "--auth": _set_auth,
}


class ArgumentParser:
    """Feeds tokens one at a time into a Draft."""

    def __init__(self, draft: Draft):
        self.draft = draft
        self.state = State.OPTIONS
        self.pending_flag: str | None = None

    def feed(self, token: str) -> State:
        """Apply one token and move to the next state."""
        if self.state is State.OPTIONS:
            self.state = self._option(token)
        elif self.state is State.FLAG_VALUE:
            self.state = self._flag_value(token)
        elif self.state is State.PATH:
            self.state = self._path(token)
        else:
            self.state = self._pair(token)
        return self.state

    def finish(self) -> None:
        """Check the parser did not stop waiting for a flag value."""
        if self.state is State.FLAG_VALUE:
            raise UsageError(f"no {self.pending_flag} value")

    def _option(self, token: str) -> State:
        if token in _DEBUG_FLAGS:
            self.draft.debug = True
            return State.OPTIONS
        if token in VALUE_FLAGS:
            self.pending_flag = token
            return State.FLAG_VALUE
        if token.startswith("-"):
            raise UsageError(f"unknown flag {quoted(token)}")
        self.draft.method = token
        logger.debug(f"Method set to {self.draft.method}")
        return State.PATH

    def _flag_value(self, token: str) -> State:
        flag = self.pending_flag
        VALUE_FLAGS[flag](self.draft, token)
        logger.debug(f"Applied {flag} {token!r}")
        self.pending_flag = None
        return State.OPTIONS

    def _path(self, token: str) -> State:
        if token == PAIRS_SEPARATOR:
            return State.PAIRS
        if not self.draft.host:
            self.draft.host = token
        else:
            self.draft.path.append(token)
        return State.PATH

    def _pair(self, token: str) -> State:
        key, sep, value = token.partition("=")
        if not sep:
            raise UsageError(f"key-value pair {quoted(token)} is invalid")

        kind, parsed = interpret(value, self.draft.format)
        if kind is Classification.FILE:
            self.draft.files[key] = parsed
        else:
            self.draft.body[key] = parsed
        return State.PAIRS


def parse_args(tokens: Iterable[str], draft: Draft) -> Draft:
    """
    Parse command line tokens (without the program name) into a Draft.

    Args:
        tokens: Arguments after the program name
        draft: Draft seeded with environment defaults, mutated in place

    Returns:
        Draft: The same draft, for chaining

    Raises:
        UsageError: On the first malformed token
    """
    parser = ArgumentParser(draft)
    for token in tokens:
        parser.feed(token)
    parser.finish()
    return draft
