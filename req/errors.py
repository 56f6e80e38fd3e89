"""
Error types raised while building and sending a request.

Every failure is terminal for the process: the CLI prints the message
and exits with status 1.
"""
import json


class ReqError(Exception):
    """Base class for all errors reported to the user."""


class UsageError(ReqError, ValueError):
    """Malformed command line: unknown flag, bad pair, bad header, bad JSON."""


class AttachmentError(ReqError, OSError):
    """A file referenced with key=@path could not be opened or read."""


class TransportError(ReqError):
    """The HTTP round trip failed (DNS, connect, TLS, timeout)."""


def quoted(value: str) -> str:
    """Render a user-supplied token double-quoted for error messages."""
    return json.dumps(value, ensure_ascii=False)
