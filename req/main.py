import logging
import sys
from typing import BinaryIO, Sequence

import requests

from .errors import ReqError
from .infra.emitter import emit
from .parsing.args import parse_args
from .schemas import Environment


logger = logging.getLogger(__name__)

USAGE = (
    "Usage: req [--host] [--path] [--header] [--auth] [--verbose] [--scheme] "
    "<method> <path> [<path> ...] [--] [<key>=<value> ...]"
)


def configure_logging(level_name: str) -> None:
    """Send log records to stderr so stdout carries only the response."""
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        level = logging.ERROR
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _print(out: BinaryIO, message: str) -> None:
    out.write(f"{message}\n".encode("utf-8"))
    out.flush()


def run(
    argv: Sequence[str],
    environment: Environment | None = None,
    out: BinaryIO | None = None,
    session: requests.Session | None = None,
) -> int:
    """
    Run one invocation of the tool.

    Args:
        argv: Arguments after the program name
        environment: Startup defaults; read from os.environ when omitted
        out: Binary stream for the response (stdout by default)
        session: Transport session; a fresh one is opened when omitted

    Returns:
        int: Process exit status, 0 on success and 1 on any error
    """
    out = out or sys.stdout.buffer
    if len(argv) <= 1:
        _print(out, USAGE)
        return 1

    try:
        if environment is None:
            environment = Environment.from_env()
        draft = parse_args(argv, environment.new_draft())
        if session is not None:
            emit(draft, session, out)
        else:
            with requests.Session() as session:
                emit(draft, session, out)

    except ReqError as e:
        logger.debug(f"Exiting on {type(e).__name__}: {e}")
        _print(out, str(e))
        return 1

    out.flush()
    return 0


def main() -> None:
    """Console entry point."""
    argv = sys.argv[1:]
    if len(argv) <= 1:
        raise SystemExit(run(argv))

    try:
        environment = Environment.from_env()
    except ReqError as e:
        _print(sys.stdout.buffer, str(e))
        raise SystemExit(1)

    configure_logging(environment.log_level)
    raise SystemExit(run(argv, environment))


if __name__ == "__main__":
    main()
