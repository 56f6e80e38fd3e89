"""
Turn a finished Draft into a prepared request, send it, and stream the
response back out.
"""
import logging
from typing import BinaryIO

import requests
from requests.exceptions import ConnectionError, RequestException, Timeout
from requests.structures import CaseInsensitiveDict
from urllib3.exceptions import HTTPError as Urllib3Error

from ..encoding.body import Opener, encode_body
from ..encoding.url import compose_url
from ..errors import TransportError, UsageError
from ..schemas import Draft
from .dump import dump_request, dump_response_head


logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


def _wire_text(text: str) -> str | bytes:
    """Header value http.client can send: Latin-1 as is, anything else as UTF-8 bytes."""
    try:
        text.encode("latin-1")
        return text
    except UnicodeEncodeError:
        return text.encode("utf-8")


def build_request(draft: Draft, opener: Opener | None = None) -> requests.PreparedRequest:
    """
    Build the transport-ready request for a Draft.

    The Draft is left untouched; the encoder's Content-Type replaces any
    Content-Type given with --header.

    Raises:
        UsageError: If no method was given or the URL is malformed
        AttachmentError: If an attachment cannot be read
    """
    if not draft.method:
        raise UsageError("no method")

    encoded = encode_body(draft, opener)
    headers = CaseInsensitiveDict({name: _wire_text(value) for name, value in draft.headers.items()})
    if encoded.content_type:
        headers["Content-Type"] = encoded.content_type

    url = compose_url(draft)
    try:
        return requests.Request(method=draft.method, url=url, headers=headers, data=encoded.content).prepare()
    except RequestException as e:
        raise UsageError(str(e)) from e


def send_request(prepared: requests.PreparedRequest, session: requests.Session) -> requests.Response:
    """Send once, no retries; transport failures become TransportError."""
    url = prepared.url
    logger.info(f"Sending {prepared.method} request to: {url}")

    try:
        response = session.send(prepared, stream=True)
        logger.info(f"Response {response.status_code} from {url}")
        return response

    except Timeout as e:
        error_msg = f"Request timeout for {url}: {e}"
        logger.warning(error_msg)
        raise TransportError(error_msg) from e

    except ConnectionError as e:
        error_msg = f"Connection failed to {url}: {e}"
        logger.warning(error_msg)
        raise TransportError(error_msg) from e

    except (RequestException, UnicodeError) as e:
        error_msg = f"Request failed to {url}: {e}"
        logger.warning(error_msg)
        raise TransportError(error_msg) from e


def write_response(response: requests.Response, out: BinaryIO, dump: bool = False) -> None:
    """
    Stream the body to out exactly as received, preceded by status line
    and headers in dump mode. Content-Encoding is not undone.
    """
    if dump:
        out.write(dump_response_head(response))
    try:
        for chunk in response.raw.stream(CHUNK_SIZE, decode_content=False):
            out.write(chunk)
    except (RequestException, Urllib3Error) as e:
        error_msg = f"Reading response from {response.url} failed: {e}"
        logger.warning(error_msg)
        raise TransportError(error_msg) from e
    finally:
        response.close()


def emit(draft: Draft, session: requests.Session, out: BinaryIO, opener: Opener | None = None) -> requests.Response:
    """Build, optionally dump, send and stream one request."""
    prepared = build_request(draft, opener)
    if draft.debug:
        out.write(dump_request(prepared))
        out.flush()
    response = send_request(prepared, session)
    write_response(response, out, dump=draft.debug)
    return response
