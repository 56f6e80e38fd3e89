"""
HTTP/1.1 wire renderings of requests and responses for dump mode.
"""
from urllib.parse import urlsplit

import requests

CRLF = "\r\n"

_HTTP_VERSIONS = {9: "HTTP/0.9", 10: "HTTP/1.0", 11: "HTTP/1.1", 20: "HTTP/2"}


def _header_text(value) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def _as_bytes(body) -> bytes:
    if body is None:
        return b""
    if isinstance(body, str):
        return body.encode("utf-8")
    return bytes(body)


def dump_request(prepared: requests.PreparedRequest) -> bytes:
    """Request line, Host, headers, blank line and body, as sent."""
    lines = [f"{prepared.method} {prepared.path_url} HTTP/1.1", f"Host: {urlsplit(prepared.url).netloc}"]
    lines.extend(f"{name}: {_header_text(value)}" for name, value in prepared.headers.items())
    head = CRLF.join(lines) + CRLF + CRLF
    return head.encode("utf-8") + _as_bytes(prepared.body)


def dump_response_head(response: requests.Response) -> bytes:
    """Status line and headers of a response, terminated by a blank line."""
    version = _HTTP_VERSIONS.get(getattr(response.raw, "version", 11), "HTTP/1.1")
    lines = [f"{version} {response.status_code} {response.reason or ''}".rstrip()]
    lines.extend(f"{name}: {value}" for name, value in response.headers.items())
    head = CRLF.join(lines) + CRLF + CRLF
    return head.encode("latin-1", errors="replace")
