"""
Body encoding: JSON, URL-encoded form, or multipart/form-data.
"""
import json
import logging
import os
from enum import Enum
from typing import BinaryIO, Callable

from urllib3.filepost import encode_multipart_formdata

from ..errors import AttachmentError, quoted
from ..schemas import Draft, EncodedBody, Format
from .url import encode_fields
from .values import format_json_float, stringify


logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
FILE_CONTENT_TYPE = "application/octet-stream"

Opener = Callable[[str], BinaryIO]


class BodyKind(str, Enum):
    NONE = "none"
    JSON = "json"
    FORM = "form"
    MULTIPART = "multipart"


def _open_file(path: str) -> BinaryIO:
    return open(path, "rb")


def choose_body_kind(draft: Draft) -> BodyKind:
    """Attachments force multipart; GET or no fields means no body."""
    if draft.files:
        return BodyKind.MULTIPART
    if not draft.body or draft.is_get:
        return BodyKind.NONE
    if draft.format is Format.FORM:
        return BodyKind.FORM
    return BodyKind.JSON


def dumps(value) -> str:
    """Compact JSON with sorted keys; floats use format_json_float."""
    if isinstance(value, float):
        return format_json_float(value)
    if isinstance(value, dict):
        members = ",".join(f"{json.dumps(key, ensure_ascii=False)}:{dumps(value[key])}" for key in sorted(value))
        return "{" + members + "}"
    if isinstance(value, list):
        return "[" + ",".join(dumps(item) for item in value) + "]"
    return json.dumps(value, ensure_ascii=False)


def encode_json(fields: dict) -> EncodedBody:
    content = dumps(fields)
    return EncodedBody(content=content.encode("utf-8"), content_type=JSON_CONTENT_TYPE)


def encode_form(fields: dict) -> EncodedBody:
    return EncodedBody(content=encode_fields(fields).encode("utf-8"), content_type=FORM_CONTENT_TYPE)


def _read_attachment(path: str, opener: Opener) -> bytes:
    try:
        with opener(path) as handle:
            return handle.read()
    except OSError as e:
        logger.warning(f"Failed to read attachment {path}: {e}")
        raise AttachmentError(f"cannot read attachment {quoted(path)}: {e.strerror or e}") from e


def encode_multipart(files: dict[str, str], fields: dict, opener: Opener | None = None) -> EncodedBody:
    """
    Encode attachments and plain fields as one multipart/form-data body.

    Args:
        files: Field name to file path
        fields: Field name to JSON value, sent as text parts
        opener: Returns a readable binary stream for a path

    Returns:
        EncodedBody: The body and its Content-Type, boundary included

    Raises:
        AttachmentError: If any attachment cannot be read; nothing is returned
    """
    opener = opener or _open_file
    parts = []
    for key in sorted(files):
        path = files[key]
        data = _read_attachment(path, opener)
        parts.append((key, (os.path.basename(path), data, FILE_CONTENT_TYPE)))
        logger.debug(f"Attached {path} as {key} ({len(data)} bytes)")

    for key in sorted(fields):
        parts.append((key, stringify(fields[key])))

    content, content_type = encode_multipart_formdata(parts)
    return EncodedBody(content=content, content_type=content_type)


def encode_body(draft: Draft, opener: Opener | None = None) -> EncodedBody:
    """Pick the body encoding for the Draft and produce the wire bytes."""
    kind = choose_body_kind(draft)
    logger.debug(f"Body encoding: {kind.value}")

    if kind is BodyKind.MULTIPART:
        return encode_multipart(draft.files, draft.body, opener)
    if kind is BodyKind.FORM:
        return encode_form(draft.body)
    if kind is BodyKind.JSON:
        return encode_json(draft.body)
    return EncodedBody()
