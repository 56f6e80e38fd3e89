"""
Decide how the value half of a key=value pair becomes a body field.
"""
import json
import logging
import re
import unicodedata
from enum import Enum
from typing import Any

from ..errors import UsageError, quoted
from ..schemas import Format


logger = logging.getLogger(__name__)

_JSON_NUMBER = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?")
_JSON_LITERALS = {"true", "false", "null"}


class Classification(str, Enum):
    ALREADY_JSON = "already_json"
    NEEDS_QUOTING = "needs_quoting"
    FILE = "file"
    RAW_PASSTHROUGH = "raw_passthrough"


def _is_json_scalar(value: str) -> bool:
    return value in _JSON_LITERALS or _JSON_NUMBER.fullmatch(value) is not None


def _has_letter_or_punct(value: str) -> bool:
    return any(ch.isalpha() or unicodedata.category(ch).startswith("P") for ch in value)


def classify(value: str, fmt: Format | None = None) -> Classification:
    """Classify a raw value literal. Pure; never raises."""
    if value.startswith("@"):
        return Classification.FILE
    if fmt is not None and fmt != Format.JSON:
        return Classification.RAW_PASSTHROUGH
    if value.startswith(("{", "[", '"')):
        return Classification.ALREADY_JSON
    if _is_json_scalar(value):
        return Classification.ALREADY_JSON
    if _has_letter_or_punct(value):
        return Classification.NEEDS_QUOTING
    return Classification.ALREADY_JSON


def _reject_constant(name: str):
    raise UsageError(f"invalid JSON value {quoted(name)}")


def loads(text: str, raw: str | None = None) -> Any:
    """Parse a JSON document, reporting failures as usage errors."""
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise UsageError(f"invalid JSON value {quoted(raw if raw is not None else text)}: {e.msg}") from e


def interpret(value: str, fmt: Format | None = None) -> tuple[Classification, Any]:
    """
    Turn a value literal into what gets stored on the Draft.

    Returns:
        tuple: the classification and the file path (FILE), the raw string
        (RAW_PASSTHROUGH) or the parsed JSON value (otherwise)

    Raises:
        UsageError: If the value is not valid JSON after optional quoting
    """
    kind = classify(value, fmt)
    logger.debug(f"Value {value!r} classified as {kind.value}")

    if kind is Classification.FILE:
        return kind, value[1:]
    if kind is Classification.RAW_PASSTHROUGH:
        return kind, value
    if kind is Classification.NEEDS_QUOTING:
        return kind, loads(json.dumps(value, ensure_ascii=False), raw=value)
    return kind, loads(value)
