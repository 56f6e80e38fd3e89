from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from requests.structures import CaseInsensitiveDict

from ..errors import UsageError, quoted


USER_AGENT = "req-v0.0.1"


def split_path(path: str) -> list[str]:
    """Split a slash-separated path prefix after trimming outer slashes.

    An empty path yields a single empty segment.
    """
    return path.strip("/").split("/")


def _default_headers() -> CaseInsensitiveDict:
    return CaseInsensitiveDict({"User-Agent": USER_AGENT})


class Format(str, Enum):
    """Body encoding requested with --format or REQ_FORMAT."""

    JSON = "json"
    FORM = "form"

    @classmethod
    def parse(cls, value: str) -> "Format":
        try:
            return cls(value)
        except ValueError:
            raise UsageError(f"unknown format {quoted(value)}") from None


class Draft(BaseModel):
    """Request being assembled from the environment and the command line."""

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    scheme: str = Field(default="http")
    host: str = Field(default="")
    method: str = Field(default="")
    path: list[str] = Field(default_factory=lambda: [""])
    headers: CaseInsensitiveDict = Field(default_factory=_default_headers)
    body: dict[str, Any] = Field(default_factory=dict)
    files: dict[str, str] = Field(default_factory=dict)
    format: Format | None = Field(default=None)
    debug: bool = Field(default=False)

    @field_validator("method")
    @classmethod
    def validate_method(cls, v: str) -> str:
        return v.upper()

    def set_header(self, name: str, value: str) -> None:
        """Set a header, replacing any earlier value under the same name."""
        self.headers[name] = value

    def add_header(self, header: str) -> None:
        """Parse a 'Name: Value' header line and set it."""
        name, sep, value = header.partition(":")
        name = name.strip()
        if not sep or not name:
            raise UsageError(f"header {quoted(header)} is invalid")
        self.set_header(name, value.strip())

    @property
    def is_get(self) -> bool:
        return self.method == "GET"
