import os
from typing import Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..errors import UsageError
from .draft import Draft, Format, split_path


class Environment(BaseModel):
    """Defaults read once from the process environment at startup."""

    host: str = Field(default="")
    path: str = Field(default="")
    format: Format | None = Field(default=None)
    log_level: str = Field(default="ERROR")

    @field_validator("format", mode="before")
    @classmethod
    def validate_format(cls, v):
        if v is None or v == "":
            return None
        if isinstance(v, Format):
            return v
        return Format.parse(v)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.strip().upper() or "ERROR"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Environment":
        """Capture REQ_* variables; later changes to the environment are not seen."""
        if environ is None:
            environ = os.environ
        try:
            return cls(
                host=environ.get("REQ_HOST", ""),
                path=environ.get("REQ_PATH", ""),
                format=environ.get("REQ_FORMAT", ""),
                log_level=environ.get("REQ_LOG_LEVEL", "ERROR"),
            )
        except ValidationError as e:
            error = e.errors()[0].get("ctx", {}).get("error")
            raise UsageError(str(error or e)) from e

    def new_draft(self) -> Draft:
        """Create the initial Draft seeded with these defaults."""
        return Draft(host=self.host, path=split_path(self.path), format=self.format)
