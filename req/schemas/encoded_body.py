from pydantic import BaseModel, Field


class EncodedBody(BaseModel):
    """Wire body chosen for a request and the Content-Type that describes it."""

    content: bytes | None = Field(default=None)
    content_type: str | None = Field(default=None)

    @property
    def is_empty(self) -> bool:
        return self.content is None
