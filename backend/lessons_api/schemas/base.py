"""Schema Base — camelCase aliases shared by every request/response model."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts camelCase or snake_case input, emits camelCase."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore",
    )


class MessageResponse(CamelModel):
    """Short acknowledgement."""
    message: str
