"""Common schema utilities and base classes."""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        allow_inf_nan=False,
    )


class PatchSchema(BaseSchema):
    """Base for partial updates; unknown fields (including ``id``) are rejected."""

    model_config = ConfigDict(extra="forbid")


class MessageResponse(BaseSchema):
    """Simple message response."""

    message: str
