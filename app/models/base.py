"""Base model utilities for in-memory records."""

from pydantic import BaseModel, ConfigDict, Field


class EntityModel(BaseModel):
    """Immutable record held by the gradebook store.

    Records are frozen; every change goes through the store, which validates
    a merged replacement record.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        str_strip_whitespace=True,
        allow_inf_nan=False,
    )


class IDMixin(BaseModel):
    """Mixin providing a caller-assigned string identifier."""

    id: str = Field(..., min_length=1, max_length=64)
