from pydantic import BaseModel, ConfigDict


class StrictBody(BaseModel):
    """Inbound payloads: unknown fields are rejected before any side effect."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class ReadModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)
