"""Common Pydantic schemas shared across the API."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Simple acknowledgement response."""

    message: str


class AvailabilityResponse(BaseModel):
    """Boolean answer to a yes/no query."""

    data: bool
