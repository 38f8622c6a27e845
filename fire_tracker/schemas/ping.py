"""Pydantic schema for the ping endpoint."""

from pydantic import BaseModel

from fire_tracker.core.ping import SERVICE_NAME


class PingResponse(BaseModel):
    message: str
    service: str = SERVICE_NAME
