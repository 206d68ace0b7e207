"""Core schemas for the application."""

from datetime import datetime

from pydantic import BaseModel

DATABASE_STATUS_ONLINE = "ONLINE"
DATABASE_STATUS_OFFLINE = "OFFLINE"


class RootStatus(BaseModel):
    """Schema for the root status response."""
    database_status: str
    time: datetime
