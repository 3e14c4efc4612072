from typing import Literal
from pydantic import BaseModel


class Notification(BaseModel):
    """A transient, user-visible message (rendered as a toast by the client)."""

    level: Literal["success", "error", "info"]
    message: str
