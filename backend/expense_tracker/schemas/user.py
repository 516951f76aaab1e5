"""User schemas."""

from datetime import datetime

from pydantic import BaseModel


class UserResponse(BaseModel):
    id: int
    email: str | None = None
    full_name: str | None = None
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}
