"""Block-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BlockRequest(BaseModel):
    """Schema for blocking another user."""

    target_id: str = Field(..., min_length=1, max_length=64, description="User to block")
    reason: str | None = Field(None, description="Optional note kept with the block")


class BlockResponse(BaseModel):
    """Schema for an active block relationship."""

    blocker_id: str
    blocked_id: str
    created_at: datetime
    reason: str | None
    blocked_user_name: str | None = None
    created: bool = Field(..., description="False when the block already existed")

    model_config = ConfigDict(from_attributes=True)


class BlockStatusResponse(BaseModel):
    """Block flags between the viewer (a) and the target (b)."""

    a_blocks_b: bool
    b_blocks_a: bool


class BlockedUserResponse(BaseModel):
    user_id: str
    user_name: str | None
    blocked_at: datetime
    reason: str | None

    model_config = ConfigDict(from_attributes=True)
