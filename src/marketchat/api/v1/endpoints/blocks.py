# src/marketchat/api/v1/endpoints/blocks.py
"""Block endpoints for the messaging API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Path, Response, status

from marketchat.api.v1.dependencies import CurrentViewerDep, SessionDep
from marketchat.schemas.block import (
    BlockedUserResponse,
    BlockRequest,
    BlockResponse,
    BlockStatusResponse,
)
from marketchat.schemas.common import ERROR_RESPONSES
from marketchat.services.blocking import BlockService

router = APIRouter(prefix="/chat/blocks", tags=["blocks"], responses=ERROR_RESPONSES)

TargetId = Annotated[str, Path(min_length=1, max_length=64)]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=BlockResponse)
async def block_user(
    payload: BlockRequest,
    viewer_id: CurrentViewerDep,
    db: SessionDep,
    response: Response,
) -> BlockResponse:
    """Block a user. Blocking someone already blocked returns the existing block."""
    outcome = await BlockService(db).block(viewer_id, payload.target_id, payload.reason)
    record = outcome.record
    if not outcome.created:
        response.status_code = status.HTTP_200_OK
    return BlockResponse(
        blocker_id=record.blocker_id,
        blocked_id=record.blocked_id,
        created_at=record.created_at,
        reason=record.reason,
        blocked_user_name=outcome.blocked_user_name,
        created=outcome.created,
    )


@router.delete("/{target_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unblock_user(
    viewer_id: CurrentViewerDep,
    db: SessionDep,
    target_id: TargetId,
) -> Response:
    """Remove the viewer's block of ``target_id``."""
    await BlockService(db).unblock(viewer_id, target_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("", response_model=list[BlockedUserResponse])
async def list_blocked_users(
    viewer_id: CurrentViewerDep,
    db: SessionDep,
) -> list[BlockedUserResponse]:
    """List users the viewer has blocked, newest first."""
    blocked = await BlockService(db).list_blocked(viewer_id)
    return [BlockedUserResponse.model_validate(entry) for entry in blocked]


@router.get("/{target_id}/status", response_model=BlockStatusResponse)
async def get_block_status(
    viewer_id: CurrentViewerDep,
    db: SessionDep,
    target_id: TargetId,
) -> BlockStatusResponse:
    """Return block flags: ``a_blocks_b`` is the viewer blocking the target."""
    result = await BlockService(db).status(viewer_id, target_id)
    return BlockStatusResponse(a_blocks_b=result.a_blocks_b, b_blocks_a=result.b_blocks_a)
