"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from marketchat.core.security import decode_subject
from marketchat.db.session import get_session
from marketchat.services.directory import SqlUserDirectory

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[AsyncSession, Depends(get_session)]


async def get_current_viewer(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> str:
    """Return the id of the authenticated viewer.

    The id is passed explicitly into every service call; there is no
    process-wide notion of a current user.

    Raises:
        HTTPException: If the token is invalid or the user is unknown.
    """
    subject = decode_subject(credentials.credentials)
    if subject is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )
    if not await SqlUserDirectory(db).exists(subject):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return subject


# Type alias for current viewer dependency
CurrentViewerDep = Annotated[str, Depends(get_current_viewer)]
