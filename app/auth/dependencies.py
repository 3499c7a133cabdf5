# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for session authentication.
#
# Callers send an opaque session token in the x-session-token header.
# The token is resolved by the database; see SessionService.
#
# Usage:
#   from app.auth import get_session_user, SessionUser
#
#   @router.post("/protected")
#   async def protected(user: SessionUser = Depends(get_session_user)):
#       return {"user_id": user.id}
# =============================================================================

from typing import Annotated, Optional

from fastapi import Header

from app.auth.models import SessionUser
from core.services.session_service import SessionService

SESSION_HEADER = "x-session-token"


def get_session_user(
    x_session_token: Annotated[
        Optional[str],
        Header(alias=SESSION_HEADER, description="Opaque session token"),
    ] = None,
) -> SessionUser:
    """
    Resolve the calling user from the x-session-token header.

    The header is optional at the framework level so a missing token
    yields the API's own 401 body instead of a validation error.

    Raises:
        SessionMissingError: 401 if no token is sent
        SessionInvalidError: 401 if the token does not resolve to a user
    """
    return SessionService.resolve_user(x_session_token)
