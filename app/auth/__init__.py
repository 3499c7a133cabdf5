# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides session-token authentication backed by the database.
#
# Usage:
#   from app.auth import get_session_user, SessionUser
#
#   @router.post("/protected")
#   async def protected(user: SessionUser = Depends(get_session_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import SESSION_HEADER, get_session_user
from app.auth.models import SessionUser

__all__ = [
    "SESSION_HEADER",
    "get_session_user",
    "SessionUser",
]
