# =============================================================================
# core/models/session.py - Session Schemas
# =============================================================================
# A session is an opaque bearer token issued at sign-in. The database
# resolves it to exactly one user id; this service never inspects it.
# =============================================================================

from pydantic import BaseModel, ConfigDict


class SessionUser(BaseModel):
    """
    Identity resolved from a session token.

    Only the user id is known; profile data lives elsewhere.
    """
    model_config = ConfigDict(frozen=True)

    id: str
