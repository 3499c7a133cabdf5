# =============================================================================
# core/services/session_service.py - Session Resolution
# =============================================================================
# Resolves opaque session tokens to user identities.
# Validity and expiry are decided by the database; this layer only maps
# the outcome onto the API's authentication errors.
# =============================================================================

import logging

from lib.supabase_client import SupabaseClient, SupabaseClientError
from core.models.session import SessionUser
from app.exceptions import SessionMissingError, SessionInvalidError

logger = logging.getLogger(__name__)


class SessionService:
    """Service for session token operations."""

    @staticmethod
    def resolve_user(session_token: str | None) -> SessionUser:
        """
        Resolve a session token to the user it belongs to.

        Args:
            session_token: Value of the x-session-token header

        Returns:
            SessionUser for the token's owner

        Raises:
            SessionMissingError: If no token was sent
            SessionInvalidError: If the token is unknown, expired, or
                the lookup failed
        """
        if not session_token or not session_token.strip():
            raise SessionMissingError()

        try:
            user_id = SupabaseClient.validate_session(session_token.strip())
        except SupabaseClientError as e:
            logger.warning(f"Session validation failed: {e}")
            raise SessionInvalidError()

        if not user_id:
            logger.info("Rejected unknown or expired session token")
            raise SessionInvalidError()

        logger.debug(f"Resolved session for user: {user_id}")
        return SessionUser(id=user_id)
