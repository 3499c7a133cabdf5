# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# The authenticated caller is a SessionUser (defined in core so services
# can use it without importing the HTTP layer).
# =============================================================================

from core.models.session import SessionUser

__all__ = ["SessionUser"]
