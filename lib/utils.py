# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import datetime, timezone


# =============================================================================
# Filename Utilities
# =============================================================================

def file_extension(filename: str | None, default: str = "jpg") -> str:
    """
    Extract the extension from an uploaded filename.

    The extension is whatever follows the last "." of the final path
    component, so a dotfile name such as ".png" yields "png". It must be
    alphanumeric; a name without a "." or with an empty or unusable
    extension falls back to ``default``.

    Example:
        file_extension("photo.PNG")        # "png"
        file_extension(".png")             # "png"
        file_extension("photo")            # "jpg"
        file_extension("../../etc.x/y")    # "jpg"
    """
    if not filename:
        return default

    name = filename.replace("\\", "/").rsplit("/", 1)[-1]
    if "." not in name:
        return default

    suffix = name.rsplit(".", 1)[1]
    if not suffix or not suffix.isalnum():
        return default
    return suffix.lower()


# =============================================================================
# Time Utilities
# =============================================================================

def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string (for updated_at columns)."""
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Error Utilities
# =============================================================================

def error_message(exc: Exception) -> str:
    """
    Best human-readable message for an exception raised by the Supabase SDK.

    postgrest's APIError and storage3's StorageException both expose a
    ``message`` attribute; plain exceptions fall back to ``str()``.
    """
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or exc.__class__.__name__
