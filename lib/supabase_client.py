# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides the few primitives the image pipeline needs:
# - Session token resolution via a database function
# - Single-row lookups by id
# - Row updates by id
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   user_id = SupabaseClient.validate_session(token)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import get_settings
from lib.utils import error_message

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST error code returned by .single() when no row matches
NO_ROWS_CODE = "PGRST116"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries a code and an optional suggestion so callers can log
    something actionable.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        user_id = SupabaseClient.validate_session("opaque-token")
        row = SupabaseClient.fetch_row("communities", "c-1", "created_by")
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS);
        ownership checks are therefore done in the service layer.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            settings = get_settings()
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached client (used by tests and on config reload)."""
        cls._instance = None

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    @classmethod
    def validate_session(cls, session_token: str) -> str | None:
        """
        Resolve a session token to a user id.

        Calls the session validation database function. The function
        returns NULL for unknown or expired tokens.

        Returns:
            The user id as a string, or None if the token is not valid

        Raises:
            SupabaseClientError: If the RPC call itself fails
        """
        client = cls.get_client()
        rpc_name = get_settings().SESSION_VALIDATION_RPC

        try:
            response = client.rpc(
                rpc_name, {"p_session_token": session_token}
            ).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to validate session: {e}",
                code="VALIDATE_SESSION_FAILED",
                suggestion=f"Check that the {rpc_name} function exists",
            )

        user_id = response.data
        if not user_id:
            return None
        return str(user_id)

    # -------------------------------------------------------------------------
    # Rows
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_row(
        cls,
        table: str,
        row_id: str,
        columns: str = "*",
    ) -> dict[str, Any] | None:
        """
        Fetch a single row by id.

        Args:
            table: Table name
            row_id: Value of the id column
            columns: Column list for the select

        Returns:
            Row dict, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .select(columns)
                .eq("id", row_id)
                .single()
                .execute()
            )

            return response.data

        except Exception as e:
            if NO_ROWS_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch {table} row: {e}",
                code="FETCH_ROW_FAILED",
                details={"table": table, "id": row_id}
            )

    @classmethod
    def update_row(
        cls,
        table: str,
        row_id: str,
        values: dict[str, Any],
    ) -> list[dict[str, Any]]:
        """
        Update a row by id.

        Returns:
            The updated rows as returned by PostgREST

        Raises:
            SupabaseClientError: If update fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .update(values)
                .eq("id", row_id)
                .execute()
            )

            logger.debug(f"Updated {table} row {row_id}: {sorted(values)}")
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=error_message(e),
                code="UPDATE_ROW_FAILED",
                details={"table": table, "id": row_id}
            )
