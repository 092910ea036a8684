# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for the two calls the catalog makes
# against its hosted store:
# - Fetch every sign, newest upload first
# - Insert one sign and return the stored row
#
# It implements the singleton pattern to reuse a single client connection.
# There is no retry, pagination, or caching: one round trip per call.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   rows = SupabaseClient.fetch_signs()
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import get_settings

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries a code and an optional suggestion so callers can surface
    an actionable message.
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
    Typed wrapper for the sign catalog table.

    All methods are class methods for easy access without instantiation.

    Example:
        rows = SupabaseClient.fetch_signs()
        row = SupabaseClient.insert_sign({"photo": "...", ...})
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses the anon key; table access is governed by the project's
        Row Level Security policies.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            settings = get_settings()
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_ANON_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_ANON_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached client (used when settings change in tests)."""
        cls._instance = None

    @classmethod
    def _table_name(cls) -> str:
        return get_settings().SIGNS_TABLE

    # -------------------------------------------------------------------------
    # Signs
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_signs(cls) -> list[dict[str, Any]]:
        """
        Fetch every sign, ordered by upload_date descending.

        Equivalent to: SELECT * FROM signs ORDER BY upload_date DESC

        Returns:
            List of row dicts (empty list if the table is empty)

        Raises:
            SupabaseClientError: If the query fails
        """
        client = cls.get_client()
        table = cls._table_name()

        try:
            response = (
                client.table(table)
                .select("*")
                .order("upload_date", desc=True)
                .execute()
            )

            rows = response.data or []
            logger.debug(f"Fetched {len(rows)} signs from {table}")
            return rows

        except Exception as e:
            logger.error(f"Failed to fetch signs: {e}")
            raise SupabaseClientError(
                message=f"Failed to fetch signs: {e}",
                code="FETCH_SIGNS_FAILED",
                suggestion="Check that the signs table exists and is readable",
                details={"table": table}
            )

    @classmethod
    def insert_sign(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert one sign and return the stored row.

        Equivalent to: INSERT INTO signs (...) RETURNING *

        Args:
            data: Column values without id / created_at

        Returns:
            The inserted row including store-assigned id and created_at

        Raises:
            SupabaseClientError: If the insert fails or returns no row
        """
        client = cls.get_client()
        table = cls._table_name()

        try:
            response = (
                client.table(table)
                .insert(data)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to insert sign: {e}")
            raise SupabaseClientError(
                message=f"Failed to upload sign: {e}",
                code="INSERT_SIGN_FAILED",
                suggestion="Check that the signs table accepts inserts",
                details={"table": table}
            )

        if not response.data:
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_SIGN_FAILED",
                suggestion="Check the table's insert/select policies",
                details={"table": table}
            )

        row = response.data[0]
        logger.info(f"Inserted sign: {row.get('id')}")
        return row
