# =============================================================================
# core/services/sign_service.py - Sign Store Operations
# =============================================================================
# Lists and inserts signs through the Supabase wrapper and converts store
# failures into StoreError. Separates HTTP concerns from database access.
# =============================================================================

import logging

from pydantic import ValidationError

from lib.supabase_client import SupabaseClient, SupabaseClientError
from core.models.sign import SignCreate, SignRecord
from app.exceptions import StoreError

logger = logging.getLogger(__name__)


class SignService:
    """
    Service for the two store calls the catalog needs.

    Each call is a single round trip; nothing is retried.
    """

    @staticmethod
    def list_signs() -> list[SignRecord]:
        """
        Fetch all signs, newest upload first.

        Returns:
            List of SignRecord models

        Raises:
            StoreError: If the query fails or a row is malformed
        """
        try:
            rows = SupabaseClient.fetch_signs()
        except SupabaseClientError as e:
            raise StoreError(e.message, operation="list")

        try:
            return [SignRecord.model_validate(row) for row in rows]
        except ValidationError as e:
            logger.error(f"Store returned a malformed sign row: {e}")
            raise StoreError(f"Malformed sign row: {e.errors()[0]['msg']}", operation="list")

    @staticmethod
    def create_sign(candidate: SignCreate) -> SignRecord:
        """
        Insert a new sign.

        Args:
            candidate: Validated sign without id / created_at

        Returns:
            The stored SignRecord

        Raises:
            StoreError: If the insert fails
        """
        try:
            row = SupabaseClient.insert_sign(candidate.model_dump())
        except SupabaseClientError as e:
            raise StoreError(e.message, operation="insert")

        try:
            record = SignRecord.model_validate(row)
        except ValidationError as e:
            logger.error(f"Store returned a malformed sign row: {e}")
            raise StoreError(f"Malformed sign row: {e.errors()[0]['msg']}", operation="insert")

        logger.info(f"Created sign: {record.id} ({record.mutcd_code})")
        return record
