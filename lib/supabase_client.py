# =============================================================================
# lib/supabase_client.py - Supabase Store Wrapper
# =============================================================================
# This module wraps a supabase-py Client behind the four operations the
# gateway needs:
# - insert a row and return the created row
# - select every row of a table
# - select one row by column equality
# - upload a binary object to a storage bucket
#
# One SupabaseStore is built at startup and shared through the application
# context. It holds no mutable state besides the client handle.
#
# Usage:
#   from lib.supabase_client import SupabaseStore
#   store = SupabaseStore.from_credentials(url, key)
#   rows = store.select_all("patients")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from lib.utils import ApplicationError

# Set up logging for this module
logger = logging.getLogger(__name__)


class StoreError(ApplicationError):
    """
    Error reported by the relational store.

    The store's own message is kept verbatim in `message` so the API
    can pass it through to the caller.
    """

    def __init__(self, message: str, table: str | None = None):
        super().__init__(
            message,
            code="STORE_ERROR",
            details={"table": table} if table else None,
        )


class StorageError(ApplicationError):
    """Error reported by object storage."""

    def __init__(self, message: str, bucket: str, key: str):
        super().__init__(
            message,
            code="STORAGE_ERROR",
            details={"bucket": bucket, "key": key},
        )


def _error_message(exc: Exception) -> str:
    """Extract the store's message from a postgrest/storage exception."""
    message = getattr(exc, "message", None)
    if message:
        return str(message)
    return str(exc)


class SupabaseStore:
    """
    Typed wrapper for Supabase table and storage operations.

    Every call is a single request to Supabase. Failures are never retried;
    they are raised as StoreError (tables) or StorageError (buckets).

    Example:
        store = SupabaseStore.from_credentials(settings.SUPABASE_URL, key)
        user = store.select_one("doctors", "phone", "9876543210")
    """

    def __init__(self, client: Client):
        self._client = client

    @classmethod
    def from_credentials(cls, url: str, key: str) -> "SupabaseStore":
        """
        Create a store backed by a new Supabase client.

        Uses the service_role key, which bypasses Row Level Security.

        Raises:
            StoreError: If client creation fails
        """
        try:
            client = create_client(url, key)
        except Exception as e:
            raise StoreError(f"Failed to create Supabase client: {e}")
        logger.info("Supabase client initialized successfully")
        return cls(client)

    # -------------------------------------------------------------------------
    # Table Operations
    # -------------------------------------------------------------------------

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a row and return the created row.

        Args:
            table: Table name
            row: Column values to insert

        Returns:
            The created row, including store-generated columns

        Raises:
            StoreError: If the insert fails or returns no row
        """
        try:
            response = self._client.table(table).insert(row).execute()
        except Exception as e:
            logger.warning(f"Insert into {table} failed: {e}")
            raise StoreError(_error_message(e), table=table)

        if not response.data:
            raise StoreError("Insert returned no data", table=table)
        return response.data[0]

    def select_all(self, table: str) -> list[dict[str, Any]]:
        """
        Fetch every row of a table.

        Raises:
            StoreError: If the query fails
        """
        try:
            response = self._client.table(table).select("*").execute()
        except Exception as e:
            logger.warning(f"Select from {table} failed: {e}")
            raise StoreError(_error_message(e), table=table)

        return response.data or []

    def select_one(self, table: str, column: str, value: Any) -> dict[str, Any] | None:
        """
        Fetch the first row where `column` equals `value`.

        Args:
            table: Table name
            column: Column to match on (e.g. "phone", "user_id")
            value: Value to match

        Returns:
            The matching row, or None if no row matches

        Raises:
            StoreError: If the query fails
        """
        try:
            response = (
                self._client.table(table)
                .select("*")
                .eq(column, value)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.warning(f"Lookup in {table} by {column} failed: {e}")
            raise StoreError(_error_message(e), table=table)

        rows = response.data or []
        return rows[0] if rows else None

    # -------------------------------------------------------------------------
    # Storage Operations
    # -------------------------------------------------------------------------

    def upload(self, bucket: str, key: str, content: bytes, content_type: str) -> str:
        """
        Upload raw bytes to a storage bucket.

        Args:
            bucket: Bucket name
            key: Object key inside the bucket
            content: File bytes
            content_type: MIME type stored with the object

        Returns:
            The object key

        Raises:
            StorageError: If the upload fails
        """
        try:
            self._client.storage.from_(bucket).upload(
                path=key,
                file=content,
                file_options={"content-type": content_type},
            )
        except Exception as e:
            logger.error(f"Storage upload failed: {e}")
            raise StorageError(_error_message(e), bucket=bucket, key=key)

        logger.info(f"Uploaded file to storage: {bucket}/{key}")
        return key
