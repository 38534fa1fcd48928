"""
Supabase client construction.

The gateway builds exactly one client per process in the application factory
and injects it into the storage adapter; there is no module-level singleton.
"""

from __future__ import annotations

import logging

from supabase import Client, create_client

log = logging.getLogger(__name__)


def build_supabase_client(url: str | None, key: str | None) -> Client:
    """
    Create a Supabase client for the configured project.

    :param url: Project URL (``SUPABASE_URL``).
    :param key: API key (``SUPABASE_ANON_KEY``).
    :returns: Ready-to-use client.
    :raises RuntimeError: If either credential is missing.
    """
    if not url or not key:
        raise RuntimeError(
            "Missing Supabase credentials. Set SUPABASE_URL and SUPABASE_ANON_KEY "
            "or use STORAGE_BACKEND=memory."
        )
    client = create_client(url, key)
    log.info("supabase.client_initialized")
    return client
