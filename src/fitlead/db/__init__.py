"""
Fitlead - Database Client.

Provides Supabase access for lead profiles and diet plans.
"""

from functools import lru_cache

from fitlead.db.client import LeadStore, create_supabase_client


@lru_cache
def get_lead_store() -> LeadStore:
    """
    Get the process-wide LeadStore.

    Built from settings on first use; missing Supabase credentials fail here.
    """
    from fitlead.config import get_settings

    settings = get_settings()
    client = create_supabase_client(settings.supabase_url, settings.supabase_anon_key)
    return LeadStore(client)


__all__ = [
    "LeadStore",
    "create_supabase_client",
    "get_lead_store",
]
