"""
Fitlead - Supabase Lead Store.

Low-level database access for leads. Two tables:
- users: one row per lead (profile + whatsapp_sent flag)
- diet_plans: generated plan text, 1:1 with a completed lead
"""

import logging
from datetime import UTC, datetime
from typing import Any

from supabase import Client, create_client

from fitlead.errors import StorageError

logger = logging.getLogger(__name__)

USERS_TABLE = "users"
DIET_PLANS_TABLE = "diet_plans"


def _utc_now() -> str:
    """Get current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


def create_supabase_client(url: str, key: str) -> Client:
    """Create a Supabase client from explicit credentials."""
    return create_client(url, key)


class LeadStore:
    """
    Read/write access to lead profiles and their diet plans.

    Write methods raise StorageError; the orchestration decides which of
    those failures are fatal.
    """

    def __init__(self, client: Client):
        self.client = client

    # =========================================================================
    # Profiles
    # =========================================================================

    def create_profile(self, record: dict[str, Any]) -> dict[str, Any]:
        """Insert a new lead and return the stored row (with id and created_at)."""
        try:
            result = self.client.table(USERS_TABLE).insert(record).execute()
        except Exception as e:
            raise StorageError("Failed to save user data") from e

        if not result.data:
            raise StorageError("Failed to save user data")
        return result.data[0]

    def mark_whatsapp_sent(self, user_id: str) -> bool:
        """
        Flip whatsapp_sent from false to true.

        Guarded on the current value so the flag transitions at most once.
        Returns True only if this call performed the transition.
        """
        try:
            result = (
                self.client.table(USERS_TABLE)
                .update({"whatsapp_sent": True})
                .eq("id", user_id)
                .eq("whatsapp_sent", False)
                .execute()
            )
        except Exception as e:
            raise StorageError(f"Failed to mark lead {user_id} as sent") from e
        return bool(result.data)

    def list_leads(self) -> list[dict[str, Any]]:
        """All leads, newest first."""
        try:
            result = (
                self.client.table(USERS_TABLE)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            raise StorageError("Failed to load leads") from e
        return result.data or []

    def get_lead(self, user_id: str) -> dict[str, Any] | None:
        """Get a single lead by ID."""
        try:
            result = (
                self.client.table(USERS_TABLE)
                .select("*")
                .eq("id", user_id)
                .maybe_single()
                .execute()
            )
        except Exception as e:
            raise StorageError(f"Failed to load lead {user_id}") from e
        if result is None:
            return None
        return result.data

    # =========================================================================
    # Diet plans
    # =========================================================================

    def attach_plan(self, user_id: str, plan_content: str) -> dict[str, Any]:
        """Store a generated plan for a lead."""
        try:
            result = (
                self.client.table(DIET_PLANS_TABLE)
                .insert({
                    "user_id": user_id,
                    "plan_content": plan_content,
                    "generated_at": _utc_now(),
                })
                .execute()
            )
        except Exception as e:
            raise StorageError(f"Failed to save diet plan for {user_id}") from e

        if not result.data:
            raise StorageError(f"Failed to save diet plan for {user_id}")
        return result.data[0]

    def mark_plan_sent(self, plan_id: str) -> None:
        """Record the delivery timestamp on a plan."""
        try:
            (
                self.client.table(DIET_PLANS_TABLE)
                .update({"sent_at": _utc_now()})
                .eq("id", plan_id)
                .execute()
            )
        except Exception as e:
            raise StorageError(f"Failed to mark diet plan {plan_id} as sent") from e

    def get_plan(self, user_id: str) -> dict[str, Any] | None:
        """Get the diet plan stored for a lead, if any."""
        try:
            result = (
                self.client.table(DIET_PLANS_TABLE)
                .select("*")
                .eq("user_id", user_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise StorageError(f"Failed to load diet plan for {user_id}") from e
        return result.data[0] if result.data else None
