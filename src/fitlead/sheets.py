"""
Fitlead - Google Sheets lead sink.

Optional: appends one row per lead to the first worksheet of a spreadsheet
using a service account. Disabled unless all three Google settings are set.
"""

import logging
from datetime import UTC, datetime
from functools import lru_cache
from typing import Any

import gspread

logger = logging.getLogger(__name__)

TOKEN_URI = "https://oauth2.googleapis.com/token"

SHEET_COLUMNS = [
    "name",
    "age",
    "weight",
    "height",
    "injuries",
    "fitness_level",
    "fitness_goal",
    "workout_days",
    "dietary_restrictions",
    "phone_number",
    "diet_plan",
    "created_at",
]


def lead_to_row(lead: dict[str, Any]) -> list:
    """Flatten a lead into the sheet's column order ('' for missing values)."""
    row = []
    for column in SHEET_COLUMNS:
        value = lead.get(column)
        if column == "created_at" and not value:
            value = datetime.now(UTC).isoformat()
        row.append("" if value is None else value)
    return row


class LeadSheet:
    """Appends leads to a Google Sheet."""

    def __init__(self, worksheet: gspread.Worksheet):
        self.worksheet = worksheet

    @classmethod
    def from_credentials(cls, service_account_email: str, private_key: str, sheet_id: str) -> "LeadSheet":
        # Keys pasted into .env usually carry literal "\n" sequences
        credentials = {
            "type": "service_account",
            "client_email": service_account_email,
            "private_key": private_key.replace("\\n", "\n"),
            "token_uri": TOKEN_URI,
        }
        gc = gspread.service_account_from_dict(credentials)
        return cls(gc.open_by_key(sheet_id).sheet1)

    def append_lead(self, lead: dict[str, Any]) -> None:
        self.worksheet.append_row(lead_to_row(lead), value_input_option="RAW")


@lru_cache
def get_lead_sheet() -> LeadSheet | None:
    """Get the process-wide sheet sink, or None when disabled."""
    from fitlead.config import get_settings

    return build_lead_sheet(get_settings())


def build_lead_sheet(settings) -> LeadSheet | None:
    """LeadSheet when Google credentials are configured, else None."""
    if not settings.sheets_configured:
        return None
    try:
        return LeadSheet.from_credentials(
            settings.google_service_account_email,
            settings.google_private_key,
            settings.google_sheet_id,
        )
    except Exception as e:
        logger.warning(f"Google Sheets sink disabled: {e}")
        return None
