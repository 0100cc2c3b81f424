"""
Fitlead - Lead Dashboard.

Read-only view over stored leads: headline stats, search, and CSV export.
All functions work on the plain row dicts returned by LeadStore.
"""

import csv
import io
import logging
from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any

from fitlead.db.client import LeadStore

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    "Name",
    "Age",
    "Weight (kg)",
    "Height (cm)",
    "Fitness Level",
    "Fitness Goal",
    "Workout Days",
    "Phone Number",
    "WhatsApp Sent",
    "Created At",
]

CSV_FIELDS = [
    "name",
    "age",
    "weight",
    "height",
    "fitness_level",
    "fitness_goal",
    "workout_days",
    "phone_number",
]


@dataclass
class LeadStats:
    """Headline numbers shown above the lead table."""
    total_leads: int = 0
    today_leads: int = 0
    whatsapp_sent: int = 0
    conversion_rate: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


def load_leads(store: LeadStore) -> list[dict[str, Any]]:
    """All leads, newest first."""
    return store.list_leads()


def parse_created_at(value: str | None) -> datetime | None:
    """Parse a Supabase timestamp into a local datetime."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.warning(f"Unparseable created_at: {value}")
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed


def created_on(lead: dict[str, Any]) -> date | None:
    """Local calendar date a lead was created."""
    created = parse_created_at(lead.get("created_at"))
    return created.date() if created else None


def conversion_rate(sent: int, total: int) -> int:
    """Sent/total as a whole percentage (half rounds up); 0 when there are no leads."""
    if total <= 0:
        return 0
    return int(sent * 100 / total + 0.5)


def compute_stats(leads: list[dict[str, Any]], today: date | None = None) -> LeadStats:
    """Total, created today, WhatsApp sent, and conversion rate."""
    today = today or date.today()
    total = len(leads)
    today_count = sum(1 for lead in leads if created_on(lead) == today)
    sent = sum(1 for lead in leads if lead.get("whatsapp_sent"))
    return LeadStats(
        total_leads=total,
        today_leads=today_count,
        whatsapp_sent=sent,
        conversion_rate=conversion_rate(sent, total),
    )


def lead_matches(lead: dict[str, Any], term: str) -> bool:
    """Name (case-insensitive), phone (exact substring), or goal (case-insensitive)."""
    needle = term.lower()
    name = lead.get("name") or ""
    phone = lead.get("phone_number") or ""
    goal = lead.get("fitness_goal") or ""
    return needle in name.lower() or term in phone or needle in goal.lower()


def filter_leads(leads: list[dict[str, Any]], term: str | None) -> list[dict[str, Any]]:
    """Leads matching a search term; all leads when the term is empty."""
    if not term:
        return list(leads)
    return [lead for lead in leads if lead_matches(lead, term)]


def _csv_value(value: Any) -> Any:
    # Falsy values (None, 0, "") render as empty, like the lead table
    return value if value else ""


def lead_to_csv_row(lead: dict[str, Any]) -> list[Any]:
    row = [_csv_value(lead.get(field)) for field in CSV_FIELDS]
    row.append("Yes" if lead.get("whatsapp_sent") else "No")
    created = created_on(lead)
    row.append(created.isoformat() if created else "")
    return row


def export_csv(leads: list[dict[str, Any]]) -> str:
    """Render leads as CSV with every field quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for lead in leads:
        writer.writerow(lead_to_csv_row(lead))
    return buffer.getvalue()


def csv_filename(today: date | None = None) -> str:
    """Download name for an export, stamped with the current date."""
    today = today or date.today()
    return f"fitness-leads-{today.isoformat()}.csv"
