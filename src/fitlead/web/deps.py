"""
Component dependencies for FastAPI routes.

Each provider returns the process-wide instance built from settings. Tests
swap them out with app.dependency_overrides.
"""

from fitlead.db import LeadStore, get_lead_store
from fitlead.llm import PlanGenerator, get_plan_generator
from fitlead.messaging import Notifier, get_notifier
from fitlead.sheets import LeadSheet, get_lead_sheet


def get_store() -> LeadStore:
    return get_lead_store()


def get_generator() -> PlanGenerator:
    return get_plan_generator()


def get_whatsapp_notifier() -> Notifier:
    return get_notifier()


def get_sheet() -> LeadSheet | None:
    return get_lead_sheet()
