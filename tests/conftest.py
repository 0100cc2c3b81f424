"""
Pytest configuration and fixtures for Fitlead tests.
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set test environment before importing fitlead modules
os.environ["FITLEAD_ENV"] = "development"
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ["OPENAI_API_KEY"] = "test-key-not-real"
for _var in ("TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "TWILIO_WHATSAPP_NUMBER", "GOOGLE_SHEET_ID"):
    os.environ.pop(_var, None)

from fitlead.messaging import DeliveryResult


@pytest.fixture
def mock_supabase():
    """Mock Supabase client for unit tests."""
    mock_client = MagicMock()

    # Mock table operations
    mock_table = MagicMock()
    mock_table.select.return_value = mock_table
    mock_table.insert.return_value = mock_table
    mock_table.update.return_value = mock_table
    mock_table.eq.return_value = mock_table
    mock_table.order.return_value = mock_table
    mock_table.limit.return_value = mock_table
    mock_table.maybe_single.return_value = mock_table
    mock_table.execute.return_value = MagicMock(data=[])

    mock_client.table.return_value = mock_table

    return mock_client


@pytest.fixture
def sample_profile():
    """A complete questionnaire payload."""
    return {
        "name": "Priya",
        "age": 28,
        "weight": 62.5,
        "height": 165,
        "injuries": "None",
        "fitness_level": "Intermediate",
        "fitness_goal": "Weight Loss",
        "workout_days": 4,
        "dietary_restrictions": "Vegetarian",
        "phone_number": "+919876543210",
    }


@pytest.fixture
def mock_store():
    """LeadStore double that stores successfully."""
    store = MagicMock()
    store.create_profile.side_effect = lambda record: {
        **record,
        "id": "user-1",
        "created_at": "2026-10-19T09:30:00+00:00",
    }
    store.attach_plan.return_value = {"id": "plan-1", "user_id": "user-1"}
    store.mark_whatsapp_sent.return_value = True
    return store


@pytest.fixture
def mock_generator():
    """PlanGenerator double returning a fixed plan."""
    generator = MagicMock()
    generator.generate = AsyncMock(return_value="Breakfast: oats. Lunch: dal and rice.")
    return generator


@pytest.fixture
def real_notifier():
    """Notifier double reporting a real (non-simulated) send."""
    notifier = MagicMock()
    notifier.send.return_value = DeliveryResult(simulated=False, sids=["SM123"], chunks=1)
    return notifier


@pytest.fixture
def simulated_notifier():
    notifier = MagicMock()
    notifier.send.return_value = DeliveryResult(simulated=True, sids=["simulated-1"], chunks=1)
    return notifier


@pytest.fixture
def sample_leads():
    """Stored lead rows as returned by list_leads (newest first)."""
    return [
        {
            "id": "lead-4",
            "name": "Rohan",
            "age": 31,
            "weight": 80,
            "height": 178,
            "fitness_level": "Beginner",
            "fitness_goal": "Muscle Gain",
            "workout_days": 5,
            "phone_number": "+919812345678",
            "whatsapp_sent": True,
            "created_at": "2026-10-19T10:00:00",
        },
        {
            "id": "lead-3",
            "name": "Sneha",
            "age": 24,
            "weight": 55,
            "height": 160,
            "fitness_level": "Advanced",
            "fitness_goal": "Strength",
            "workout_days": 6,
            "phone_number": "+14155550100",
            "whatsapp_sent": True,
            "created_at": "2026-10-18T10:00:00",
        },
        {
            "id": "lead-2",
            "name": "Arjun",
            "age": 40,
            "weight": 92,
            "height": 182,
            "fitness_level": "Intermediate",
            "fitness_goal": "Weight Loss",
            "workout_days": 3,
            "phone_number": "+447700900123",
            "whatsapp_sent": True,
            "created_at": "2026-10-17T10:00:00",
        },
        {
            "id": "lead-1",
            "name": "Meera",
            "age": 35,
            "weight": 68,
            "height": 170,
            "fitness_level": "Beginner",
            "fitness_goal": "Maintenance",
            "workout_days": 2,
            "phone_number": "+919900011122",
            "whatsapp_sent": False,
            "created_at": "2026-10-16T10:00:00",
        },
    ]
