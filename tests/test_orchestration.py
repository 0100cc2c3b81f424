"""
Tests for the lead flow orchestration.

Store profile → generate plan → store plan → deliver → mark sent.
Only profile storage and generation failures reach the caller.
"""

import asyncio
from unittest.mock import MagicMock

import pytest

from fitlead.errors import (
    ConfigurationError,
    DeliveryError,
    GenerationError,
    InvalidFieldError,
    MissingFieldError,
    StorageError,
)
from fitlead.models import REQUIRED_FIELDS, parse_profile
from fitlead.orchestration import build_delivery_message, run_lead_flow


def _run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio needed)."""
    return asyncio.run(coro)


def _flow(payload, store, generator, notifier, sheet=None):
    return _run(run_lead_flow(
        payload,
        store=store,
        generator=generator,
        notifier=notifier,
        sheet=sheet,
    ))


# ---------------------------------------------------------------------------
# Profile validation
# ---------------------------------------------------------------------------

class TestProfileValidation:

    @pytest.mark.parametrize("field", REQUIRED_FIELDS)
    def test_missing_field_reported(self, sample_profile, field):
        payload = {k: v for k, v in sample_profile.items() if k != field}
        with pytest.raises(MissingFieldError) as exc:
            parse_profile(payload)
        assert exc.value.message == f"Missing required field: {field}"
        assert exc.value.status_code == 400

    def test_first_missing_field_wins(self, sample_profile):
        payload = dict(sample_profile, age=None, phone_number="")
        with pytest.raises(MissingFieldError) as exc:
            parse_profile(payload)
        assert exc.value.field == "age"

    def test_optional_free_text_defaults(self, sample_profile):
        payload = dict(sample_profile, injuries="", dietary_restrictions=None)
        profile = parse_profile(payload)
        assert profile.injuries == "None"
        assert profile.dietary_restrictions == "None"

    def test_unparseable_field(self, sample_profile):
        with pytest.raises(InvalidFieldError) as exc:
            parse_profile(dict(sample_profile, age="twenty"))
        assert exc.value.field == "age"

    @pytest.mark.parametrize("field, value", [
        ("fitness_level", "Expert"),
        ("fitness_goal", "Become a pirate"),
    ])
    def test_out_of_range_choice_rejected(self, sample_profile, field, value):
        with pytest.raises(InvalidFieldError) as exc:
            parse_profile(dict(sample_profile, **{field: value}))
        assert exc.value.field == field
        assert exc.value.status_code == 400

    def test_choices_match_questionnaire_options(self):
        from typing import get_args

        from fitlead.models import FitnessGoal, FitnessLevel
        from intake.questions import FITNESS_GOALS, FITNESS_LEVELS

        assert get_args(FitnessLevel) == FITNESS_LEVELS
        assert get_args(FitnessGoal) == FITNESS_GOALS

    def test_record_starts_unsent(self, sample_profile):
        record = parse_profile(sample_profile).to_record()
        assert record["whatsapp_sent"] is False
        assert record["conversation_log"] == []


# ---------------------------------------------------------------------------
# Flow
# ---------------------------------------------------------------------------

class TestRunLeadFlow:

    def test_happy_path(self, sample_profile, mock_store, mock_generator, real_notifier):
        result = _flow(sample_profile, mock_store, mock_generator, real_notifier)

        assert result.to_response() == {
            "success": True,
            "user_id": "user-1",
            "diet_plan": "Breakfast: oats. Lunch: dal and rice.",
        }
        mock_store.attach_plan.assert_called_once_with("user-1", "Breakfast: oats. Lunch: dal and rice.")
        mock_store.mark_whatsapp_sent.assert_called_once_with("user-1")
        mock_store.mark_plan_sent.assert_called_once_with("plan-1")
        assert result.marked_sent

    def test_delivery_message_wraps_plan(self, sample_profile, mock_store, mock_generator, real_notifier):
        _flow(sample_profile, mock_store, mock_generator, real_notifier)

        to, message = real_notifier.send.call_args.args
        assert to == "+919876543210"
        assert message == build_delivery_message("Priya", "Breakfast: oats. Lunch: dal and rice.")
        assert message.startswith("Hi Priya!")

    def test_missing_field_writes_nothing(self, sample_profile, mock_store, mock_generator, real_notifier):
        payload = dict(sample_profile)
        del payload["weight"]

        with pytest.raises(MissingFieldError):
            _flow(payload, mock_store, mock_generator, real_notifier)

        mock_store.create_profile.assert_not_called()
        mock_generator.generate.assert_not_called()

    def test_profile_storage_failure_is_fatal(self, sample_profile, mock_store, mock_generator, real_notifier):
        mock_store.create_profile.side_effect = StorageError("Failed to save user data")

        with pytest.raises(StorageError):
            _flow(sample_profile, mock_store, mock_generator, real_notifier)

        mock_generator.generate.assert_not_called()
        real_notifier.send.assert_not_called()

    @pytest.mark.parametrize("error", [
        ConfigurationError("OpenAI API key is not configured."),
        GenerationError("Failed to generate diet plan. Please try again."),
    ])
    def test_generation_failure_leaves_partial_lead(
        self, sample_profile, mock_store, mock_generator, real_notifier, error
    ):
        mock_generator.generate.side_effect = error

        with pytest.raises(type(error)):
            _flow(sample_profile, mock_store, mock_generator, real_notifier)

        mock_store.create_profile.assert_called_once()
        mock_store.attach_plan.assert_not_called()
        real_notifier.send.assert_not_called()
        mock_store.mark_whatsapp_sent.assert_not_called()

    def test_plan_storage_failure_is_not_fatal(self, sample_profile, mock_store, mock_generator, real_notifier):
        mock_store.attach_plan.side_effect = StorageError("Failed to save diet plan")

        result = _flow(sample_profile, mock_store, mock_generator, real_notifier)

        assert result.diet_plan == "Breakfast: oats. Lunch: dal and rice."
        assert not result.plan_stored
        # Delivery still attempted, but nothing to stamp
        real_notifier.send.assert_called_once()
        mock_store.mark_whatsapp_sent.assert_not_called()

    def test_delivery_failure_does_not_change_response(
        self, sample_profile, mock_store, mock_generator, real_notifier
    ):
        real_notifier.send.side_effect = DeliveryError("Failed to send WhatsApp message")

        result = _flow(sample_profile, mock_store, mock_generator, real_notifier)

        assert result.to_response()["success"] is True
        assert not result.delivered
        mock_store.mark_whatsapp_sent.assert_not_called()
        mock_store.mark_plan_sent.assert_not_called()

    def test_unexpected_delivery_exception_is_contained(
        self, sample_profile, mock_store, mock_generator, real_notifier
    ):
        real_notifier.send.side_effect = RuntimeError("socket closed")

        result = _flow(sample_profile, mock_store, mock_generator, real_notifier)

        assert result.user_id == "user-1"
        mock_store.mark_whatsapp_sent.assert_not_called()

    def test_simulated_delivery_leaves_flag_false(
        self, sample_profile, mock_store, mock_generator, simulated_notifier
    ):
        result = _flow(sample_profile, mock_store, mock_generator, simulated_notifier)

        assert result.delivered and result.simulated
        mock_store.mark_whatsapp_sent.assert_not_called()
        mock_store.mark_plan_sent.assert_not_called()

    def test_plan_not_stamped_when_flag_already_set(
        self, sample_profile, mock_store, mock_generator, real_notifier
    ):
        mock_store.mark_whatsapp_sent.return_value = False

        result = _flow(sample_profile, mock_store, mock_generator, real_notifier)

        assert not result.marked_sent
        mock_store.mark_plan_sent.assert_not_called()

    def test_mark_sent_failure_is_not_fatal(self, sample_profile, mock_store, mock_generator, real_notifier):
        mock_store.mark_whatsapp_sent.side_effect = StorageError("Failed to mark lead")

        result = _flow(sample_profile, mock_store, mock_generator, real_notifier)

        assert result.to_response()["success"] is True
        assert not result.marked_sent

    def test_sheet_receives_lead_with_plan(self, sample_profile, mock_store, mock_generator, real_notifier):
        sheet = MagicMock()

        _flow(sample_profile, mock_store, mock_generator, real_notifier, sheet=sheet)

        appended = sheet.append_lead.call_args.args[0]
        assert appended["id"] == "user-1"
        assert appended["diet_plan"] == "Breakfast: oats. Lunch: dal and rice."

    def test_sheet_failure_is_not_fatal(self, sample_profile, mock_store, mock_generator, real_notifier):
        sheet = MagicMock()
        sheet.append_lead.side_effect = RuntimeError("quota exceeded")

        result = _flow(sample_profile, mock_store, mock_generator, real_notifier, sheet=sheet)

        assert result.user_id == "user-1"


# ---------------------------------------------------------------------------
# LeadStore
# ---------------------------------------------------------------------------

class TestLeadStore:

    def test_create_profile_returns_row(self, mock_supabase):
        from fitlead.db import LeadStore

        mock_supabase.table.return_value.execute.return_value = MagicMock(data=[{"id": "u1"}])
        row = LeadStore(mock_supabase).create_profile({"name": "Priya"})

        assert row == {"id": "u1"}
        mock_supabase.table.assert_called_with("users")

    def test_create_profile_wraps_errors(self, mock_supabase):
        from fitlead.db import LeadStore

        mock_supabase.table.return_value.execute.side_effect = RuntimeError("connection refused")
        with pytest.raises(StorageError) as exc:
            LeadStore(mock_supabase).create_profile({"name": "Priya"})
        assert exc.value.message == "Failed to save user data"

    def test_mark_sent_is_guarded(self, mock_supabase):
        from fitlead.db import LeadStore

        table = mock_supabase.table.return_value
        table.execute.return_value = MagicMock(data=[])

        assert LeadStore(mock_supabase).mark_whatsapp_sent("u1") is False
        table.update.assert_called_once_with({"whatsapp_sent": True})
        table.eq.assert_any_call("id", "u1")
        table.eq.assert_any_call("whatsapp_sent", False)

    def test_get_lead_handles_missing_row(self, mock_supabase):
        from fitlead.db import LeadStore

        mock_supabase.table.return_value.execute.return_value = None
        assert LeadStore(mock_supabase).get_lead("missing") is None
