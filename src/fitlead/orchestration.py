"""
Fitlead - Lead flow orchestration.

Runs once per completed questionnaire:

1. Store the lead profile              (fatal on failure)
2. Generate the diet plan              (fatal on failure, profile stays as a partial lead)
3. Store the plan                      (logged only)
4. Deliver over WhatsApp, mark as sent (logged only, never changes the response)
5. Return the lead id and plan text

Nothing after step 2 can turn a generated plan into a failed response.
"""

import logging
from dataclasses import dataclass
from typing import Any

from fitlead.db.client import LeadStore
from fitlead.errors import StorageError
from fitlead.llm.client import PlanGenerator
from fitlead.messaging.whatsapp import Notifier
from fitlead.models import parse_profile
from fitlead.sheets import LeadSheet

logger = logging.getLogger(__name__)


@dataclass
class LeadFlowResult:
    """What the orchestration endpoint reports back, plus side-effect status."""
    user_id: str
    diet_plan: str
    plan_stored: bool = False
    delivered: bool = False
    simulated: bool = False
    marked_sent: bool = False

    def to_response(self) -> dict[str, Any]:
        return {
            "success": True,
            "user_id": self.user_id,
            "diet_plan": self.diet_plan,
        }


def build_delivery_message(name: str, diet_plan: str) -> str:
    """WhatsApp message wrapping the plan text."""
    return (
        f"Hi {name}! 🎉 Here's your personalized diet plan:\n\n"
        f"{diet_plan}\n\n"
        "For more fitness tips and exclusive gym offers, stay tuned! "
        "Our team will contact you soon."
    )


async def run_lead_flow(
    payload: dict[str, Any],
    *,
    store: LeadStore,
    generator: PlanGenerator,
    notifier: Notifier,
    sheet: LeadSheet | None = None,
) -> LeadFlowResult:
    """
    Store a lead, generate its diet plan, and deliver it.

    Raises:
        MissingFieldError / InvalidFieldError: payload rejected before any write
        StorageError: the profile couldn't be stored
        ConfigurationError / GenerationError: the plan couldn't be generated
    """
    profile = parse_profile(payload)

    # 1. Profile - nothing else runs without a stored identity
    try:
        user = store.create_profile(profile.to_record())
    except StorageError as e:
        logger.error(f"Error inserting user: {e.__cause__ or e}")
        raise
    user_id = user["id"]
    logger.info(f"Stored lead {user_id} ({profile.fitness_goal}, {profile.workout_days} days/week)")

    # 2. Generation - failures leave the profile behind as a partial lead
    diet_plan = await generator.generate(profile.model_dump())

    result = LeadFlowResult(user_id=user_id, diet_plan=diet_plan)

    # 3. Plan storage - the plan is still returned if this fails
    plan_record = None
    try:
        plan_record = store.attach_plan(user_id, diet_plan)
        result.plan_stored = True
    except StorageError as e:
        logger.error(f"Error saving diet plan for {user_id}: {e.__cause__ or e}")

    # 4. Delivery - isolated, nothing in here reaches the caller
    try:
        delivery = notifier.send(profile.phone_number, build_delivery_message(profile.name, diet_plan))
        result.delivered = True
        result.simulated = delivery.simulated
    except Exception as e:
        logger.error(f"WhatsApp sending failed for {user_id}: {e}")

    if result.delivered and not result.simulated and plan_record is not None:
        _mark_sent(store, result, plan_record)

    if sheet is not None:
        try:
            sheet.append_lead({**user, "diet_plan": diet_plan})
        except Exception as e:
            logger.warning(f"Failed to append lead {user_id} to Google Sheet: {e}")

    return result


def _mark_sent(store: LeadStore, result: LeadFlowResult, plan_record: dict[str, Any]) -> None:
    """Flip the lead's sent flag, then stamp the plan only if the flip happened."""
    try:
        result.marked_sent = store.mark_whatsapp_sent(result.user_id)
    except StorageError as e:
        logger.error(f"Error marking lead {result.user_id} as sent: {e.__cause__ or e}")
        return

    if not result.marked_sent:
        return

    try:
        store.mark_plan_sent(plan_record["id"])
    except StorageError as e:
        logger.error(f"Error stamping diet plan {plan_record.get('id')} as sent: {e.__cause__ or e}")
