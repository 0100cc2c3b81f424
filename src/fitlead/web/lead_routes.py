"""
Lead funnel API routes.

- POST /generate-diet: store lead → generate plan → deliver (the orchestration)
- POST /send-whatsapp: deliver a message directly
- GET /intake/questions: questionnaire catalogue for client UIs
"""

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from intake import get_question_options

from fitlead.db import LeadStore
from fitlead.errors import DeliveryError, FitleadError
from fitlead.llm import PlanGenerator
from fitlead.messaging import Notifier
from fitlead.orchestration import run_lead_flow
from fitlead.sheets import LeadSheet
from fitlead.web.deps import get_generator, get_sheet, get_store, get_whatsapp_notifier

logger = logging.getLogger(__name__)

router = APIRouter(tags=["leads"])


async def _read_json_object(request: Request) -> dict | None:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return body if isinstance(body, dict) else None


@router.post("/generate-diet")
async def generate_diet(
    request: Request,
    store: LeadStore = Depends(get_store),
    generator: PlanGenerator = Depends(get_generator),
    notifier: Notifier = Depends(get_whatsapp_notifier),
    sheet: LeadSheet | None = Depends(get_sheet),
):
    """
    Run the lead flow for a completed questionnaire.

    400 on the first missing field, 500 on storage or generation failure,
    200 with the plan otherwise (delivery problems never change that).
    """
    payload = await _read_json_object(request)
    if payload is None:
        return JSONResponse(status_code=400, content={"error": "Request body must be a JSON object"})

    try:
        result = await run_lead_flow(
            payload,
            store=store,
            generator=generator,
            notifier=notifier,
            sheet=sheet,
        )
    except FitleadError as e:
        return JSONResponse(status_code=e.status_code, content=e.to_response())
    except Exception as e:
        logger.exception(f"Error in generate-diet: {e}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    return result.to_response()


@router.post("/send-whatsapp")
async def send_whatsapp(
    request: Request,
    notifier: Notifier = Depends(get_whatsapp_notifier),
):
    """Send a WhatsApp message, chunked to Twilio's length limit."""
    payload = await _read_json_object(request) or {}
    to = payload.get("to")
    message = payload.get("message")

    if not (isinstance(to, str) and to.strip()) or not (isinstance(message, str) and message):
        return JSONResponse(status_code=400, content={"error": "Missing required fields: to, message"})

    try:
        result = notifier.send(to, message)
    except DeliveryError as e:
        return JSONResponse(status_code=e.status_code, content=e.to_response())

    if result.simulated:
        return {
            "success": True,
            "message": "WhatsApp message simulated (Twilio not configured)",
            "sid": result.sid,
        }

    return {
        "success": True,
        "message": "WhatsApp message sent successfully",
    }


@router.get("/intake/questions")
async def get_intake_questions():
    """Questionnaire catalogue in display order."""
    return {"questions": get_question_options()}
