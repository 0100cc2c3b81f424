"""
Dashboard API routes (read-only).

StorageError propagates to the app-level FitleadError handler.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from fitlead.dashboard import compute_stats, csv_filename, export_csv, filter_leads, load_leads
from fitlead.db import LeadStore
from fitlead.web.deps import get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/leads", tags=["dashboard"])


@router.get("")
async def list_leads(
    search: str = Query(default="", description="Match name, phone number, or goal"),
    store: LeadStore = Depends(get_store),
):
    """Leads (newest first) filtered by search, with stats over all leads."""
    leads = load_leads(store)
    filtered = filter_leads(leads, search)
    return {
        "stats": compute_stats(leads).to_dict(),
        "count": len(filtered),
        "leads": filtered,
    }


@router.get("/stats")
async def lead_stats(store: LeadStore = Depends(get_store)):
    """Headline stats only."""
    return compute_stats(load_leads(store)).to_dict()


@router.get("/export.csv")
async def export_leads_csv(
    search: str = Query(default="", description="Export only leads matching this term"),
    store: LeadStore = Depends(get_store),
):
    """Download the (filtered) lead list as CSV."""
    filtered = filter_leads(load_leads(store), search)
    filename = csv_filename()

    logger.info(f"Exported {len(filtered)} leads to {filename}")

    return Response(
        content=export_csv(filtered),
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"'
        },
    )


@router.get("/{user_id}")
async def get_lead(user_id: str, store: LeadStore = Depends(get_store)):
    """A single lead with its diet plan, if one was stored."""
    lead = store.get_lead(user_id)
    if lead is None:
        raise HTTPException(status_code=404, detail="Lead not found")
    return {"lead": lead, "diet_plan": store.get_plan(user_id)}
