# dashboard router: practitioner daily schedule and practice metrics
# fetches rows from the synced collections, composition happens in services.composer

import logging
from datetime import datetime, timedelta

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from bloom.models.dashboard import DashboardResponse
from bloom.services.db import Database, get_db
from bloom.services.composer import DashboardRows, PractitionerNotFound, compose_dashboard
from bloom.dependencies import get_as_of

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/practitioners", tags=["dashboard"])


def _error_response(status_code: int, message: str) -> JSONResponse:
    body = DashboardResponse(success=False, error=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


async def _fetch_sessions(practitioner_id: str, day_start: datetime, db: Database) -> list[dict]:
    """sessions for the day joined to their clients. sessions with no client are dropped."""
    cursor = db.sessions.find({
        "practitioner_id": practitioner_id,
        "scheduled_start_time": {"$gte": day_start, "$lt": day_start + timedelta(days=1)},
    }).sort("scheduled_start_time", 1)
    sessions = await cursor.to_list(length=None)
    if not sessions:
        return []

    client_ids = list({s.get("client_id") for s in sessions if s.get("client_id")})
    clients = {}
    async for doc in db.clients.find({"_id": {"$in": client_ids}}):
        clients[doc["_id"]] = doc

    rows = []
    for session in sessions:
        client = clients.get(session.get("client_id"))
        if client is None:
            logger.warning(f"Session {session.get('_id')} has no client {session.get('client_id')}, skipping")
            continue
        rows.append({
            "id": str(session["_id"]),
            "scheduled_start_time": session.get("scheduled_start_time"),
            "session_number": session.get("session_number"),
            "status": session.get("status"),
            "location_type": session.get("location_type"),
            "client_id": str(client["_id"]),
            "client_initials": client.get("initials"),
            "client_name": " ".join(filter(None, [client.get("first_name"), client.get("last_name")])),
            "presenting_issues": client.get("presenting_issues"),
            "mhcp_remaining_sessions": client.get("mhcp_remaining_sessions"),
            "mhcp_total_sessions": client.get("mhcp_total_sessions"),
            "relationship_months": client.get("relationship_months"),
        })
    return rows


async def _fetch_rows(practitioner_id: str, as_of: datetime, db: Database) -> DashboardRows:
    practitioner = await db.practitioners.find_one({"_id": practitioner_id})
    if practitioner is None:
        return DashboardRows()

    # view documents are independent and read-only, order doesn't matter
    by_practitioner = {"practitioner_id": practitioner_id}
    day_start = datetime.combine(as_of.date(), datetime.min.time())
    return DashboardRows(
        practitioner=practitioner,
        sessions=await _fetch_sessions(practitioner_id, day_start, db),
        weekly=await db.weekly_stats.find_one(by_practitioner),
        monthly=await db.monthly_stats.find_one(by_practitioner),
        upcoming=await db.upcoming_stats.find_one(by_practitioner),
        mhcp_ending=await db.mhcp_ending_soon.find_one(by_practitioner),
        sync_status=await db.sync_status.find_one(by_practitioner),
    )


@router.get("/{practitioner_id}/dashboard", response_model=DashboardResponse)
async def get_practitioner_dashboard(
    practitioner_id: str,
    as_of: datetime = Depends(get_as_of),
    db: Database = Depends(get_db),
):
    """today's sessions, weekly/monthly/upcoming stats and sync health for a practitioner"""
    logger.info(f"Fetching dashboard for practitioner {practitioner_id}, date {as_of.date().isoformat()}")

    rows = await _fetch_rows(practitioner_id, as_of, db)
    try:
        composed = compose_dashboard(practitioner_id, as_of, rows)
    except PractitionerNotFound:
        logger.info(f"Practitioner not found: {practitioner_id}")
        return _error_response(status.HTTP_404_NOT_FOUND, "Practitioner not found")

    return DashboardResponse(success=True, data=composed.data)
