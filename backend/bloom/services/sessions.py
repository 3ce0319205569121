# session feed: normalizes session/client join rows and picks the "up next" session
#
# a join row looks like the sessions document merged with its client:
#   id, scheduled_start_time, session_number, status, location_type,
#   client_id, client_initials, client_name, presenting_issues,
#   mhcp_remaining_sessions, mhcp_total_sessions, relationship_months

import logging
from datetime import date
from typing import Any, Optional

from bloom.config import settings
from bloom.models.dashboard import (
    SessionFeedItem,
    DaySummary,
    SCHEDULED,
    CONFIRMED,
    IN_PROGRESS,
    COMPLETED,
    CANCELLED,
    NO_SHOW,
    SESSION_STATUSES,
    TELEHEALTH,
    IN_PERSON,
)
from bloom.services.coercion import note, to_int, parse_json_list, to_datetime
from bloom.services.wall_clock import format_wall_clock, minutes_since_midnight, parse_wall_clock

logger = logging.getLogger(__name__)

# statuses that can be flagged as the next appointment
UP_NEXT_STATUSES = (SCHEDULED, CONFIRMED)

# aliases used by the data store and the upstream scheduling system (fhir)
_STATUS_ALIASES = {
    "booked": SCHEDULED,
    "pending": SCHEDULED,
    "proposed": SCHEDULED,
    "arrived": CONFIRMED,
    "checked-in": CONFIRMED,
    "in_progress": IN_PROGRESS,
    "fulfilled": COMPLETED,
    "entered-in-error": CANCELLED,
    "no_show": NO_SHOW,
    "noshow": NO_SHOW,
}

_LOCATION_ALIASES = {
    "telehealth": TELEHEALTH,
    "video": TELEHEALTH,
    "in-person": IN_PERSON,
    "in_person": IN_PERSON,
}


def normalize_status(raw: Any, warnings: Optional[list[str]] = None) -> str:
    """map a stored status onto the dashboard's closed set"""
    if raw is None or raw == "":
        return SCHEDULED
    status = str(raw).strip().lower()
    status = _STATUS_ALIASES.get(status, status)
    if status not in SESSION_STATUSES:
        note(warnings, f"status: unknown value {raw!r}")
    return status


def normalize_location(raw: Any) -> str:
    if not raw:
        return IN_PERSON
    return _LOCATION_ALIASES.get(str(raw).strip().lower(), IN_PERSON)


def initials_from_name(name: Optional[str]) -> str:
    """"Jordan Kim" -> "JK", at most two letters"""
    if not name:
        return ""
    return "".join(part[0].upper() for part in name.split() if part)[:2]


def normalize_session(row: dict, warnings: Optional[list[str]] = None) -> SessionFeedItem:
    """build a SessionFeedItem from a session/client join row, defaulting nullable columns"""
    session_id = str(row.get("id") or row.get("_id") or "")

    start_time = to_datetime(row.get("scheduled_start_time"))
    if start_time is None:
        note(warnings, f"session {session_id}: unreadable start time {row.get('scheduled_start_time')!r}")
        display_time = ""
    else:
        display_time = format_wall_clock(start_time)

    session_number = to_int(row.get("session_number"), 1, field="session_number", warnings=warnings)

    return SessionFeedItem(
        id=session_id,
        time=display_time,
        clientInitials=row.get("client_initials") or initials_from_name(row.get("client_name")),
        clientId=str(row.get("client_id") or ""),
        sessionNumber=session_number if session_number > 0 else 1,
        presentingIssues=parse_json_list(
            row.get("presenting_issues"), field=f"session {session_id} presenting_issues", warnings=warnings
        ),
        mhcpRemaining=to_int(row.get("mhcp_remaining_sessions"), 0, field="mhcp_remaining_sessions", warnings=warnings),
        mhcpTotal=to_int(
            row.get("mhcp_total_sessions"), settings.DEFAULT_MHCP_TOTAL_SESSIONS,
            field="mhcp_total_sessions", warnings=warnings,
        ),
        relationshipMonths=to_int(row.get("relationship_months"), 0, field="relationship_months", warnings=warnings),
        status=normalize_status(row.get("status"), warnings),
        isUpNext=False,
        locationType=normalize_location(row.get("location_type")),
        start_time=start_time,
    )


def session_minutes(session: SessionFeedItem) -> int:
    """minutes since midnight: from the carried instant when there is one"""
    if session.start_time is not None:
        return minutes_since_midnight(session.start_time)
    return parse_wall_clock(session.time)


def sort_sessions(sessions: list[SessionFeedItem]) -> list[SessionFeedItem]:
    """chronological order, ties keep their original order"""
    return sorted(sessions, key=session_minutes)


def _pick_next(sessions: list[SessionFeedItem], now_minutes: int) -> Optional[SessionFeedItem]:
    candidates = sort_sessions([s for s in sessions if s.status in UP_NEXT_STATUSES])
    for session in candidates:
        if session_minutes(session) > now_minutes:
            return session
    # nothing later today: still surface the earliest open session, even if it's past
    # TODO: confirm with product whether a day of only past-due sessions should show no badge
    return candidates[0] if candidates else None


def resolve_next_session(sessions: list[SessionFeedItem], now_minutes: int) -> Optional[str]:
    """id of the session that is up next, or None when nothing is scheduled/confirmed"""
    chosen = _pick_next(sessions, now_minutes)
    return chosen.id if chosen else None


def mark_up_next(sessions: list[SessionFeedItem], now_minutes: int) -> Optional[str]:
    """set is_up_next on every session (true for at most one) and return the chosen id"""
    chosen = _pick_next(sessions, now_minutes)
    for session in sessions:
        session.is_up_next = session is chosen
    return chosen.id if chosen else None


def summarize_day(sessions: list[SessionFeedItem], day: date) -> DaySummary:
    return DaySummary(
        date=day.isoformat(),
        totalSessions=len(sessions),
        completedSessions=sum(1 for s in sessions if s.status == COMPLETED),
        upcomingSessions=sum(1 for s in sessions if s.status in (SCHEDULED, CONFIRMED, IN_PROGRESS)),
        cancelledSessions=sum(1 for s in sessions if s.status in (CANCELLED, NO_SHOW)),
    )
