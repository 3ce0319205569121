# dashboard composer: turns raw practitioner/session/stats rows into one DashboardData
# pure and stateless: rows in, dashboard out. fetching the rows is the router's job.
#
# the only hard failure is a missing practitioner. everything else degrades to
# defaults and is reported through the warnings list returned with the data.

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from bloom.config import settings
from bloom.models.dashboard import DashboardData, Practitioner
from bloom.services.coercion import parse_json_list
from bloom.services.sessions import normalize_session, sort_sessions, mark_up_next, summarize_day
from bloom.services.stats import weekly_stats, monthly_stats, upcoming_stats
from bloom.services.sync_status import normalize_sync_status
from bloom.services.wall_clock import minutes_since_midnight

logger = logging.getLogger(__name__)


class PractitionerNotFound(Exception):
    """raised when no practitioner row exists for the requested id"""

    def __init__(self, practitioner_id: str):
        self.practitioner_id = practitioner_id
        super().__init__(f"Practitioner not found: {practitioner_id}")


@dataclass
class DashboardRows:
    """everything the data store returned for one dashboard request"""
    practitioner: Optional[dict] = None
    sessions: list[dict] = field(default_factory=list)
    weekly: Optional[dict] = None
    monthly: Optional[dict] = None
    upcoming: Optional[dict] = None
    mhcp_ending: Optional[dict] = None
    sync_status: Optional[dict] = None


@dataclass
class ComposedDashboard:
    data: DashboardData
    warnings: list[str] = field(default_factory=list)


def normalize_practitioner(row: dict, warnings: Optional[list[str]] = None) -> Practitioner:
    return Practitioner(
        id=str(row.get("id") or row.get("_id") or ""),
        displayName=row.get("display_name") or "",
        email=row.get("email") or "",
        specializations=parse_json_list(row.get("specializations"), field="specializations", warnings=warnings),
        timezone=row.get("timezone") or settings.DEFAULT_TIMEZONE,
    )


def compose_dashboard(practitioner_id: str, as_of: datetime, rows: DashboardRows) -> ComposedDashboard:
    """assemble the dashboard for practitioner_id as seen at as_of (local wall-clock)"""
    if rows.practitioner is None:
        raise PractitionerNotFound(practitioner_id)

    warnings: list[str] = []
    practitioner = normalize_practitioner(rows.practitioner, warnings)

    sessions = sort_sessions([normalize_session(row, warnings) for row in rows.sessions])
    weekly = weekly_stats(rows.weekly, warnings)
    monthly = monthly_stats(rows.monthly, as_of, warnings)
    upcoming = upcoming_stats(rows.upcoming, rows.mhcp_ending, warnings)
    sync_status = normalize_sync_status(rows.sync_status, as_of, warnings)

    mark_up_next(sessions, minutes_since_midnight(as_of))

    data = DashboardData(
        practitioner=practitioner,
        todaysSessions=sessions,
        todaysSummary=summarize_day(sessions, as_of.date()),
        weeklyStats=weekly,
        upcomingStats=upcoming,
        monthlyStats=monthly,
        lastUpdated=as_of.isoformat(),
        syncStatus=sync_status,
    )

    for warning in warnings:
        logger.warning(f"Dashboard {practitioner_id}: {warning}")

    return ComposedDashboard(data=data, warnings=warnings)
