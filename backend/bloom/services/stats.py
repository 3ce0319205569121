# stats aggregation: maps weekly / monthly / upcoming view documents to dashboard stats
# a missing view document is not an error: every field falls back to its default

import calendar
from datetime import datetime
from typing import Optional

from bloom.config import settings
from bloom.models.dashboard import WeeklyStats, MonthlyStats, UpcomingStats, RevenueByBillingType
from bloom.services.coercion import (
    note,
    round_half_up,
    to_number,
    to_int,
    number_or_default,
    to_iso_date,
)
from bloom.services.revenue import project_for_date

BILLING_TYPES = ("medicare", "private", "dva", "workcover", "ndis")


def completion_rate(completed: int, total: int) -> int:
    """percentage of completed sessions, 0 when there were none"""
    if total > 0:
        return round_half_up(completed / total * 100)
    return 0


def weekly_stats(row: Optional[dict], warnings: Optional[list[str]] = None) -> WeeklyStats:
    if row is None:
        note(warnings, "weekly stats: no row, using defaults")
        row = {}

    completed = to_int(row.get("completed_sessions"), field="completed_sessions", warnings=warnings)
    total = to_int(row.get("total_sessions"), field="total_sessions", warnings=warnings)

    return WeeklyStats(
        weekStartDate=to_iso_date(row.get("week_start")),
        weekEndDate=to_iso_date(row.get("week_end")),
        currentSessions=completed,
        scheduledSessions=to_int(row.get("scheduled_sessions"), field="scheduled_sessions", warnings=warnings),
        maxSessions=int(number_or_default(
            row.get("weekly_session_target"), settings.DEFAULT_WEEKLY_SESSION_TARGET,
            field="weekly_session_target", warnings=warnings,
        )),
        currentRevenue=to_number(row.get("earned_revenue"), field="earned_revenue", warnings=warnings),
        targetRevenue=number_or_default(
            row.get("weekly_revenue_target"), settings.DEFAULT_WEEKLY_REVENUE_TARGET,
            field="weekly_revenue_target", warnings=warnings,
        ),
        completionRate=completion_rate(completed, total),
        noShowCount=to_int(row.get("no_shows"), field="no_shows", warnings=warnings),
        cancellationCount=to_int(row.get("cancellations"), field="cancellations", warnings=warnings),
    )


def monthly_stats(row: Optional[dict], as_of: datetime,
                  warnings: Optional[list[str]] = None) -> MonthlyStats:
    """monthly revenue and sessions. as_of drives the default labels and the yearly pace."""
    if row is None:
        note(warnings, "monthly stats: no row, using defaults")
        row = {}

    current_revenue = to_number(row.get("earned_revenue"), field="earned_revenue", warnings=warnings)
    # projected_revenue in the view only covers sessions still to come this month
    still_scheduled = to_number(row.get("projected_revenue"), field="projected_revenue", warnings=warnings)
    projection = project_for_date(current_revenue, as_of.date())

    breakdown = RevenueByBillingType(**{
        billing_type: to_number(row.get(f"{billing_type}_revenue"), field=f"{billing_type}_revenue", warnings=warnings)
        for billing_type in BILLING_TYPES
    })

    return MonthlyStats(
        monthName=row.get("month_name") or calendar.month_name[as_of.month],
        monthYear=row.get("month_year") or as_of.strftime("%Y-%m"),
        currentRevenue=current_revenue,
        targetRevenue=number_or_default(
            row.get("monthly_revenue_target"), settings.DEFAULT_MONTHLY_REVENUE_TARGET,
            field="monthly_revenue_target", warnings=warnings,
        ),
        projectedRevenue=still_scheduled + current_revenue,
        yearlyProjection=projection.yearly_projection,
        sessionsCompleted=to_int(row.get("completed_sessions"), field="completed_sessions", warnings=warnings),
        sessionsScheduled=to_int(row.get("scheduled_sessions"), field="scheduled_sessions", warnings=warnings),
        averageSessionValue=number_or_default(
            row.get("avg_session_value"), settings.DEFAULT_AVERAGE_SESSION_VALUE,
            field="avg_session_value", warnings=warnings,
        ),
        revenueByBillingType=breakdown,
    )


def upcoming_stats(row: Optional[dict], mhcp_row: Optional[dict] = None,
                   warnings: Optional[list[str]] = None) -> UpcomingStats:
    """short-horizon counts plus care-continuity signals.
    mhcp_row comes from the separate mhcp_ending_soon view."""
    if row is None:
        note(warnings, "upcoming stats: no row, using defaults")
        row = {}
    mhcp_row = mhcp_row or {}

    return UpcomingStats(
        tomorrowSessions=to_int(row.get("tomorrow_sessions"), field="tomorrow_sessions", warnings=warnings),
        remainingThisWeek=to_int(row.get("remaining_this_week"), field="remaining_this_week", warnings=warnings),
        nextWeekSessions=to_int(row.get("next_week_sessions"), field="next_week_sessions", warnings=warnings),
        mhcpEndingSoon=to_int(mhcp_row.get("clients_mhcp_ending"), field="clients_mhcp_ending", warnings=warnings),
        clientsNeedingFollowUp=to_int(
            row.get("clients_needing_follow_up"), field="clients_needing_follow_up", warnings=warnings
        ),
        unbookedRegulars=to_int(row.get("unbooked_regulars"), field="unbooked_regulars", warnings=warnings),
    )
