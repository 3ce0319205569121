# dashboard models: practitioner dashboard response schemas
# mirrors frontend types/bloom.ts SessionFeedItem, WeeklyStats, MonthlyStats, etc.

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


# session statuses: the closed set the dashboard renders
SCHEDULED = "scheduled"
CONFIRMED = "confirmed"
IN_PROGRESS = "in-progress"
COMPLETED = "completed"
CANCELLED = "cancelled"
NO_SHOW = "no-show"

SESSION_STATUSES = (SCHEDULED, CONFIRMED, IN_PROGRESS, COMPLETED, CANCELLED, NO_SHOW)

TELEHEALTH = "telehealth"
IN_PERSON = "in-person"


class Practitioner(BaseModel):
    id: str
    display_name: str = Field("", alias="displayName")
    email: str = ""
    specializations: list[str] = Field(default_factory=list)
    timezone: str = "Australia/Sydney"

    model_config = {"populate_by_name": True}


class SessionFeedItem(BaseModel):
    """a single session in today's feed"""
    id: str
    time: str = ""
    client_initials: str = Field("", alias="clientInitials")
    client_id: str = Field("", alias="clientId")
    session_number: int = Field(1, alias="sessionNumber")
    presenting_issues: list[str] = Field(default_factory=list, alias="presentingIssues")
    mhcp_remaining: int = Field(0, alias="mhcpRemaining")
    mhcp_total: int = Field(10, alias="mhcpTotal")
    relationship_months: int = Field(0, alias="relationshipMonths")
    status: str = SCHEDULED
    is_up_next: bool = Field(False, alias="isUpNext")
    location_type: str = Field(IN_PERSON, alias="locationType")

    # raw start instant, kept next to the display string and never serialized
    start_time: Optional[datetime] = Field(None, exclude=True)

    model_config = {"populate_by_name": True}


class DaySummary(BaseModel):
    """session counts for the selected day"""
    date: str
    total_sessions: int = Field(0, alias="totalSessions")
    completed_sessions: int = Field(0, alias="completedSessions")
    upcoming_sessions: int = Field(0, alias="upcomingSessions")
    cancelled_sessions: int = Field(0, alias="cancelledSessions")

    model_config = {"populate_by_name": True}


class WeeklyStats(BaseModel):
    week_start_date: str = Field("", alias="weekStartDate")
    week_end_date: str = Field("", alias="weekEndDate")
    current_sessions: int = Field(0, alias="currentSessions")
    scheduled_sessions: int = Field(0, alias="scheduledSessions")
    max_sessions: int = Field(25, alias="maxSessions")
    current_revenue: float = Field(0.0, alias="currentRevenue")
    target_revenue: float = Field(5500.0, alias="targetRevenue")
    completion_rate: int = Field(0, alias="completionRate")
    no_show_count: int = Field(0, alias="noShowCount")
    cancellation_count: int = Field(0, alias="cancellationCount")

    model_config = {"populate_by_name": True}


class RevenueByBillingType(BaseModel):
    """earned revenue split by billing category, need not sum to the total"""
    medicare: float = 0.0
    private: float = 0.0
    dva: float = 0.0
    workcover: float = 0.0
    ndis: float = 0.0


class MonthlyStats(BaseModel):
    month_name: str = Field("", alias="monthName")
    month_year: str = Field("", alias="monthYear")
    current_revenue: float = Field(0.0, alias="currentRevenue")
    target_revenue: float = Field(22000.0, alias="targetRevenue")
    projected_revenue: float = Field(0.0, alias="projectedRevenue")
    yearly_projection: int = Field(0, alias="yearlyProjection")
    sessions_completed: int = Field(0, alias="sessionsCompleted")
    sessions_scheduled: int = Field(0, alias="sessionsScheduled")
    average_session_value: float = Field(220.0, alias="averageSessionValue")
    revenue_by_billing_type: RevenueByBillingType = Field(
        default_factory=RevenueByBillingType, alias="revenueByBillingType"
    )

    model_config = {"populate_by_name": True}


class UpcomingStats(BaseModel):
    tomorrow_sessions: int = Field(0, alias="tomorrowSessions")
    remaining_this_week: int = Field(0, alias="remainingThisWeek")
    next_week_sessions: int = Field(0, alias="nextWeekSessions")
    mhcp_ending_soon: int = Field(0, alias="mhcpEndingSoon")
    clients_needing_follow_up: int = Field(0, alias="clientsNeedingFollowUp")
    unbooked_regulars: int = Field(0, alias="unbookedRegulars")

    model_config = {"populate_by_name": True}


class SyncError(BaseModel):
    timestamp: str
    operation: str
    entity: str
    error: str
    is_resolved: bool = Field(False, alias="isResolved")

    model_config = {"populate_by_name": True}


class SyncStatus(BaseModel):
    """health of the background sync with the upstream scheduling system"""
    is_connected: bool = Field(True, alias="isConnected")
    last_successful_sync: Optional[str] = Field(None, alias="lastSuccessfulSync")
    last_sync_attempt: Optional[str] = Field(None, alias="lastSyncAttempt")
    sync_errors: list[SyncError] = Field(default_factory=list, alias="syncErrors")
    pending_changes: int = Field(0, alias="pendingChanges")

    model_config = {"populate_by_name": True}


class DashboardData(BaseModel):
    practitioner: Practitioner
    todays_sessions: list[SessionFeedItem] = Field(default_factory=list, alias="todaysSessions")
    todays_summary: DaySummary = Field(..., alias="todaysSummary")
    weekly_stats: WeeklyStats = Field(default_factory=WeeklyStats, alias="weeklyStats")
    upcoming_stats: UpcomingStats = Field(default_factory=UpcomingStats, alias="upcomingStats")
    monthly_stats: MonthlyStats = Field(default_factory=MonthlyStats, alias="monthlyStats")
    last_updated: str = Field(..., alias="lastUpdated")
    sync_status: SyncStatus = Field(default_factory=SyncStatus, alias="syncStatus")

    model_config = {"populate_by_name": True}


class DashboardResponse(BaseModel):
    """response envelope: data on success, error message otherwise"""
    success: bool
    data: Optional[DashboardData] = None
    error: Optional[str] = None
