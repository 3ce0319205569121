# revenue projection: linear extrapolation from a partial month
# ignores seasonality on purpose, the dashboard only wants a pace indicator

import calendar
from dataclasses import dataclass
from datetime import date

from bloom.services.coercion import round_half_up


@dataclass(frozen=True)
class RevenueProjection:
    monthly_pace: float
    yearly_projection: int


def project_revenue(earned_this_month: float, day_of_month: int, days_in_month: int) -> RevenueProjection:
    """extrapolate this month's earnings to a full month, then to a year.
    day_of_month of 0 means no elapsed days, so earnings are taken as the pace."""
    if day_of_month > 0:
        monthly_pace = (earned_this_month / day_of_month) * days_in_month
    else:
        monthly_pace = earned_this_month
    return RevenueProjection(
        monthly_pace=monthly_pace,
        yearly_projection=round_half_up(monthly_pace * 12),
    )


def project_for_date(earned_this_month: float, as_of: date) -> RevenueProjection:
    days_in_month = calendar.monthrange(as_of.year, as_of.month)[1]
    return project_revenue(earned_this_month, as_of.day, days_in_month)
