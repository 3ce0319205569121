# fastapi dependency injection
# provides the wall clock and the requested dashboard date

import logging
from datetime import date, datetime
from typing import Callable, Optional

from fastapi import Depends, Query

logger = logging.getLogger(__name__)


class InvalidDashboardDate(Exception):
    """raised when the ?date= query param isn't YYYY-MM-DD"""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid date: {value}")


def get_clock() -> Callable[[], datetime]:
    """local wall-clock "now": overridden in tests"""
    return datetime.now


def get_as_of(
    date_param: Optional[str] = Query(None, alias="date", description="dashboard date, YYYY-MM-DD"),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> datetime:
    """the requested day combined with the current time of day, defaults to now"""
    now = clock()
    if not date_param:
        return now

    try:
        target = date.fromisoformat(date_param)
    except ValueError:
        raise InvalidDashboardDate(date_param)

    return datetime.combine(target, now.time())
