"""Date manipulation utilities"""

import calendar
from datetime import date, datetime, timedelta
from typing import List


def generate_date_range(start: date, end: date) -> List[date]:
    """Generate list of dates from start to end (inclusive)"""
    days = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(days)]


def whole_days_between(later: datetime, earlier: datetime) -> int:
    """Number of full days from earlier to later, truncated toward zero"""
    delta = later - earlier
    if delta >= timedelta(0):
        return delta.days
    return -((-delta).days)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def same_month(moment: datetime, reference: datetime) -> bool:
    return moment.year == reference.year and moment.month == reference.month
