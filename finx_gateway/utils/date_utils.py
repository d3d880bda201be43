"""Date manipulation utilities"""

from datetime import date


def add_months(from_date: date, months: int) -> date:
    """First day of the month that is `months` calendar months after from_date"""
    total = from_date.year * 12 + (from_date.month - 1) + months
    return date(total // 12, total % 12 + 1, 1)
