"""Income aggregation - period totals and per-staff / per-service subtotals"""

import calendar
import logging
from datetime import date, timedelta
from typing import Iterable

logger = logging.getLogger(__name__)


def period_bounds(today: date) -> dict[str, tuple[str, str]]:
    """ISO date bounds (inclusive) of the current day, ISO week and month"""
    week_start = today - timedelta(days=today.weekday())
    week_end = week_start + timedelta(days=6)
    month_start = today.replace(day=1)
    month_end = today.replace(day=calendar.monthrange(today.year, today.month)[1])
    return {
        "today": (today.isoformat(), today.isoformat()),
        "week": (week_start.isoformat(), week_end.isoformat()),
        "month": (month_start.isoformat(), month_end.isoformat()),
    }


def _ranked(totals: dict[str, float], label: str) -> list[dict]:
    items = [{label: name, "total": round(total, 2)} for name, total in totals.items()]
    return sorted(items, key=lambda item: item["total"], reverse=True)


def summarize_incomes(incomes: Iterable[dict], today: date) -> dict:
    """
    Single pass over the income records.

    Dates are compared as ISO strings, so an income dated outside every
    window still counts toward the all-time total.
    """
    bounds = period_bounds(today)
    week_start, week_end = bounds["week"]
    month_start, month_end = bounds["month"]
    today_str = today.isoformat()

    total_all_time = 0.0
    total_month = 0.0
    total_week = 0.0
    total_today = 0.0
    by_staff: dict[str, float] = {}
    by_service: dict[str, float] = {}
    count = 0

    for income in incomes:
        count += 1
        try:
            amount = float(income.get("amount", 0))
        except (TypeError, ValueError):
            logger.warning(f"Income {income.get('id')} has a non-numeric amount, counted as 0")
            amount = 0.0
        income_date = str(income.get("date", ""))

        total_all_time += amount
        if month_start <= income_date <= month_end:
            total_month += amount
        if week_start <= income_date <= week_end:
            total_week += amount
        if income_date == today_str:
            total_today += amount

        staff_name = income.get("staffName") or "Unknown"
        service_name = income.get("serviceName") or "Unknown"
        by_staff[staff_name] = by_staff.get(staff_name, 0.0) + amount
        by_service[service_name] = by_service.get(service_name, 0.0) + amount

    return {
        "totalAllTime": round(total_all_time, 2),
        "totalThisMonth": round(total_month, 2),
        "totalThisWeek": round(total_week, 2),
        "totalToday": round(total_today, 2),
        "byStaff": _ranked(by_staff, "staffName"),
        "byService": _ranked(by_service, "serviceName"),
        "recordCount": count,
    }
