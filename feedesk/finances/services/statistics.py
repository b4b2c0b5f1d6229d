"""
finances/services/statistics.py
────────────────────────────────
Collection chart for the dashboard: money received (PAID payments) per
bucket over a trailing window.

    day   – last 7 days,   labelled "Jan 05"
    week  – last 8 weeks,  weeks start on Sunday, labelled "Week Jan 05"
    month – last 6 months, labelled "Jan 2026"
"""

from datetime import timedelta

from django.db import DEFAULT_DB_ALIAS
from django.db.models import Count, Sum
from django.utils import timezone

from ..models import Payment
from ..results import ErrorKind, Result, service_boundary
from .shapes import money

PERIODS = ('day', 'week', 'month')


def _start_of_day(dt):
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def _start_of_month(dt, months_back=0):
    month_index = dt.year * 12 + (dt.month - 1) - months_back
    return _start_of_day(dt).replace(year=month_index // 12, month=month_index % 12 + 1, day=1)


def _buckets(period, now):
    """Yield (label, start, end) for each bucket, oldest first."""
    if period == 'day':
        today = _start_of_day(now)
        for i in range(6, -1, -1):
            start = today - timedelta(days=i)
            yield start.strftime('%b %d'), start, start + timedelta(days=1)
    elif period == 'week':
        this_week = _start_of_day(now) - timedelta(days=(now.weekday() + 1) % 7)
        for i in range(7, -1, -1):
            start = this_week - timedelta(weeks=i)
            yield f"Week {start.strftime('%b %d')}", start, start + timedelta(weeks=1)
    else:
        for i in range(5, -1, -1):
            start = _start_of_month(now, i)
            yield start.strftime('%b %Y'), start, _start_of_month(now, i - 1)


@service_boundary('Failed to fetch statistics')
def get_dashboard_statistics(period='week', now=None, using=DEFAULT_DB_ALIAS):
    if period not in PERIODS:
        return Result.failure(ErrorKind.VALIDATION, f'Unknown period "{period}"')

    now = timezone.localtime(now or timezone.now())
    paid = Payment.objects.using(using).filter(status=Payment.Status.PAID)

    points = []
    for label, start, end in _buckets(period, now):
        totals = paid.filter(payment_date__gte=start, payment_date__lt=end).aggregate(
            collections=Sum('amount'),
            transactions=Count('id'),
        )
        points.append({
            'date':         label,
            'collections':  money(totals['collections'] or 0),
            'transactions': totals['transactions'],
        })
    return Result.success(points)
