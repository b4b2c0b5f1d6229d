"""
finances/services/dashboard.py
───────────────────────────────
Data for the dashboard overview page.
"""

from django.db import DEFAULT_DB_ALIAS

from ..models import Event, Payment
from ..results import Result, service_boundary
from .shapes import event_dict, payment_dict

RECENT_LIMIT = 5


@service_boundary('Failed to fetch dashboard data')
def get_dashboard_data(using=DEFAULT_DB_ALIAS):
    """
    Every event, every payment (with student / event names and the event
    cost), plus the five most recent payments by payment date.
    """
    events = Event.objects.using(using).all()
    payments = (
        Payment.objects.using(using)
        .select_related('student', 'event')
        .order_by('-payment_date')
    )
    transactions = [payment_dict(p, with_student=True, with_event=True) for p in payments]

    return Result.success({
        'events':             [event_dict(e) for e in events],
        'transactions':       transactions,
        'recentTransactions': transactions[:RECENT_LIMIT],
    })
