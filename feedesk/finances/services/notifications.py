"""
finances/services/notifications.py
───────────────────────────────────
Payments waiting for an administrator to verify a submitted screenshot.
"""

from django.db import DEFAULT_DB_ALIAS

from ..models import Payment
from ..results import Result, service_boundary
from .shapes import payment_dict


@service_boundary('Failed to fetch pending transactions')
def get_pending_transactions(using=DEFAULT_DB_ALIAS):
    payments = (
        Payment.objects.using(using)
        .filter(status=Payment.Status.VERIFICATION_PENDING)
        .select_related('student', 'event')
        .order_by('payment_date')
    )
    return Result.success([payment_dict(p, with_student=True, with_event=True) for p in payments])
