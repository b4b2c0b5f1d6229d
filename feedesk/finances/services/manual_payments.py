"""
finances/services/manual_payments.py
─────────────────────────────────────
Cash / offline payments recorded by an administrator at the desk.
"""

import logging
import time

from django.db import DEFAULT_DB_ALIAS, transaction

from ..models import Event, Payment, Student
from ..results import ErrorKind, Result, service_boundary
from .payments import settled_payment_exists
from .shapes import payment_dict

logger = logging.getLogger(__name__)


def cash_transaction_id():
    return f'CASH_{int(time.time() * 1000)}'


@service_boundary('Failed to record payment')
def record_cash_payment(student_id, event_id, amount, payment_date, recorded_by,
                        notes='', receipt_number='', using=DEFAULT_DB_ALIAS):
    """
    Record a cash payment as PAID.  Refused when the student already has a
    PAID payment for the event; the check and the insert share one
    transaction with the student row locked.
    """
    if not recorded_by:
        return Result.failure(ErrorKind.UNAUTHORIZED, 'Unauthorized')

    with transaction.atomic(using=using):
        student = Student.objects.using(using).select_for_update().filter(pk=student_id).first()
        if student is None:
            return Result.failure(ErrorKind.NOT_FOUND, 'Student not found')
        event = Event.objects.using(using).filter(pk=event_id).first()
        if event is None:
            return Result.failure(ErrorKind.NOT_FOUND, 'Event not found')

        if settled_payment_exists(student.pk, event.pk, statuses=[Payment.Status.PAID], using=using):
            return Result.failure(
                ErrorKind.CONFLICT, 'Payment already recorded for this student and event'
            )

        payment = Payment.objects.using(using).create(
            student=student,
            event=event,
            amount=amount,
            payment_date=payment_date,
            status=Payment.Status.PAID,
            payment_method='Cash',
            transaction_id=cash_transaction_id(),
            is_manual_entry=True,
            recorded_by=str(recorded_by),
            notes=notes or '',
            receipt_number=receipt_number or '',
        )

    logger.info(
        'Cash payment %s recorded by %s: %s → %s (%s INR)',
        payment.pk, recorded_by, student.roll_no, event.name, amount,
    )
    return Result.success(payment_dict(payment, with_student=True, with_event=True))


@service_boundary('Failed to fetch manual payments')
def get_manual_payments(using=DEFAULT_DB_ALIAS):
    payments = (
        Payment.objects.using(using)
        .filter(is_manual_entry=True)
        .select_related('student', 'event')
        .order_by('-created_at')
    )
    return Result.success([payment_dict(p, with_student=True, with_event=True) for p in payments])
