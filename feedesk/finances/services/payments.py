"""
finances/services/payments.py
──────────────────────────────
Payments for an event: listing, status changes, the public pay page and
payment creation.

Status transitions
──────────────────
    Pending ──► Verification Pending ──► Paid
    Pending ──► Paid
    Pending / Verification Pending ──► Failed

Paid and Failed are terminal, but nothing here refuses to move a payment out
of them; such overwrites are logged at WARNING so they can be audited.
"""

import logging

from django.db import DEFAULT_DB_ALIAS, transaction

from ..models import Event, Payment, Student
from ..results import ErrorKind, Result, service_boundary
from .shapes import event_dict, payment_dict, student_dict

logger = logging.getLogger(__name__)


def apply_status(payment, status, transaction_id=None, using=DEFAULT_DB_ALIAS):
    """
    Move *payment* to *status* (optionally recording the gateway
    transaction id) and save.  The caller owns the transaction / row lock.
    """
    if payment.status in Payment.TERMINAL_STATUSES and payment.status != status:
        logger.warning(
            'Payment %s leaves terminal status %s for %s',
            payment.pk, payment.status, status,
        )
    payment.status = status
    update_fields = ['status', 'updated_at']
    if transaction_id is not None:
        payment.transaction_id = transaction_id
        update_fields.append('transaction_id')
    payment.save(using=using, update_fields=update_fields)
    return payment


def settled_payment_exists(student_id, event_id, statuses=Payment.SETTLED_STATUSES,
                           using=DEFAULT_DB_ALIAS):
    return Payment.objects.using(using).filter(
        student_id=student_id,
        event_id=event_id,
        status__in=statuses,
    ).exists()


@service_boundary('Failed to fetch payments')
def get_event_payments(event_id, using=DEFAULT_DB_ALIAS):
    event = Event.objects.using(using).filter(pk=event_id).first()
    if event is None:
        return Result.failure(ErrorKind.NOT_FOUND, 'Event not found')

    payments = (
        Payment.objects.using(using)
        .filter(event=event)
        .select_related('student')
        .order_by('-payment_date')
    )
    return Result.success({
        'event':        event_dict(event),
        'transactions': [payment_dict(p, with_student=True) for p in payments],
    })


@service_boundary('Failed to update payment status')
def update_payment_status(payment_id, status, using=DEFAULT_DB_ALIAS):
    if status not in Payment.Status.values:
        return Result.failure(ErrorKind.VALIDATION, f'Unknown payment status "{status}"')

    with transaction.atomic(using=using):
        payment = (
            Payment.objects.using(using)
            .select_for_update()
            .select_related('student', 'event')
            .filter(pk=payment_id)
            .first()
        )
        if payment is None:
            return Result.failure(ErrorKind.NOT_FOUND, 'Payment not found')
        apply_status(payment, status, using=using)

    logger.info('Payment %s set to %s', payment.pk, status)
    return Result.success(payment_dict(payment, with_student=True, with_event=True))


@service_boundary('Failed to fetch data')
def get_payment_page_data(event_id, using=DEFAULT_DB_ALIAS):
    """
    The event plus every student who has not yet paid for it (or submitted
    a payment awaiting verification), ordered by roll number.
    """
    event = Event.objects.using(using).filter(pk=event_id).first()
    if event is None:
        return Result.failure(ErrorKind.NOT_FOUND, 'Event not found')

    settled_ids = (
        Payment.objects.using(using)
        .filter(event=event, status__in=Payment.SETTLED_STATUSES)
        .values_list('student_id', flat=True)
    )
    available = (
        Student.objects.using(using)
        .exclude(id__in=list(settled_ids))
        .order_by('roll_no')
    )
    return Result.success({
        'event':             event_dict(event),
        'availableStudents': [student_dict(s) for s in available],
    })


@service_boundary('Failed to create payment')
def create_payment(student_id, event_id, amount, payment_method, transaction_id='',
                   status=Payment.Status.PENDING, razorpay_order_id='',
                   screenshot_url='', using=DEFAULT_DB_ALIAS):
    status = status or Payment.Status.PENDING
    if status not in Payment.Status.values:
        return Result.failure(ErrorKind.VALIDATION, f'Unknown payment status "{status}"')

    with transaction.atomic(using=using):
        # Locking the student serialises concurrent submissions for them.
        student = Student.objects.using(using).select_for_update().filter(pk=student_id).first()
        if student is None:
            return Result.failure(ErrorKind.NOT_FOUND, 'Student not found')
        event = Event.objects.using(using).filter(pk=event_id).first()
        if event is None:
            return Result.failure(ErrorKind.NOT_FOUND, 'Event not found')

        if status in Payment.SETTLED_STATUSES and settled_payment_exists(
            student.pk, event.pk, using=using,
        ):
            return Result.failure(
                ErrorKind.CONFLICT, 'Payment already recorded for this student and event'
            )

        payment = Payment.objects.using(using).create(
            student=student,
            event=event,
            amount=amount,
            payment_method=payment_method,
            transaction_id=transaction_id or '',
            status=status,
            razorpay_order_id=razorpay_order_id or '',
            screenshot_url=screenshot_url or '',
        )

    logger.info('Created %s payment %s for %s → %s', status, payment.pk, student.roll_no, event.name)
    return Result.success(payment_dict(payment, with_student=True, with_event=True))
