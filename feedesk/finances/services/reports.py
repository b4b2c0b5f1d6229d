"""
finances/services/reports.py
─────────────────────────────
Reports page: four report flavours plus CSV export.

Every report returns {"transactions": [...rows], "summary": {...}} and
accepts the same optional filters (date_from / date_to on payment_date).

generate_transaction_report   – every payment, optionally for one event
generate_event_report         – one event: who paid, who is pending, who owes
generate_transaction_summary  – totals by status and by payment method
generate_student_wise_report  – one row per student
export_to_csv                 – any of the above as CSV text
"""

import csv
import io
from decimal import Decimal

from django.db import DEFAULT_DB_ALIAS
from django.db.models import Count, Sum
from django.utils import timezone

from ..models import Event, Payment, Student
from ..results import ErrorKind, Result, service_boundary
from .shapes import event_dict, money, payment_dict

OPEN_STATUSES = (Payment.Status.PENDING, Payment.Status.VERIFICATION_PENDING)


def _filtered_payments(date_from=None, date_to=None, event_id=None, using=DEFAULT_DB_ALIAS):
    qs = Payment.objects.using(using).select_related('student', 'event')
    if date_from:
        qs = qs.filter(payment_date__gte=date_from)
    if date_to:
        qs = qs.filter(payment_date__lte=date_to)
    if event_id:
        qs = qs.filter(event_id=event_id)
    return qs.order_by('-payment_date')


def _sum(qs):
    return qs.aggregate(s=Sum('amount'))['s'] or Decimal('0')


def _status_totals(payments):
    paid    = payments.filter(status=Payment.Status.PAID)
    pending = payments.filter(status__in=OPEN_STATUSES)
    failed  = payments.filter(status=Payment.Status.FAILED)
    return {
        'totalTransactions': payments.count(),
        'totalCollected':    money(_sum(paid)),
        'totalPending':      money(_sum(pending)),
        'totalFailed':       money(_sum(failed)),
        'paidCount':         paid.count(),
        'pendingCount':      pending.count(),
        'failedCount':       failed.count(),
    }


@service_boundary('Failed to generate report')
def generate_transaction_report(date_from=None, date_to=None, event_id=None,
                                using=DEFAULT_DB_ALIAS):
    payments = _filtered_payments(date_from, date_to, event_id, using=using)
    return Result.success({
        'transactions': [payment_dict(p, with_student=True, with_event=True) for p in payments],
        'summary':      _status_totals(payments),
    })


@service_boundary('Failed to generate event report')
def generate_event_report(event_id, date_from=None, date_to=None, using=DEFAULT_DB_ALIAS):
    event = Event.objects.using(using).filter(pk=event_id).first()
    if event is None:
        return Result.failure(ErrorKind.NOT_FOUND, 'Event not found')

    payments = _filtered_payments(date_from, date_to, event.pk, using=using)

    total_students = Student.objects.using(using).count()
    paid_ids = set(
        payments.filter(status=Payment.Status.PAID).values_list('student_id', flat=True)
    )
    pending_ids = set(
        payments.filter(status__in=OPEN_STATUSES).values_list('student_id', flat=True)
    ) - paid_ids

    summary = _status_totals(payments)
    # Counts here are students, not payments.
    summary.update({
        'event':          event_dict(event),
        'totalStudents':  total_students,
        'paidCount':      len(paid_ids),
        'pendingCount':   len(pending_ids),
        'unpaidCount':    max(0, total_students - len(paid_ids) - len(pending_ids)),
        'paidAmount':     summary['totalCollected'],
        'pendingAmount':  summary['totalPending'],
        'expectedAmount': money(event.cost * total_students),
    })
    return Result.success({
        'transactions': [payment_dict(p, with_student=True, with_event=True) for p in payments],
        'summary':      summary,
    })


@service_boundary('Failed to generate summary')
def generate_transaction_summary(date_from=None, date_to=None, using=DEFAULT_DB_ALIAS):
    payments = _filtered_payments(date_from, date_to, using=using)

    by_status = [
        {'status': row['status'], 'count': row['count'], 'amount': money(row['amount'])}
        for row in payments.order_by().values('status')
        .annotate(count=Count('id'), amount=Sum('amount'))
        .order_by('status')
    ]
    by_method = [
        {'paymentMethod': row['payment_method'] or 'Unknown', 'count': row['count'],
         'amount': money(row['amount'])}
        for row in payments.order_by().values('payment_method')
        .annotate(count=Count('id'), amount=Sum('amount'))
        .order_by('-amount')
    ]

    summary = _status_totals(payments)
    summary.update({'byStatus': by_status, 'byMethod': by_method})
    return Result.success({
        'transactions': [payment_dict(p, with_student=True, with_event=True) for p in payments],
        'summary':      summary,
    })


@service_boundary('Failed to generate student report')
def generate_student_wise_report(date_from=None, date_to=None, using=DEFAULT_DB_ALIAS):
    payments = _filtered_payments(date_from, date_to, using=using)

    rows = {}
    for student in Student.objects.using(using).order_by('roll_no'):
        rows[student.pk] = {
            'studentId':         student.pk,
            'studentName':       student.name,
            'studentRoll':       student.roll_no,
            'class':             student.class_name,
            'totalTransactions': 0,
            'paidCount':         0,
            'pendingCount':      0,
            'paidAmount':        Decimal('0'),
            'pendingAmount':     Decimal('0'),
        }

    for p in payments:
        row = rows.get(p.student_id)
        if row is None:
            continue
        row['totalTransactions'] += 1
        if p.status == Payment.Status.PAID:
            row['paidCount'] += 1
            row['paidAmount'] += p.amount
        elif p.status in OPEN_STATUSES:
            row['pendingCount'] += 1
            row['pendingAmount'] += p.amount

    students = list(rows.values())
    total_paid = sum((r['paidAmount'] for r in students), Decimal('0'))
    total_pending = sum((r['pendingAmount'] for r in students), Decimal('0'))
    for r in students:
        r['paidAmount'] = money(r['paidAmount'])
        r['pendingAmount'] = money(r['pendingAmount'])

    return Result.success({
        'transactions': students,
        'summary': {
            'totalStudents':     len(students),
            'studentsWithPayments': sum(1 for r in students if r['paidCount']),
            'totalTransactions': sum(r['totalTransactions'] for r in students),
            'totalCollected':    money(total_paid),
            'totalPending':      money(total_pending),
        },
    })


def export_to_csv(rows, filename, summary=None):
    """
    Render *rows* (list of flat dicts) as CSV text.  Columns follow the key
    order of the rows; a scalar-only summary block is appended at the end.
    """
    if not rows:
        return Result.failure(ErrorKind.VALIDATION, 'No data to export')

    columns = []
    for row in rows:
        for key in row:
            if key not in columns:
                columns.append(key)

    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=columns, extrasaction='ignore', lineterminator='\n')
    writer.writeheader()
    for row in rows:
        writer.writerow({k: v for k, v in row.items() if not isinstance(v, (dict, list))})

    if summary:
        plain = csv.writer(buf, lineterminator='\n')
        plain.writerow([])
        plain.writerow(['Summary'])
        for key, value in summary.items():
            if not isinstance(value, (dict, list)):
                plain.writerow([key, value])

    stamp = timezone.localdate().strftime('%Y-%m-%d')
    return Result.success({'csv': buf.getvalue(), 'filename': f'{filename}_{stamp}.csv'})
