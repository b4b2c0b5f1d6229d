"""
finances/services/shapes.py
────────────────────────────
Turn model rows into the plain dicts the dashboard consumes.

Datetimes become ISO-8601 strings, money becomes a string (no float
rounding), and Event.payment_options is parsed from its JSON text.
"""

from decimal import Decimal

CENTS = Decimal('0.01')


def iso(value):
    return value.isoformat() if value is not None else None


def money(value):
    """Two decimal places whatever the database hands back for sums."""
    return str(Decimal(str(value if value is not None else 0)).quantize(CENTS))


def student_dict(student):
    return {
        'id':        student.id,
        'name':      student.name,
        'rollNo':    student.roll_no,
        'email':     student.email,
        'class':     student.class_name,
        'createdAt': iso(student.created_at),
        'updatedAt': iso(student.updated_at),
    }


def event_dict(event):
    return {
        'id':             event.id,
        'name':           event.name,
        'description':    event.description,
        'deadline':       iso(event.deadline),
        'cost':           money(event.cost),
        'paymentOptions': event.payment_options_list,
        'qrCodeUrl':      event.qr_code_url,
        'category':       event.category,
        'createdAt':      iso(event.created_at),
        'updatedAt':      iso(event.updated_at),
    }


def payment_dict(payment, with_student=False, with_event=False):
    """
    Shape one Payment.  *with_student* / *with_event* add the denormalised
    name columns used by tables (the relations must be select_related).
    """
    data = {
        'id':              payment.id,
        'studentId':       payment.student_id,
        'eventId':         payment.event_id,
        'amount':          money(payment.amount),
        'paymentDate':     iso(payment.payment_date),
        'transactionId':   payment.transaction_id,
        'status':          payment.status,
        'paymentMethod':   payment.payment_method,
        'screenshotUrl':   payment.screenshot_url,
        'razorpayOrderId': payment.razorpay_order_id,
        'isManualEntry':   payment.is_manual_entry,
        'recordedBy':      payment.recorded_by,
        'notes':           payment.notes,
        'receiptNumber':   payment.receipt_number,
        'createdAt':       iso(payment.created_at),
        'updatedAt':       iso(payment.updated_at),
    }
    if with_student:
        data['studentName'] = payment.student.name
        data['studentRoll'] = payment.student.roll_no
    if with_event:
        data['eventName'] = payment.event.name
        data['eventCost'] = money(payment.event.cost)
    return data


def qr_code_dict(qr):
    return {'id': qr.id, 'name': qr.name, 'url': qr.url}


def print_distribution_dict(record):
    return {
        'id':            record.id,
        'studentId':     record.student_id,
        'studentName':   record.student.name,
        'studentRoll':   record.student.roll_no,
        'eventId':       record.event_id,
        'distributedAt': iso(record.distributed_at),
    }
