from decimal import Decimal

from django.utils import timezone

from finances import services
from finances.models import Payment
from finances.results import ErrorKind

from .conftest import post_json

URL = '/dashboard/payments/manual/'


def cash_body(student, event, **overrides):
    body = {
        'student_id':     student.pk,
        'event_id':       event.pk,
        'amount':         '500.00',
        'payment_date':   timezone.now().isoformat(),
        'notes':          'Paid at the front desk',
        'receipt_number': 'R-0042',
    }
    body.update(overrides)
    return body


def test_cash_payment_is_recorded_as_paid(admin_client, admin_user, student, event):
    resp = post_json(admin_client, URL, cash_body(student, event))

    assert resp.status_code == 200
    data = resp.json()['data']
    assert data['status'] == 'Paid'
    assert data['paymentMethod'] == 'Cash'
    assert data['isManualEntry'] is True
    assert data['recordedBy'] == str(admin_user.pk)
    assert data['transactionId'].startswith('CASH_')
    assert data['receiptNumber'] == 'R-0042'


def test_second_cash_payment_for_same_pair_is_refused(admin_client, student, event, make_payment):
    make_payment(status=Payment.Status.PAID)

    resp = post_json(admin_client, URL, cash_body(student, event))

    assert resp.status_code == 409
    assert resp.json() == {
        'success': False,
        'error':   'Payment already recorded for this student and event',
    }
    assert Payment.objects.count() == 1


def test_pending_payment_does_not_block_cash(admin_client, student, event, make_payment):
    make_payment(status=Payment.Status.VERIFICATION_PENDING)

    resp = post_json(admin_client, URL, cash_body(student, event))

    assert resp.status_code == 200
    assert Payment.objects.count() == 2


def test_unknown_student_is_404(admin_client, event):
    resp = post_json(admin_client, URL, {
        'student_id': 'missing', 'event_id': event.pk,
        'amount': '10', 'payment_date': timezone.now().isoformat(),
    })

    assert resp.status_code == 404
    assert resp.json()['error'] == 'Student not found'


def test_non_positive_amount_is_rejected(admin_client, student, event):
    resp = post_json(admin_client, URL, cash_body(student, event, amount='0'))

    assert resp.status_code == 400
    assert not Payment.objects.exists()


def test_recording_requires_a_signed_in_user(student, event):
    result = services.record_cash_payment(
        student.pk, event.pk, Decimal('500'), timezone.now(), recorded_by=None,
    )

    assert result.kind is ErrorKind.UNAUTHORIZED
    assert not Payment.objects.exists()


def test_manual_payments_list_only_manual_entries(admin_client, student, event, make_payment,
                                                  other_student):
    make_payment(status=Payment.Status.PAID, student=other_student)
    post_json(admin_client, URL, cash_body(student, event, amount='250'))

    resp = admin_client.get(URL)

    rows = resp.json()['data']
    assert len(rows) == 1
    assert rows[0]['amount'] == '250.00'
    assert rows[0]['studentName'] == 'Asha Rao'
    assert rows[0]['eventName'] == 'Annual Day'
