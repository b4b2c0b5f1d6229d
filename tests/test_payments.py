from datetime import timedelta
from decimal import Decimal

from django.utils import timezone

from finances import services
from finances.models import Payment
from finances.results import ErrorKind

from .conftest import post_json


# ── Status changes ────────────────────────────────────────────────────────────

def test_approve_screenshot_payment(admin_client, make_payment):
    payment = make_payment(status=Payment.Status.VERIFICATION_PENDING)

    resp = post_json(admin_client, f'/dashboard/payments/{payment.pk}/status/', {'status': 'Paid'})

    assert resp.status_code == 200
    assert resp.json()['data']['status'] == 'Paid'
    payment.refresh_from_db()
    assert payment.status == Payment.Status.PAID


def test_unknown_status_is_rejected(admin_client, make_payment):
    payment = make_payment()

    resp = post_json(admin_client, f'/dashboard/payments/{payment.pk}/status/', {'status': 'Refunded'})

    assert resp.status_code == 400
    payment.refresh_from_db()
    assert payment.status == Payment.Status.PENDING


def test_status_of_unknown_payment_is_404(db):
    result = services.update_payment_status('nope', Payment.Status.PAID)

    assert result.kind is ErrorKind.NOT_FOUND


def test_status_change_needs_post(admin_client, make_payment):
    payment = make_payment()

    assert admin_client.get(f'/dashboard/payments/{payment.pk}/status/').status_code == 405


def test_pending_queue_lists_verification_pending_only(admin_client, make_payment, other_student):
    make_payment(status=Payment.Status.PENDING)
    waiting = make_payment(status=Payment.Status.VERIFICATION_PENDING, student=other_student)

    rows = admin_client.get('/dashboard/payments/pending/').json()['data']

    assert [r['id'] for r in rows] == [waiting.pk]
    assert rows[0]['studentRoll'] == '102'
    assert rows[0]['eventName'] == 'Annual Day'


# ── Public pay page ───────────────────────────────────────────────────────────

def test_pay_page_hides_students_who_settled(client, event, student, other_student, make_payment):
    make_payment(status=Payment.Status.VERIFICATION_PENDING)

    data = client.get(f'/pay/{event.pk}/').json()['data']

    assert data['event']['paymentOptions'] == ['UPI', 'Cash']
    assert [s['id'] for s in data['availableStudents']] == [other_student.pk]


def test_pay_page_for_unknown_event(client, db):
    assert client.get('/pay/missing/').status_code == 404


def test_submit_screenshot_payment(client, event, student):
    resp = post_json(client, f'/pay/{event.pk}/submit/', {
        'student_id':     student.pk,
        'amount':         '500',
        'payment_method': 'UPI',
        'status':         'Verification Pending',
        'screenshot_url': 'data:image/png;base64,AAAA',
        'transaction_id': 'UPI-778899',
    })

    assert resp.status_code == 200
    payment = Payment.objects.get()
    assert payment.status == Payment.Status.VERIFICATION_PENDING
    assert payment.event_id == event.pk


def test_submit_defaults_to_pending(client, event, student):
    post_json(client, f'/pay/{event.pk}/submit/', {
        'student_id': student.pk, 'amount': '500', 'payment_method': 'Razorpay',
        'razorpay_order_id': 'order_1',
    })

    assert Payment.objects.get().status == Payment.Status.PENDING


def test_pay_page_cannot_submit_a_paid_payment(client, event, student):
    resp = post_json(client, f'/pay/{event.pk}/submit/', {
        'student_id':     student.pk,
        'amount':         '1',
        'payment_method': 'UPI',
        'status':         'Paid',
    })

    assert resp.status_code == 400
    assert not Payment.objects.exists()


def test_second_settled_submission_conflicts(event, student, make_payment):
    make_payment(status=Payment.Status.PAID)

    result = services.create_payment(
        student.pk, event.pk, Decimal('500'), 'UPI', status=Payment.Status.VERIFICATION_PENDING,
    )

    assert result.kind is ErrorKind.CONFLICT
    assert Payment.objects.count() == 1


def test_create_payment_for_unknown_student(event):
    result = services.create_payment('ghost', event.pk, Decimal('1'), 'UPI')

    assert result.kind is ErrorKind.NOT_FOUND
    assert result.error == 'Student not found'


# ── Events and dashboard ──────────────────────────────────────────────────────

def test_create_and_list_events(admin_client, db):
    resp = post_json(admin_client, '/dashboard/events/', {
        'name':            'Science Fair',
        'deadline':        '2026-12-01T17:00:00+05:30',
        'cost':            '150.50',
        'payment_options': ['UPI'],
        'category':        'Academic',
    })

    assert resp.status_code == 200
    created = resp.json()['data']
    assert created['paymentOptions'] == ['UPI']
    assert created['cost'] == '150.50'

    listed = admin_client.get('/dashboard/events/').json()['data']
    assert [e['name'] for e in listed] == ['Science Fair']
    assert admin_client.get(f"/dashboard/events/{created['id']}/").status_code == 200


def test_event_payments_newest_first(admin_client, event, make_payment, other_student):
    old = make_payment(payment_date=timezone.now() - timedelta(days=2))
    new = make_payment(student=other_student)

    data = admin_client.get(f'/dashboard/events/{event.pk}/payments/').json()['data']

    assert [t['id'] for t in data['transactions']] == [new.pk, old.pk]
    assert data['transactions'][0]['studentName'] == 'Vikram Iyer'


def test_dashboard_overview(admin_client, event, make_payment):
    for _ in range(6):
        make_payment()

    data = admin_client.get('/dashboard/').json()['data']

    assert len(data['events']) == 1
    assert len(data['transactions']) == 6
    assert len(data['recentTransactions']) == 5
    assert data['recentTransactions'][0]['eventCost'] == '500.00'


def test_print_distribution(admin_client, event, student):
    resp = post_json(admin_client, f'/dashboard/events/{event.pk}/prints/', {'student_id': student.pk})

    assert resp.status_code == 200
    rows = admin_client.get(f'/dashboard/events/{event.pk}/prints/').json()['data']
    assert rows[0]['studentRoll'] == '101'
