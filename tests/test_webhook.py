import json

import pytest

from finances.models import Payment
from gateway.webhooks import reconcile_webhook, sign

SECRET = 'whsec_test'
URL = '/api/razorpay/webhook/'


@pytest.fixture(autouse=True)
def webhook_secret(settings):
    settings.RAZORPAY_WEBHOOK_SECRET = SECRET


def captured(order_id='order_ABC', payment_id='pay_XYZ'):
    return json.dumps({
        'event': 'payment.captured',
        'payload': {'payment': {'entity': {
            'id': payment_id,
            'order_id': order_id,
            'notes': {'eventId': 'evt1', 'studentId': 'stu1'},
        }}},
    })


def deliver(client, body, signature=None):
    extra = {}
    if signature is not False:
        extra['HTTP_X_RAZORPAY_SIGNATURE'] = signature or sign(body, SECRET)
    return client.post(URL, data=body, content_type='application/json', **extra)


def test_captured_payment_is_marked_paid(client, make_payment):
    payment = make_payment(razorpay_order_id='order_ABC')

    resp = deliver(client, captured())

    assert resp.status_code == 200
    assert resp.json() == {'status': 'ok'}
    payment.refresh_from_db()
    assert payment.status == Payment.Status.PAID
    assert payment.transaction_id == 'pay_XYZ'


def test_bad_signature_changes_nothing(client, make_payment):
    payment = make_payment(razorpay_order_id='order_ABC')
    before = payment.updated_at

    resp = deliver(client, captured(), signature=sign(captured(), 'wrong-secret'))

    assert resp.status_code == 400
    assert resp.json() == {'error': 'Invalid signature'}
    payment.refresh_from_db()
    assert payment.status == Payment.Status.PENDING
    assert payment.transaction_id == ''
    assert payment.updated_at == before


def test_missing_signature(client, make_payment):
    make_payment(razorpay_order_id='order_ABC')

    resp = deliver(client, captured(), signature=False)

    assert resp.status_code == 400
    assert resp.json() == {'error': 'Signature missing'}


def test_duplicate_delivery_is_idempotent(client, make_payment):
    payment = make_payment(razorpay_order_id='order_ABC')
    body = captured()

    first = deliver(client, body)
    second = deliver(client, body)

    assert first.status_code == second.status_code == 200
    payment.refresh_from_db()
    assert payment.status == Payment.Status.PAID
    assert payment.transaction_id == 'pay_XYZ'
    assert Payment.objects.count() == 1


def test_unknown_order_is_404_and_mutates_nothing(client, make_payment):
    payment = make_payment(razorpay_order_id='order_ABC')

    resp = deliver(client, captured(order_id='order_UNKNOWN'))

    assert resp.status_code == 404
    assert resp.json() == {'error': 'Payment not found'}
    payment.refresh_from_db()
    assert payment.status == Payment.Status.PENDING


def test_other_events_are_acknowledged_without_changes(client, make_payment):
    payment = make_payment(razorpay_order_id='order_ABC')
    body = json.dumps({'event': 'payment.failed', 'payload': {}})

    resp = deliver(client, body)

    assert resp.status_code == 200
    payment.refresh_from_db()
    assert payment.status == Payment.Status.PENDING


def test_malformed_json_is_rejected(client, db):
    resp = deliver(client, '{not json')

    assert resp.status_code == 400


def test_captured_event_without_order_id(client, db):
    body = json.dumps({'event': 'payment.captured', 'payload': {'payment': {'entity': {'id': 'pay_1'}}}})

    assert deliver(client, body).status_code == 400


def test_missing_secret_is_a_server_error(db):
    status, body = reconcile_webhook(captured().encode(), 'sig', '')

    assert status == 500


def test_webhook_is_post_only(client, db):
    assert client.get(URL).status_code == 405


def test_paid_after_failed_is_logged(client, make_payment, caplog):
    payment = make_payment(status=Payment.Status.FAILED, razorpay_order_id='order_ABC')

    with caplog.at_level('WARNING', logger='finances.services.payments'):
        deliver(client, captured())

    payment.refresh_from_db()
    assert payment.status == Payment.Status.PAID
    assert 'leaves terminal status' in caplog.text



def test_non_ascii_signature_is_rejected(client, make_payment):
    payment = make_payment(razorpay_order_id='order_ABC')

    resp = deliver(client, captured(), signature='éabc')

    assert resp.status_code == 400
    assert resp.json() == {'error': 'Invalid signature'}
    payment.refresh_from_db()
    assert payment.status == Payment.Status.PENDING
