"""
gateway/webhooks.py
───────────────────
Reconcile Razorpay webhook deliveries with our Payment rows.

Razorpay signs the raw request body with the webhook secret
(HMAC-SHA256, hex) and sends it in X-Razorpay-Signature.  Only
`payment.captured` changes anything: the Payment whose razorpay_order_id
matches is marked Paid and gets the gateway payment id as its
transaction id.  Redeliveries of the same event are harmless.

reconcile_webhook() returns (http_status, body) so the view stays a
one-liner and the logic can be tested without HTTP.
"""

import hashlib
import hmac
import json
import logging

from django.db import DEFAULT_DB_ALIAS, DatabaseError, transaction

from finances.models import Payment
from finances.services.payments import apply_status

logger = logging.getLogger(__name__)

CAPTURED_EVENT = 'payment.captured'


def sign(body, secret):
    """Hex HMAC-SHA256 of *body* (bytes) under *secret*."""
    if isinstance(body, str):
        body = body.encode('utf-8')
    return hmac.new(secret.encode('utf-8'), body, hashlib.sha256).hexdigest()


def signature_matches(body, signature, secret):
    expected = sign(body, secret).encode('ascii')
    return hmac.compare_digest(expected, signature.encode('utf-8', 'surrogateescape'))


def _captured_entity(envelope):
    try:
        return envelope['payload']['payment']['entity']
    except (KeyError, TypeError):
        return None


def reconcile_webhook(body, signature, secret, using=DEFAULT_DB_ALIAS):
    if not secret:
        logger.error('RAZORPAY_WEBHOOK_SECRET is not configured; rejecting webhook')
        return 500, {'error': 'Webhook secret not configured'}
    if not signature:
        return 400, {'error': 'Signature missing'}
    if not signature_matches(body, signature, secret):
        logger.warning('Webhook rejected: invalid signature')
        return 400, {'error': 'Invalid signature'}

    try:
        envelope = json.loads(body)
    except ValueError:
        return 400, {'error': 'Invalid JSON payload'}
    if not isinstance(envelope, dict):
        return 400, {'error': 'Invalid JSON payload'}

    if envelope.get('event') != CAPTURED_EVENT:
        return 200, {'status': 'ok'}

    entity = _captured_entity(envelope)
    order_id = entity.get('order_id') if isinstance(entity, dict) else None
    if not order_id:
        return 400, {'error': 'Order id missing'}

    try:
        with transaction.atomic(using=using):
            payment = (
                Payment.objects.using(using)
                .select_for_update()
                .filter(razorpay_order_id=order_id)
                .first()
            )
            if payment is None:
                logger.error('No payment found for order_id %s', order_id)
                return 404, {'error': 'Payment not found'}
            apply_status(payment, Payment.Status.PAID,
                         transaction_id=entity.get('id') or '', using=using)
    except DatabaseError:
        logger.exception('Webhook processing failed for order %s', order_id)
        return 500, {'error': 'Webhook processing failed'}

    logger.info('Payment %s updated to Paid for order %s', payment.pk, order_id)
    return 200, {'status': 'ok'}
