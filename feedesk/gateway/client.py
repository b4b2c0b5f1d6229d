"""
gateway/client.py
─────────────────
Thin client for the Razorpay Orders API.

An order must exist before the checkout widget can take the money; the
webhook later matches the captured payment back to our Payment row by its
order id.  Only the one call the pay page needs is implemented.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """The gateway could not be reached or refused the request."""


def to_paise(amount):
    """Rupees (any numeric) → integer paise, the gateway's smallest unit."""
    return int((Decimal(str(amount)) * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def order_receipt(event_id, student_id):
    return f'receipt_event_{event_id}_student_{student_id}'


class RazorpayClient:
    def __init__(self, key_id=None, key_secret=None, api_url=None, timeout=None):
        self.key_id     = key_id if key_id is not None else settings.RAZORPAY_KEY_ID
        self.key_secret = key_secret if key_secret is not None else settings.RAZORPAY_KEY_SECRET
        self.api_url    = (api_url or settings.RAZORPAY_API_URL).rstrip('/')
        self.timeout    = timeout or settings.RAZORPAY_TIMEOUT

    def create_order(self, amount, event_id, student_id, currency=None):
        """
        Create an order for *amount* rupees and return the gateway's JSON.
        The event and student ids travel in `notes` so the order can be
        traced back from the gateway dashboard.
        """
        if not self.key_id or not self.key_secret:
            raise GatewayError('Razorpay key id/secret not configured')

        payload = {
            'amount':   to_paise(amount),
            'currency': currency or settings.RAZORPAY_CURRENCY,
            'receipt':  order_receipt(event_id, student_id),
            'notes':    {'eventId': event_id, 'studentId': student_id},
        }
        try:
            r = requests.post(
                f'{self.api_url}/orders',
                json=payload,
                auth=(self.key_id, self.key_secret),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise GatewayError(f'Network error contacting Razorpay: {type(exc).__name__}: {exc}')

        if not r.ok:
            raise GatewayError(f'Order creation failed: {r.status_code} {r.text}')
        try:
            order = r.json()
        except ValueError:
            raise GatewayError('Order creation failed: non-JSON response from Razorpay')

        logger.info('Created Razorpay order %s for event %s / student %s',
                    order.get('id'), event_id, student_id)
        return order
