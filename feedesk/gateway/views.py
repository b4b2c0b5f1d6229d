"""
gateway/views.py
────────────────
Razorpay endpoints.  Both are CSRF-exempt: the order endpoint is called
from the public pay page, the webhook by Razorpay itself.
"""

import json
import logging

from django.conf import settings
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from .client import GatewayError, RazorpayClient
from .forms import OrderForm
from .webhooks import reconcile_webhook

logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
def order_view(req):
    try:
        data = json.loads(req.body or b'{}')
    except ValueError:
        data = None
    if not isinstance(data, dict):
        return JsonResponse({'error': 'Invalid input', 'details': {}}, status=400)

    form = OrderForm(data)
    if not form.is_valid():
        return JsonResponse(
            {'error': 'Invalid input', 'details': form.errors.get_json_data()},
            status=400,
        )

    cd = form.cleaned_data
    try:
        order = RazorpayClient().create_order(cd['amount'], cd['eventId'], cd['studentId'])
    except GatewayError:
        logger.exception('Razorpay order creation failed')
        return JsonResponse({'error': 'Failed to create Razorpay order'}, status=500)
    return JsonResponse(order)


@csrf_exempt
@require_POST
def webhook_view(req):
    status, body = reconcile_webhook(
        req.body,
        req.headers.get('X-Razorpay-Signature'),
        settings.RAZORPAY_WEBHOOK_SECRET,
    )
    return JsonResponse(body, status=status)
