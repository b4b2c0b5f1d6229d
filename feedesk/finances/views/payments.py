"""
finances/views/payments.py
───────────────────────────
Admin payment views (status changes, verification queue, cash entries)
and the two public pay-page endpoints.
"""

from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from .. import services
from ..forms import CashPaymentForm, CreatePaymentForm, PaymentStatusForm
from .utils import (
    admin_required,
    bad_body_response,
    current_user_id,
    invalid_form_response,
    request_data,
    require_POST_or_405,
    result_response,
)


# ── Admin ─────────────────────────────────────────────────────────────────────

@admin_required
@require_POST_or_405
def payment_status_view(req, payment_id):
    """Approve / reject a payment, e.g. after reviewing its screenshot."""
    data = request_data(req)
    if data is None:
        return bad_body_response()
    form = PaymentStatusForm(data)
    if not form.is_valid():
        return invalid_form_response(form)
    return result_response(
        services.update_payment_status(payment_id, form.cleaned_data['status'])
    )


@admin_required
@require_GET
def pending_payments_view(req):
    """Payments in Verification Pending, oldest first."""
    return result_response(services.get_pending_transactions())


@admin_required
@require_http_methods(['GET', 'POST'])
def manual_payments_view(req):
    if req.method == 'GET':
        return result_response(services.get_manual_payments())

    data = request_data(req)
    if data is None:
        return bad_body_response()
    form = CashPaymentForm(data)
    if not form.is_valid():
        return invalid_form_response(form)

    cd = form.cleaned_data
    return result_response(services.record_cash_payment(
        student_id=cd['student_id'],
        event_id=cd['event_id'],
        amount=cd['amount'],
        payment_date=cd['payment_date'],
        recorded_by=current_user_id(req),
        notes=cd['notes'],
        receipt_number=cd['receipt_number'],
    ))


# ── Public pay page ───────────────────────────────────────────────────────────

@require_GET
def pay_page_view(req, event_id):
    """The event and the students who still have to pay for it."""
    return result_response(services.get_payment_page_data(event_id))


@csrf_exempt
@require_POST_or_405
def submit_payment_view(req, event_id):
    """
    A payment submitted from the pay page: a Razorpay order about to be
    paid (Pending) or a screenshot awaiting review (Verification Pending).
    """
    data = request_data(req)
    if data is None:
        return bad_body_response()
    data = data.copy()
    data['event_id'] = event_id
    form = CreatePaymentForm(data)
    if not form.is_valid():
        return invalid_form_response(form)
    return result_response(services.create_payment(**form.cleaned_data))
