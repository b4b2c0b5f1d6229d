"""
finances/views/events.py
─────────────────────────
Events: list / create, detail, the event's payments and its
print-distribution log.
"""

from django.views.decorators.http import require_GET, require_http_methods

from .. import services
from ..forms import EventForm, PrintDistributionForm
from .utils import (
    admin_required,
    bad_body_response,
    invalid_form_response,
    request_data,
    result_response,
)


@admin_required
@require_http_methods(['GET', 'POST'])
def events_view(req):
    if req.method == 'GET':
        return result_response(services.get_events())

    data = request_data(req)
    if data is None:
        return bad_body_response()
    form = EventForm(data)
    if not form.is_valid():
        return invalid_form_response(form)
    return result_response(services.create_event(**form.cleaned_data))


@admin_required
@require_GET
def event_detail_view(req, event_id):
    return result_response(services.get_event(event_id))


@admin_required
@require_GET
def event_payments_view(req, event_id):
    return result_response(services.get_event_payments(event_id))


@admin_required
@require_http_methods(['GET', 'POST'])
def event_prints_view(req, event_id):
    if req.method == 'GET':
        return result_response(services.get_print_distributions(event_id))

    data = request_data(req)
    if data is None:
        return bad_body_response()
    form = PrintDistributionForm(data)
    if not form.is_valid():
        return invalid_form_response(form)
    return result_response(
        services.record_print_distribution(form.cleaned_data['student_id'], event_id)
    )
