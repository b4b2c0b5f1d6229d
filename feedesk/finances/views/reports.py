"""
finances/views/reports.py
──────────────────────────
Report generation (JSON) and CSV download.
"""

from django.http import HttpResponse
from django.views.decorators.http import require_GET

from .. import services
from ..forms import ReportFilterForm
from .utils import admin_required, invalid_form_response, result_response

EXPORT_FILENAMES = {
    'transaction': 'transaction_report',
    'summary':     'transaction_summary',
    'student':     'student_wise_report',
}


def _run_report(cd):
    filters = {'date_from': cd.get('date_from'), 'date_to': cd.get('date_to')}
    report_type = cd['type']
    if report_type == 'event':
        return services.generate_event_report(cd['event_id'], **filters)
    if report_type == 'summary':
        return services.generate_transaction_summary(**filters)
    if report_type == 'student':
        return services.generate_student_wise_report(**filters)
    return services.generate_transaction_report(event_id=cd.get('event_id') or None, **filters)


@admin_required
@require_GET
def report_view(req):
    """`?type=transaction|event|summary|student&date_from=&date_to=&event_id=`"""
    form = ReportFilterForm(req.GET)
    if not form.is_valid():
        return invalid_form_response(form)
    return result_response(_run_report(form.cleaned_data))


@admin_required
@require_GET
def report_export_view(req):
    """Same parameters as report_view; answers with a CSV attachment."""
    form = ReportFilterForm(req.GET)
    if not form.is_valid():
        return invalid_form_response(form)

    cd = form.cleaned_data
    report = _run_report(cd)
    if not report.ok:
        return result_response(report)

    if cd['type'] == 'event':
        filename = f"event_report_{cd['event_id']}"
    else:
        filename = EXPORT_FILENAMES.get(cd['type'], 'transaction_report')

    exported = services.export_to_csv(
        report.data['transactions'], filename, report.data['summary'],
    )
    if not exported.ok:
        return result_response(exported)

    # UTF-8 BOM so spreadsheet apps pick the right encoding.
    resp = HttpResponse('\ufeff' + exported.data['csv'], content_type='text/csv; charset=utf-8')
    resp['Content-Disposition'] = f'attachment; filename="{exported.data["filename"]}"'
    return resp
