"""
finances/views/qr_codes.py
───────────────────────────
Settings page: payment QR codes.
"""

from django.views.decorators.http import require_http_methods

from .. import services
from ..forms import QrCodeForm
from .utils import (
    admin_required,
    bad_body_response,
    invalid_form_response,
    request_data,
    require_POST_or_405,
    result_response,
)


@admin_required
@require_http_methods(['GET', 'POST'])
def qr_codes_view(req):
    if req.method == 'GET':
        return result_response(services.get_qr_codes())

    data = request_data(req)
    if data is None:
        return bad_body_response()
    form = QrCodeForm(data, req.FILES)
    if not form.is_valid():
        return invalid_form_response(form)
    return result_response(
        services.add_qr_code(form.cleaned_data['name'], form.cleaned_data['url'])
    )


@admin_required
@require_POST_or_405
def delete_qr_code_view(req, qr_id):
    return result_response(services.delete_qr_code(qr_id))
