"""
finances/views/students.py
───────────────────────────
Student roster: list / add, CSV bulk import, per-student payment history.
"""

from django.views.decorators.http import require_GET, require_http_methods

from .. import services
from ..forms import StudentCSVImportForm, StudentForm
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
def students_view(req):
    if req.method == 'GET':
        return result_response(services.get_students())

    data = request_data(req)
    if data is None:
        return bad_body_response()
    form = StudentForm(data)
    if not form.is_valid():
        return invalid_form_response(form)

    cd = form.cleaned_data
    return result_response(services.add_student(
        name=cd['name'],
        roll_number=cd['roll_number'],
        email=cd['email'],
        class_name=cd['class_name'],
    ))


@admin_required
@require_POST_or_405
def import_students_view(req):
    """Multipart upload of a roster CSV (field `csv_file`)."""
    form = StudentCSVImportForm(req.POST, req.FILES)
    if not form.is_valid():
        return invalid_form_response(form)
    return result_response(services.import_students(form.cleaned_data['csv_file']))


@admin_required
@require_GET
def student_payments_view(req, student_id):
    return result_response(services.get_student_payments(student_id))
