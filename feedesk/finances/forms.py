"""
finances/forms.py
─────────────────
Input validation for the dashboard handlers.  The views bind these forms to
either form-encoded POST data or a decoded JSON body.
"""

import base64
import csv
import io
import json

from django import forms
from django.core.validators import FileExtensionValidator

from .models import Payment

QR_IMAGE_EXTENSIONS = ['png', 'jpg', 'jpeg', 'webp']
QR_IMAGE_MAX_BYTES = 2 * 1024 * 1024


class JSONListField(forms.Field):
    """
    Accepts a list, a JSON-encoded list, or a comma-separated string and
    cleans to a list of non-empty strings.
    """

    def to_python(self, value):
        if value in self.empty_values:
            return []
        if isinstance(value, str):
            text = value.strip()
            if text.startswith('['):
                try:
                    value = json.loads(text)
                except ValueError:
                    raise forms.ValidationError('Enter a valid JSON list.')
            else:
                value = text.split(',')
        if not isinstance(value, (list, tuple)):
            raise forms.ValidationError('Enter a list of values.')
        return [str(v).strip() for v in value if str(v).strip()]


# ── Students ──────────────────────────────────────────────────────────────────

class StudentForm(forms.Form):
    name        = forms.CharField(max_length=200)
    roll_number = forms.CharField(max_length=50, label='Roll number')
    email       = forms.EmailField(required=False)
    class_name  = forms.CharField(max_length=50, required=False, label='Class')


class StudentCSVImportForm(forms.Form):
    """
    Upload a CSV file to bulk-create students.

    Expected CSV columns (header row required):
        Name, Roll Number, Email, Class
    """

    REQUIRED_COLUMNS = {'Name', 'Roll Number'}

    csv_file = forms.FileField(
        label='CSV file',
        help_text='Must contain columns: Name, Roll Number (optional: Email, Class)',
    )

    def clean_csv_file(self):
        f = self.cleaned_data['csv_file']
        if not f.name.lower().endswith('.csv'):
            raise forms.ValidationError('Please upload a .csv file.')
        try:
            text = f.read().decode('utf-8-sig')   # handle Excel BOM
        except UnicodeDecodeError:
            raise forms.ValidationError('File must be UTF-8 encoded.')

        reader = csv.DictReader(io.StringIO(text))
        missing = self.REQUIRED_COLUMNS - set(reader.fieldnames or [])
        if missing:
            raise forms.ValidationError(
                f'CSV is missing required columns: {", ".join(sorted(missing))}'
            )
        rows = list(reader)
        if not rows:
            raise forms.ValidationError('The CSV file is empty.')
        return rows


# ── Events ────────────────────────────────────────────────────────────────────

class EventForm(forms.Form):
    name            = forms.CharField(max_length=200)
    description     = forms.CharField(required=False)
    deadline        = forms.DateTimeField()
    cost            = forms.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    payment_options = JSONListField(required=False)
    qr_code_url     = forms.CharField(required=False)
    category        = forms.CharField(max_length=100, required=False)


# ── Payments ──────────────────────────────────────────────────────────────────

class CreatePaymentForm(forms.Form):
    """
    A payment submitted from the public pay page.  It can only be Pending
    or Verification Pending; Paid comes from the webhook or a cash entry.
    """

    PUBLIC_STATUSES = [
        (Payment.Status.PENDING,              Payment.Status.PENDING.label),
        (Payment.Status.VERIFICATION_PENDING, Payment.Status.VERIFICATION_PENDING.label),
    ]

    student_id        = forms.CharField(max_length=40)
    event_id          = forms.CharField(max_length=40)
    amount            = forms.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    payment_method    = forms.CharField(max_length=50)
    transaction_id    = forms.CharField(max_length=100, required=False)
    status            = forms.ChoiceField(choices=PUBLIC_STATUSES, required=False)
    razorpay_order_id = forms.CharField(max_length=100, required=False)
    screenshot_url    = forms.CharField(required=False)


class PaymentStatusForm(forms.Form):
    status = forms.ChoiceField(choices=Payment.Status.choices)


class CashPaymentForm(forms.Form):
    """Administrator form to record cash handed over at the desk."""

    student_id     = forms.CharField(max_length=40)
    event_id       = forms.CharField(max_length=40)
    amount         = forms.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    payment_date   = forms.DateTimeField()
    notes          = forms.CharField(required=False)
    receipt_number = forms.CharField(max_length=100, required=False)

    def clean_amount(self):
        amount = self.cleaned_data['amount']
        if amount <= 0:
            raise forms.ValidationError('Amount must be greater than zero.')
        return amount


# ── Settings ──────────────────────────────────────────────────────────────────

class QrCodeForm(forms.Form):
    """
    A payment QR code: either a URL, or an uploaded image that is stored
    as a base64 data URL.
    """

    name  = forms.CharField(max_length=200)
    url   = forms.CharField(required=False)
    image = forms.ImageField(
        required=False,
        validators=[FileExtensionValidator(QR_IMAGE_EXTENSIONS)],
    )

    def clean_image(self):
        image = self.cleaned_data.get('image')
        if image and image.size > QR_IMAGE_MAX_BYTES:
            raise forms.ValidationError('Image must be 2 MB or smaller.')
        return image

    def clean(self):
        cleaned = super().clean()
        image = cleaned.get('image')
        if image:
            image.seek(0)
            encoded = base64.b64encode(image.read()).decode('ascii')
            content_type = getattr(image, 'content_type', None) or 'image/png'
            cleaned['url'] = f'data:{content_type};base64,{encoded}'
        if not cleaned.get('url'):
            raise forms.ValidationError(
                'Please provide both a name and a URL for the QR code.'
            )
        return cleaned


# ── Reports ───────────────────────────────────────────────────────────────────

class ReportFilterForm(forms.Form):
    REPORT_TYPES = [
        ('transaction', 'Transaction Report'),
        ('event',       'Event Report'),
        ('summary',     'Transaction Summary'),
        ('student',     'Student-wise Report'),
    ]

    type      = forms.ChoiceField(choices=REPORT_TYPES, required=False)
    date_from = forms.DateTimeField(required=False)
    date_to   = forms.DateTimeField(required=False)
    event_id  = forms.CharField(max_length=40, required=False)

    def clean(self):
        cleaned = super().clean()
        cleaned['type'] = cleaned.get('type') or 'transaction'
        if cleaned['type'] == 'event' and not cleaned.get('event_id'):
            raise forms.ValidationError('Please select an event')
        date_from, date_to = cleaned.get('date_from'), cleaned.get('date_to')
        if date_from and date_to and date_from > date_to:
            raise forms.ValidationError('Start date must be before end date.')
        return cleaned


class PrintDistributionForm(forms.Form):
    student_id = forms.CharField(max_length=40)
