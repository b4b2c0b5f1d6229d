"""
finances/models.py
──────────────────
The money engine.  Everything the dashboard collects fees for lives here.

Student           – a pupil, identified by a unique roll number.
Event             – something students pay for, e.g. "Annual Day – 500 INR".
Payment           – one payment (online, screenshot-verified or cash) by a
                    student towards an event.
QrCode            – a payment QR image shown on the public pay page.
PrintDistribution – record of a printed item handed to a student for an event.

Primary keys are opaque strings so that rows imported from the legacy
database keep their original ids.
"""

import json
import uuid

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


def generate_id():
    return uuid.uuid4().hex


class Student(models.Model):
    """
    A pupil who can be charged for events.
    """

    id = models.CharField(primary_key=True, max_length=40, default=generate_id, editable=False)
    roll_no = models.CharField(
        max_length=50,
        unique=True,
        verbose_name='Roll number',
        help_text='Unique roll number printed on the student ID card.',
    )
    name = models.CharField(max_length=200)
    email = models.EmailField(blank=True)
    class_name = models.CharField(
        max_length=50,
        blank=True,
        verbose_name='Class',
        help_text="Class / section label, e.g. '10-B'.",
    )
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['roll_no']
        verbose_name = 'Student'
        verbose_name_plural = 'Students'

    def __str__(self):
        return f"{self.name} ({self.roll_no})"


class Event(models.Model):
    """
    Something the school collects money for: a trip, a fest, exam fees.

    `payment_options` is stored as a JSON-encoded list of strings
    (e.g. '["UPI", "Cash"]'); use `payment_options_list` to read it.
    """

    id = models.CharField(primary_key=True, max_length=40, default=generate_id, editable=False)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    deadline = models.DateTimeField(help_text='Last moment payments are expected.')
    cost = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(0)],
        help_text='Amount each student is expected to pay (INR).',
    )
    payment_options = models.TextField(
        default='[]',
        help_text='JSON list of accepted payment methods.',
    )
    qr_code_url = models.TextField(
        blank=True,
        help_text='Payment QR image shown on the pay page (URL or data URL).',
    )
    category = models.CharField(max_length=100, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['deadline']
        verbose_name = 'Event'
        verbose_name_plural = 'Events'

    def __str__(self):
        return f"{self.name} – {self.cost} INR"

    @property
    def payment_options_list(self):
        try:
            options = json.loads(self.payment_options or '[]')
        except ValueError:
            return []
        return options if isinstance(options, list) else []


class Payment(models.Model):
    """
    Records a single payment made by a student towards an Event.

    Online payments start as PENDING with a Razorpay order id and are moved
    to PAID by the gateway webhook.  Screenshot payments wait in
    VERIFICATION_PENDING until an administrator reviews them.  Cash handed
    over at the desk is recorded directly as PAID with is_manual_entry set.
    """

    class Status(models.TextChoices):
        PENDING              = 'Pending',              'Pending'
        PAID                 = 'Paid',                 'Paid'
        FAILED               = 'Failed',               'Failed'
        VERIFICATION_PENDING = 'Verification Pending', 'Verification Pending'

    # A (student, event) pair should hold at most one payment in these states.
    SETTLED_STATUSES = (Status.PAID, Status.VERIFICATION_PENDING)
    TERMINAL_STATUSES = (Status.PAID, Status.FAILED)

    id = models.CharField(primary_key=True, max_length=40, default=generate_id, editable=False)
    student = models.ForeignKey(
        Student,
        on_delete=models.CASCADE,
        related_name='payments',
    )
    event = models.ForeignKey(
        Event,
        on_delete=models.CASCADE,
        related_name='payments',
    )
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text='Amount actually paid (INR).',
    )
    payment_date = models.DateTimeField(default=timezone.now)
    transaction_id = models.CharField(
        max_length=100,
        blank=True,
        help_text='Gateway payment id, UPI reference or CASH_<timestamp>.',
    )
    status = models.CharField(
        max_length=30,
        choices=Status.choices,
        default=Status.PENDING,
    )
    payment_method = models.CharField(max_length=50, blank=True)
    screenshot_url = models.TextField(blank=True)
    razorpay_order_id = models.CharField(
        max_length=100,
        blank=True,
        db_index=True,
        help_text='Order id returned by Razorpay; matched by the webhook.',
    )
    is_manual_entry = models.BooleanField(default=False)
    recorded_by = models.CharField(
        max_length=100,
        blank=True,
        help_text='Id of the administrator who recorded a manual entry.',
    )
    notes = models.TextField(blank=True)
    receipt_number = models.CharField(max_length=100, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-payment_date']
        verbose_name = 'Payment'
        verbose_name_plural = 'Payments'

    def __str__(self):
        return (
            f"{self.student} → {self.event.name} "
            f"({self.amount} INR, {self.get_status_display()})"
        )


class QrCode(models.Model):
    """A payment QR image (e.g. 'GPay Business') offered on the pay page."""

    id = models.CharField(primary_key=True, max_length=40, default=generate_id, editable=False)
    name = models.CharField(max_length=200)
    url = models.TextField(help_text='Image URL or base64 data URL.')

    class Meta:
        ordering = ['name']
        verbose_name = 'QR Code'
        verbose_name_plural = 'QR Codes'

    def __str__(self):
        return self.name


class PrintDistribution(models.Model):
    id = models.CharField(primary_key=True, max_length=40, default=generate_id, editable=False)
    student = models.ForeignKey(
        Student,
        on_delete=models.CASCADE,
        related_name='print_distributions',
    )
    event = models.ForeignKey(
        Event,
        on_delete=models.CASCADE,
        related_name='print_distributions',
    )
    distributed_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['-distributed_at']
        verbose_name = 'Print Distribution'
        verbose_name_plural = 'Print Distributions'

    def __str__(self):
        return f"{self.student} – {self.event.name} ({self.distributed_at:%Y-%m-%d})"
