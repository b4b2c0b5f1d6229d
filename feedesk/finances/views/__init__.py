"""
finances/views/
───────────────
Split into sub-modules for clarity:
  utils.py     – shared helpers (decorators, JSON envelope, body parsing)
  dashboard.py – overview data and collections chart
  students.py  – roster, CSV import, per-student payments
  events.py    – events, event payments, print distribution
  payments.py  – status changes, verification queue, cash entries, pay page
  reports.py   – reports and CSV download
  qr_codes.py  – payment QR codes (settings page)
"""
from .dashboard import dashboard_view, statistics_view
from .events import event_detail_view, event_payments_view, event_prints_view, events_view
from .payments import (
    manual_payments_view,
    pay_page_view,
    payment_status_view,
    pending_payments_view,
    submit_payment_view,
)
from .qr_codes import delete_qr_code_view, qr_codes_view
from .reports import report_export_view, report_view
from .students import import_students_view, student_payments_view, students_view

__all__ = [
    # dashboard
    'dashboard_view',
    'statistics_view',
    # students
    'students_view',
    'import_students_view',
    'student_payments_view',
    # events
    'events_view',
    'event_detail_view',
    'event_payments_view',
    'event_prints_view',
    # payments
    'payment_status_view',
    'pending_payments_view',
    'manual_payments_view',
    'pay_page_view',
    'submit_payment_view',
    # reports
    'report_view',
    'report_export_view',
    # settings
    'qr_codes_view',
    'delete_qr_code_view',
]
