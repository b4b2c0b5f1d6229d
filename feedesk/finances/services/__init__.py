"""
finances/services/
──────────────────
The dashboard's request handlers.  Each function validates its input,
talks to the store through the database alias passed as `using`, and
returns a finances.results.Result; views never touch the ORM directly.

  dashboard.py       – overview page data
  statistics.py      – collections chart
  students.py        – roster, CSV import, per-student history
  events.py          – event list / create / detail
  payments.py        – event payments, status changes, pay page
  manual_payments.py – cash entries
  notifications.py   – payments awaiting verification
  qr_codes.py        – payment QR codes
  reports.py         – reports and CSV export
  prints.py          – print-distribution records
"""
from .dashboard import get_dashboard_data
from .events import create_event, get_event, get_events
from .manual_payments import get_manual_payments, record_cash_payment
from .notifications import get_pending_transactions
from .payments import (
    apply_status,
    create_payment,
    get_event_payments,
    get_payment_page_data,
    update_payment_status,
)
from .prints import get_print_distributions, record_print_distribution
from .qr_codes import add_qr_code, delete_qr_code, get_qr_codes
from .reports import (
    export_to_csv,
    generate_event_report,
    generate_student_wise_report,
    generate_transaction_report,
    generate_transaction_summary,
)
from .statistics import get_dashboard_statistics
from .students import add_student, get_student_payments, get_students, import_students

__all__ = [
    # dashboard
    'get_dashboard_data',
    'get_dashboard_statistics',
    # students
    'add_student',
    'get_students',
    'import_students',
    'get_student_payments',
    # events
    'get_events',
    'get_event',
    'create_event',
    # payments
    'apply_status',
    'create_payment',
    'get_event_payments',
    'get_payment_page_data',
    'update_payment_status',
    'record_cash_payment',
    'get_manual_payments',
    'get_pending_transactions',
    # settings
    'get_qr_codes',
    'add_qr_code',
    'delete_qr_code',
    # reports
    'generate_transaction_report',
    'generate_event_report',
    'generate_transaction_summary',
    'generate_student_wise_report',
    'export_to_csv',
    # prints
    'record_print_distribution',
    'get_print_distributions',
]
