from datetime import timedelta
from decimal import Decimal

from django.utils import timezone

from finances import services
from finances.models import Payment
from finances.results import ErrorKind
from finances.services.shapes import money

URL = '/dashboard/reports/'


def test_transaction_report_summary(admin_client, make_payment, other_student):
    make_payment(status=Payment.Status.PAID)
    make_payment(status=Payment.Status.VERIFICATION_PENDING, student=other_student, amount=Decimal('200'))
    make_payment(status=Payment.Status.FAILED, amount=Decimal('50'))

    summary = admin_client.get(URL).json()['data']['summary']

    assert summary['totalTransactions'] == 3
    assert summary['totalCollected'] == '500.00'
    assert summary['totalPending'] == '200.00'
    assert summary['totalFailed'] == '50.00'


def test_date_filters_narrow_the_report(make_payment):
    now = timezone.now()
    make_payment(status=Payment.Status.PAID, payment_date=now - timedelta(days=40))
    make_payment(status=Payment.Status.PAID, payment_date=now)

    result = services.generate_transaction_report(date_from=now - timedelta(days=7))

    assert len(result.data['transactions']) == 1


def test_event_report_counts_students(admin_client, event, student, other_student, make_payment):
    make_payment(status=Payment.Status.PAID)

    resp = admin_client.get(URL, {'type': 'event', 'event_id': event.pk})

    summary = resp.json()['data']['summary']
    assert summary['totalStudents'] == 2
    assert summary['paidCount'] == 1
    assert summary['pendingCount'] == 0
    assert summary['unpaidCount'] == 1
    assert summary['expectedAmount'] == '1000.00'


def test_event_report_needs_an_event(admin_client, db):
    resp = admin_client.get(URL, {'type': 'event'})

    assert resp.status_code == 400
    assert resp.json()['error'] == 'Please select an event'


def test_event_report_for_unknown_event(db):
    assert services.generate_event_report('missing').kind is ErrorKind.NOT_FOUND


def test_summary_groups_by_status_and_method(make_payment, other_student):
    make_payment(status=Payment.Status.PAID, payment_method='UPI')
    make_payment(status=Payment.Status.PAID, payment_method='Cash', student=other_student)

    summary = services.generate_transaction_summary().data['summary']

    assert summary['byStatus'] == [{'status': 'Paid', 'count': 2, 'amount': '1000.00'}]
    assert {m['paymentMethod'] for m in summary['byMethod']} == {'UPI', 'Cash'}


def test_student_wise_report(student, other_student, make_payment):
    make_payment(status=Payment.Status.PAID)

    result = services.generate_student_wise_report()

    rows = {r['studentRoll']: r for r in result.data['transactions']}
    assert rows['101']['paidAmount'] == '500.00'
    assert rows['102']['totalTransactions'] == 0
    assert result.data['summary']['studentsWithPayments'] == 1


def test_csv_export_download(admin_client, make_payment):
    make_payment(status=Payment.Status.PAID)

    resp = admin_client.get(f'{URL}export/')

    assert resp.status_code == 200
    assert resp['Content-Type'] == 'text/csv; charset=utf-8'
    assert resp['Content-Disposition'].startswith('attachment; filename="transaction_report_')
    body = resp.content.decode('utf-8')
    assert body.startswith('\ufeff')
    header = body[1:].splitlines()[0].split(',')
    assert 'studentName' in header
    assert 'Summary' in body


def test_export_of_nothing_is_refused(admin_client, db):
    resp = admin_client.get(f'{URL}export/')

    assert resp.status_code == 400
    assert resp.json()['error'] == 'No data to export'


def test_export_to_csv_flattens_rows():
    result = services.export_to_csv(
        [{'a': 1, 'b': 'x'}, {'a': 2, 'c': 'y', 'nested': {'skip': True}}],
        'custom',
        summary={'total': 3, 'breakdown': []},
    )

    lines = result.data['csv'].splitlines()
    assert lines[0] == 'a,b,c,nested'
    assert lines[2] == '2,,y,'
    assert lines[-1] == 'total,3'
    assert result.data['filename'].startswith('custom_')
    assert result.data['filename'].endswith('.csv')


def test_money_always_has_two_decimal_places():
    assert money(Decimal('500')) == '500.00'
    assert money(1000) == '1000.00'
    assert money(None) == '0.00'
    assert money(Decimal('12.5')) == '12.50'
