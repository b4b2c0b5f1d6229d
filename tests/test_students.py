from django.core.files.uploadedfile import SimpleUploadedFile

from finances import services
from finances.models import Payment, Student
from finances.results import ErrorKind

from .conftest import post_json

URL = '/dashboard/students/'


def test_add_student(admin_client, db):
    resp = post_json(admin_client, URL, {'name': 'Meera', 'roll_number': '7', 'class_name': '9-A'})

    assert resp.status_code == 200
    data = resp.json()['data']
    assert data['name'] == 'Meera'
    assert data['rollNumber'] == '7'
    assert Student.objects.get(pk=data['id']).class_name == '9-A'


def test_duplicate_roll_number_conflicts(admin_client, student):
    resp = post_json(admin_client, URL, {'name': 'Someone', 'roll_number': student.roll_no})

    assert resp.status_code == 409
    assert resp.json()['error'] == 'A student with this roll number already exists'
    assert Student.objects.count() == 1


def test_blank_fields_fail_validation(db):
    result = services.add_student('  ', '12')

    assert result.kind is ErrorKind.VALIDATION
    assert result.http_status == 400


def test_students_are_listed_by_roll_number(admin_client, db):
    for roll in ('30', '10', '20'):
        Student.objects.create(roll_no=roll, name=f'Student {roll}')

    resp = admin_client.get(URL)

    assert [s['rollNo'] for s in resp.json()['data']] == ['10', '20', '30']


def test_csv_import_creates_skips_and_counts(admin_client, student):
    csv_text = (
        'Name,Roll Number,Email,Class\n'
        'Ravi,201,ravi@example.com,10-A\n'
        f'Duplicate,{student.roll_no},,\n'
        ',202,,\n'
        'Nila,203,,10-C\n'
    )
    upload = SimpleUploadedFile('roster.csv', csv_text.encode('utf-8-sig'), content_type='text/csv')

    resp = admin_client.post(f'{URL}import/', {'csv_file': upload})

    assert resp.status_code == 200
    assert resp.json()['data'] == {'created': 2, 'skipped': 1, 'invalid': 1}
    assert Student.objects.get(roll_no='201').email == 'ravi@example.com'


def test_csv_import_requires_columns(admin_client, db):
    upload = SimpleUploadedFile('roster.csv', b'Full Name,Roll\nA,1\n', content_type='text/csv')

    resp = admin_client.post(f'{URL}import/', {'csv_file': upload})

    assert resp.status_code == 400
    assert 'missing required columns' in resp.json()['error']


def test_student_payment_history(admin_client, student, make_payment):
    make_payment(status=Payment.Status.PAID)

    resp = admin_client.get(f'{URL}{student.pk}/payments/')

    data = resp.json()['data']
    assert data['student']['rollNo'] == '101'
    assert data['transactions'][0]['eventName'] == 'Annual Day'


def test_unknown_student_history_is_404(admin_client, db):
    resp = admin_client.get(f'{URL}nope/payments/')

    assert resp.status_code == 404
    assert resp.json() == {'success': False, 'error': 'Student not found'}
