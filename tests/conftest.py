import json
from datetime import timedelta
from decimal import Decimal

import pytest
from django.conf import settings
from django.utils import timezone

from accounts.models import User
from accounts.session import create_session_token
from finances.models import Event, Payment, Student


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        username='admin@school.test',
        email='admin@school.test',
        password='s3cret-pass',
        name='Desk Admin',
    )


@pytest.fixture
def admin_client(client, admin_user):
    """A test client carrying a valid dashboard `session` cookie."""
    client.cookies[settings.SESSION_TOKEN_COOKIE_NAME] = create_session_token(admin_user)
    return client


@pytest.fixture
def student(db):
    return Student.objects.create(roll_no='101', name='Asha Rao', class_name='10-B')


@pytest.fixture
def other_student(db):
    return Student.objects.create(roll_no='102', name='Vikram Iyer', class_name='10-B')


@pytest.fixture
def event(db):
    return Event.objects.create(
        name='Annual Day',
        deadline=timezone.now() + timedelta(days=14),
        cost=Decimal('500.00'),
        payment_options=json.dumps(['UPI', 'Cash']),
    )


@pytest.fixture
def make_payment(student, event):
    def _make(status=Payment.Status.PENDING, **kwargs):
        kwargs.setdefault('student', student)
        kwargs.setdefault('event', event)
        kwargs.setdefault('amount', Decimal('500.00'))
        kwargs.setdefault('payment_method', 'Razorpay')
        return Payment.objects.create(status=status, **kwargs)
    return _make


def post_json(client, url, payload, **extra):
    return client.post(url, data=json.dumps(payload), content_type='application/json', **extra)
