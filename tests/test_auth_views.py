from django.conf import settings

from accounts.models import User
from accounts.session import decode_session_token


def test_login_form_renders(client, db):
    resp = client.get('/login/')

    assert resp.status_code == 200
    assert b'Sign in' in resp.content


def test_login_issues_http_only_session_cookie(client, admin_user):
    resp = client.post('/login/', {'email': 'admin@school.test', 'password': 's3cret-pass'})

    assert resp.status_code == 302
    assert resp['Location'] == '/dashboard/'
    cookie = resp.cookies[settings.SESSION_TOKEN_COOKIE_NAME]
    assert cookie['httponly']
    assert cookie['max-age'] == 86400
    assert decode_session_token(cookie.value)['user']['email'] == 'admin@school.test'


def test_login_with_wrong_password_is_rejected(client, admin_user):
    resp = client.post('/login/', {'email': 'admin@school.test', 'password': 'nope'})

    assert resp.status_code == 400
    assert b'Invalid credentials' in resp.content
    assert settings.SESSION_TOKEN_COOKIE_NAME not in resp.cookies


def test_login_requires_both_fields(client, db):
    resp = client.post('/login/', {'email': 'admin@school.test'})

    assert resp.status_code == 400
    assert not User.objects.exists()


def test_first_login_on_empty_install_creates_admin(client, db):
    resp = client.post('/login/', {'email': 'first@school.test', 'password': 'pick-one'})

    assert resp.status_code == 302
    user = User.objects.get()
    assert user.email == 'first@school.test'
    assert user.is_superuser
    assert user.check_password('pick-one')


def test_no_bootstrap_once_a_user_exists(client, admin_user):
    client.post('/login/', {'email': 'intruder@x.test', 'password': 'whatever'})

    assert User.objects.count() == 1


def test_logout_clears_cookie(admin_client):
    resp = admin_client.post('/logout/')

    assert resp.status_code == 302
    assert resp.cookies[settings.SESSION_TOKEN_COOKIE_NAME].value == ''


def test_logout_rejects_get(admin_client):
    assert admin_client.get('/logout/').status_code == 405
