import io

from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from finances.models import QrCode

from .conftest import post_json

URL = '/dashboard/settings/qr-codes/'


def png_upload(name='qr.png'):
    buf = io.BytesIO()
    Image.new('RGB', (8, 8), 'white').save(buf, format='PNG')
    return SimpleUploadedFile(name, buf.getvalue(), content_type='image/png')


def test_add_qr_code_by_url(admin_client, db):
    resp = post_json(admin_client, URL, {'name': 'School UPI', 'url': 'https://cdn.example/qr.png'})

    assert resp.status_code == 200
    assert QrCode.objects.get().name == 'School UPI'


def test_add_qr_code_by_image_upload(admin_client, db):
    resp = admin_client.post(URL, {'name': 'Front desk', 'image': png_upload()})

    assert resp.status_code == 200
    assert QrCode.objects.get().url.startswith('data:image/png;base64,')


def test_non_image_upload_is_rejected(admin_client, db):
    fake = SimpleUploadedFile('qr.png', b'definitely not a png', content_type='image/png')

    resp = admin_client.post(URL, {'name': 'Broken', 'image': fake})

    assert resp.status_code == 400
    assert not QrCode.objects.exists()


def test_qr_code_needs_url_or_image(admin_client, db):
    resp = post_json(admin_client, URL, {'name': 'Nothing'})

    assert resp.status_code == 400
    assert resp.json()['error'] == 'Please provide both a name and a URL for the QR code.'


def test_delete_qr_code(admin_client, db):
    qr = QrCode.objects.create(name='Old', url='https://cdn.example/old.png')

    resp = admin_client.post(f'{URL}{qr.pk}/delete/')

    assert resp.status_code == 200
    assert resp.json() == {'success': True}
    assert not QrCode.objects.exists()


def test_delete_unknown_qr_code(admin_client, db):
    resp = admin_client.post(f'{URL}missing/delete/')

    assert resp.status_code == 404
    assert resp.json()['error'] == 'QR code not found'
