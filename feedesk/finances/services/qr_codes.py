"""
finances/services/qr_codes.py
──────────────────────────────
Payment QR codes managed from the settings page.
"""

import logging

from django.db import DEFAULT_DB_ALIAS

from ..models import QrCode
from ..results import ErrorKind, Result, service_boundary
from .shapes import qr_code_dict

logger = logging.getLogger(__name__)


@service_boundary('Failed to fetch QR codes')
def get_qr_codes(using=DEFAULT_DB_ALIAS):
    return Result.success([qr_code_dict(q) for q in QrCode.objects.using(using).all()])


@service_boundary('Failed to add QR code')
def add_qr_code(name, url, using=DEFAULT_DB_ALIAS):
    if not name or not url:
        return Result.failure(
            ErrorKind.VALIDATION, 'Please provide both a name and a URL for the QR code.'
        )
    qr = QrCode.objects.using(using).create(name=name, url=url)
    logger.info('Added QR code %s', qr.name)
    return Result.success(qr_code_dict(qr))


@service_boundary('Failed to delete QR code')
def delete_qr_code(qr_id, using=DEFAULT_DB_ALIAS):
    deleted, _ = QrCode.objects.using(using).filter(pk=qr_id).delete()
    if not deleted:
        return Result.failure(ErrorKind.NOT_FOUND, 'QR code not found')
    logger.info('Deleted QR code %s', qr_id)
    return Result.success()
