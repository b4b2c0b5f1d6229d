"""
finances/services/events.py
────────────────────────────
Events students pay for.
"""

import json
import logging
from decimal import Decimal

from django.db import DEFAULT_DB_ALIAS

from ..models import Event
from ..results import ErrorKind, Result, service_boundary
from .shapes import event_dict

logger = logging.getLogger(__name__)


@service_boundary('Failed to fetch events')
def get_events(using=DEFAULT_DB_ALIAS):
    return Result.success([event_dict(e) for e in Event.objects.using(using).order_by('deadline')])


@service_boundary('Failed to fetch event')
def get_event(event_id, using=DEFAULT_DB_ALIAS):
    event = Event.objects.using(using).filter(pk=event_id).first()
    if event is None:
        return Result.failure(ErrorKind.NOT_FOUND, 'Event not found')
    return Result.success(event_dict(event))


@service_boundary('Failed to create event')
def create_event(name, deadline, cost, description='', payment_options=None,
                 qr_code_url='', category='', using=DEFAULT_DB_ALIAS):
    if Decimal(cost) < 0:
        return Result.failure(ErrorKind.VALIDATION, 'Cost cannot be negative')

    event = Event.objects.using(using).create(
        name=name,
        description=description,
        deadline=deadline,
        cost=cost,
        payment_options=json.dumps(list(payment_options or [])),
        qr_code_url=qr_code_url,
        category=category,
    )
    logger.info('Created event %s (%s)', event.name, event.id)
    return Result.success(event_dict(event))
