"""
finances/services/prints.py
────────────────────────────
Which students have collected their printed copy for an event.
"""

from django.db import DEFAULT_DB_ALIAS

from ..models import Event, PrintDistribution, Student
from ..results import ErrorKind, Result, service_boundary
from .shapes import print_distribution_dict


@service_boundary('Failed to record distribution')
def record_print_distribution(student_id, event_id, using=DEFAULT_DB_ALIAS):
    student = Student.objects.using(using).filter(pk=student_id).first()
    if student is None:
        return Result.failure(ErrorKind.NOT_FOUND, 'Student not found')
    event = Event.objects.using(using).filter(pk=event_id).first()
    if event is None:
        return Result.failure(ErrorKind.NOT_FOUND, 'Event not found')

    record = PrintDistribution.objects.using(using).create(student=student, event=event)
    return Result.success(print_distribution_dict(record))


@service_boundary('Failed to fetch distributions')
def get_print_distributions(event_id, using=DEFAULT_DB_ALIAS):
    if not Event.objects.using(using).filter(pk=event_id).exists():
        return Result.failure(ErrorKind.NOT_FOUND, 'Event not found')
    records = (
        PrintDistribution.objects.using(using)
        .filter(event_id=event_id)
        .select_related('student')
    )
    return Result.success([print_distribution_dict(r) for r in records])
