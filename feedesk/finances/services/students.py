"""
finances/services/students.py
──────────────────────────────
Student roster: add one, list all, bulk import from CSV rows, and the
per-student payment history.
"""

import logging

from django.db import DEFAULT_DB_ALIAS, transaction

from ..models import Payment, Student
from ..results import ErrorKind, Result, service_boundary
from .shapes import payment_dict, student_dict

logger = logging.getLogger(__name__)


@service_boundary('Failed to add student')
def add_student(name, roll_number, email='', class_name='', using=DEFAULT_DB_ALIAS):
    name = (name or '').strip()
    roll_number = (roll_number or '').strip()
    if not name or not roll_number:
        return Result.failure(ErrorKind.VALIDATION, 'Please fill in all required fields')

    with transaction.atomic(using=using):
        if Student.objects.using(using).filter(roll_no=roll_number).exists():
            return Result.failure(
                ErrorKind.CONFLICT, 'A student with this roll number already exists'
            )
        student = Student.objects.using(using).create(
            name=name,
            roll_no=roll_number,
            email=(email or '').strip(),
            class_name=(class_name or '').strip(),
        )

    logger.info('Added student %s (%s)', student.name, student.roll_no)
    return Result.success({
        'id':         student.id,
        'name':       student.name,
        'rollNumber': student.roll_no,
    })


@service_boundary('Failed to fetch students')
def get_students(using=DEFAULT_DB_ALIAS):
    students = Student.objects.using(using).order_by('roll_no')
    return Result.success([student_dict(s) for s in students])


@service_boundary('Failed to import students')
def import_students(rows, using=DEFAULT_DB_ALIAS):
    """
    Create students from parsed CSV rows (dicts keyed by the header
    `Name, Roll Number, Email, Class`).  Rows without a name or roll number
    are skipped, as are roll numbers that already exist.
    """
    created = skipped = invalid = 0

    with transaction.atomic(using=using):
        existing = set(Student.objects.using(using).values_list('roll_no', flat=True))
        for row in rows:
            name = (row.get('Name') or '').strip()
            roll_no = (row.get('Roll Number') or '').strip()
            if not name or not roll_no:
                invalid += 1
                continue
            if roll_no in existing:
                skipped += 1
                continue
            Student.objects.using(using).create(
                name=name,
                roll_no=roll_no,
                email=(row.get('Email') or '').strip(),
                class_name=(row.get('Class') or '').strip(),
            )
            existing.add(roll_no)
            created += 1

    logger.info('Student import: %d created, %d skipped, %d invalid', created, skipped, invalid)
    return Result.success({'created': created, 'skipped': skipped, 'invalid': invalid})


@service_boundary('Failed to fetch payments')
def get_student_payments(student_id, using=DEFAULT_DB_ALIAS):
    student = Student.objects.using(using).filter(pk=student_id).first()
    if student is None:
        return Result.failure(ErrorKind.NOT_FOUND, 'Student not found')

    payments = (
        Payment.objects.using(using)
        .filter(student=student)
        .select_related('event')
        .order_by('-payment_date')
    )
    return Result.success({
        'student':      student_dict(student),
        'transactions': [payment_dict(p, with_event=True) for p in payments],
    })
