"""
finances/management/commands/import_legacy_sqlite.py
─────────────────────────────────────────────────────
Copy data out of the legacy SQLite database into the current database.

    python manage.py import_legacy_sqlite path/to/dev.db

Tables are read in dependency order (User, Student, Event, QrCode, Payment,
PrintDistribution).  Rows that already exist are left alone (users matched
by email, everything else by id), so the command can be re-run safely.
Payments and print records whose student or event is missing are skipped.
"""

import sqlite3
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import DEFAULT_DB_ALIAS, transaction
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from finances.models import Event, Payment, PrintDistribution, QrCode, Student


def legacy_datetime(value):
    """
    Legacy timestamps are either epoch milliseconds or ISO-8601 text.
    Returns an aware datetime, or None for empty values.
    """
    if value in (None, ''):
        return None
    if isinstance(value, (int, float)) or str(value).isdigit():
        return datetime.fromtimestamp(int(value) / 1000, tz=dt_timezone.utc)
    parsed = parse_datetime(str(value).replace(' ', 'T', 1))
    if parsed is None:
        raise ValueError(f'Unrecognised timestamp {value!r}')
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, dt_timezone.utc)
    return parsed


def legacy_password(value):
    """bcrypt hashes ($2a$/$2b$…) are prefixed so BCryptPasswordHasher can verify them."""
    if value and value.startswith('$2'):
        return f'bcrypt${value}'
    return value or '!'


class Command(BaseCommand):
    help = 'Import users, students, events, QR codes, payments and print records from a legacy SQLite file.'

    def add_arguments(self, parser):
        parser.add_argument('path', help='Path to the legacy SQLite database file.')
        parser.add_argument(
            '--database', default=DEFAULT_DB_ALIAS,
            help='Database alias to import into (default: "default").',
        )

    def handle(self, *args, **options):
        self.using = options['database']
        try:
            conn = sqlite3.connect(f"file:{options['path']}?mode=ro", uri=True)
        except sqlite3.Error as exc:
            raise CommandError(f"Cannot open {options['path']}: {exc}")
        conn.row_factory = sqlite3.Row

        try:
            with transaction.atomic(using=self.using):
                self._import('User',              conn, self.import_user)
                self._import('Student',           conn, self.import_student)
                self._import('Event',             conn, self.import_event)
                self._import('QrCode',            conn, self.import_qr_code, optional=True)
                self._import('Payment',           conn, self.import_payment)
                self._import('PrintDistribution', conn, self.import_print, optional=True)
        finally:
            conn.close()

        self.stdout.write(self.style.SUCCESS('Import complete.'))

    # ── driver ────────────────────────────────────────────────────────────────

    def _import(self, table, conn, import_row, optional=False):
        try:
            rows = conn.execute(f'SELECT * FROM "{table}"').fetchall()
        except sqlite3.OperationalError as exc:
            if optional:
                self.stdout.write(self.style.WARNING(f'Skipping {table}: {exc}'))
                return
            raise CommandError(f'Cannot read {table}: {exc}')

        created = skipped = 0
        for row in rows:
            if import_row(dict(row)):
                created += 1
            else:
                skipped += 1
        self.stdout.write(f'{table}: {len(rows)} found, {created} imported, {skipped} skipped')

    def _restore_updated_at(self, model, pk, row):
        updated = legacy_datetime(row.get('updatedAt'))
        if updated:
            model.objects.using(self.using).filter(pk=pk).update(updated_at=updated)

    def _relations_exist(self, row):
        return (
            Student.objects.using(self.using).filter(pk=row['studentId']).exists()
            and Event.objects.using(self.using).filter(pk=row['eventId']).exists()
        )

    # ── per-table ─────────────────────────────────────────────────────────────

    def import_user(self, row):
        User = get_user_model()
        if User.objects.using(self.using).filter(email__iexact=row['email']).exists():
            return False
        is_admin = (row.get('role') or User.Role.ADMIN) == User.Role.ADMIN
        User.objects.using(self.using).create(
            username=row['email'],
            email=row['email'],
            password=legacy_password(row.get('password')),
            name=row.get('name') or '',
            role=row.get('role') or User.Role.ADMIN,
            is_staff=is_admin,
            date_joined=legacy_datetime(row.get('createdAt')) or timezone.now(),
        )
        return True

    def import_student(self, row):
        if Student.objects.using(self.using).filter(pk=row['id']).exists():
            return False
        if Student.objects.using(self.using).filter(roll_no=row['rollNo']).exists():
            self.stdout.write(self.style.WARNING(
                f"Skipping student {row['id']}: roll number {row['rollNo']} already taken"
            ))
            return False
        Student.objects.using(self.using).create(
            id=row['id'],
            roll_no=row['rollNo'],
            name=row['name'],
            email=row.get('email') or '',
            class_name=row.get('class') or '',
            created_at=legacy_datetime(row.get('createdAt')) or timezone.now(),
        )
        self._restore_updated_at(Student, row['id'], row)
        return True

    def import_event(self, row):
        if Event.objects.using(self.using).filter(pk=row['id']).exists():
            return False
        Event.objects.using(self.using).create(
            id=row['id'],
            name=row['name'],
            description=row.get('description') or '',
            deadline=legacy_datetime(row['deadline']),
            cost=Decimal(str(row['cost'])),
            payment_options=row.get('paymentOptions') or '[]',
            qr_code_url=row.get('qrCodeUrl') or '',
            category=row.get('category') or '',
            created_at=legacy_datetime(row.get('createdAt')) or timezone.now(),
        )
        self._restore_updated_at(Event, row['id'], row)
        return True

    def import_qr_code(self, row):
        if QrCode.objects.using(self.using).filter(pk=row['id']).exists():
            return False
        QrCode.objects.using(self.using).create(id=row['id'], name=row['name'], url=row['url'])
        return True

    def import_payment(self, row):
        if Payment.objects.using(self.using).filter(pk=row['id']).exists():
            return False
        if not self._relations_exist(row):
            self.stdout.write(f"Skipping payment {row['id']}: missing student or event")
            return False
        Payment.objects.using(self.using).create(
            id=row['id'],
            student_id=row['studentId'],
            event_id=row['eventId'],
            amount=Decimal(str(row['amount'])),
            payment_date=legacy_datetime(row.get('paymentDate')) or timezone.now(),
            transaction_id=row.get('transactionId') or '',
            status=row.get('status') or Payment.Status.PENDING,
            payment_method=row.get('paymentMethod') or '',
            screenshot_url=row.get('screenshotUrl') or '',
            razorpay_order_id=row.get('razorpay_order_id') or '',
            is_manual_entry=bool(row.get('isManualEntry')),
            recorded_by=row.get('recordedBy') or '',
            notes=row.get('manualEntryNotes') or '',
            receipt_number=row.get('receiptNumber') or '',
            created_at=legacy_datetime(row.get('createdAt')) or timezone.now(),
        )
        self._restore_updated_at(Payment, row['id'], row)
        return True

    def import_print(self, row):
        if PrintDistribution.objects.using(self.using).filter(pk=row['id']).exists():
            return False
        if not self._relations_exist(row):
            return False
        PrintDistribution.objects.using(self.using).create(
            id=row['id'],
            student_id=row['studentId'],
            event_id=row['eventId'],
            distributed_at=legacy_datetime(row.get('distributedAt')) or timezone.now(),
        )
        return True
