# finances/migrations/0001_initial.py
#
# Students, events, payments, QR codes and print-distribution records.

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models

import finances.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Student',
            fields=[
                ('id', models.CharField(default=finances.models.generate_id, editable=False, max_length=40, primary_key=True, serialize=False)),
                ('roll_no', models.CharField(
                    help_text='Unique roll number printed on the student ID card.',
                    max_length=50,
                    unique=True,
                    verbose_name='Roll number',
                )),
                ('name', models.CharField(max_length=200)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('class_name', models.CharField(blank=True, help_text="Class / section label, e.g. '10-B'.", max_length=50, verbose_name='Class')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Student',
                'verbose_name_plural': 'Students',
                'ordering': ['roll_no'],
            },
        ),
        migrations.CreateModel(
            name='Event',
            fields=[
                ('id', models.CharField(default=finances.models.generate_id, editable=False, max_length=40, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('deadline', models.DateTimeField(help_text='Last moment payments are expected.')),
                ('cost', models.DecimalField(
                    decimal_places=2,
                    help_text='Amount each student is expected to pay (INR).',
                    max_digits=10,
                    validators=[django.core.validators.MinValueValidator(0)],
                )),
                ('payment_options', models.TextField(default='[]', help_text='JSON list of accepted payment methods.')),
                ('qr_code_url', models.TextField(blank=True, help_text='Payment QR image shown on the pay page (URL or data URL).')),
                ('category', models.CharField(blank=True, max_length=100)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Event',
                'verbose_name_plural': 'Events',
                'ordering': ['deadline'],
            },
        ),
        migrations.CreateModel(
            name='QrCode',
            fields=[
                ('id', models.CharField(default=finances.models.generate_id, editable=False, max_length=40, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('url', models.TextField(help_text='Image URL or base64 data URL.')),
            ],
            options={
                'verbose_name': 'QR Code',
                'verbose_name_plural': 'QR Codes',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Payment',
            fields=[
                ('id', models.CharField(default=finances.models.generate_id, editable=False, max_length=40, primary_key=True, serialize=False)),
                ('amount', models.DecimalField(decimal_places=2, help_text='Amount actually paid (INR).', max_digits=10)),
                ('payment_date', models.DateTimeField(default=django.utils.timezone.now)),
                ('transaction_id', models.CharField(blank=True, help_text='Gateway payment id, UPI reference or CASH_<timestamp>.', max_length=100)),
                ('status', models.CharField(
                    choices=[
                        ('Pending', 'Pending'),
                        ('Paid', 'Paid'),
                        ('Failed', 'Failed'),
                        ('Verification Pending', 'Verification Pending'),
                    ],
                    default='Pending',
                    max_length=30,
                )),
                ('payment_method', models.CharField(blank=True, max_length=50)),
                ('screenshot_url', models.TextField(blank=True)),
                ('razorpay_order_id', models.CharField(
                    blank=True,
                    db_index=True,
                    help_text='Order id returned by Razorpay; matched by the webhook.',
                    max_length=100,
                )),
                ('is_manual_entry', models.BooleanField(default=False)),
                ('recorded_by', models.CharField(blank=True, help_text='Id of the administrator who recorded a manual entry.', max_length=100)),
                ('notes', models.TextField(blank=True)),
                ('receipt_number', models.CharField(blank=True, max_length=100)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('event', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='payments', to='finances.event')),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='payments', to='finances.student')),
            ],
            options={
                'verbose_name': 'Payment',
                'verbose_name_plural': 'Payments',
                'ordering': ['-payment_date'],
            },
        ),
        migrations.CreateModel(
            name='PrintDistribution',
            fields=[
                ('id', models.CharField(default=finances.models.generate_id, editable=False, max_length=40, primary_key=True, serialize=False)),
                ('distributed_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('event', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='print_distributions', to='finances.event')),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='print_distributions', to='finances.student')),
            ],
            options={
                'verbose_name': 'Print Distribution',
                'verbose_name_plural': 'Print Distributions',
                'ordering': ['-distributed_at'],
            },
        ),
    ]
