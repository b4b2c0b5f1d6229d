"""
finances/admin.py
─────────────────
Admin registrations for Student, Event, Payment, QrCode, PrintDistribution.
"""

from django.contrib import admin

from .models import Event, Payment, PrintDistribution, QrCode, Student


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display  = ('roll_no', 'name', 'class_name', 'email', 'created_at')
    list_filter   = ('class_name',)
    search_fields = ('roll_no', 'name', 'email')


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display    = ('name', 'category', 'cost', 'deadline', 'total_collected')
    list_filter     = ('category', 'deadline')
    search_fields   = ('name', 'description')
    readonly_fields = ('created_at', 'updated_at')

    fieldsets = (
        (None, {
            'fields': ('name', 'description', 'category', 'cost', 'deadline'),
        }),
        ('Payment', {
            'fields': ('payment_options', 'qr_code_url'),
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    @admin.display(description='Collected (INR)')
    def total_collected(self, obj):
        from django.db.models import Sum
        return (
            obj.payments.filter(status=Payment.Status.PAID)
            .aggregate(s=Sum('amount'))['s'] or 0
        )


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display  = ('student', 'event', 'amount', 'status', 'payment_method',
                     'is_manual_entry', 'payment_date')
    list_filter   = ('status', 'payment_method', 'is_manual_entry')
    search_fields = ('student__name', 'student__roll_no', 'event__name',
                     'transaction_id', 'razorpay_order_id', 'receipt_number')
    raw_id_fields = ('student', 'event')
    readonly_fields = ('created_at', 'updated_at')


@admin.register(QrCode)
class QrCodeAdmin(admin.ModelAdmin):
    list_display  = ('name',)
    search_fields = ('name',)


@admin.register(PrintDistribution)
class PrintDistributionAdmin(admin.ModelAdmin):
    list_display  = ('student', 'event', 'distributed_at')
    list_filter   = ('event',)
    raw_id_fields = ('student', 'event')
