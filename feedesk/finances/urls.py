"""
finances/urls.py
────────────────
URL patterns for the dashboard (admin session required) and the public
pay page.  Included in the root urls.py with:
    path('', include('finances.urls')),
"""

from django.urls import path

from . import views

urlpatterns = [
    # Dashboard
    path('dashboard/',                                   views.dashboard_view,        name='dashboard'),
    path('dashboard/statistics/',                        views.statistics_view,       name='statistics'),
    path('dashboard/students/',                          views.students_view,         name='students'),
    path('dashboard/students/import/',                   views.import_students_view,  name='import_students'),
    path('dashboard/students/<str:student_id>/payments/', views.student_payments_view, name='student_payments'),
    path('dashboard/events/',                            views.events_view,           name='events'),
    path('dashboard/events/<str:event_id>/',             views.event_detail_view,     name='event_detail'),
    path('dashboard/events/<str:event_id>/payments/',    views.event_payments_view,   name='event_payments'),
    path('dashboard/events/<str:event_id>/prints/',      views.event_prints_view,     name='event_prints'),
    path('dashboard/payments/pending/',                  views.pending_payments_view, name='pending_payments'),
    path('dashboard/payments/manual/',                   views.manual_payments_view,  name='manual_payments'),
    path('dashboard/payments/<str:payment_id>/status/',  views.payment_status_view,   name='payment_status'),
    path('dashboard/reports/',                           views.report_view,           name='reports'),
    path('dashboard/reports/export/',                    views.report_export_view,    name='report_export'),
    path('dashboard/settings/qr-codes/',                 views.qr_codes_view,         name='qr_codes'),
    path('dashboard/settings/qr-codes/<str:qr_id>/delete/', views.delete_qr_code_view, name='delete_qr_code'),

    # Public pay page
    path('pay/<str:event_id>/',                          views.pay_page_view,         name='pay_page'),
    path('pay/<str:event_id>/submit/',                   views.submit_payment_view,   name='submit_payment'),
]
