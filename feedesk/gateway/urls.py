from django.urls import path

from . import views

urlpatterns = [
    path('api/razorpay/order/',   views.order_view,   name='razorpay_order'),
    path('api/razorpay/webhook/', views.webhook_view, name='razorpay_webhook'),
]
