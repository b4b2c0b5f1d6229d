"""
accounts/urls.py
────────────────
URL patterns for authentication.
Included in the root urls.py with:
    path('', include('accounts.urls')),
"""

from django.urls import path

from . import views

urlpatterns = [
    path('login/',  views.login_view,  name='login'),
    path('logout/', views.logout_view, name='logout'),
]
