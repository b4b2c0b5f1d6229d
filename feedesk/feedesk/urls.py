"""
URL configuration for the feedesk project.

  path('', include('core.urls')),        # site root
  path('', include('accounts.urls')),    # login / logout
  path('', include('finances.urls')),    # /dashboard/… and the public /pay/… page
  path('', include('gateway.urls')),     # /api/razorpay/order/ and /webhook/
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', include('core.urls')),
    path('', include('accounts.urls')),
    path('', include('finances.urls')),
    path('', include('gateway.urls')),
]

handler404 = 'core.views.handler404'
handler500 = 'core.views.handler500'
