"""
finances/views/dashboard.py
────────────────────────────
Overview page data and the collections chart.
"""

from django.views.decorators.http import require_GET

from .. import services
from .utils import admin_required, result_response


@admin_required
@require_GET
def dashboard_view(req):
    """Events, all payments and the five most recent ones."""
    return result_response(services.get_dashboard_data())


@admin_required
@require_GET
def statistics_view(req):
    """Collections per day / week / month (`?period=`, default week)."""
    period = req.GET.get('period', 'week')
    return result_response(services.get_dashboard_statistics(period))
