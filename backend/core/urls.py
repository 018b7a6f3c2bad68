"""
Core app URL configuration.

Included from the project ``urls.py`` as::

    path('api/core/', include('core.urls')),

  GET /api/core/dashboard/   → DashboardStatsView
  GET /api/core/constants/   → SystemConstantsView
"""

from django.urls import path

from . import views

app_name = "core"

urlpatterns = [
    # ── Dashboard ────────────────────────────────────────────────────
    path(
        "dashboard/",
        views.DashboardStatsView.as_view(),
        name="dashboard-stats",
    ),

    # ── System Constants / Enums ─────────────────────────────────────
    path(
        "constants/",
        views.SystemConstantsView.as_view(),
        name="system-constants",
    ),
]
