"""
Crimes app URL configuration.

Included from the project ``urls.py`` under ``api/``.

  GET  /api/crimes/             → CrimeViewSet.list
  POST /api/crimes/             → CrimeViewSet.create
  GET  /api/crimes/{id}/        → CrimeViewSet.retrieve
  PUT  /api/crimes/{id}/        → CrimeViewSet.update
  GET  /api/crimes/{id}/logs/   → CrimeViewSet.logs
"""

from rest_framework.routers import DefaultRouter

from .views import CrimeViewSet

router = DefaultRouter()
router.register(
    prefix=r"crimes",
    viewset=CrimeViewSet,
    basename="crime",
)

urlpatterns = router.urls
