"""
Evidence app URL configuration.

Included from the project ``urls.py`` under ``api/``.

Endpoint Map
------------
  GET    /api/evidence/?crime=<id>      → EvidenceViewSet.list
  POST   /api/evidence/                 → EvidenceViewSet.create
  GET    /api/evidence/{id}/            → EvidenceViewSet.retrieve
  PATCH  /api/evidence/{id}/            → EvidenceViewSet.partial_update
  DELETE /api/evidence/{id}/            → EvidenceViewSet.destroy
  POST   /api/evidence/bulk-delete/     → EvidenceViewSet.bulk_delete
"""

from rest_framework.routers import DefaultRouter

from .views import EvidenceViewSet

router = DefaultRouter()
router.register(
    prefix=r"evidence",
    viewset=EvidenceViewSet,
    basename="evidence",
)

urlpatterns = router.urls
