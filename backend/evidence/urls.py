"""
Evidence app URL configuration.

Included in the project-level ``urls.py`` as::

    path('api/', include('evidence.urls')),

Endpoint Map
------------
    GET    /evidence/                → list   (?page, limit, search, caseId)
    POST   /evidence/                → create (multipart)
    GET    /evidence/{id}/           → retrieve
    PUT    /evidence/{id}/           → update          (uploader)
    PATCH  /evidence/{id}/           → partial_update  (admin, multipart)
    DELETE /evidence/{id}/           → destroy         (admin)
    POST   /evidence/{id}/remarks/   → remarks
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import EvidenceViewSet

app_name = "evidence"

router = DefaultRouter()
router.register(r"evidence", EvidenceViewSet, basename="evidence")

urlpatterns = [
    path("", include(router.urls)),
]
