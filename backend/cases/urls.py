"""
Cases app URL configuration.

Included in the project-level ``urls.py`` as::

    path('api/', include('cases.urls')),

Endpoint Map
------------
    GET    /cases/                   → list
    POST   /cases/                   → create
    GET    /cases/{id}/              → retrieve
    PUT    /cases/{id}/              → update        (admin)
    DELETE /cases/{id}/              → destroy       (admin)
    PATCH  /cases/{id}/start/        → start         (admin)
    PATCH  /cases/{id}/close/        → close         (admin)
    POST   /cases/{id}/remarks/      → remarks
    PATCH  /cases/assign/{id}/       → assign        (admin)
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import CaseViewSet

app_name = "cases"

router = DefaultRouter()
router.register(r"cases", CaseViewSet, basename="case")

urlpatterns = [
    path("", include(router.urls)),
]
