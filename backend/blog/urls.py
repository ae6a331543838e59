"""
Blog app URL configuration.

Endpoint Map
------------
    GET    /blog/                             → list
    POST   /blog/                             → create          (admin)
    GET    /blog/{id}/                        → retrieve
    PUT    /blog/{id}/                        → update          (admin)
    DELETE /blog/{id}/                        → destroy         (admin)
    POST   /blog/{id}/comment/                → comment
    DELETE /blog/{id}/comment/{commentId}/    → delete_comment  (admin)
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import BlogViewSet

app_name = "blog"

router = DefaultRouter()
router.register(r"blog", BlogViewSet, basename="blog")

urlpatterns = [
    path("", include(router.urls)),
]
