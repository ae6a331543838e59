"""
Accounts app URL configuration.

Included in the project-level ``urls.py`` as::

    path('api/auth/', include('accounts.urls')),

Endpoint Map
------------
Authentication
    POST   /register/            → RegisterView
    POST   /register-admin/      → RegisterAdminView
    POST   /login/               → LoginView
    POST   /token/refresh/       → TokenRefreshView (SimpleJWT)
    GET    /profile/             → ProfileView

Staff Management (admin)
    GET    /staff/               → StaffViewSet.list
    PATCH  /staff/{id}/          → StaffViewSet.partial_update
    DELETE /staff/{id}/          → StaffViewSet.destroy
    GET    /pending/             → StaffViewSet.pending
    PATCH  /approve/{id}/        → StaffViewSet.approve
"""

from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from .views import (
    LoginView,
    ProfileView,
    RegisterAdminView,
    RegisterView,
    StaffViewSet,
)

app_name = "accounts"

staff_list = StaffViewSet.as_view({"get": "list"})
staff_detail = StaffViewSet.as_view({"patch": "partial_update", "delete": "destroy"})
staff_pending = StaffViewSet.as_view({"get": "pending"})
staff_approve = StaffViewSet.as_view({"patch": "approve"})

urlpatterns = [
    # ── Authentication ───────────────────────────────────────────────
    path("register/", RegisterView.as_view(), name="register"),
    path("register-admin/", RegisterAdminView.as_view(), name="register-admin"),
    path("login/", LoginView.as_view(), name="login"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
    path("profile/", ProfileView.as_view(), name="profile"),

    # ── Staff management ─────────────────────────────────────────────
    path("staff/", staff_list, name="staff-list"),
    path("staff/<int:pk>/", staff_detail, name="staff-detail"),
    path("pending/", staff_pending, name="staff-pending"),
    path("approve/<int:pk>/", staff_approve, name="staff-approve"),
]
