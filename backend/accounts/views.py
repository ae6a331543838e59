"""
Accounts app views.

All views follow the **Thin View** pattern: validate input via
serializers, delegate to the service layer, and return the result
wrapped in a DRF ``Response``.  **No business logic** resides here.

View Map
--------
- ``RegisterView``       — POST /auth/register/
- ``RegisterAdminView``  — POST /auth/register-admin/
- ``LoginView``          — POST /auth/login/
- ``ProfileView``        — GET  /auth/profile/
- ``StaffViewSet``       — /auth/staff/, /auth/pending/, /auth/approve/{id}/
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from core.permissions import IsAdmin

from .serializers import (
    ApproveStaffSerializer,
    LoginRequestSerializer,
    RegisterAdminRequestSerializer,
    RegisterRequestSerializer,
    StaffSerializer,
    StaffUpdateSerializer,
    TokenResponseSerializer,
)
from .services import (
    AuthenticationService,
    CurrentStaffService,
    StaffManagementService,
    StaffRegistrationService,
)


def _token_body(tokens: dict) -> dict:
    return {
        "token": tokens["token"],
        "refresh": tokens["refresh"],
        "email": tokens["email"],
        "isAdmin": tokens["is_admin"],
    }


# ═══════════════════════════════════════════════════════════════════
#  Authentication Views
# ═══════════════════════════════════════════════════════════════════


class RegisterView(APIView):
    """
    POST /api/auth/register/

    Public endpoint.  Creates an unapproved staff account.
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        summary="Register staff",
        request=RegisterRequestSerializer,
        responses={
            201: OpenApiResponse(response=StaffSerializer, description="Registration submitted, awaiting admin approval."),
            400: OpenApiResponse(description="Missing field or DuplicateEmail."),
        },
        tags=["Auth"],
    )
    def post(self, request: Request) -> Response:
        serializer = RegisterRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        staff = StaffRegistrationService.register_staff(serializer.validated_data)
        return Response(StaffSerializer(staff).data, status=status.HTTP_201_CREATED)


class RegisterAdminView(APIView):
    """
    POST /api/auth/register-admin/

    Public, secret-gated.  Only succeeds while no admin exists.
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        summary="Register the first admin",
        request=RegisterAdminRequestSerializer,
        responses={
            201: OpenApiResponse(response=TokenResponseSerializer, description="Admin created and logged in."),
            400: OpenApiResponse(description="Missing field or DuplicateEmail."),
            401: OpenApiResponse(description="InvalidSecret."),
            403: OpenApiResponse(description="AdminAlreadyExists."),
        },
        tags=["Auth"],
    )
    def post(self, request: Request) -> Response:
        serializer = RegisterAdminRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        admin = StaffRegistrationService.register_bootstrap_admin(serializer.validated_data)
        tokens = AuthenticationService.generate_tokens(admin)
        return Response(_token_body(tokens), status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """
    POST /api/auth/login/

    Public endpoint.  Email + password → JWT pair.
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        summary="Log in",
        request=LoginRequestSerializer,
        responses={
            200: OpenApiResponse(response=TokenResponseSerializer, description="Authenticated."),
            401: OpenApiResponse(description="InvalidCredentials."),
            403: OpenApiResponse(description="PendingApproval."),
        },
        tags=["Auth"],
    )
    def post(self, request: Request) -> Response:
        serializer = LoginRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        tokens = AuthenticationService.login(
            serializer.validated_data["email"],
            serializer.validated_data["password"],
        )
        return Response(_token_body(tokens), status=status.HTTP_200_OK)


class ProfileView(APIView):
    """
    GET /api/auth/profile/

    The authenticated staff member's own record.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Current staff profile",
        responses={200: StaffSerializer},
        tags=["Auth"],
    )
    def get(self, request: Request) -> Response:
        staff = CurrentStaffService.get_profile(request.user)
        return Response(StaffSerializer(staff).data, status=status.HTTP_200_OK)


# ═══════════════════════════════════════════════════════════════════
#  Staff Management (admin)
# ═══════════════════════════════════════════════════════════════════


class StaffViewSet(viewsets.ViewSet):
    """
    Admin-only staff management.

    Routes
    ------
    GET    /staff/           → list
    PATCH  /staff/{id}/      → partial_update
    DELETE /staff/{id}/      → destroy
    GET    /pending/         → pending
    PATCH  /approve/{id}/    → approve
    """

    permission_classes = [IsAuthenticated, IsAdmin]

    @extend_schema(
        summary="List all staff",
        responses={200: StaffSerializer(many=True)},
        tags=["Staff"],
    )
    def list(self, request: Request) -> Response:
        qs = StaffManagementService.list_staff(request.user)
        return Response(StaffSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="List staff awaiting approval",
        responses={200: StaffSerializer(many=True)},
        tags=["Staff"],
    )
    def pending(self, request: Request) -> Response:
        qs = StaffManagementService.list_staff(request.user, pending_only=True)
        return Response(StaffSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Approve or unapprove staff",
        request=ApproveStaffSerializer,
        responses={
            200: StaffSerializer,
            403: OpenApiResponse(description="Target is an admin."),
            404: OpenApiResponse(description="Staff not found."),
        },
        tags=["Staff"],
    )
    def approve(self, request: Request, pk: int = None) -> Response:
        serializer = ApproveStaffSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        staff = StaffManagementService.set_approval(
            staff_id=pk,
            is_approved=serializer.validated_data["is_approved"],
            performed_by=request.user,
        )
        return Response(StaffSerializer(staff).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Edit staff",
        request=StaffUpdateSerializer,
        responses={
            200: StaffSerializer,
            400: OpenApiResponse(description="DuplicateEmail."),
            404: OpenApiResponse(description="Staff not found."),
        },
        tags=["Staff"],
    )
    def partial_update(self, request: Request, pk: int = None) -> Response:
        serializer = StaffUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        staff = StaffManagementService.update_staff(
            staff_id=pk,
            data=serializer.validated_data,
            performed_by=request.user,
        )
        return Response(StaffSerializer(staff).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Delete staff",
        responses={
            204: OpenApiResponse(description="Staff deleted."),
            400: OpenApiResponse(description="Cannot delete own account."),
            404: OpenApiResponse(description="Staff not found."),
        },
        tags=["Staff"],
    )
    def destroy(self, request: Request, pk: int = None) -> Response:
        StaffManagementService.delete_staff(staff_id=pk, performed_by=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)
