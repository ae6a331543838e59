"""
Cases app ViewSets.

Architecture: Views are intentionally thin.
Every view follows the strict three-step pattern:

    1. Parse / validate input via a serializer.
    2. Delegate all business logic to the appropriate service class.
    3. Serialize the result and return a DRF ``Response``.

ViewSets
--------
- ``CaseViewSet`` — the single ViewSet for all case endpoints.  Status
  transitions, remarks and assignment are ``@action`` methods.
"""

from __future__ import annotations

from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
)
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from core.permissions import IsAdmin

from .serializers import (
    CaseAssignSerializer,
    CaseCreateSerializer,
    CaseDetailSerializer,
    CaseFilterSerializer,
    CaseListSerializer,
    CaseUpdateSerializer,
    RemarkCreateSerializer,
)
from .services import (
    CaseAdminService,
    CaseCreationService,
    CaseQueryService,
    CaseRemarkService,
    CaseWorkflowService,
)


class CaseViewSet(viewsets.ViewSet):
    """
    Central ViewSet for the cases app.

    Uses ``viewsets.ViewSet`` (not ``ModelViewSet``) so every action is
    explicitly defined.

    Permission Strategy
    -------------------
    Reading, creating and remarking need authentication only.  Editing,
    deleting, status transitions and assignment additionally need
    ``IsAdmin``; the service layer re-checks the admin flag.
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"

    _ADMIN_ACTIONS = {"update", "destroy", "start", "close", "assign"}

    def get_permissions(self):
        if self.action in self._ADMIN_ACTIONS:
            return [IsAuthenticated(), IsAdmin()]
        return super().get_permissions()

    # ── Standard CRUD ────────────────────────────────────────────────

    @extend_schema(
        summary="List cases",
        parameters=[
            OpenApiParameter(name="status", type=str, location=OpenApiParameter.QUERY, description="Filter by status: Open, In Progress, Closed."),
            OpenApiParameter(name="search", type=str, location=OpenApiParameter.QUERY, description="Case-insensitive search on case ID and location."),
        ],
        responses={200: CaseListSerializer(many=True)},
        tags=["Cases"],
    )
    def list(self, request: Request) -> Response:
        """GET /api/cases/"""
        filter_serializer = CaseFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        qs = CaseQueryService.get_filtered_queryset(filter_serializer.validated_data)
        return Response(CaseListSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Create a case",
        description="Creates an Open case assigned to the caller.",
        request=CaseCreateSerializer,
        responses={
            201: CaseDetailSerializer,
            400: OpenApiResponse(description="Missing field or DuplicateCaseId."),
        },
        tags=["Cases"],
    )
    def create(self, request: Request) -> Response:
        """POST /api/cases/"""
        serializer = CaseCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        case = CaseCreationService.create_case(serializer.validated_data, request.user)
        return Response(CaseDetailSerializer(case).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Retrieve a case",
        responses={
            200: CaseDetailSerializer,
            404: OpenApiResponse(description="Case not found."),
        },
        tags=["Cases"],
    )
    def retrieve(self, request: Request, pk: int = None) -> Response:
        """GET /api/cases/{id}/"""
        case = CaseQueryService.get_case_detail(pk)
        return Response(CaseDetailSerializer(case).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Edit case metadata (admin)",
        description="Changes caseId and/or location.  Status is changed through start/close.",
        request=CaseUpdateSerializer,
        responses={
            200: CaseDetailSerializer,
            400: OpenApiResponse(description="DuplicateCaseId."),
            404: OpenApiResponse(description="Case not found."),
        },
        tags=["Cases"],
    )
    def update(self, request: Request, pk: int = None) -> Response:
        """PUT /api/cases/{id}/"""
        serializer = CaseUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        case = CaseAdminService.update_case(pk, serializer.validated_data, request.user)
        return Response(CaseDetailSerializer(case).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Delete a case (admin)",
        description="Deletes the case, its remarks and all of its evidence.",
        responses={
            204: OpenApiResponse(description="Case deleted."),
            404: OpenApiResponse(description="Case not found."),
        },
        tags=["Cases"],
    )
    def destroy(self, request: Request, pk: int = None) -> Response:
        """DELETE /api/cases/{id}/"""
        CaseAdminService.delete_case(pk, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ── Workflow @actions ─────────────────────────────────────────────

    @action(detail=True, methods=["patch"], url_path="start")
    @extend_schema(
        summary="Start a case (admin)",
        request=None,
        responses={
            200: CaseDetailSerializer,
            409: OpenApiResponse(description="Case is not Open."),
        },
        tags=["Cases – Workflow"],
    )
    def start(self, request: Request, pk: int = None) -> Response:
        """PATCH /api/cases/{id}/start/"""
        case = CaseWorkflowService.start_case(pk, request.user)
        return Response(CaseDetailSerializer(case).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["patch"], url_path="close")
    @extend_schema(
        summary="Close a case (admin)",
        request=None,
        responses={
            200: CaseDetailSerializer,
            400: OpenApiResponse(description="AlreadyClosed."),
        },
        tags=["Cases – Workflow"],
    )
    def close(self, request: Request, pk: int = None) -> Response:
        """PATCH /api/cases/{id}/close/"""
        case = CaseWorkflowService.close_case(pk, request.user)
        return Response(CaseDetailSerializer(case).data, status=status.HTTP_200_OK)

    # ── Sub-resource @actions ─────────────────────────────────────────

    @action(detail=True, methods=["post"], url_path="remarks")
    @extend_schema(
        summary="Add a remark",
        request=RemarkCreateSerializer,
        responses={
            200: CaseDetailSerializer,
            400: OpenApiResponse(description="EmptyRemark."),
            404: OpenApiResponse(description="Case not found."),
        },
        tags=["Cases"],
    )
    def remarks(self, request: Request, pk: int = None) -> Response:
        """POST /api/cases/{id}/remarks/"""
        serializer = RemarkCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        case = CaseRemarkService.add_remark(pk, serializer.validated_data["text"], request.user)
        return Response(CaseDetailSerializer(case).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=["patch"], url_path=r"assign/(?P<case_pk>\d+)")
    @extend_schema(
        summary="Assign a case (admin)",
        request=CaseAssignSerializer,
        responses={
            200: CaseDetailSerializer,
            400: OpenApiResponse(description="Staff member not approved."),
            404: OpenApiResponse(description="Case or staff not found."),
        },
        tags=["Cases"],
    )
    def assign(self, request: Request, case_pk: str = None) -> Response:
        """PATCH /api/cases/assign/{id}/"""
        serializer = CaseAssignSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        case = CaseAdminService.assign_case(
            case_pk, serializer.validated_data["staff_id"], request.user,
        )
        return Response(CaseDetailSerializer(case).data, status=status.HTTP_200_OK)
