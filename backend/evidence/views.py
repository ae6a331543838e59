"""
Evidence app views.

Architecture: Views are intentionally thin.
    1. Parse / validate input via a serializer.
    2. Delegate all business logic to the appropriate service class.
    3. Serialize the result and return a DRF ``Response``.

``PUT`` is the uploader's edit path and ``PATCH`` the admin's; both act
on the same ``/evidence/{id}/`` resource.
"""

from __future__ import annotations

from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
)
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from cases.serializers import RemarkCreateSerializer
from core.permissions import IsAdmin

from .serializers import (
    EvidenceAdminUpdateSerializer,
    EvidenceCreateSerializer,
    EvidenceDetailSerializer,
    EvidenceFilterSerializer,
    EvidenceOwnerUpdateSerializer,
    EvidencePageSerializer,
)
from .services import (
    EvidenceProcessingService,
    EvidenceQueryService,
    EvidenceRemarkService,
)


class EvidenceViewSet(viewsets.ViewSet):
    """
    CRUD + remarks for evidence items.

    Permission Strategy
    -------------------
    Any authenticated staff member may list, read, create and remark.
    ``PUT`` is open to authenticated staff and ownership is enforced in
    the service layer.  ``PATCH`` and ``DELETE`` require ``IsAdmin``.
    """

    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    lookup_value_regex = r"\d+"

    _ADMIN_ACTIONS = {"partial_update", "destroy"}

    def get_permissions(self):
        if self.action in self._ADMIN_ACTIONS:
            return [IsAuthenticated(), IsAdmin()]
        return super().get_permissions()

    @extend_schema(
        summary="List evidence (paginated)",
        parameters=[
            OpenApiParameter(name="page", type=int, location=OpenApiParameter.QUERY, description="1-based page number (default 1). Not clamped."),
            OpenApiParameter(name="limit", type=int, location=OpenApiParameter.QUERY, description="Page size, 1-100 (default 6)."),
            OpenApiParameter(name="search", type=str, location=OpenApiParameter.QUERY, description="Case-insensitive search on item and description."),
            OpenApiParameter(name="caseId", type=str, location=OpenApiParameter.QUERY, description="Only evidence of the case with this case ID."),
        ],
        responses={200: EvidencePageSerializer},
        tags=["Evidence"],
    )
    def list(self, request: Request) -> Response:
        """GET /api/evidence/"""
        filter_serializer = EvidenceFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        window = EvidenceQueryService.list_page(filter_serializer.validated_data)
        return Response(EvidencePageSerializer(window).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Create evidence",
        description="Multipart with an optional `photo` (jpg, jpeg, png, pdf; 5 MB max).",
        request=EvidenceCreateSerializer,
        responses={
            201: EvidenceDetailSerializer,
            400: OpenApiResponse(description="MissingField, unknown caseId, UnsupportedType or TooLarge."),
        },
        tags=["Evidence"],
    )
    def create(self, request: Request) -> Response:
        """POST /api/evidence/"""
        serializer = EvidenceCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        photo = data.pop("photo", None)
        evidence = EvidenceProcessingService.create_evidence(data, request.user, photo=photo)
        return Response(EvidenceDetailSerializer(evidence).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Retrieve evidence",
        responses={
            200: EvidenceDetailSerializer,
            404: OpenApiResponse(description="Evidence not found."),
        },
        tags=["Evidence"],
    )
    def retrieve(self, request: Request, pk: int = None) -> Response:
        """GET /api/evidence/{id}/"""
        evidence = EvidenceQueryService.get_evidence_detail(pk)
        return Response(EvidenceDetailSerializer(evidence).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Edit own evidence (uploader)",
        request=EvidenceOwnerUpdateSerializer,
        responses={
            200: EvidenceDetailSerializer,
            403: OpenApiResponse(description="Unauthorized: not the uploader."),
            404: OpenApiResponse(description="Evidence not found."),
        },
        tags=["Evidence"],
    )
    def update(self, request: Request, pk: int = None) -> Response:
        """PUT /api/evidence/{id}/"""
        serializer = EvidenceOwnerUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        evidence = EvidenceProcessingService.update_own_evidence(
            pk, serializer.validated_data, request.user,
        )
        return Response(EvidenceDetailSerializer(evidence).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Edit any evidence (admin)",
        description="Multipart; a new `photo` replaces and releases the previous one.",
        request=EvidenceAdminUpdateSerializer,
        responses={
            200: EvidenceDetailSerializer,
            400: OpenApiResponse(description="Unknown caseId, UnsupportedType or TooLarge."),
            404: OpenApiResponse(description="Evidence not found."),
        },
        tags=["Evidence"],
    )
    def partial_update(self, request: Request, pk: int = None) -> Response:
        """PATCH /api/evidence/{id}/"""
        serializer = EvidenceAdminUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        photo = data.pop("photo", None)
        evidence = EvidenceProcessingService.update_evidence_as_admin(
            pk, data, request.user, photo=photo,
        )
        return Response(EvidenceDetailSerializer(evidence).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Delete evidence (admin)",
        responses={
            204: OpenApiResponse(description="Evidence deleted."),
            404: OpenApiResponse(description="Evidence not found."),
        },
        tags=["Evidence"],
    )
    def destroy(self, request: Request, pk: int = None) -> Response:
        """DELETE /api/evidence/{id}/"""
        EvidenceProcessingService.delete_evidence(pk, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"], url_path="remarks")
    @extend_schema(
        summary="Add a remark",
        request=RemarkCreateSerializer,
        responses={
            200: EvidenceDetailSerializer,
            400: OpenApiResponse(description="EmptyRemark."),
            404: OpenApiResponse(description="Evidence not found."),
        },
        tags=["Evidence"],
    )
    def remarks(self, request: Request, pk: int = None) -> Response:
        """POST /api/evidence/{id}/remarks/"""
        serializer = RemarkCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        evidence = EvidenceRemarkService.add_remark(pk, serializer.validated_data["text"], request.user)
        return Response(EvidenceDetailSerializer(evidence).data, status=status.HTTP_200_OK)
