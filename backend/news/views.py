"""
News app views.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, OpenApiTypes, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from .services import NewsService


class CybercrimeNewsView(APIView):
    """
    GET /api/news/cybercrime-news/

    Public endpoint.  Returns the GNews search response as-is.
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        summary="Cybercrime headlines",
        responses={
            200: OpenApiResponse(response=OpenApiTypes.OBJECT, description="GNews search payload (`totalArticles`, `articles`)."),
            500: OpenApiResponse(description="UpstreamError: key missing or GNews unavailable."),
        },
        tags=["News"],
    )
    def get(self, request: Request) -> Response:
        return Response(NewsService.fetch_cybercrime_news(), status=status.HTTP_200_OK)
