"""
Blog app views.

Reading and commenting are open to every authenticated staff member;
authoring and moderation are admin-only.
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

from core.permissions import IsAdmin

from .serializers import (
    BlogCreateSerializer,
    BlogDetailSerializer,
    BlogFilterSerializer,
    BlogListSerializer,
    BlogUpdateSerializer,
    CommentCreateSerializer,
)
from .services import BlogCommentService, BlogPostService, BlogQueryService


class BlogViewSet(viewsets.ViewSet):

    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    lookup_value_regex = r"\d+"

    _ADMIN_ACTIONS = {"create", "update", "destroy", "delete_comment"}

    def get_permissions(self):
        if self.action in self._ADMIN_ACTIONS:
            return [IsAuthenticated(), IsAdmin()]
        return super().get_permissions()

    @extend_schema(
        summary="List blog posts",
        parameters=[
            OpenApiParameter(name="category", type=str, location=OpenApiParameter.QUERY, description="Only posts of this category."),
        ],
        responses={200: BlogListSerializer(many=True)},
        tags=["Blog"],
    )
    def list(self, request: Request) -> Response:
        """GET /api/blog/"""
        filter_serializer = BlogFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        qs = BlogQueryService.get_filtered_queryset(filter_serializer.validated_data)
        return Response(BlogListSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Publish a blog post (admin)",
        description="Multipart with an optional `photo` (jpg, jpeg, png; 5 MB max).",
        request=BlogCreateSerializer,
        responses={
            201: BlogDetailSerializer,
            400: OpenApiResponse(description="MissingField, UnsupportedType or TooLarge."),
        },
        tags=["Blog"],
    )
    def create(self, request: Request) -> Response:
        """POST /api/blog/"""
        serializer = BlogCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        photo = data.pop("photo", None)
        blog = BlogPostService.create_post(data, request.user, photo=photo)
        return Response(BlogDetailSerializer(blog).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Retrieve a blog post",
        responses={
            200: BlogDetailSerializer,
            404: OpenApiResponse(description="Blog post not found."),
        },
        tags=["Blog"],
    )
    def retrieve(self, request: Request, pk: int = None) -> Response:
        """GET /api/blog/{id}/"""
        blog = BlogQueryService.get_blog_detail(pk)
        return Response(BlogDetailSerializer(blog).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Edit a blog post (admin)",
        request=BlogUpdateSerializer,
        responses={
            200: BlogDetailSerializer,
            404: OpenApiResponse(description="Blog post not found."),
        },
        tags=["Blog"],
    )
    def update(self, request: Request, pk: int = None) -> Response:
        """PUT /api/blog/{id}/"""
        serializer = BlogUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        photo = data.pop("photo", None)
        blog = BlogPostService.update_post(pk, data, request.user, photo=photo)
        return Response(BlogDetailSerializer(blog).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Delete a blog post (admin)",
        responses={
            204: OpenApiResponse(description="Blog post deleted."),
            404: OpenApiResponse(description="Blog post not found."),
        },
        tags=["Blog"],
    )
    def destroy(self, request: Request, pk: int = None) -> Response:
        """DELETE /api/blog/{id}/"""
        BlogPostService.delete_post(pk, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"], url_path="comment", url_name="comment")
    @extend_schema(
        summary="Comment on a blog post",
        request=CommentCreateSerializer,
        responses={
            201: BlogDetailSerializer,
            400: OpenApiResponse(description="EmptyComment."),
            404: OpenApiResponse(description="Blog post not found."),
        },
        tags=["Blog"],
    )
    def comment(self, request: Request, pk: int = None) -> Response:
        """POST /api/blog/{id}/comment/"""
        serializer = CommentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        blog = BlogCommentService.add_comment(pk, serializer.validated_data["content"], request.user)
        return Response(BlogDetailSerializer(blog).data, status=status.HTTP_201_CREATED)

    @action(
        detail=True,
        methods=["delete"],
        url_path=r"comment/(?P<comment_pk>\d+)",
        url_name="comment-detail",
    )
    @extend_schema(
        summary="Delete a comment (admin)",
        responses={
            200: BlogDetailSerializer,
            404: OpenApiResponse(description="Blog post or comment not found."),
        },
        tags=["Blog"],
    )
    def delete_comment(self, request: Request, pk: int = None, comment_pk: str = None) -> Response:
        """DELETE /api/blog/{id}/comment/{commentId}/"""
        blog = BlogCommentService.delete_comment(pk, comment_pk, request.user)
        return Response(BlogDetailSerializer(blog).data, status=status.HTTP_200_OK)
