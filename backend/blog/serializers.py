"""
Blog app serializers.

Requests are multipart when they carry a ``photo``; JSON otherwise.
"""

from __future__ import annotations

from rest_framework import serializers

from accounts.serializers import StaffRefSerializer

from .models import Blog, BlogCategory, BlogComment


# ═══════════════════════════════════════════════════════════════════
#  Request Serializers
# ═══════════════════════════════════════════════════════════════════


class BlogFilterSerializer(serializers.Serializer):
    category = serializers.ChoiceField(choices=BlogCategory.choices, required=False)


class BlogCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    content = serializers.CharField()
    category = serializers.ChoiceField(choices=BlogCategory.choices)
    photo = serializers.FileField(required=False, allow_null=True, write_only=True)


class BlogUpdateSerializer(serializers.Serializer):
    """Absent or empty fields keep their value."""

    title = serializers.CharField(max_length=255, required=False, allow_blank=True)
    content = serializers.CharField(required=False, allow_blank=True)
    category = serializers.ChoiceField(choices=BlogCategory.choices, required=False, allow_blank=True)
    photo = serializers.FileField(required=False, allow_null=True, write_only=True)


class CommentCreateSerializer(serializers.Serializer):
    """Blank content is rejected by the service as ``EmptyComment``."""

    content = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=False, default="")


# ═══════════════════════════════════════════════════════════════════
#  Response Serializers
# ═══════════════════════════════════════════════════════════════════


class BlogCommentSerializer(serializers.ModelSerializer):
    authorId = serializers.IntegerField(source="author_id", read_only=True, allow_null=True)
    author = StaffRefSerializer(read_only=True, allow_null=True)

    class Meta:
        model = BlogComment
        fields = ["id", "content", "authorId", "author", "timestamp"]
        read_only_fields = fields


class BlogListSerializer(serializers.ModelSerializer):
    authorId = serializers.IntegerField(source="author_id", read_only=True, allow_null=True)
    author = StaffRefSerializer(read_only=True, allow_null=True)
    timestamp = serializers.DateTimeField(source="created_at", read_only=True)
    commentCount = serializers.IntegerField(source="comment_count", read_only=True)

    class Meta:
        model = Blog
        fields = [
            "id", "title", "content", "category", "authorId", "author",
            "photo", "timestamp", "commentCount",
        ]
        read_only_fields = fields


class BlogDetailSerializer(serializers.ModelSerializer):
    authorId = serializers.IntegerField(source="author_id", read_only=True, allow_null=True)
    author = StaffRefSerializer(read_only=True, allow_null=True)
    timestamp = serializers.DateTimeField(source="created_at", read_only=True)
    comments = BlogCommentSerializer(many=True, read_only=True)

    class Meta:
        model = Blog
        fields = [
            "id", "title", "content", "category", "authorId", "author",
            "photo", "timestamp", "comments",
        ]
        read_only_fields = fields
