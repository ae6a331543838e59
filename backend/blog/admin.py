from django.contrib import admin

from .models import Blog, BlogComment


class BlogCommentInline(admin.TabularInline):
    model = BlogComment
    extra = 0
    readonly_fields = ("author", "content", "timestamp")


@admin.register(Blog)
class BlogAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "category", "author", "created_at")
    list_filter = ("category",)
    search_fields = ("title", "content")
    inlines = [BlogCommentInline]
