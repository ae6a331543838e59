from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import Staff


@admin.register(Staff)
class StaffAdmin(BaseUserAdmin):
    list_display = ("name", "email", "is_admin", "is_approved", "is_active")
    search_fields = ("name", "email")
    list_filter = ("is_admin", "is_approved", "is_active")
    ordering = ("name",)
    filter_horizontal = ("groups", "user_permissions")
    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Profile", {"fields": ("name", "profile_picture")}),
        ("Tracker Access", {"fields": ("is_admin", "is_approved")}),
        ("Django Admin", {"fields": ("is_active", "is_staff", "is_superuser",
                                     "groups", "user_permissions")}),
        ("Important dates", {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (None, {
            "classes": ("wide",),
            "fields": ("email", "name", "password1", "password2",
                       "is_admin", "is_approved"),
        }),
    )
