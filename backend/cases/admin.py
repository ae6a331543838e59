from django.contrib import admin

from .models import Case, CaseRemark


class CaseRemarkInline(admin.TabularInline):
    model = CaseRemark
    extra = 0
    readonly_fields = ("staff", "text", "timestamp")


@admin.register(Case)
class CaseAdmin(admin.ModelAdmin):
    list_display = ("id", "case_id", "status", "date", "location",
                    "staff", "created_at")
    list_filter = ("status",)
    search_fields = ("case_id", "location")
    inlines = [CaseRemarkInline]


@admin.register(CaseRemark)
class CaseRemarkAdmin(admin.ModelAdmin):
    list_display = ("case", "staff", "timestamp")
    search_fields = ("text",)
